"""Select repositories by regular expression and run svn against them."""

__version__ = "1.0.0"
