"""Core functionality for apsrepo."""

from .arguments import PartitionedArgs, partition_args
from .catalog import Catalog
from .commands import Dispatcher
from .config import Config, Options
from .errors import (
    ApsRepoError,
    CatalogError,
    CommandError,
    ConfigError,
    ExpressionError,
    NoMatchError,
)
from .matcher import Matcher
from .outpath import expand_output_path
from .repository import SvnRunner
from .urls import build_url

__all__ = [
    "ApsRepoError",
    "Catalog",
    "CatalogError",
    "CommandError",
    "Config",
    "ConfigError",
    "Dispatcher",
    "ExpressionError",
    "Matcher",
    "NoMatchError",
    "Options",
    "PartitionedArgs",
    "SvnRunner",
    "build_url",
    "expand_output_path",
    "partition_args",
]
