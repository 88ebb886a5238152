"""Partitioning of positional command-line tokens.

The positional tokens of an apsrepo command line look like::

    [filter-regexp ...] [-- svn-command ...]

Everything before the first ``--`` is a filter expression and everything
after it is handed to the external command untouched, except for at most
one ``+path`` token. That token may sit anywhere in the command and
replaces the ``-p`` relative path, which lets the path be edited at the end
of the command line::

    apsrepo ^foo -- ls -v +branches/b    # svn ls -v <REPO>/branches/b
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

DELIMITER = "--"
PATH_PREFIX = "+"


@dataclass(frozen=True)
class PartitionedArgs:
    """Result of splitting positional tokens.

    Attributes:
        filters: Tokens before the delimiter.
        command: Tokens after the delimiter, without the ``+path`` token.
        path: Relative path taken from the ``+path`` token, if one was given.
        has_command: Whether at least one token followed the delimiter.
    """

    filters: Tuple[str, ...] = ()
    command: Tuple[str, ...] = ()
    path: Optional[str] = None
    has_command: bool = False


def extract_path(tokens: Sequence[str]) -> Tuple[Tuple[str, ...], Optional[str]]:
    """Remove the first ``+path`` token from ``tokens``.

    A lone ``+`` is not a path token. Later ``+path`` tokens are left alone.

    Returns:
        The remaining tokens and the path, or None if no token qualified.
    """
    for i, token in enumerate(tokens):
        if token.startswith(PATH_PREFIX) and len(token) > 1:
            return tuple(tokens[:i]) + tuple(tokens[i + 1 :]), token[1:]
    return tuple(tokens), None


def partition_args(tokens: Sequence[str]) -> PartitionedArgs:
    """Split tokens into filters and a passthrough command."""
    if DELIMITER not in tokens:
        return PartitionedArgs(filters=tuple(tokens))

    pos = list(tokens).index(DELIMITER)
    filters = tuple(tokens[:pos])
    rest = tokens[pos + 1 :]
    if not rest:
        return PartitionedArgs(filters=filters)

    command, path = extract_path(rest)
    return PartitionedArgs(filters=filters, command=command, path=path, has_command=True)
