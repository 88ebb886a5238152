"""Output path templates.

An output path template is literal text with keyword markers:

    @   repository identifier
    ^   relative path
    %   repository identifier joined with the relative path

A marker preceded by a backslash is literal: ``out\\@home/@`` expands to
``out@home/<repo>``.

Expansion runs in two phases. Substitution passes repeat until nothing
changes, with every substituted value carrying its own marker escaped so it
cannot expand into itself. Afterwards the escapes are removed. Values that
re-introduce each other's markers (repository ``^`` with path ``@``) would
substitute forever, so the number of passes is capped.
"""

from __future__ import annotations

import os
from typing import Dict, Tuple

ESCAPE = "\\"
REPO_MARKER = "@"
PATH_MARKER = "^"
JOINED_MARKER = "%"
MAX_PASSES = 100


def join_path(repo: str, rel_path: str) -> str:
    """Join repository and relative path as a cleaned filesystem path."""
    joined = os.path.join(repo, rel_path)
    return os.path.normpath(joined) if joined else ""


def _bindings(repo: str, rel_path: str) -> Dict[str, str]:
    values = {
        REPO_MARKER: repo,
        PATH_MARKER: rel_path,
        JOINED_MARKER: join_path(repo, rel_path),
    }
    return {marker: value.replace(marker, ESCAPE + marker) for marker, value in values.items()}


def _substitute(text: str, marker: str, value: str) -> Tuple[str, bool]:
    """Replace every unescaped ``marker`` in ``text`` with ``value``."""
    parts = []
    changed = False
    for i, char in enumerate(text):
        if char == marker and (i == 0 or text[i - 1] != ESCAPE):
            parts.append(value)
            changed = True
        else:
            parts.append(char)
    return "".join(parts), changed


def expand_output_path(template: str, repo: str, rel_path: str = "") -> str:
    """Expand the markers of ``template``.

    Args:
        template: Output path template.
        repo: Repository identifier bound to ``@``.
        rel_path: Relative path bound to ``^``.

    Returns:
        str: The expanded path. If the pass limit is reached the partially
             expanded string is returned.
    """
    bindings = _bindings(repo, rel_path)

    result = template
    for _ in range(MAX_PASSES):
        expanded = False
        for marker, value in bindings.items():
            result, changed = _substitute(result, marker, value)
            expanded = expanded or changed
        if not expanded:
            break

    for marker in bindings:
        result = result.replace(ESCAPE + marker, marker)
    return result
