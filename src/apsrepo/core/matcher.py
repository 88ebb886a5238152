"""Regular-expression matching of repository identifiers."""

from __future__ import annotations

import logging
import re
from typing import Iterator, List, Sequence, Tuple

from .catalog import Catalog
from .errors import ExpressionError

logger = logging.getLogger(__name__)

CASE_INSENSITIVE_FLAG = "(?i)"


class Matcher:
    """Selects catalog entries with filter expressions.

    All expressions are compiled with the same case sensitivity. Matching
    is an unanchored search, so ``foo`` matches ``libfoo-bar``; anchors must
    be written explicitly (``^foo$``).

    Attributes:
        catalog (Catalog): Repositories to match against.
        case_sensitive (bool): Whether matching honours case.
    """

    def __init__(self, catalog: Catalog, case_sensitive: bool = False):
        """Initialize matcher."""
        self.catalog = catalog
        self.case_sensitive = case_sensitive

    def compile(self, expressions: Sequence[str]) -> List[re.Pattern[str]]:
        """Compile expressions, raising ExpressionError on the first failure."""
        compiled = []
        for expression in expressions:
            if not self.case_sensitive:
                expression = CASE_INSENSITIVE_FLAG + expression
            try:
                compiled.append(re.compile(expression))
            except re.error as e:
                raise ExpressionError(expressions, str(e)) from e
        return compiled

    def match_all(self, expressions: Sequence[str]) -> List[str]:
        """Return repositories matched by every expression, in catalog order.

        Raises:
            ExpressionError: If any expression fails to compile. The error
                names all supplied expressions.
        """
        patterns = self.compile(expressions)
        return [
            repo for repo in self.catalog if all(p.search(repo) for p in patterns)
        ]

    def iter_any(self, expressions: Sequence[str]) -> Iterator[Tuple[str, List[str]]]:
        """Match each expression on its own, yielding ``(expression, matches)``.

        Expressions are evaluated lazily in the given order. An expression
        that fails to compile is logged and skipped.
        """
        for expression in expressions:
            try:
                matches = self.match_all([expression])
            except ExpressionError as e:
                logger.warning("skipping invalid expression: %s (%s)", expression, e.reason)
                continue
            logger.debug("%s matched %d repositories", expression, len(matches))
            yield expression, matches

    def match_any(self, expressions: Sequence[str]) -> List[str]:
        """Concatenate per-expression matches in filter order.

        A repository matched by several expressions appears once for each
        of them.
        """
        result: List[str] = []
        for _, matches in self.iter_any(expressions):
            result.extend(matches)
        return result
