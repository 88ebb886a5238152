"""Repository catalog for apsrepo."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from .errors import CatalogError

logger = logging.getLogger(__name__)


class Catalog:
    """Ordered, read-only list of repository identifiers.

    Identifiers keep the order in which they appear in the repository file.

    Attributes:
        path (Path): File the catalog was loaded from, if any.
    """

    def __init__(self, repos: Iterable[str], path: Union[str, Path, None] = None):
        """Initialize catalog."""
        self._repos = tuple(repos)
        self.path = Path(path) if path is not None else None

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Catalog":
        """Load a catalog from a line-oriented file.

        Each line holds one repository identifier. Line terminators are
        removed; nothing else is trimmed. Empty lines are skipped
        rather than kept as empty identifiers. Bytes that are not valid UTF-8
        are kept as surrogate escapes.

        Args:
            path: Repository file to read.

        Returns:
            Catalog: Identifiers in file order.

        Raises:
            CatalogError: If the file cannot be opened or read.
        """
        repos: List[str] = []
        try:
            with open(path, "r", encoding="utf-8", errors="surrogateescape", newline="") as f:
                for line in f:
                    repo = line.rstrip("\n")
                    if repo.endswith("\r"):
                        repo = repo[:-1]
                    if repo:
                        repos.append(repo)
        except OSError as e:
            raise CatalogError(f"cannot read repository file {path}: {e}", str(path)) from e

        logger.debug("Loaded %d repositories from %s", len(repos), path)
        return cls(repos, path)

    def __iter__(self) -> Iterator[str]:
        return iter(self._repos)

    def __len__(self) -> int:
        return len(self._repos)

    def __contains__(self, repo: object) -> bool:
        return repo in self._repos

    def __getitem__(self, index: int) -> str:
        return self._repos[index]

    def __repr__(self) -> str:
        """Return string representation."""
        return f"Catalog({len(self._repos)} repositories, path={self.path})"
