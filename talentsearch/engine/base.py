"""Abstract base class for search engine backends."""

from abc import ABC, abstractmethod
from typing import Any

from talentsearch.core.schemas import Hit


class SearchEngine(ABC):
    """Operations the talent search needs from a search engine.

    Implementations raise their own exceptions on failure; callers decide
    whether to propagate or absorb them.
    """

    @abstractmethod
    def index(self, index: str, document: dict[str, Any], doc_id: str) -> str:
        """Write ``document`` under ``doc_id``, replacing any previous version.

        Returns the engine's outcome (e.g. 'created', 'updated').
        """

    @abstractmethod
    def search(
        self,
        index: str,
        query: dict[str, Any],
        sort: list[dict[str, Any]] | None,
        size: int,
    ) -> list[Hit]:
        """Run ``query`` and return hits in engine order."""

    @abstractmethod
    def delete_index(self, index: str) -> None:
        """Drop ``index``; a missing index is not an error."""

    @abstractmethod
    def create_index(
        self,
        index: str,
        settings: dict[str, Any],
        mappings: dict[str, Any],
    ) -> None:
        """Create ``index`` with the given settings and field mappings."""

    @abstractmethod
    def refresh(self, index: str) -> None:
        """Make recent writes to ``index`` visible to search."""
