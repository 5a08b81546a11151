"""Candidate storage and ranking.

Holds the caller's items together with their display labels. Ranking is a pure
function of the query and the current candidates; the last result is cached so
re-ranking an unchanged query is free.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterable
from typing import Any

from .errors import EmptyStoreError
from .search.fuzzy import ScoredMatch, rank_labels

logger = logging.getLogger(__name__)


class CandidateStore:
    """Own the item list and derived labels for one picker."""

    def __init__(self, display: Callable[[Any], str] | None = None) -> None:
        self._display = display if display is not None else str
        self._items: list[Any] = []
        self._labels: tuple[str, ...] = ()
        self._cache: tuple[str, tuple[ScoredMatch, ...]] | None = None

    def __len__(self) -> int:
        return len(self._labels)

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    def set_items(self, items: Iterable[Any], display: Callable[[Any], str] | None = None) -> None:
        """Replace every candidate with ``items`` and recompute labels."""
        if display is not None:
            self._display = display
        self._items = list(items)
        self._labels = tuple(self._display(item) for item in self._items)
        self._cache = None
        logger.debug("candidate store holds %d items", len(self._labels))

    def reset(self) -> None:
        self._items = []
        self._labels = ()
        self._cache = None

    def require_candidates(self) -> None:
        if not self._labels:
            raise EmptyStoreError("no candidates to pick from")

    def rank(self, query: str) -> tuple[ScoredMatch, ...]:
        if self._cache is not None and self._cache[0] == query:
            return self._cache[1]
        view = rank_labels(query, self._labels)
        self._cache = (query, view)
        return view

    def label(self, index: int) -> str:
        return self._labels[index]

    def item_copy(self, index: int) -> Any:
        """Return a shallow copy of the item at its original ``index``."""
        return copy.copy(self._items[index])
