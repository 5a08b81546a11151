"""Fuzzy matching and ranking exports."""

from __future__ import annotations

from .fuzzy import (
    SEPARATORS,
    ScoredMatch,
    fuzzy_match,
    fuzzy_score,
    highlight_spans,
    rank_labels,
)

__all__ = [
    "SEPARATORS",
    "ScoredMatch",
    "fuzzy_match",
    "fuzzy_score",
    "highlight_spans",
    "rank_labels",
]
