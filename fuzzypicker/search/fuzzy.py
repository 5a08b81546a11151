from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

SEPARATORS = "/_- ."


@dataclass(frozen=True)
class ScoredMatch:
    """One ranked candidate: source index, score, and matched character offsets."""

    index: int
    score: int
    positions: tuple[int, ...] = ()


def _fold(text: str) -> list[str]:
    # Fold per character so offsets keep pointing into the original string.
    return [ch.casefold() for ch in text]


def _find(folded: list[str], needle: str, start: int) -> int:
    for idx in range(start, len(folded)):
        if folded[idx] == needle:
            return idx
    return -1


def _align(
    query_folded: list[str],
    candidate: str,
    candidate_folded: list[str],
    start: int,
) -> tuple[int, tuple[int, ...]] | None:
    score = 0
    prev_idx = -1
    run = 0
    positions: list[int] = []
    search_from = start
    for needle in query_folded:
        idx = _find(candidate_folded, needle, search_from)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate[idx - 1] in SEPARATORS:
            score += 35
        positions.append(idx)
        prev_idx = idx
        search_from = idx + 1

    score -= len(candidate) // 5
    return score, tuple(positions)


def fuzzy_match(query: str, candidate: str) -> tuple[int, tuple[int, ...]] | None:
    """Score ``query`` against ``candidate`` as a case-insensitive subsequence.

    Returns ``(score, positions)`` or ``None`` when the query characters do not
    appear in order. Every occurrence of the first query character is tried as
    an anchor for a greedy leftmost alignment; the best-scoring alignment wins
    and the earliest anchor breaks ties. An empty query matches everything with
    score ``0`` and no positions.
    """
    if not query:
        return 0, ()
    query_folded = _fold(query)
    candidate_folded = _fold(candidate)

    best: tuple[int, tuple[int, ...]] | None = None
    first = query_folded[0]
    for anchor, ch in enumerate(candidate_folded):
        if ch != first:
            continue
        aligned = _align(query_folded, candidate, candidate_folded, anchor)
        if aligned is None:
            # Later anchors only see a suffix of this one, so they cannot match either.
            break
        if best is None or aligned[0] > best[0]:
            best = aligned
    return best


def fuzzy_score(query: str, candidate: str) -> int | None:
    matched = fuzzy_match(query, candidate)
    if matched is None:
        return None
    return matched[0]


def rank_labels(query: str, labels: Sequence[str]) -> tuple[ScoredMatch, ...]:
    """Rank ``labels`` for ``query``: score descending, then source index ascending."""
    scored: list[ScoredMatch] = []
    for idx, label in enumerate(labels):
        matched = fuzzy_match(query, label)
        if matched is None:
            continue
        score, positions = matched
        scored.append(ScoredMatch(index=idx, score=score, positions=positions))
    scored.sort(key=lambda item: (-item.score, item.index))
    return tuple(scored)


def highlight_spans(positions: Sequence[int]) -> tuple[tuple[int, int], ...]:
    """Collapse sorted match offsets into half-open ``(start, end)`` runs."""
    spans: list[tuple[int, int]] = []
    for pos in positions:
        if spans and spans[-1][1] == pos:
            spans[-1] = (spans[-1][0], pos + 1)
        else:
            spans.append((pos, pos + 1))
    return tuple(spans)
