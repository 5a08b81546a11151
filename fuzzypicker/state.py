from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .search.fuzzy import ScoredMatch


class Phase(enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in {Phase.CONFIRMED, Phase.CANCELLED}


@dataclass
class PickerSession:
    phase: Phase = Phase.IDLE
    query: str = ""
    query_cursor: int = 0
    selected: int = 0
    list_start: int = 0
    visible_rows: int = 1
    view: tuple[ScoredMatch, ...] = field(default_factory=tuple)
    confirmed_index: int | None = None
    last_click_idx: int = -1
    last_click_time: float = 0.0
