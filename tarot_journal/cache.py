"""In-memory interpretation cache for one reading session."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Optional, Sequence

from tarot_journal.models import DrawnCard, Interpretation

log = logging.getLogger("tarot_journal.cache")


def cache_key(question: str, cards: Sequence[DrawnCard]) -> str:
    """Question plus the ordered name:position:orientation of every card."""
    card_string = "|".join(f"{c.name}:{c.position}:{c.orientation}" for c in cards)
    return f"{question}::{card_string}"


class InterpretationCache:
    """Least-recently-used map of cache_key -> Interpretation."""

    def __init__(self, capacity: int = 128) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._entries: "OrderedDict[str, Interpretation]" = OrderedDict()

    def get(self, question: str, cards: Sequence[DrawnCard]) -> Optional[Interpretation]:
        key = cache_key(question, cards)
        interpretation = self._entries.get(key)
        if interpretation is not None:
            self._entries.move_to_end(key)
        return interpretation

    def put(self, question: str, cards: Sequence[DrawnCard], interpretation: Interpretation) -> None:
        key = cache_key(question, cards)
        self._entries[key] = interpretation
        self._entries.move_to_end(key)
        while len(self._entries) > self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            log.debug("evicted interpretation key=%s", evicted)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
