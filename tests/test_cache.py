import pytest

from tarot_journal.cache import InterpretationCache, cache_key
from tarot_journal.models import Interpretation


def _interpretation(summary: str) -> Interpretation:
    return Interpretation(
        id=summary,
        timestamp="2026-01-01T00:00:00+00:00",
        summary=summary,
        introduction="",
        cards=[],
        card_interactions="",
        guidance="",
        reflection_questions=[],
    )


def test_key_format(draw):
    cards = draw(("The Fool", "past", False), ("Death", "present", True))
    assert cache_key("What now?", cards) == "What now?::The Fool:past:upright|Death:present:reversed"


def test_orientation_change_misses(draw):
    cache = InterpretationCache()
    cards = draw(("The Fool", "past", False), ("Death", "present", True))
    cache.put("q", cards, _interpretation("a"))

    flipped = draw(("The Fool", "past", True), ("Death", "present", True))
    assert cache_key("q", cards) != cache_key("q", flipped)
    assert cache.get("q", flipped) is None
    assert cache.get("q", cards).summary == "a"


def test_reorder_misses(draw):
    cache = InterpretationCache()
    cards = draw(("The Fool", "past", False), ("Death", "present", False))
    cache.put("q", cards, _interpretation("a"))

    assert cache.get("q", list(reversed(cards))) is None


def test_question_must_match_exactly(draw):
    cache = InterpretationCache()
    cards = draw(("The Fool", "past", False))
    cache.put("Will it work?", cards, _interpretation("a"))

    assert cache.get("will it work?", cards) is None
    assert cache.get("Will it work? ", cards) is None


def test_lru_eviction(draw):
    cache = InterpretationCache(capacity=2)
    a, b, c = (draw((name, "single", False)) for name in ("The Sun", "The Moon", "The Star"))

    cache.put("q", a, _interpretation("a"))
    cache.put("q", b, _interpretation("b"))
    # touch a so b becomes least recently used
    assert cache.get("q", a) is not None
    cache.put("q", c, _interpretation("c"))

    assert len(cache) == 2
    assert cache.get("q", b) is None
    assert cache.get("q", a).summary == "a"
    assert cache.get("q", c).summary == "c"
    assert cache_key("q", c) in cache


def test_put_same_key_replaces(draw):
    cache = InterpretationCache(capacity=2)
    cards = draw(("The Sun", "single", False))
    cache.put("q", cards, _interpretation("old"))
    cache.put("q", cards, _interpretation("new"))

    assert len(cache) == 1
    assert cache.get("q", cards).summary == "new"


def test_clear(draw):
    cache = InterpretationCache()
    cache.put("q", draw(("The Sun", "single", False)), _interpretation("a"))
    cache.clear()
    assert len(cache) == 0


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        InterpretationCache(capacity=0)
