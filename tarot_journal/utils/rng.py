"""Deterministic RNG utilities for reproducible shuffles, draws and text selection."""

import hashlib
import random
from typing import List

from tarot_journal.deck import drawn_card
from tarot_journal.models import Card, DrawnCard, SpreadDefinition


def seeded_random(seed: str, salt: str = "") -> random.Random:
    """Create a deterministic random.Random instance from seed and optional salt.

    Args:
        seed: Base seed string
        salt: Optional salt to modify the seed (e.g., a user or session id)

    Returns:
        random.Random instance that will produce deterministic sequences
    """
    digest = hashlib.sha256(f"{seed}{salt}".encode("utf-8")).hexdigest()
    return random.Random(int(digest, 16) & ((1 << 31) - 1))


def shuffle_deck(deck_ids: List[str], rng: random.Random) -> List[str]:
    """Return a shuffled copy of `deck_ids`, consuming `rng`."""
    shuffled = deck_ids.copy()
    rng.shuffle(shuffled)
    return shuffled


def draw_cards(deck_ids: List[str], count: int, seed: str, salt: str = "", allow_reversed: bool = False) -> List[dict]:
    """Draw `count` cards without replacement from a seeded shuffle.

    Orientation is decided from the same stream after the shuffle, so a
    (seed, salt) pair always yields the same cards facing the same way.

    Returns:
        List of dicts with 'card_id' and 'reversed' keys
    """
    if count < 0 or count > len(deck_ids):
        raise ValueError(f"Cannot draw {count} cards from a deck of {len(deck_ids)}")

    rng = seeded_random(seed, salt)
    shuffled = shuffle_deck(deck_ids, rng)

    return [
        {"card_id": card_id, "reversed": allow_reversed and rng.choice([True, False])}
        for card_id in shuffled[:count]
    ]


def draw_spread(
    cards: List[Card],
    spread: SpreadDefinition,
    seed: str,
    salt: str = "",
    allow_reversed: bool = True,
) -> List[DrawnCard]:
    """Deal one card into each position of `spread`, in position order."""
    by_name = {c.name: c for c in cards}
    drawn = draw_cards(
        deck_ids=list(by_name),
        count=len(spread.positions),
        seed=seed,
        salt=salt,
        allow_reversed=allow_reversed,
    )
    return [
        drawn_card(by_name[d["card_id"]], pos.id, pos.name, reversed_=d["reversed"])
        for pos, d in zip(spread.positions, drawn)
    ]
