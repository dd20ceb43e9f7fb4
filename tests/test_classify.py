import pytest

from tarot_journal.classify import classify, classify_theme, classify_tone


@pytest.mark.parametrize("question,theme", [
    ("Will I find love this year?", "relationship"),
    ("What is happening in my RELATIONSHIP?", "relationship"),
    ("Should I change jobs?", "career"),
    ("How is my work going?", "career"),
    ("What about my health?", "health"),
    ("How can I improve my wellness routine?", "health"),
    ("Where is my spiritual path leading?", "spiritual"),
    ("What supports my personal growth?", "spiritual"),
    ("What should I know today?", "general"),
    ("", "general"),
])
def test_theme_keywords(question, theme):
    assert classify_theme(question) == theme


def test_relationship_checked_before_career():
    assert classify_theme("How does my career affect my love life?") == "relationship"


def test_career_checked_before_health():
    assert classify_theme("Is my job hurting my health?") == "career"


def test_tone_positive_when_nothing_reversed(draw):
    cards = draw(("Two of Cups", "past", False), ("Six of Wands", "present", False), ("Ace of Swords", "future", False))
    assert classify_tone(cards) == "positive"


def test_tone_exactly_half_reversed_is_balanced(draw):
    cards = draw(
        ("Two of Cups", "a", True),
        ("Six of Wands", "b", True),
        ("Ace of Swords", "c", False),
        ("Ten of Pentacles", "d", False),
    )
    assert classify_tone(cards) == "balanced"


def test_tone_challenging_when_most_reversed(draw):
    cards = draw(("Two of Cups", "past", True), ("Six of Wands", "present", True), ("Ace of Swords", "future", False))
    assert classify_tone(cards) == "challenging"


def test_tone_major_majority_promotes(draw):
    significant = draw(("The Fool", "past", False), ("Death", "present", True), ("Ace of Swords", "future", False))
    assert classify_tone(significant) == "significant"

    transformative = draw(("The Fool", "past", True), ("Death", "present", True), ("Ace of Swords", "future", False))
    assert classify_tone(transformative) == "transformative"


def test_tone_half_major_not_promoted(draw):
    cards = draw(("The Fool", "a", False), ("Ace of Cups", "b", False))
    assert classify_tone(cards) == "positive"


def test_empty_draw_still_classifies():
    assert classify("", []) == ("general", "positive")
