"""Template-based reading synthesis.

Every generator here is a pure function of its inputs, except `summary` and
`reflection_questions`, which draw from the `random.Random` they are given.
"""

import random
from typing import Any, Dict, List, Sequence

from tarot_journal.classify import classify
from tarot_journal.models import DrawnCard, Theme, Tone

SUITS = ("Cups", "Swords", "Wands", "Pentacles")


def _has_suit(card: DrawnCard, suit: str) -> bool:
    return suit in card.name


# -------------------------------------------------------------------
# PER-CARD
# -------------------------------------------------------------------

POSITION_CONTEXT = {
    "past": "In the past position, this card reflects influences that have shaped your current situation.",
    "present": "In the present position, this card illuminates the current energies surrounding your situation.",
    "future": "In the future position, this card suggests potential developments and energies that may emerge.",
}

NAMED_MEANINGS = {
    "The Fool": (
        "The Fool represents new beginnings, spontaneity, and unlimited potential. You stand at the threshold of an adventure, ready to embrace new experiences with an open heart.",
        "The Fool reversed suggests hesitation, missed opportunities, or recklessness. You may be either holding back too much or rushing forward without proper preparation.",
    ),
    "The Magician": (
        "The Magician represents manifestation, personal power, and skilled action. You have all the tools you need to create what you desire if you focus your intention.",
        "The Magician reversed indicates manipulation, untapped talents, or wasted potential. You may not be fully utilizing your skills or might be using them in unproductive ways.",
    ),
    "The High Priestess": (
        "The High Priestess represents intuition, mystery, and inner wisdom. Trust your inner voice and acknowledge the deeper currents beneath the surface of your situation.",
        "The High Priestess reversed suggests ignored intuition, hidden information coming to light, or superficial understanding. You may need to go deeper than surface appearances.",
    ),
}

SUIT_MEANINGS = {
    "Cups": (
        "This Cups card relates to emotions, relationships, creativity, and intuition. It suggests a focus on the heart's wisdom and emotional connections in your situation.",
        "This Cups card in reverse suggests emotional challenges, blockages, or imbalances in feelings or relationships. There may be emotional aspects you're avoiding or struggling to process.",
    ),
    "Swords": (
        "This Swords card relates to the intellect, communication, challenges, and truth. It suggests mental clarity and decisive action are important in your situation.",
        "This Swords card in reverse indicates intellectual confusion, poor communication, or mental blocks. You may be overthinking or avoiding difficult truths.",
    ),
    "Wands": (
        "This Wands card relates to energy, passion, creativity, and spiritual growth. It suggests vitality and inspiration are flowing through your situation.",
        "This Wands card in reverse suggests blocked energy, delays in progress, or lack of enthusiasm. Your creative or spiritual fire may be dampened.",
    ),
    "Pentacles": (
        "This Pentacles card relates to the material world, finances, work, and physical wellbeing. It suggests practical matters and manifestation in the physical realm.",
        "This Pentacles card in reverse indicates material challenges, financial setbacks, or neglect of practical matters. You may need to reorient your approach to physical world concerns.",
    ),
}

GENERIC_MEANING = (
    "This card brings its unique energy to your reading, suggesting specific influences related to your question.",
    "This card in reverse suggests challenges or inverted energies related to its upright meaning. What normally flows easily may be blocked or expressed in less conventional ways.",
)

# theme -> (aligned suit, upright insight, reversed insight)
THEME_INSIGHTS = {
    "relationship": (
        "Cups",
        "For your relationship concerns, this indicates emotional currents that influence your connections and how you relate to others.",
        "In relationships, this suggests examining emotional barriers or unspoken tensions that may be affecting your connections with others.",
    ),
    "career": (
        "Pentacles",
        "In your professional life, this suggests practical developments and material aspects that influence your career path.",
        "For your career questions, this points to potential obstacles or adjustments needed in your professional approach or work environment.",
    ),
    "spiritual": (
        "Wands",
        "For your spiritual growth, this represents energies and inspiration that fuel your inner development and awakening.",
        "On your spiritual journey, this indicates inner blocks or transformative challenges that require attention and integration.",
    ),
}


def _card_meaning(card: DrawnCard) -> str:
    pair = NAMED_MEANINGS.get(card.name)
    if pair is None:
        pair = next((SUIT_MEANINGS[s] for s in SUITS if _has_suit(card, s)), GENERIC_MEANING)
    return pair[1] if card.is_reversed else pair[0]


def card_interpretation(card: DrawnCard, theme: Theme) -> str:
    """Position context, card meaning and (when the card fits the theme) a theme insight."""
    context = POSITION_CONTEXT.get(card.position)
    if context is None:
        label = card.position_name or card.position
        context = f"In the {label} position, this card offers specific insight related to this aspect of your question."

    parts = [context, _card_meaning(card)]

    insight = THEME_INSIGHTS.get(theme)
    if insight:
        suit, upright, reversed_ = insight
        if _has_suit(card, suit) or card.is_major:
            parts.append(reversed_ if card.is_reversed else upright)

    return " ".join(parts)


# -------------------------------------------------------------------
# NARRATIVE
# -------------------------------------------------------------------

TONE_WORDS = {
    "positive": ["promising", "encouraging", "favorable", "auspicious"],
    "challenging": ["challenging", "complex", "demanding", "testing"],
    "balanced": ["balanced", "nuanced", "thoughtful", "considered"],
    "significant": ["significant", "profound", "meaningful", "substantial"],
    "transformative": ["transformative", "life-changing", "evolving", "shifting"],
}


def summary(question: str, cards: Sequence[DrawnCard], tone: Tone, rng: random.Random) -> str:
    word = rng.choice(TONE_WORDS[tone])
    if len(cards) == 1:
        name = cards[0].name
        lead = name if name.startswith("The ") else f"The {name}"
        return (
            f"This single card reading offers {word} insights regarding your question about {question}. "
            f"{lead} suggests a focused message that warrants careful reflection."
        )
    if len(cards) == 3:
        return (
            f"This three-card spread reveals a {word} journey through past influences, present circumstances, "
            f"and future possibilities regarding {question}. The cards tell a story of evolution and growth."
        )
    return (
        f"This {len(cards)}-card spread presents a {word} exploration of the forces surrounding your question "
        f"about {question}. The cards reveal multiple dimensions that deserve careful consideration."
    )


INTRO_BY_THEME = {
    "relationship": "Your question about relationships brings us to examine the connections, emotions, and patterns that shape your interpersonal dynamics. The cards have responded to your inquiry with insights that may help clarify your path forward.",
    "career": "Your professional journey is at a crossroads, and the cards respond to your questions about career with perspectives on your path, potential, and purpose in your work life.",
    "health": "The cards respond to your question about wellbeing by illuminating the physical, mental, and spiritual aspects of your health journey. This reading offers perspectives on balance and healing.",
    "spiritual": "Your spiritual quest is reflected in these cards, showing aspects of your inner development, awakening, and connection to deeper meaning.",
    "general": "The cards have responded to your question with a pattern that reflects both your current circumstances and the energies surrounding your situation. This reading offers perspectives to consider as you navigate your path.",
}

INTRO_TONE = {
    "positive": "The overall energy appears supportive and encouraging, suggesting favorable circumstances for growth.",
    "challenging": "Be aware that the reading indicates some challenges ahead, but within them lie opportunities for significant growth.",
    "balanced": "The balance of energies in this reading suggests a nuanced situation with both opportunities and aspects requiring careful attention.",
    "significant": "The cards indicate this is a pivotal time with potential for meaningful developments in your situation.",
    "transformative": "The profound energies present in this reading suggest you're at a crucial turning point with potential for deep transformation.",
}


def introduction(theme: Theme, tone: Tone) -> str:
    return f"{INTRO_BY_THEME[theme]} {INTRO_TONE[tone]}"


INTERACTION_BY_THEME = {
    "relationship": "In the context of relationships, these cards together reveal the emotional currents, communication patterns, and growth opportunities in your connections with others.",
    "career": "Regarding your career questions, this combination of cards highlights the skills, challenges, and potential paths forward in your professional journey.",
    "spiritual": "For your spiritual development, these cards interact to show different aspects of your inner growth, awakening, and the energies supporting your evolution.",
}
INTERACTION_DEFAULT = "These cards work together to create a narrative that addresses multiple dimensions of your question."


def card_interactions(cards: Sequence[DrawnCard], theme: Theme) -> str:
    if len(cards) == 1:
        return "This single card stands alone, offering focused insight into your question."

    total = len(cards)
    reversed_count = sum(1 for c in cards if c.is_reversed)
    major_count = sum(1 for c in cards if c.is_major)

    if reversed_count == 0:
        pattern = "All cards appearing upright suggests a clear path forward with aligned energies supporting your journey."
    elif reversed_count == total:
        pattern = "All cards appearing reversed suggests significant blocks or internal challenges that require your attention."
    else:
        pattern = (
            f"With {reversed_count} of {total} cards reversed, there's a balance of flowing energy "
            "and areas that may be blocked or turned inward."
        )

    progression = ""
    if total >= 3:
        first, last = cards[0], cards[-1]
        if _has_suit(first, "Wands") and _has_suit(last, "Pentacles"):
            progression = "The reading progresses from inspiration and energy (Wands) toward material manifestation (Pentacles), suggesting ideas becoming reality."
        elif _has_suit(first, "Swords") and _has_suit(last, "Cups"):
            progression = "The reading moves from mental activity (Swords) toward emotional resolution (Cups), suggesting intellectual challenges finding emotional integration."
        elif major_count >= 2:
            progression = "The presence of multiple Major Arcana cards indicates significant life themes and transformative energies at work in your situation."

    closing = INTERACTION_BY_THEME.get(theme, INTERACTION_DEFAULT)
    return " ".join(p for p in (pattern, progression, closing) if p)


GUIDANCE_BY_THEME = {
    "relationship": "In your relationships, the cards suggest focusing on honest communication and emotional authenticity. Give space for both connection and independence, allowing relationships to evolve naturally.",
    "career": "For your professional journey, consider aligning your work with your values and strengths. Be strategic about opportunities while remaining adaptable to changing circumstances.",
    "health": "Regarding your wellbeing, the cards emphasize the importance of balance between different aspects of health - physical, emotional, mental, and spiritual. Small consistent actions create lasting wellness.",
    "spiritual": "On your spiritual path, trust the unfolding process and remain open to insights from unexpected sources. Integration of spiritual awareness into daily life creates sustainable growth.",
    "general": "The cards suggest maintaining flexibility while staying true to your core values. Timing matters - know when to act decisively and when to wait for clarity.",
}

GUIDANCE_TONE = {
    "positive": "The supportive energies present suggest this is an excellent time to move forward with confidence. Trust the process and embrace the opportunities appearing before you.",
    "challenging": "While challenges appear in this reading, remember that difficulties often precede significant growth. Approach obstacles as teachers rather than barriers.",
    "balanced": "Balance is key in your approach going forward. Weigh different aspects carefully and avoid extremes as you navigate this situation.",
    "significant": "This appears to be a pivotal time with important developments on the horizon. Your choices now may have far-reaching effects.",
    "transformative": "You stand at a threshold of potential transformation. Embrace the process of deep change, even when it requires letting go of the familiar.",
}


def guidance(theme: Theme, tone: Tone, cards: Sequence[DrawnCard]) -> str:
    parts = [GUIDANCE_BY_THEME[theme], GUIDANCE_TONE[tone]]

    has_swords = any(_has_suit(c, "Swords") for c in cards)
    has_cups = any(_has_suit(c, "Cups") for c in cards)
    if has_swords and has_cups:
        parts.append("Finding harmony between head and heart will be particularly important for you in this situation.")
    elif any(c.is_major and c.is_reversed for c in cards):
        parts.append("Pay attention to internal blocks or resistance that may be preventing you from fully embracing your potential in this situation.")

    return " ".join(parts)


# -------------------------------------------------------------------
# REFLECTION
# -------------------------------------------------------------------

MAX_REFLECTION_QUESTIONS = 5

GENERAL_QUESTIONS = [
    "What immediate insights resonate with you from this reading?",
    "Which card speaks to you most strongly and why?",
    "How might you integrate this guidance into your daily life?",
]

THEME_QUESTIONS = {
    "relationship": [
        "How are your current relationships reflecting your inner state?",
        "What patterns from past relationships might be influencing your present situation?",
        "What qualities do you most value in your closest relationships?",
    ],
    "career": [
        "What aspects of your work bring you the most fulfillment?",
        "How does your career path align with your core values?",
        "What skills or qualities would you like to develop further professionally?",
    ],
    "health": [
        "What areas of your wellbeing need the most attention right now?",
        "How might emotional patterns be affecting your physical health?",
        "What small changes could create greater balance in your daily routines?",
    ],
    "spiritual": [
        "How do you experience connection with your deeper self or higher guidance?",
        "What practices help you maintain spiritual awareness in daily life?",
        "What beliefs or perspectives might be ready for evolution?",
    ],
    "general": [
        "What aspects of this situation might you be overlooking?",
        "How do your fears and hopes influence how you see this situation?",
        "What would success or resolution look like to you?",
    ],
}

TONE_QUESTIONS = {
    "challenging": [
        "How have difficult situations contributed to your growth in the past?",
        "What resources or support might help you navigate current challenges?",
    ],
    "transformative": [
        "What might you need to release to allow transformation?",
        "How can you stay grounded through significant changes?",
    ],
    "significant": [
        "How can you best prepare for important developments ahead?",
        "What foundations need strengthening before moving forward?",
    ],
}

THRESHOLD_CARDS = {"The Fool", "Death", "The World"}


def reflection_pool(theme: Theme, tone: Tone, cards: Sequence[DrawnCard]) -> List[str]:
    pool = GENERAL_QUESTIONS + THEME_QUESTIONS[theme] + TONE_QUESTIONS.get(tone, [])
    if any(c.name in THRESHOLD_CARDS for c in cards):
        pool.append("How do you feel about beginnings and endings in your life right now?")
    if any("King" in c.name or "Queen" in c.name for c in cards):
        pool.append("What aspects of mature leadership or wisdom do you need to embody more fully?")
    return pool


def reflection_questions(theme: Theme, tone: Tone, cards: Sequence[DrawnCard], rng: random.Random) -> List[str]:
    pool = reflection_pool(theme, tone, cards)
    rng.shuffle(pool)
    return pool[:MAX_REFLECTION_QUESTIONS]


class TemplateSynthesizer:
    """Builds every interpretation field from the lookup tables above."""

    def synthesize(self, question: str, cards: Sequence[DrawnCard], rng: random.Random) -> Dict[str, Any]:
        theme, tone = classify(question, cards)
        return {
            "summary": summary(question, cards, tone, rng),
            "introduction": introduction(theme, tone),
            "cards": [
                {"name": c.name, "position": c.position, "interpretation": card_interpretation(c, theme)}
                for c in cards
            ],
            "card_interactions": card_interactions(cards, theme),
            "guidance": guidance(theme, tone, cards),
            "reflection_questions": reflection_questions(theme, tone, cards, rng),
        }
