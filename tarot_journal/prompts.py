from typing import Sequence

from tarot_journal.models import DrawnCard, SpreadDefinition

RESPONSE_SHAPE = """{
  "summary": "Brief overall summary of the reading",
  "introduction": "Introduction paragraph relating to the question",
  "cards": [
    {
      "name": "Card name",
      "position": "Position id",
      "interpretation": "Interpretation for this specific card"
    }
  ],
  "card_interactions": "How the cards relate to each other",
  "guidance": "Overall guidance based on the reading",
  "reflection_questions": ["Question 1", "Question 2", "Question 3"]
}"""


def build_prompt(question: str, spread: SpreadDefinition, cards: Sequence[DrawnCard]) -> str:
    """Reading request for a language model, asking for a JSON interpretation."""
    lines = [
        "As a skilled tarot card reader, provide an insightful, thoughtful interpretation for the following reading.",
        "",
        f'User\'s Question: "{question}"',
        f"Spread Type: {spread.name}",
        "",
        "Cards drawn:",
    ]
    lines += [f"- {c.name} in the {c.position} position ({c.orientation})" for c in cards]
    lines += [
        "",
        "Provide a holistic interpretation that includes:",
        "1. A brief introduction connecting to the user's question",
        "2. Individual interpretations for each card in its position",
        "3. How the cards interact with each other",
        "4. Overall guidance and insights from the reading",
        "5. Reflection questions for the user to consider",
        "",
        "Format the response in JSON with the following structure:",
        RESPONSE_SHAPE,
    ]
    return "\n".join(lines)
