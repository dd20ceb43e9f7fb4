"""Optional OpenAI-backed interpreter for the prompt built in prompts.py."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from tarot_journal import config
from tarot_journal.models import CardInterpretation

log = logging.getLogger("tarot_journal.llm")

SYSTEM_PROMPT = """You are a natural, intuitive tarot reader.

Rules:
- Ground every part of the interpretation in the cards provided
- Give exactly one entry in "cards" per card drawn, in the order given
- Respond with a single JSON object and nothing else"""


class LLMError(RuntimeError):
    pass


class _LLMReading(BaseModel):
    summary: str
    introduction: str
    cards: List[CardInterpretation]
    card_interactions: str
    guidance: str
    reflection_questions: List[str]


class OpenAIInterpreter:
    def __init__(self, api_key: str, model: str = config.OPENAI_MODEL, temperature: float = 0.7) -> None:
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_env(cls) -> Optional["OpenAIInterpreter"]:
        """Interpreter when TAROT_USE_LLM is on and OPENAI_API_KEY is set, else None."""
        api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
        if not config.USE_LLM or not api_key:
            return None
        return cls(api_key=api_key)

    async def interpret(self, prompt: str) -> Dict[str, Any]:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                max_tokens=1500,
                temperature=self.temperature,
            )
        except OpenAIError as e:
            raise LLMError(f"OpenAI request failed: {e}") from e

        content = (response.choices[0].message.content or "").strip()
        try:
            reading = _LLMReading.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            log.debug("unparseable model reply: %s", content)
            raise LLMError(f"Model reply is not a valid interpretation: {e}") from e
        return reading.model_dump()
