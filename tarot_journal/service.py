"""Interpretation orchestration: cache lookup, synthesis, cache fill."""

from __future__ import annotations

import asyncio
import logging
import random
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from tarot_journal.cache import InterpretationCache
from tarot_journal.llm import LLMError, OpenAIInterpreter
from tarot_journal.models import DrawnCard, Interpretation, InterpretResult, SpreadDefinition
from tarot_journal.prompts import build_prompt
from tarot_journal.synthesis import TemplateSynthesizer

log = logging.getLogger("tarot_journal.service")

GENERATION_ERROR = "Failed to generate interpretation. Please try again."


def _check_card_entries(fields: Dict[str, Any], cards: Sequence[DrawnCard]) -> None:
    """The reply must carry one entry per drawn card, in draw order."""
    returned = [entry.get("name") for entry in fields.get("cards") or []]
    expected = [card.name for card in cards]
    if returned != expected:
        raise LLMError(f"Reply cards {returned} do not match the draw {expected}")


class InterpretationService:
    """Owns one InterpretationCache; call end_session() to drop it."""

    def __init__(
        self,
        cache: InterpretationCache,
        synthesizer: Optional[TemplateSynthesizer] = None,
        rng: Optional[random.Random] = None,
        latency: float = 0.0,
        llm: Optional[OpenAIInterpreter] = None,
    ) -> None:
        self.cache = cache
        self.synthesizer = synthesizer or TemplateSynthesizer()
        self.rng = rng or random.Random()
        self.latency = latency
        self.llm = llm

    async def interpret(
        self,
        question: str,
        spread: SpreadDefinition,
        cards: Sequence[DrawnCard],
    ) -> InterpretResult:
        try:
            cached = self.cache.get(question, cards)
            if cached is not None:
                log.info("using cached interpretation id=%s", cached.id)
                return InterpretResult(interpretation=cached)

            if len(cards) != spread.layout.card_count:
                # TODO: reject once product decides whether partial spreads are valid
                log.warning(
                    "spread %s expects %d cards, got %d; interpreting the cards given",
                    spread.id, spread.layout.card_count, len(cards),
                )

            prompt = build_prompt(question, spread, cards)
            if self.latency > 0:
                await asyncio.sleep(self.latency)

            fields = await self._synthesize(question, prompt, cards)
            interpretation = Interpretation(
                id=str(uuid.uuid4()),
                timestamp=datetime.now(timezone.utc).isoformat(),
                **fields,
            )
            self.cache.put(question, cards, interpretation)
            return InterpretResult(interpretation=interpretation)
        except Exception:
            log.exception("error generating interpretation for spread=%s", spread.id)
            return InterpretResult(error=GENERATION_ERROR)

    async def _synthesize(self, question: str, prompt: str, cards: Sequence[DrawnCard]) -> Dict[str, Any]:
        if self.llm is not None:
            try:
                fields = await self.llm.interpret(prompt)
                _check_card_entries(fields, cards)
                return fields
            except LLMError as e:
                log.warning("LLM interpretation failed, using templates: %s", e)
        return self.synthesizer.synthesize(question, cards, self.rng)

    def end_session(self) -> None:
        log.info("ending interpretation session, dropping %d cached entries", len(self.cache))
        self.cache.clear()
