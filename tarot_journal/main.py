import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tarot_journal import config
from tarot_journal.cache import InterpretationCache
from tarot_journal.deck import validate_deck
from tarot_journal.llm import OpenAIInterpreter
from tarot_journal.routes.deck_routes import router as deck_router
from tarot_journal.routes.journal_routes import router as journal_router
from tarot_journal.routes.reading_routes import router as reading_router
from tarot_journal.service import InterpretationService
from tarot_journal.storage.database import init_db

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("tarot_journal.main")


def build_interpreter() -> InterpretationService:
    return InterpretationService(
        cache=InterpretationCache(capacity=config.CACHE_CAPACITY),
        latency=config.SIMULATED_LATENCY,
        llm=OpenAIInterpreter.from_env(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.interpreter.end_session()


def create_app(interpreter: Optional[InterpretationService] = None) -> FastAPI:
    validate_deck()
    init_db()

    app = FastAPI(title="Tarot Journal", version="0.1.0", lifespan=lifespan)
    app.state.interpreter = interpreter or build_interpreter()
    log.info(
        "interpreter ready cache_capacity=%d llm=%s",
        app.state.interpreter.cache.capacity,
        app.state.interpreter.llm is not None,
    )

    app.include_router(deck_router)
    app.include_router(reading_router)
    app.include_router(journal_router)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
