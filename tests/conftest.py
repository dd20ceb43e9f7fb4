import os
import tempfile

# Settings are read at import time; keep the import-time app off the real database.
os.environ["TAROT_DB_PATH"] = os.path.join(tempfile.mkdtemp(prefix="tarot-journal-"), "import.db")
os.environ.pop("TAROT_USE_LLM", None)
os.environ["TAROT_SIMULATED_LATENCY"] = "0"

import pytest
from fastapi.testclient import TestClient

import tarot_journal.storage.database as db_module
from tarot_journal.cache import InterpretationCache
from tarot_journal.deck import drawn_card, get_card
from tarot_journal.main import create_app
from tarot_journal.service import InterpretationService
from tarot_journal.utils.rng import seeded_random


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    """Point storage at a fresh SQLite file for one test."""
    path = str(tmp_path / "tarot.db")
    monkeypatch.setattr(db_module, "DB_PATH", path)
    db_module.init_db()
    return path


@pytest.fixture
def draw():
    """Build DrawnCards from (name, position, reversed) tuples."""
    def _draw(*specs):
        return [
            drawn_card(get_card(name), position, position.title(), reversed_=rev)
            for name, position, rev in specs
        ]
    return _draw


@pytest.fixture
def interpreter():
    return InterpretationService(cache=InterpretationCache(capacity=8), rng=seeded_random("tests"))


@pytest.fixture
def client(temp_db, interpreter):
    return TestClient(create_app(interpreter))
