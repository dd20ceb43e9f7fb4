"""Runtime settings, read from the environment (and a root `.env` if present)."""

import os
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[1]

load_dotenv(REPO_ROOT / ".env")

DATA_DIR = Path(__file__).resolve().parent / "data"

DB_PATH = os.getenv("TAROT_DB_PATH", str(REPO_ROOT / "data" / "tarot_journal.db"))
CACHE_CAPACITY = int(os.getenv("TAROT_CACHE_CAPACITY", "128"))
# Seconds to wait before synthesizing; stands in for a model round-trip.
SIMULATED_LATENCY = float(os.getenv("TAROT_SIMULATED_LATENCY", "0"))
USE_LLM = os.getenv("TAROT_USE_LLM", "").strip().lower() in ("1", "true", "yes", "on")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
LOG_LEVEL = os.getenv("TAROT_LOG_LEVEL", "INFO").upper()
