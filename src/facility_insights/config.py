"""Configuration and constants. Read from the environment, with a local .env loaded through python-dotenv."""

import os
from pathlib import Path

from dotenv import load_dotenv


def _get(key: str, default: str | None = None) -> str | None:
    """Read config from os.environ; blank values count as unset."""
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def _load_dotenv_local() -> None:
    """Load .env from the project root when present. Real environment variables win."""
    root = Path(__file__).resolve().parent.parent.parent
    env_file = root / ".env"
    if env_file.exists():
        load_dotenv(env_file, override=False)


_load_dotenv_local()

# Paths. We live in src/facility_insights/ so project root is parent.parent.parent.
PROJECT_ROOT = Path(_get("PROJECT_ROOT", str(Path(__file__).resolve().parent.parent.parent)))
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_CSV = Path(_get("FACILITY_CSV") or str(DATA_DIR / "Virtue Foundation Ghana v0.3 - Sheet1.csv"))
MAP_DATA_DIR = Path(_get("MAP_DATA_DIR") or str(PROJECT_ROOT / "map" / "public" / "data"))

# Facilities scoring below this (raw 0-105 score) count as incomplete.
INCOMPLETE_SCORE_THRESHOLD = int(_get("INCOMPLETE_SCORE_THRESHOLD", "50"))

LOG_LEVEL = (_get("LOG_LEVEL", "INFO") or "INFO").upper()
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

# API
CORS_ORIGINS = [o.strip() for o in (_get("CORS_ORIGINS", "*") or "*").split(",") if o.strip()]
