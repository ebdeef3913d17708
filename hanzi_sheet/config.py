from __future__ import annotations

import os
from pathlib import Path

APP_DIR = Path(__file__).resolve().parent

# Data directory (offline dictionary copy lives here):
DATA_DIR = Path(os.getenv("DATA_DIR", str(APP_DIR / "data"))).resolve()

FALLBACK_PATH = APP_DIR / "data" / "fallback_characters.json"


def _parse_csv_env(name: str) -> list[str]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return []
    return [x.strip() for x in raw.split(",") if x.strip()]


def _parse_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def _parse_float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# Sources, tried in this order: Make Me a Hanzi, JSON API (only if set), local file (only if present).
MMH_URL = os.getenv(
    "HANZI_MMH_URL",
    "https://raw.githubusercontent.com/skishore/makemeahanzi/master/data/dictionary.txt",
)
# e.g. https://dict.example.org/api/chars/{character}
JSON_API_URL = os.getenv("HANZI_JSON_API_URL", "").strip()
LOCAL_DICTIONARY_PATH = Path(
    os.getenv("HANZI_LOCAL_DICTIONARY", str(DATA_DIR / "dictionary.txt"))
).resolve()

HTTP_TIMEOUT = _parse_float_env("HANZI_HTTP_TIMEOUT", 30.0)
WARM_UP = _parse_bool_env("HANZI_WARM_UP", True)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS:
# - Default to local dev. For production, set CORS_ORIGINS to the worksheet page origins.
#   Example:
#     CORS_ORIGINS=https://example.github.io,https://worksheets.example.org
DEFAULT_CORS_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
    "http://127.0.0.1",
    "http://127.0.0.1:3000",
]
CORS_ORIGINS = _parse_csv_env("CORS_ORIGINS") or DEFAULT_CORS_ORIGINS
