"""Bundled fallback table, used when no dictionary source can answer."""

from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .config import FALLBACK_PATH
from .models import CharacterRecord

FallbackTable = Mapping[str, CharacterRecord]


def load_fallback_table(path: Path = FALLBACK_PATH) -> FallbackTable:
    """
    Load the fallback JSON:
      { "学": {"pinyin": "xué", "tone": 2, "meaning_de": ..., "words": [...]}, ... }
    Keys are the characters; the record's own `character` field is filled from the key.
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Fallback table {path} must be a JSON object keyed by character")

    table = {}
    for zi, item in raw.items():
        if not isinstance(item, dict):
            raise ValueError(f"Fallback entry for {zi!r} is not an object")
        table[zi] = CharacterRecord(**{**item, "character": zi, "source": "fallback"})
    return MappingProxyType(table)
