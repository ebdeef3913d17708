from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


class ExampleWord(BaseModel):
    word: str
    pinyin: str = ""  # empty when no reading is known
    meaning_de: str
    synthetic: bool = False  # generated placeholder, not a real dictionary word


class CharacterRecord(BaseModel):
    character: str = Field(min_length=1)
    pinyin: str
    tone: int = Field(default=0, ge=0, le=4)  # 0 = neutral/unknown
    meaning_de: str
    meaning_en: str
    strokes: int = Field(default=0, ge=0)  # 0 = unknown
    hsk_level: int = Field(default=1, ge=1)
    words: List[ExampleWord] = []
    source: str = ""


class SourceEntry(BaseModel):
    """Raw answer of one dictionary source, before enrichment."""

    character: str
    pinyin: str
    definition: str
    strokes: int = 0


class PracticeCell(BaseModel):
    index: int
    text: str  # empty for blank cells
    kind: Literal["reference", "fade", "blank"]
    fade_level: int = 0  # 1..n for fade cells


class Worksheet(BaseModel):
    record: CharacterRecord
    stroke_label: str
    hsk_label: str
    cells: List[PracticeCell]
    words: List[ExampleWord]

