"""
Heuristic helpers that turn a raw dictionary entry into worksheet data.

None of these are linguistically rigorous:
- tone comes from the first tone mark found,
- the HSK tier is a membership check against short static lists,
- the German meaning is a keyword match, not a translation.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from pypinyin import Style, lazy_pinyin

from .models import ExampleWord

TONE_MARKS: Dict[str, int] = {
    # a
    "ā": 1, "á": 2, "ǎ": 3, "à": 4,
    # e
    "ē": 1, "é": 2, "ě": 3, "è": 4,
    # i
    "ī": 1, "í": 2, "ǐ": 3, "ì": 4,
    # o
    "ō": 1, "ó": 2, "ǒ": 3, "ò": 4,
    # u
    "ū": 1, "ú": 2, "ǔ": 3, "ù": 4,
    # ü (a bare ü has always been read as first tone here)
    "ü": 1, "ǖ": 1, "ǘ": 2, "ǚ": 3, "ǜ": 4,
}

# Ordered: the first keyword found in the definition wins.
GERMAN_KEYWORDS: Dict[str, str] = {
    "water": "Wasser",
    "fire": "Feuer",
    "mountain": "Berg",
    "tree": "Baum",
    "person": "Person",
    "big": "groß",
    "small": "klein",
    "sun": "Sonne",
    "moon": "Mond",
    "earth": "Erde",
    "gold": "Gold",
    "wood": "Holz",
    "metal": "Metall",
    "hand": "Hand",
    "car": "Auto",
    "good": "gut",
    "learn": "lernen",
    "study": "studieren",
}

HSK1_CHARACTERS = (
    "一", "二", "三", "人", "大", "小", "水", "火",
    "山", "木", "日", "月", "好", "学", "中", "国",
)

# Tier n is HSK_TIERS[n - 1]; characters in none of them get len(HSK_TIERS) + 1.
HSK_TIERS: Sequence[Sequence[str]] = (HSK1_CHARACTERS,)

CURATED_WORDS: Dict[str, List[ExampleWord]] = {
    "学": [
        ExampleWord(word="学生", pinyin="xuéshēng", meaning_de="Student"),
        ExampleWord(word="学校", pinyin="xuéxiào", meaning_de="Schule"),
        ExampleWord(word="学习", pinyin="xuéxí", meaning_de="lernen"),
    ],
    "好": [
        ExampleWord(word="你好", pinyin="nǐhǎo", meaning_de="Hallo"),
        ExampleWord(word="好的", pinyin="hǎode", meaning_de="okay, gut"),
        ExampleWord(word="很好", pinyin="hěnhǎo", meaning_de="sehr gut"),
    ],
}


def extract_tone(pinyin: Optional[str]) -> int:
    """Return 1-4 for the first tone-marked vowel in `pinyin`, 0 if there is none."""
    if not pinyin:
        return 0
    for ch in pinyin:
        tone = TONE_MARKS.get(ch)
        if tone:
            return tone
    return 0


def estimate_hsk_level(character: str, tiers: Sequence[Sequence[str]] = HSK_TIERS) -> int:
    for level, members in enumerate(tiers, start=1):
        if character in members:
            return level
    return len(tiers) + 1


def translate_to_german(definition: Optional[str]) -> Optional[str]:
    """
    Keyword lookup for a German gloss of an English definition.
    Returns None when nothing matches; callers show the English text instead.
    """
    if not definition:
        return None
    low = definition.lower()
    for en, de in GERMAN_KEYWORDS.items():
        if en in low:
            return de
    return None


def _reading(word: str) -> str:
    # characters pypinyin does not know are dropped, so the reading may be empty
    return "".join(lazy_pinyin(word, style=Style.TONE, errors="ignore"))


def generate_example_words(character: str) -> List[ExampleWord]:
    """
    Curated words where we have them. Everything else gets three placeholder
    compounds built around the character; they are not real vocabulary and are
    marked `synthetic`.
    """
    curated = CURATED_WORDS.get(character)
    if curated:
        return [w.model_copy() for w in curated]

    placeholders = [character + "子", "大" + character, character + "们"]
    return [
        ExampleWord(
            word=w,
            pinyin=_reading(w),
            meaning_de=f"Beispielwort {i}",
            synthetic=True,
        )
        for i, w in enumerate(placeholders, start=1)
    ]
