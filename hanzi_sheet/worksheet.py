from __future__ import annotations

from typing import List

from .models import CharacterRecord, PracticeCell, Worksheet

GRID_SIZE = 20
FADE_STEPS = 3


def build_practice_grid(character: str, size: int = GRID_SIZE, fades: int = FADE_STEPS) -> List[PracticeCell]:
    """Reference cell first, then `fades` progressively lighter copies, then blank cells."""
    if size < 1:
        raise ValueError("size must be >= 1")
    if fades < 0:
        raise ValueError("fades must be >= 0")

    cells: List[PracticeCell] = []
    for i in range(size):
        if i == 0:
            cells.append(PracticeCell(index=i, text=character, kind="reference"))
        elif i <= fades:
            cells.append(PracticeCell(index=i, text=character, kind="fade", fade_level=i))
        else:
            cells.append(PracticeCell(index=i, text="", kind="blank"))
    return cells


def stroke_label(strokes: int) -> str:
    return f"{strokes or '?'} Striche"


def build_worksheet(record: CharacterRecord, size: int = GRID_SIZE, fades: int = FADE_STEPS) -> Worksheet:
    return Worksheet(
        record=record,
        stroke_label=stroke_label(record.strokes),
        hsk_label=f"HSK {record.hsk_level}",
        cells=build_practice_grid(record.character, size=size, fades=fades),
        words=list(record.words),
    )
