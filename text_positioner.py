"""Convert decoded text runs into positioned text elements."""

from __future__ import annotations

import math
from typing import Iterable, List

from models import TextElement, TextRun


def position_text(text_run: TextRun) -> TextElement:
    # Reported glyph heights are exaggerated for some fonts, so the height is
    # taken from the length of the transform's vertical basis vector instead.
    transform = text_run.transform
    height = math.sqrt(transform[2] * transform[2] + transform[3] * transform[3])
    return TextElement(
        text=text_run.text,
        x=transform[4],
        y=transform[5],
        width=text_run.width,
        height=height,
    )


def position_texts(text_runs: Iterable[TextRun]) -> List[TextElement]:
    return [position_text(text_run) for text_run in text_runs]
