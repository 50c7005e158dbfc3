"""Run-length encoding of a pixel grid into an English prompt.

Each row is classified black/white and scanned left to right; every maximal
run becomes one phrase:

    Line 3 starts with 2 black pixels, followed by 1 white pixel, and finally 4 black pixels.

A row holding a single run is described as ``Line N only contains <color> pixels.``
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Sequence

from imageprompt.libs.vision.grid import PixelGrid
from imageprompt.libs.vision.luma import PixelColor, classify_row

from .models import Run

logger = logging.getLogger(__name__)

__all__ = [
    "PromptEncoder",
    "build_header",
    "describe_row",
    "describe_run",
    "encode_prompt",
    "iter_runs",
]


def build_header(height: int, width: int) -> str:
    return f"Please create an image with {height} rows and {width} columns.\n\n"


def iter_runs(colors: Iterable[PixelColor]) -> Iterator[Run]:
    """Yield the maximal runs of a row in left-to-right order."""

    current: Optional[PixelColor] = None
    start = 0
    length = 0
    for color in colors:
        if color == current:
            length += 1
            continue
        if current is not None:
            yield Run(current, length, start)
            start += length
        current = color
        length = 1
    if current is not None:
        yield Run(current, length, start)


def describe_run(run: Run, *, line: int, width: int) -> str:
    """Phrase for one run of row *line*, which is *width* pixels wide."""

    color = run.color.value
    if run.is_last(width):
        # A run spanning the whole row beats both the opening and closing wording.
        if run.length == width:
            return f"Line {line} only contains {color} pixels.\n"
        return f"and finally {run.length} {color} {run.noun()}.\n"
    if run.is_first():
        return f"Line {line} starts with {run.length} {color} {run.noun()}, "
    return f"followed by {run.length} {color} {run.noun()}, "


def describe_row(colors: Sequence[PixelColor], *, line: int) -> str:
    width = len(colors)
    if width == 0:
        return f"Line {line} contains no pixels.\n"
    return "".join(describe_run(run, line=line, width=width) for run in iter_runs(colors))


class PromptEncoder:
    """Turns a :class:`PixelGrid` into the full prompt text."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def row_colors(self, grid: PixelGrid, y: int) -> List[PixelColor]:
        return classify_row(grid.row(y))

    def iter_lines(self, grid: PixelGrid) -> Iterator[str]:
        yield build_header(grid.height, grid.width)
        for y in range(grid.min_y, grid.max_y):
            yield describe_row(self.row_colors(grid, y), line=y - grid.min_y + 1)

    def encode(self, grid: PixelGrid) -> str:
        prompt = "".join(self.iter_lines(grid))
        self.log.debug(
            "encoded prompt",
            extra={
                "rows": grid.height,
                "columns": grid.width,
                "characters": len(prompt),
            },
        )
        return prompt


def encode_prompt(grid: PixelGrid, *, log: Optional[logging.Logger] = None) -> str:
    return PromptEncoder(log).encode(grid)
