"""Value types shared by the prompt encoder."""

from __future__ import annotations

from dataclasses import dataclass

from imageprompt.libs.vision.luma import PixelColor


@dataclass(frozen=True)
class Run:
    """Maximal span of same-coloured pixels within one row."""

    color: PixelColor
    length: int
    start: int = 0

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ValueError(f"run length must be >= 1, got {self.length}")
        if self.start < 0:
            raise ValueError(f"run start must be >= 0, got {self.start}")

    @property
    def end(self) -> int:
        return self.start + self.length

    def is_first(self) -> bool:
        return self.start == 0

    def is_last(self, width: int) -> bool:
        return self.end == width

    def noun(self) -> str:
        return "pixel" if self.length == 1 else "pixels"
