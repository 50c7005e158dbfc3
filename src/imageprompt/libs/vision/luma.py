"""Gray conversion and black/white classification of pixel samples.

The gray value follows ITU-R 601-2 luma (0.299 R + 0.587 G + 0.114 B) computed
in 16.16 fixed point on 16-bit, alpha-premultiplied channels, so a pixel lands
on the same side of the 128 threshold as it does in the reference decoder.
Opaque 8-bit gray samples map to themselves; fully transparent pixels are black.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Sequence, Union

import numpy as np

__all__ = [
    "BLACK_THRESHOLD",
    "PixelColor",
    "classify",
    "classify_row",
    "gray_value",
    "gray_values",
]

BLACK_THRESHOLD = 128

_WEIGHT_R = 19595
_WEIGHT_G = 38470
_WEIGHT_B = 7471

Sample = Union[int, Sequence[int]]


class PixelColor(str, Enum):
    """Binary classification of a pixel."""

    BLACK = "black"
    WHITE = "white"


def gray_values(rgba: np.ndarray) -> np.ndarray:
    """Vectorised gray conversion for an ``(..., 4)`` uint8 RGBA array."""

    arr = np.asarray(rgba, dtype=np.int64)
    if arr.shape[-1] != 4:
        raise ValueError(f"expected RGBA samples, got shape {arr.shape}")
    alpha = arr[..., 3]
    # Widen to 16 bit and premultiply by alpha.
    rgb16 = (arr[..., :3] * 0x101) * alpha[..., None] // 0xFF
    y = (
        _WEIGHT_R * rgb16[..., 0]
        + _WEIGHT_G * rgb16[..., 1]
        + _WEIGHT_B * rgb16[..., 2]
        + (1 << 15)
    ) >> 24
    return y.astype(np.uint8)


def _as_rgba(sample: Sample) -> tuple[int, int, int, int]:
    if isinstance(sample, (int, np.integer)):
        value = int(sample)
        return value, value, value, 0xFF
    values = [int(v) for v in sample]
    if len(values) == 3:
        return values[0], values[1], values[2], 0xFF
    if len(values) == 4:
        return values[0], values[1], values[2], values[3]
    raise ValueError(f"expected a gray, RGB or RGBA sample, got {sample!r}")


def gray_value(sample: Sample) -> int:
    """Gray value in ``[0, 255]`` for one gray, RGB or RGBA sample."""

    return int(gray_values(np.array(_as_rgba(sample)))[()])


def _label(gray: int) -> PixelColor:
    return PixelColor.BLACK if gray < BLACK_THRESHOLD else PixelColor.WHITE


def classify(sample: Sample) -> PixelColor:
    """Black when the gray value is below 128, white otherwise."""

    return _label(gray_value(sample))


def classify_row(rgba_row: np.ndarray) -> List[PixelColor]:
    """Classify every sample of a ``(width, 4)`` row, left to right."""

    return [_label(int(g)) for g in gray_values(rgba_row).reshape(-1)]
