"""Decoded pixel grids and the loader that produces them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from imageprompt.errors import err_image_decode, err_image_open

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PixelGrid:
    """Read-only RGBA samples addressed by ``(x, y)`` inside ``bounds``.

    ``pixels`` has shape ``(height, width, 4)``; ``(min_x, min_y)`` is the
    coordinate of ``pixels[0, 0]``.
    """

    pixels: np.ndarray
    min_x: int = 0
    min_y: int = 0
    source: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        arr = np.array(self.pixels, dtype=np.uint8, copy=True)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"expected (height, width, 4) RGBA pixels, got {arr.shape}")
        arr.setflags(write=False)
        object.__setattr__(self, "pixels", arr)

    @classmethod
    def from_image(cls, image: Image.Image, source: Optional[Path] = None) -> "PixelGrid":
        if image.mode == "I" or image.mode.startswith("I;16"):
            # Pillow's convert() clips wide gray at 255; keep the high byte instead.
            wide = np.asarray(image).astype(np.int64)
            gray = (np.clip(wide, 0, 0xFFFF) >> 8).astype(np.uint8)
            rgba = np.empty(gray.shape + (4,), dtype=np.uint8)
            rgba[..., :3] = gray[..., None]
            rgba[..., 3] = 0xFF
            return cls(rgba, source=source)
        rgba_image = image if image.mode == "RGBA" else image.convert("RGBA")
        return cls(np.asarray(rgba_image, dtype=np.uint8), source=source)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def max_x(self) -> int:
        return self.min_x + self.width

    @property
    def max_y(self) -> int:
        return self.min_y + self.height

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """``(min_x, min_y, max_x, max_y)`` with exclusive maxima."""
        return self.min_x, self.min_y, self.max_x, self.max_y

    def at(self, x: int, y: int) -> Tuple[int, int, int, int]:
        if not (self.min_x <= x < self.max_x and self.min_y <= y < self.max_y):
            raise IndexError(f"({x}, {y}) outside bounds {self.bounds}")
        r, g, b, a = self.pixels[y - self.min_y, x - self.min_x]
        return int(r), int(g), int(b), int(a)

    def row(self, y: int) -> np.ndarray:
        if not self.min_y <= y < self.max_y:
            raise IndexError(f"row {y} outside bounds {self.bounds}")
        return self.pixels[y - self.min_y]


def load_image(
    path: Union[str, Path], *, log: Optional[logging.Logger] = None
) -> PixelGrid:
    """Decode the image at *path* into a :class:`PixelGrid`.

    The format is detected from the file content. Raises ``ImageOpenError``
    when the file cannot be opened and ``ImageDecodeError`` when its bytes are
    not a supported, intact image.
    """

    log = log or logger
    image_path = Path(path)

    try:
        handle = image_path.open("rb")
    except OSError as exc:
        raise err_image_open(image_path, exc.strerror or str(exc)) from exc

    with handle:
        try:
            with Image.open(handle) as image:
                image.load()
                log.debug(
                    "decoded %s as %s (mode=%s, size=%dx%d)",
                    image_path,
                    image.format,
                    image.mode,
                    image.width,
                    image.height,
                )
                return PixelGrid.from_image(image, source=image_path)
        except UnidentifiedImageError as exc:
            raise err_image_decode(image_path, "unknown image format") from exc
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            raise err_image_decode(image_path, str(exc)) from exc
