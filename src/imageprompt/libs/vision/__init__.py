from .grid import PixelGrid, load_image
from .luma import PixelColor, classify, classify_row, gray_value, gray_values

__all__ = [
    "PixelColor",
    "PixelGrid",
    "classify",
    "classify_row",
    "gray_value",
    "gray_values",
    "load_image",
]
