from __future__ import annotations

from pathlib import Path
from typing import Union


class ImagePromptError(Exception):
    """Base class for every failure surfaced by the image-to-prompt tool."""

    def __init__(self, err_type: str, message: str, hint: str | None = None):
        super().__init__(message)
        self.err_type = err_type
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        return self.message

    def as_dict(self) -> dict:
        payload = {"type": self.err_type, "message": self.message}
        if self.hint:
            payload["hint"] = self.hint
        return payload


class FlagError(ImagePromptError, ValueError):
    pass


class ImageOpenError(ImagePromptError, OSError):
    pass


class ImageDecodeError(ImagePromptError, ValueError):
    pass


def err_invalid_log_level(value: str, source: str | None = None) -> FlagError:
    message = f"Unknown log level '{value}'"
    if source:
        message += f" (from {source})"
    return FlagError(
        "invalid_log_level",
        message,
        "Use one of: debug, info, warn, error",
    )


def err_image_open(path: Union[str, Path], reason: str) -> ImageOpenError:
    return ImageOpenError("image_open_failed", f"open image file {path}: {reason}")


def err_image_decode(path: Union[str, Path], reason: str) -> ImageDecodeError:
    return ImageDecodeError(
        "image_decode_failed",
        f"decode image {path}: {reason}",
        "Check that the file is a supported raster image",
    )
