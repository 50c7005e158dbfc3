"""Image-to-prompt CLI module.

Available commands:
- image-to-prompt IMAGE_FILE: print the run-length encoded prompt for an image
"""

from .main import app

__all__ = ["app"]
