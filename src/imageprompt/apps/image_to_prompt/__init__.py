"""Image-to-prompt: describe black/white pixel content as English text."""

__version__ = "0.0.1"
