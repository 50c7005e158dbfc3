from .encoder import PromptEncoder, encode_prompt
from .models import Run

__all__ = ["PromptEncoder", "Run", "encode_prompt"]
