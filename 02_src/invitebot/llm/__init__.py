"""LLM module."""

from .composer import Composer, IComposer
from .llm_provider import ILLMProvider, LLMProvider

__all__ = ["ILLMProvider", "LLMProvider", "IComposer", "Composer"]
