"""LLM package initialization."""

from ai_command_runner.llm.factory import LLMFactory
from ai_command_runner.llm.provider import LLMProvider, ModelRequestError

__all__ = [
    "LLMFactory",
    "LLMProvider",
    "ModelRequestError",
]
