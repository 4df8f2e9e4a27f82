"""Abstract base class for model providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ModelRequestError(Exception):
    """Raised when the model endpoint does not return a usable response.

    `status` is the HTTP status code, or None when no response was received.
    """

    status: int | None
    body: str

    def __str__(self) -> str:
        if self.status is None:
            return f"Model request failed: {self.body}"
        return f"Model API error {self.status}: {self.body}"


class LLMProvider(ABC):
    """Abstract base class for model providers.

    This interface allows pluggable backends (hosted text-generation, OpenAI-compatible
    chat endpoints, test fakes). Implementations perform exactly one outbound call per
    `generate` and never retry.
    """

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Generate text completion from a prompt.

        Args:
            prompt: The input prompt.

        Returns:
            Generated text completion.

        Raises:
            ModelRequestError: If the endpoint fails or returns an unusable body.
        """
        pass
