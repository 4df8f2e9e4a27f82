"""Factory for creating model providers."""

import logging

from ai_command_runner.llm.openai_provider import OpenAICompatibleProvider
from ai_command_runner.llm.provider import LLMProvider
from ai_command_runner.llm.text_generation_provider import TextGenerationProvider
from ai_command_runner.runner.config import RunnerSettings

logger = logging.getLogger(__name__)


class LLMFactory:
    """Factory for creating model provider instances."""

    @staticmethod
    def create(settings: RunnerSettings) -> LLMProvider:
        """Create a model provider based on configuration.

        Args:
            settings: Runner settings specifying the provider.

        Returns:
            Configured provider instance.

        Raises:
            ValueError: If provider type is not supported.
        """
        logger.info(f"Creating LLM provider: {settings.llm_provider}")

        if settings.llm_provider == "text-generation":
            return TextGenerationProvider(
                token=settings.hf_api_token,
                model_id=settings.model_id,
                base_url=settings.inference_base_url,
                max_new_tokens=settings.max_new_tokens,
                timeout=settings.request_timeout_seconds,
            )
        elif settings.llm_provider == "openai-compatible":
            return OpenAICompatibleProvider(
                token=settings.hf_api_token,
                model_id=settings.model_id,
                base_url=settings.openai_base_url,
                max_new_tokens=settings.max_new_tokens,
                timeout=settings.request_timeout_seconds,
            )
        else:
            raise ValueError(f"Unsupported LLM provider: {settings.llm_provider}")
