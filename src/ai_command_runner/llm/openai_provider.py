"""OpenAI-compatible chat completion provider.

Useful for endpoints that expose the OpenAI wire format, such as the
Hugging Face router (`https://router.huggingface.co/v1`).
"""

import logging

from openai import APIError, APIStatusError, OpenAI

from ai_command_runner.llm.provider import LLMProvider, ModelRequestError

logger = logging.getLogger(__name__)


class OpenAICompatibleProvider(LLMProvider):
    """OpenAI API provider implementation."""

    def __init__(
        self,
        *,
        token: str,
        model_id: str,
        base_url: str,
        max_new_tokens: int = 1024,
        timeout: float | None = None,
        client: OpenAI | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            token: API key sent as a bearer token.
            model_id: Model name passed through to the endpoint.
            base_url: OpenAI-compatible API base URL.
            max_new_tokens: Output token budget.
            timeout: Request timeout in seconds. None waits indefinitely.
            client: Optional pre-built client.

        Raises:
            ValueError: If API key is not provided.
        """
        if not token:
            raise ValueError("API key is required")

        self.model = model_id
        self.max_new_tokens = max_new_tokens
        # No retries: one outbound call per run.
        self.client = client or OpenAI(
            api_key=token, base_url=base_url, timeout=timeout, max_retries=0
        )

        logger.info(f"OpenAI-compatible provider initialized with model: {self.model}")

    def generate(self, prompt: str) -> str:
        """Generate a completion with temperature 0.

        Args:
            prompt: The input prompt, sent as a single user message.

        Returns:
            Generated text completion.
        """
        logger.debug(f"Generating completion for prompt: {prompt[:100]}...")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_new_tokens,
                temperature=0,
            )
        except APIStatusError as e:
            raise ModelRequestError(status=e.status_code, body=e.response.text) from e
        except APIError as e:
            raise ModelRequestError(status=None, body=e.message) from e

        content = response.choices[0].message.content or ""
        logger.debug(f"Generated {len(content)} characters")

        return content
