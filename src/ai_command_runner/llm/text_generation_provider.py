"""Hosted text-generation inference provider (Hugging Face Inference API)."""

from __future__ import annotations

import logging

import requests

from ai_command_runner.llm.provider import LLMProvider, ModelRequestError
from ai_command_runner.llm.responses import classify_response

logger = logging.getLogger(__name__)


class TextGenerationProvider(LLMProvider):
    """Calls `POST {base_url}/{model_id}` with a text-generation payload.

    Generation is deterministic (`do_sample` disabled) with a bounded token budget.
    The session is injectable so tests never touch the network.
    """

    def __init__(
        self,
        *,
        token: str,
        model_id: str,
        base_url: str = "https://api-inference.huggingface.co/models",
        max_new_tokens: int = 1024,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            token: Bearer token for the inference API.
            model_id: Model identifier, e.g. 'HuggingFaceH4/starchat2-15b-v0.1'.
            base_url: Inference API base URL.
            max_new_tokens: Output token budget.
            timeout: Request timeout in seconds. None waits indefinitely.
            session: Optional pre-built session.

        Raises:
            ValueError: If token or model ID is missing.
        """
        if not token:
            raise ValueError("API token is required")
        if not model_id:
            raise ValueError("Model ID is required")

        self.model_id = model_id
        self.max_new_tokens = max_new_tokens
        self.timeout = timeout
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
                "User-Agent": "ai-command-runner",
            }
        )

        logger.info("Text-generation provider initialized", extra={"model_id": model_id})

    @property
    def url(self) -> str:
        return f"{self._base_url}/{self.model_id}"

    def build_payload(self, prompt: str) -> dict[str, object]:
        return {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": self.max_new_tokens,
                "do_sample": False,
            },
        }

    def generate(self, prompt: str) -> str:
        logger.debug("Posting prompt", extra={"url": self.url, "prompt_chars": len(prompt)})

        try:
            resp = self._session.post(self.url, json=self.build_payload(prompt), timeout=self.timeout)
        except requests.RequestException as e:
            raise ModelRequestError(status=None, body=str(e)) from e

        # Only 2xx is success; requests treats redirects as ok.
        if not 200 <= resp.status_code < 300:
            raise ModelRequestError(status=resp.status_code, body=resp.text)

        try:
            data = resp.json()
        except ValueError as e:
            raise ModelRequestError(status=resp.status_code, body=resp.text) from e

        shape = classify_response(data)
        logger.debug(
            "Classified model response",
            extra={"shape": type(shape).__name__, "chars": len(shape.text)},
        )
        return shape.text
