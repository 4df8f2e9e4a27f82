"""Configuration for a single runner invocation.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The settings object is built once by the CLI entrypoint and handed to every
component. Nothing else in the package reads the process environment.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL_ID = "HuggingFaceH4/starchat2-15b-v0.1"


class RunnerSettings(BaseSettings):
    """Settings for the command runner.

    Environment variables:
    - HF_API_TOKEN      (required)
    - MODEL_ID          (optional)
    - LOG_LEVEL         (optional)
    - AI_RUNNER_ROOT    (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `RunnerSettings(_env_file=path_to_env)`.
    """

    # Empty default so `RunnerSettings()` type-checks; the validator below enforces a value.
    hf_api_token: str = Field(
        default="",
        validation_alias="HF_API_TOKEN",
        description="Bearer token for the model endpoint",
    )
    model_id: str = Field(
        default=DEFAULT_MODEL_ID,
        validation_alias="MODEL_ID",
        description="Model identifier appended to the inference URL",
    )
    llm_provider: Literal["text-generation", "openai-compatible"] = Field(
        default="text-generation",
        validation_alias="AI_RUNNER_LLM_PROVIDER",
        description="Which model client to use",
    )
    inference_base_url: str = Field(
        default="https://api-inference.huggingface.co/models",
        validation_alias="HF_INFERENCE_BASE_URL",
        description="Base URL of the text-generation inference API",
    )
    openai_base_url: str = Field(
        default="https://router.huggingface.co/v1",
        validation_alias="AI_RUNNER_OPENAI_BASE_URL",
        description="Base URL used by the openai-compatible provider",
    )
    max_new_tokens: int = Field(
        default=1024,
        gt=0,
        validation_alias="AI_RUNNER_MAX_NEW_TOKENS",
        description="Output token budget for a single generation",
    )
    request_timeout_seconds: float | None = Field(
        default=None,
        validation_alias="AI_RUNNER_REQUEST_TIMEOUT_SECONDS",
        description="Timeout for the model call (None waits indefinitely)",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    workspace_root: Path = Field(
        default=Path("."),
        validation_alias="AI_RUNNER_ROOT",
        description="Repository root that relative paths are resolved against",
    )
    command_file: Path = Field(
        default=Path("AI_COMMANDS.md"),
        validation_alias="AI_COMMAND_FILE",
        description="Free-text command file read at the start of a run",
    )
    audit_file: Path = Field(
        default=Path("AI_REPORT.md"),
        validation_alias="AI_AUDIT_FILE",
        description="Append-only audit log",
    )
    sandbox_dir: Path = Field(
        default=Path("ai-workspace"),
        validation_alias="AI_SANDBOX_DIR",
        description="Directory that model-requested writes are confined to",
    )
    allowed_root_files: str = Field(
        default="README.md,AI_REPORT.md,AI_COMMANDS.md",
        validation_alias="AI_ALLOWED_ROOT_FILES",
        description="Comma-separated root filenames that may be touched outside the sandbox",
    )

    publish_enabled: bool = Field(
        default=True,
        validation_alias="AI_RUNNER_PUBLISH",
        description="Commit and push the working tree at the end of a run",
    )
    commit_message: str = Field(
        default="Automated changes by AI runner",
        validation_alias="AI_RUNNER_COMMIT_MESSAGE",
    )
    committer_name: str = Field(
        default="github-actions[bot]",
        validation_alias="AI_RUNNER_COMMITTER_NAME",
    )
    committer_email: str = Field(
        default="actions@github.com",
        validation_alias="AI_RUNNER_COMMITTER_EMAIL",
    )
    push_remote: str = Field(
        default="origin",
        validation_alias="AI_RUNNER_PUSH_REMOTE",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
        protected_namespaces=(),
    )

    @model_validator(mode="after")
    def _require_api_token(self) -> RunnerSettings:
        if not self.hf_api_token.strip():
            raise ValueError("HF_API_TOKEN is required")
        return self

    @property
    def command_path(self) -> Path:
        """Location of the command file."""

        return self.workspace_root / self.command_file

    @property
    def audit_path(self) -> Path:
        """Location of the audit log."""

        return self.workspace_root / self.audit_file

    def parsed_allowed_root_files(self) -> list[str]:
        return [name.strip() for name in self.allowed_root_files.split(",") if name.strip()]
