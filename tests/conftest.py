"""Test configuration and fixtures."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from ai_command_runner.runner.actions import ActionApplier, PathPolicy
from ai_command_runner.runner.config import RunnerSettings

_RUNNER_ENV_VARS = (
    "HF_API_TOKEN",
    "MODEL_ID",
    "LOG_LEVEL",
    "AI_RUNNER_ROOT",
    "AI_COMMAND_FILE",
    "AI_AUDIT_FILE",
    "AI_SANDBOX_DIR",
    "AI_ALLOWED_ROOT_FILES",
    "AI_RUNNER_PUBLISH",
    "AI_RUNNER_LLM_PROVIDER",
)


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Undo `configure_logging` so handlers never outlive pytest's captured streams."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove runner variables inherited from the developer's shell."""
    for name in _RUNNER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Provide an empty repository root."""
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture
def settings(clean_env: pytest.MonkeyPatch, workspace: Path) -> RunnerSettings:
    """Provide settings rooted at the temporary workspace with publishing disabled."""
    clean_env.setenv("HF_API_TOKEN", "test-token")
    clean_env.setenv("AI_RUNNER_ROOT", str(workspace))
    clean_env.setenv("AI_RUNNER_PUBLISH", "false")
    return RunnerSettings(_env_file=None)


@pytest.fixture
def applier(workspace: Path) -> ActionApplier:
    """Provide an applier with the default sandbox and allow-list."""
    policy = PathPolicy(
        root=workspace,
        sandbox_dir=Path("ai-workspace"),
        allowed_root_files=["README.md", "AI_REPORT.md", "AI_COMMANDS.md"],
    )
    return ActionApplier(policy)
