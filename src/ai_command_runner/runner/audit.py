"""Append-only audit log of runner invocations.

One Markdown block per run: timestamp, one line per outcome, the verbatim model
response. Entries are never rewritten.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from ai_command_runner.runner.actions import Outcome

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def format_outcome_line(outcome: Outcome) -> str:
    line = f"- {outcome.status}: {outcome.serialized_action()}"
    if outcome.reason:
        line += f" reason: {outcome.reason}"
    if outcome.error:
        line += f" error: {outcome.error}"
    return line


def format_audit_entry(outcomes: list[Outcome], raw_model_text: str, *, timestamp: datetime) -> str:
    lines = [f"## AI run at {timestamp.isoformat()}", ""]
    lines.extend(format_outcome_line(o) for o in outcomes)
    lines.extend(
        [
            "",
            "Model raw response:",
            "```",
            raw_model_text,
            "```",
            "",
            "----",
            "",
        ]
    )
    return "\n".join(lines)


class AuditLog:
    """Appends audit entries to a Markdown file."""

    def __init__(self, path: Path, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._path = path
        self._clock = clock

    @property
    def path(self) -> Path:
        return self._path

    def append(self, outcomes: list[Outcome], raw_model_text: str) -> str:
        """Append one entry and return the text that was written."""

        entry = format_audit_entry(outcomes, raw_model_text, timestamp=self._clock())
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as f:
            f.write(entry)

        logger.info(
            "Audit entry appended",
            extra={"audit_path": str(self._path), "outcomes": len(outcomes)},
        )
        return entry
