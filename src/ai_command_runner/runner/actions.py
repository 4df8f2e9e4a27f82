"""Apply model-requested file actions under a path safety policy.

The applier is the only place that writes to the repository on the model's behalf.
Every input item yields exactly one `Outcome`, in input order; no single item can
abort the batch.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

NOT_IN_SAFE_PATH = "not in safe path"


class OutcomeStatus(StrEnum):
    OK = "ok"
    SKIPPED = "skipped"
    MISSING = "missing"
    UNKNOWN_ACTION = "unknown_action"
    ERROR = "error"
    # Run-level statuses, only used for degenerate audit entries.
    MODEL_NO_JSON = "model_no_json"
    MODEL_INVALID_FORMAT = "model_invalid_format"


class Action(BaseModel):
    """One file-level operation requested by the model.

    `type` is deliberately not constrained so unknown values survive validation and
    can be reported as `unknown_action`.
    """

    model_config = ConfigDict(extra="allow")

    type: str
    path: str = Field(default="")
    content: str | None = Field(default=None)
    reason: str | None = Field(default=None)


@dataclass(frozen=True, slots=True)
class Outcome:
    """The recorded result of attempting one action.

    `action` is the validated `Action`, the raw JSON value when validation failed,
    or None for run-level entries.
    """

    status: OutcomeStatus
    action: Any = None
    error: str | None = None
    reason: str | None = None

    def serialized_action(self) -> str:
        payload = self.action
        if isinstance(payload, Action):
            payload = payload.model_dump(exclude_none=True)
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)


class PathPolicy:
    """Decides whether an action path may be touched.

    Allowed: anything that resolves to the sandbox directory or below it, plus raw
    paths that exactly equal one of the allow-listed root filenames.
    """

    def __init__(self, *, root: Path, sandbox_dir: Path, allowed_root_files: list[str]) -> None:
        self.root = root.resolve()
        self.sandbox = (self.root / sandbox_dir).resolve()
        self.allowed_root_files = frozenset(allowed_root_files)

    def resolve(self, raw_path: str) -> Path:
        return (self.root / raw_path).resolve()

    def is_allowed(self, raw_path: str) -> bool:
        if raw_path in self.allowed_root_files:
            return True
        if not raw_path:
            return False
        return self.resolve(raw_path).is_relative_to(self.sandbox)


class ActionApplier:
    """Applies create/update/delete actions sequentially."""

    def __init__(self, policy: PathPolicy) -> None:
        self.policy = policy

    def apply(self, items: list[Any]) -> list[Outcome]:
        self.policy.sandbox.mkdir(parents=True, exist_ok=True)

        outcomes = [self.apply_one(item) for item in items]
        logger.info(
            "Actions applied",
            extra={
                "total": len(outcomes),
                "ok": sum(1 for o in outcomes if o.status == OutcomeStatus.OK),
            },
        )
        return outcomes

    def apply_one(self, item: Any) -> Outcome:
        try:
            action = Action.model_validate(item)
        except ValidationError as e:
            logger.warning("Invalid action item", extra={"item": item})
            message = "; ".join(err["msg"] for err in e.errors())
            return Outcome(status=OutcomeStatus.ERROR, action=item, error=message)

        if action.type == "skip":
            return Outcome(
                status=OutcomeStatus.SKIPPED,
                action=action,
                reason=action.reason or "skipped by model",
            )

        try:
            if not self.policy.is_allowed(action.path):
                logger.warning("Rejected unsafe path", extra={"path": action.path})
                return Outcome(
                    status=OutcomeStatus.SKIPPED, action=action, reason=NOT_IN_SAFE_PATH
                )

            target = self.policy.resolve(action.path)
            if action.type in {"create", "update"}:
                # Both overwrite; create does not fail on an existing file.
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(action.content or "", encoding="utf-8")
                return Outcome(status=OutcomeStatus.OK, action=action)

            if action.type == "delete":
                if not target.exists():
                    return Outcome(status=OutcomeStatus.MISSING, action=action)
                target.unlink()
                return Outcome(status=OutcomeStatus.OK, action=action)

        # ValueError: embedded NUL byte. RuntimeError: symlink loop during resolve().
        except (OSError, ValueError, RuntimeError) as e:
            logger.warning(
                "Action failed",
                extra={"type": action.type, "path": action.path, "error": str(e)},
            )
            return Outcome(status=OutcomeStatus.ERROR, action=action, error=str(e))

        return Outcome(status=OutcomeStatus.UNKNOWN_ACTION, action=action)
