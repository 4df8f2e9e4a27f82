"""Single-run pipeline: read -> prompt -> model -> parse -> apply -> audit -> publish."""

from __future__ import annotations

import logging

from ai_command_runner.llm.factory import LLMFactory
from ai_command_runner.llm.provider import LLMProvider, ModelRequestError
from ai_command_runner.runner.actions import ActionApplier, Outcome, OutcomeStatus, PathPolicy
from ai_command_runner.runner.audit import AuditLog
from ai_command_runner.runner.commands import read_commands
from ai_command_runner.runner.config import RunnerSettings
from ai_command_runner.runner.parsing import extract_first_json
from ai_command_runner.runner.prompt import build_prompt
from ai_command_runner.runner.publish import GitPublisher, NoopPublisher, Publisher, publish

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def build_publisher(settings: RunnerSettings) -> Publisher:
    if not settings.publish_enabled:
        return NoopPublisher()
    return GitPublisher(
        root=settings.workspace_root,
        committer_name=settings.committer_name,
        committer_email=settings.committer_email,
        remote=settings.push_remote,
    )


class CommandRunner:
    """Runs the command file through the model once and applies the result.

    Collaborators are built from settings unless injected, so tests can swap the
    model client and the publisher for fakes.
    """

    def __init__(
        self,
        settings: RunnerSettings,
        *,
        llm: LLMProvider | None = None,
        publisher: Publisher | None = None,
        audit: AuditLog | None = None,
    ) -> None:
        self.settings = settings
        self._llm = llm
        self.publisher = publisher or build_publisher(settings)
        self.audit = audit or AuditLog(settings.audit_path)
        self.applier = ActionApplier(
            PathPolicy(
                root=settings.workspace_root,
                sandbox_dir=settings.sandbox_dir,
                allowed_root_files=settings.parsed_allowed_root_files(),
            )
        )

    @property
    def llm(self) -> LLMProvider:
        # Built lazily: a run with no commands never needs a client.
        if self._llm is None:
            self._llm = LLMFactory.create(self.settings)
        return self._llm

    def run(self) -> int:
        """Execute one run and return the process exit code."""

        commands_text = read_commands(self.settings.command_path)
        if not commands_text.strip():
            logger.info(
                "No commands found", extra={"command_path": str(self.settings.command_path)}
            )
            return EXIT_OK

        prompt = build_prompt(
            commands_text,
            source_name=self.settings.command_file.name,
            sandbox_dir=self.settings.sandbox_dir.as_posix(),
        )

        logger.info("Calling model", extra={"model_id": self.settings.model_id})
        try:
            model_text = self.llm.generate(prompt)
        except ModelRequestError as e:
            logger.error(
                "Model call failed", extra={"status": e.status, "body": e.body[:500]}
            )
            return EXIT_FAILURE
        logger.info("Model replied", extra={"snippet": model_text[:500]})

        parsed = extract_first_json(model_text)
        if parsed is None:
            logger.error("No JSON detected from model; saving raw output to audit")
            self.audit.append([Outcome(status=OutcomeStatus.MODEL_NO_JSON)], model_text)
            return EXIT_FAILURE

        if not isinstance(parsed, list):
            logger.error(
                "Model JSON is not an array; saving to audit",
                extra={"json_type": type(parsed).__name__},
            )
            self.audit.append(
                [Outcome(status=OutcomeStatus.MODEL_INVALID_FORMAT, action=parsed)], model_text
            )
            return EXIT_FAILURE

        outcomes = self.applier.apply(parsed)
        self.audit.append(outcomes, model_text)
        publish(self.publisher, self.settings.commit_message)
        return EXIT_OK
