"""CLI entrypoint for the command runner.

Exit codes:
- 0: run completed (including "no commands")
- 1: configuration error, model call failure, or unusable model output
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from ai_command_runner import __version__
from ai_command_runner.runner.config import RunnerSettings
from ai_command_runner.runner.logging import configure_logging
from ai_command_runner.runner.pipeline import EXIT_FAILURE, CommandRunner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-runner",
        description=(
            "Send a free-text command file to a text-generation model and apply the "
            "returned file actions inside the sandbox directory"
        ),
    )
    parser.add_argument("--version", action="version", version=f"ai-command-runner {__version__}")
    parser.add_argument(
        "--command-file",
        default=None,
        help="Command file to read (defaults to AI_COMMAND_FILE or AI_COMMANDS.md)",
    )
    parser.add_argument(
        "--no-publish",
        action="store_true",
        help="Apply actions and write the audit entry, but do not commit or push",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = RunnerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (set HF_API_TOKEN or check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_FAILURE

    overrides: dict[str, object] = {}
    if args.command_file is not None:
        overrides["command_file"] = Path(args.command_file)
    if args.no_publish:
        overrides["publish_enabled"] = False
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings.log_level)

    try:
        return CommandRunner(settings).run()
    except Exception:
        logger.exception("Run failed")
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
