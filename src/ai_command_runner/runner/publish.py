"""Publish the working tree: stage, commit, push.

Publishing is the terminal, best-effort step of a run. `publish` never raises;
authentication problems, rejected pushes and missing binaries are logged only.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

NOTHING_TO_COMMIT_MARKERS: tuple[str, ...] = ("nothing to commit", "nothing added to commit")


class Publisher(Protocol):
    """Version-control capability used at the end of a run."""

    def stage_all(self) -> None: ...

    def commit(self, message: str) -> bool:
        """Commit staged changes. Returns False when there was nothing to commit."""
        ...

    def push(self) -> None: ...


class NoopPublisher:
    """Publisher that records nothing. Used with `--no-publish`."""

    def stage_all(self) -> None:
        logger.debug("Publishing disabled; skipping stage")

    def commit(self, message: str) -> bool:
        logger.debug("Publishing disabled; skipping commit", extra={"commit_message": message})
        return False

    def push(self) -> None:
        logger.debug("Publishing disabled; skipping push")


class GitPublisher:
    """Shells out to `git` inside the repository root."""

    def __init__(
        self,
        *,
        root: Path,
        committer_name: str,
        committer_email: str,
        remote: str = "origin",
    ) -> None:
        self.root = root
        self.committer_name = committer_name
        self.committer_email = committer_email
        self.remote = remote

    def _git(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            ["git", *args],
            cwd=self.root,
            capture_output=True,
            text=True,
            check=check,
        )

    def stage_all(self) -> None:
        self._git("add", "-A")

    def commit(self, message: str) -> bool:
        result = self._git(
            "-c",
            f"user.name={self.committer_name}",
            "-c",
            f"user.email={self.committer_email}",
            "commit",
            "-m",
            message,
            check=False,
        )
        if result.returncode == 0:
            return True

        output = f"{result.stdout}\n{result.stderr}"
        if any(marker in output for marker in NOTHING_TO_COMMIT_MARKERS):
            logger.info("No changes to commit")
            return False

        raise subprocess.CalledProcessError(
            result.returncode, result.args, output=result.stdout, stderr=result.stderr
        )

    def push(self) -> None:
        self._git("push", self.remote, "HEAD")


def publish(publisher: Publisher, message: str) -> bool:
    """Stage, commit and push. Returns True when the push step completed."""

    try:
        publisher.stage_all()
        committed = publisher.commit(message)
        publisher.push()
    except subprocess.CalledProcessError as e:
        logger.error(
            "git push error (maybe no changes or auth issue)",
            extra={"command": e.cmd, "returncode": e.returncode, "stderr": e.stderr},
        )
        return False
    except Exception as e:
        logger.error("Publishing failed", extra={"error": str(e)})
        return False

    logger.info("Changes pushed", extra={"committed": committed})
    return True
