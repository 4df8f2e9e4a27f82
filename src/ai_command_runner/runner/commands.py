"""Command source: the human-authored instruction file."""

from __future__ import annotations

from pathlib import Path


def read_commands(path: Path) -> str:
    """Return the full text of the command file, or "" if it does not exist.

    The text is opaque natural language; it is embedded in the prompt untouched.
    """

    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")
