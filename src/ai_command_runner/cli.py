"""Module entrypoint: `python -m ai_command_runner.cli`.

The CLI itself lives in `ai_command_runner.runner.main`.
"""

from __future__ import annotations

from ai_command_runner.runner.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
