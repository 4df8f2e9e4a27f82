"""AI command runner.

Reads a free-text command file, asks a text-generation model for a JSON list of
file actions, applies them inside a sandbox directory, appends an audit entry and
publishes the result with git.
"""

__version__ = "0.1.0"

from ai_command_runner.runner.config import RunnerSettings

__all__ = ["__version__", "RunnerSettings"]
