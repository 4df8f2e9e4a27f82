"""Prompt construction for the action-list request."""

from __future__ import annotations

_PROMPT_TEMPLATE = """
You are an autonomous repository assistant. I will give you raw instructions from {source_name}. Output ONLY a JSON array (no extra prose). Each array item must be an object with:
- "type": one of "create", "update", "delete"
- "path": path to the file (relative to repo root)
- "content": (only for create/update) string content of the file

If you refuse or cannot perform something, mark it as {{"type":"skip","path":"...","reason":"..."}}.

Here are the commands:
-----
{commands}
-----

Rules:
- Only return JSON array. Example:
[
  {{"type":"create","path":"{sandbox}/hello.txt","content":"Hello"}},
  {{"type":"delete","path":"{sandbox}/old.txt"}}
]

- Do NOT return anything else outside the JSON.

Now produce the JSON array.
"""


def build_prompt(
    commands_text: str,
    *,
    source_name: str = "AI_COMMANDS.md",
    sandbox_dir: str = "ai-workspace",
) -> str:
    """Wrap raw command text in the fixed instruction template.

    The command text is inserted verbatim; the template demands a pure JSON array of
    `{type, path, content}` objects and `skip` entries for anything not performable.
    """

    return _PROMPT_TEMPLATE.format(
        source_name=source_name,
        commands=commands_text,
        sandbox=sandbox_dir.strip("/"),
    )
