"""Known response shapes of the text-generation inference API.

Hosted models disagree on how they wrap generated text. Rather than probing the
decoded JSON ad hoc at the call site, a response is classified once into one of
the variants below. Every variant exposes `text`; `UnrecognizedShape` falls back
to the JSON serialization of the payload instead of failing.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class GeneratedTextItems:
    """`[{"generated_text": "..."}, ...]`"""

    text: str


@dataclass(frozen=True, slots=True)
class StringItems:
    """`["...", ...]`"""

    text: str


@dataclass(frozen=True, slots=True)
class GeneratedTextRecord:
    """`{"generated_text": "..."}`"""

    text: str


@dataclass(frozen=True, slots=True)
class PlainText:
    """A bare JSON string."""

    text: str


@dataclass(frozen=True, slots=True)
class UnrecognizedShape:
    payload: Any

    @property
    def text(self) -> str:
        return json.dumps(self.payload, ensure_ascii=False)


ResponseShape = GeneratedTextItems | StringItems | GeneratedTextRecord | PlainText | UnrecognizedShape


def _generated_text(value: Any) -> str | None:
    if isinstance(value, dict):
        text = value.get("generated_text")
        if isinstance(text, str):
            return text
    return None


def classify_response(data: Any) -> ResponseShape:
    """Classify a decoded JSON response body. Only the first list item is considered."""

    if isinstance(data, list) and data:
        first = data[0]
        text = _generated_text(first)
        if text is not None:
            return GeneratedTextItems(text=text)
        if isinstance(first, str):
            return StringItems(text=first)
        return UnrecognizedShape(payload=data)

    text = _generated_text(data)
    if text is not None:
        return GeneratedTextRecord(text=text)

    if isinstance(data, str):
        return PlainText(text=data)

    return UnrecognizedShape(payload=data)
