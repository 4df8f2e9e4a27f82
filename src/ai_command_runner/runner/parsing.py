"""Extract a JSON value from free-form model output.

Two stages only: a strict parse of the first bracket-delimited span, then a single
retry after stripping trailing commas. This is not a tolerant JSON parser.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

# Greedy: from the first opening bracket/brace to the last closing one.
_JSON_SPAN_RE = re.compile(r"[\[{].*[\]}]", re.DOTALL)
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")


def find_json_span(text: str) -> str | None:
    match = _JSON_SPAN_RE.search(text)
    return match.group(0) if match else None


def strip_trailing_commas(candidate: str) -> str:
    return _TRAILING_COMMA_RE.sub(r"\1", candidate)


def extract_first_json(text: str) -> Any | None:
    """Return the parsed JSON value embedded in `text`, or None.

    None means either no candidate span exists or both parse attempts failed.
    Structural validation is left to the caller.
    """

    candidate = find_json_span(text)
    if candidate is None:
        return None

    # RecursionError: nesting deeper than the decoder allows.
    try:
        return json.loads(candidate)
    except (json.JSONDecodeError, RecursionError):
        pass

    try:
        return json.loads(strip_trailing_commas(candidate))
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning("Failed to parse JSON from model response", extra={"error": str(e)})
        return None
