"""JSON parsing for judge answers.

Judges are asked for exactly one JSON object. Markdown code fences around
the object are removed; anything else that is not valid JSON is an error.
"""

from __future__ import annotations

import json

from musive.features.llm.errors import LlmProcessingError


_FENCE = "```"


def strip_markdown_fences(text: str) -> str:
    """Remove a surrounding ```/```json fence and trim whitespace."""
    text = text.strip()
    if not text.startswith(_FENCE):
        return text
    _, newline, body = text.partition("\n")
    if not newline:
        return text
    body = body.rstrip()
    if body.endswith(_FENCE):
        body = body[: -len(_FENCE)]
    return body.strip()


def parse_json_object(raw: str) -> dict[str, object]:
    """Parse a judge answer that must be a single JSON object.

    Args:
        raw: Raw text from the model.

    Returns:
        Parsed object.

    Raises:
        LlmProcessingError: If the (unfenced) text is not valid JSON or
            is valid JSON but not an object.
    """
    text = strip_markdown_fences(raw)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Judge answer is not valid JSON ({exc.msg}): {text[:200]}"
        raise LlmProcessingError(msg) from exc

    if not isinstance(parsed, dict):
        msg = f"Judge answer is a JSON {type(parsed).__name__}, not an object"
        raise LlmProcessingError(msg)
    return parsed
