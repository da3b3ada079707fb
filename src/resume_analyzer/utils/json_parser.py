"""Strict JSON decoding of model responses."""

from __future__ import annotations

import json


def extract_json_object(text: str) -> dict:
    """Decode a model response that must be exactly one JSON object.

    A surrounding markdown code fence (```json ... ```) is tolerated. Prose
    around the object, arrays and truncated output are rejected rather than
    repaired.
    """
    body = _strip_code_fences(text.strip())
    if not body:
        raise ValueError("Response text is empty")

    try:
        data = json.loads(body)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Response is not valid JSON: {exc.msg} at position {exc.pos}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _strip_code_fences(text: str) -> str:
    """Remove an opening ``` line and a closing ``` line, if both are present."""
    lines = text.split("\n")
    if len(lines) < 2 or not lines[0].strip().startswith("```"):
        return text

    while lines and not lines[-1].strip():
        lines = lines[:-1]
    if lines[-1].strip() != "```":
        return text

    return "\n".join(lines[1:-1]).strip()
