"""Helpers shared by the note and AI endpoints."""

from __future__ import annotations

import json
import re

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def normalize_tags(tags: list[str] | None) -> list[str]:
    """Trim tags, drop blanks and exact duplicates, keep first-seen order."""
    if not tags:
        return []
    cleaned = [str(tag).strip() for tag in tags]
    return list(dict.fromkeys(tag for tag in cleaned if tag))


def load_json_object(text: str) -> dict:
    """Parse a JSON object from model output.

    A surrounding markdown code fence is tolerated; nothing else is repaired.

    Raises:
        ValueError: If the text is not a JSON object.
    """
    stripped = text.strip()
    fenced = _CODE_FENCE_RE.match(stripped)
    if fenced:
        stripped = fenced.group(1)
    data = json.loads(stripped)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data
