"""Free-text completion prompt.

The user's draft is sent as-is so the model continues it.
"""

from __future__ import annotations

from notewise.ai_router.schemas import Message

TEMPERATURE = 0.7
MAX_TOKENS = 100


def build_messages(text: str) -> list[Message]:
    """Build message list for a completion suggestion.

    Raises:
        ValueError: If text is empty or whitespace-only.
    """
    if not text or not text.strip():
        raise ValueError("text must not be empty")

    return [Message(role="user", content=text)]
