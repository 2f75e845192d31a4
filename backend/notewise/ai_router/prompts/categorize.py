"""Categorize prompt template.

Asks for one category and five tags for a note, as JSON:
``{"category": "category_name", "tags": ["tag1", ..., "tag5"]}``.
"""

from __future__ import annotations

from notewise.ai_router.schemas import Message

TEMPERATURE = 0.5
MAX_TOKENS = 150

SYSTEM_PROMPT = (
    "You classify personal notes. "
    "You must respond ONLY with a JSON object. Do not include any other text."
)

USER_PROMPT_TEMPLATE = (
    "Given the following note, provide a category and 5 relevant tags in JSON format:\n\n"
    "{title}\n{content}\n\n"
    'Output format: {{"category": "category_name", "tags": ["tag1", "tag2", "tag3", "tag4", "tag5"]}}'
)


def build_messages(title: str, content: str) -> list[Message]:
    """Build message list for category and tag generation.

    Raises:
        ValueError: If both title and content are blank.
    """
    if not (title or "").strip() and not (content or "").strip():
        raise ValueError("note must have a title or content")

    return [
        Message(role="system", content=SYSTEM_PROMPT),
        Message(role="user", content=USER_PROMPT_TEMPLATE.format(title=title, content=content)),
    ]
