"""Search keyword extraction prompt.

The model answers with a comma- or newline-separated keyword list,
which :func:`notewise.services.query_composer.split_keywords` parses.
"""

from __future__ import annotations

from notewise.ai_router.schemas import Message

TEMPERATURE = 0.3
MAX_TOKENS = 50

SYSTEM_PROMPT = (
    "You turn natural-language questions into search keywords. "
    "Answer with the keywords only, separated by commas."
)

USER_PROMPT_TEMPLATE = 'Extract the most important search keywords from this query: "{query}"\n\nKeywords:'


def build_messages(query: str) -> list[Message]:
    """Build message list for keyword extraction.

    Raises:
        ValueError: If query is empty or whitespace-only.
    """
    if not query or not query.strip():
        raise ValueError("query must not be empty")

    return [
        Message(role="system", content=SYSTEM_PROMPT),
        Message(role="user", content=USER_PROMPT_TEMPLATE.format(query=query.strip())),
    ]
