"""Summary prompt template.

Produces a single concise paragraph describing the note content.
"""

from __future__ import annotations

from notewise.ai_router.schemas import Message

TEMPERATURE = 0.5
MAX_TOKENS = 150

SYSTEM_PROMPT = (
    "You summarize personal notes. Answer with the summary paragraph only, "
    "without a heading or any introduction."
)

USER_PROMPT_TEMPLATE = "Summarize the following text in a concise paragraph:\n\n{note_content}"


def build_messages(note_content: str) -> list[Message]:
    """Build message list for note summarization.

    Args:
        note_content: The note body to summarize.

    Returns:
        A list of Message objects (system + user).

    Raises:
        ValueError: If note_content is empty or whitespace-only.
    """
    if not note_content or not note_content.strip():
        raise ValueError("note_content must not be empty")

    return [
        Message(role="system", content=SYSTEM_PROMPT),
        Message(role="user", content=USER_PROMPT_TEMPLATE.format(note_content=note_content)),
    ]
