"""LLM-backed note features.

Wraps the :class:`AIRouter` with the fixed prompts used by the AI
endpoints: completion suggestions, summaries, category/tag assignment
and search keyword extraction.  Provider failures propagate as
:class:`ProviderError`; unusable model output raises :class:`ParseError`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from notewise.ai_router.prompts import categorize, completion, keywords, summarize
from notewise.ai_router.router import AIRouter
from notewise.ai_router.schemas import AIRequest, Message, ParseError
from notewise.services.query_composer import split_keywords
from notewise.utils.note_utils import load_json_object, normalize_tags

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Categorization:
    category: str
    tags: list[str] = field(default_factory=list)


def parse_categorization(content: str) -> Categorization:
    """Extract category and tags from the categorize prompt's JSON answer.

    Non-string entries in ``tags`` are dropped.

    Raises:
        ParseError: If the text is not a JSON object with a string
            ``category`` and a list ``tags``.
    """
    try:
        data = load_json_object(content)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ParseError(f"Model output is not a JSON object: {exc}", raw=content) from exc

    category = data.get("category")
    tags = data.get("tags", [])
    if not isinstance(category, str) or not category.strip():
        raise ParseError("Model output has no category", raw=content)
    if not isinstance(tags, list):
        raise ParseError("Model output tags is not a list", raw=content)

    return Categorization(category=category.strip(), tags=normalize_tags([t for t in tags if isinstance(t, str)]))


class NoteAssistant:
    """Runs the note prompts through an :class:`AIRouter`.

    Every method builds its prompt before calling the router, so blank input
    raises :class:`ValueError` and no provider request is made.  Callers
    reject blank input up front; the API layer answers 400.
    """

    def __init__(self, router: AIRouter, model: str | None = None) -> None:
        self._router = router
        self._model = model

    async def _complete(self, messages: list[Message], temperature: float, max_tokens: int) -> str:
        request = AIRequest(
            messages=messages,
            model=self._model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        response = await self._router.chat(request)
        return response.content.strip()

    async def suggest_completion(self, text: str) -> str:
        return await self._complete(
            completion.build_messages(text),
            completion.TEMPERATURE,
            completion.MAX_TOKENS,
        )

    async def summarize(self, content: str) -> str:
        return await self._complete(
            summarize.build_messages(content),
            summarize.TEMPERATURE,
            summarize.MAX_TOKENS,
        )

    async def categorize(self, title: str, content: str) -> Categorization:
        """Ask for a category and tags.

        Raises:
            ParseError: If the model answer is not the expected JSON.
        """
        answer = await self._complete(
            categorize.build_messages(title, content),
            categorize.TEMPERATURE,
            categorize.MAX_TOKENS,
        )
        try:
            return parse_categorization(answer)
        except ParseError:
            logger.warning("Failed to parse categorization from AI response: %s", answer[:200])
            raise

    async def extract_keywords(self, query: str) -> list[str]:
        answer = await self._complete(
            keywords.build_messages(query),
            keywords.TEMPERATURE,
            keywords.MAX_TOKENS,
        )
        return split_keywords(answer)
