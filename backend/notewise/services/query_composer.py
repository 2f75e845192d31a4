"""Keyword search composition for natural-language note search.

The keyword extraction prompt returns free text such as
``"budget, forecast\\nQ3"``.  :func:`split_keywords` turns that into a clean
keyword list and :func:`compose` builds a :class:`KeywordFilter`:

    note matches  <=>  ANY keyword is found (case-insensitive substring) in
                       title OR content OR a tag OR an AI tag OR category

The filter evaluates in memory (:meth:`KeywordFilter.matches`) or renders to
a SQLAlchemy expression (:meth:`KeywordFilter.where_clause`) for SQLite or
PostgreSQL.  A filter with
no keywords matches nothing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import String, column, false, func, literal, or_, select
from sqlalchemy.sql.elements import ColumnElement

from notewise.models import Note

_SEPARATOR_RE = re.compile(r"[,\n]")

SEARCH_FIELDS: tuple[str, ...] = ("title", "content", "tags", "ai_tags", "category")

# Set-returning function that expands a JSON array into its text elements.
_JSON_ELEMENTS_FUNCTIONS: dict[str, str] = {
    "sqlite": "json_each",
    "postgresql": "json_array_elements_text",
}
DEFAULT_DIALECT = "postgresql"


def tag_contains(tags_column: Any, keyword: str, dialect_name: str = DEFAULT_DIALECT) -> ColumnElement[bool]:
    """True when any element of a JSON tag list contains ``keyword``.

    Elements are matched one by one after JSON decoding, so the brackets,
    quotes and separators of the stored text never match.
    """
    function_name = _JSON_ELEMENTS_FUNCTIONS.get(dialect_name, _JSON_ELEMENTS_FUNCTIONS[DEFAULT_DIALECT])
    elements = getattr(func, function_name)(tags_column).table_valued(column("value", String))
    return (
        select(literal(1))
        .select_from(elements)
        .where(elements.c.value.icontains(keyword, autoescape=True))
        .exists()
    )


def split_keywords(raw: str | None) -> list[str]:
    """Split model output on commas or newlines into trimmed keywords.

    Empty pieces are dropped, as are case-insensitive repeats (first
    occurrence wins).
    """
    if not raw:
        return []

    keywords: list[str] = []
    seen: set[str] = set()
    for piece in _SEPARATOR_RE.split(raw):
        keyword = piece.strip()
        if not keyword or keyword.casefold() in seen:
            continue
        seen.add(keyword.casefold())
        keywords.append(keyword)
    return keywords


def _contains(haystack: str | None, needle: str) -> bool:
    return bool(haystack) and needle.casefold() in haystack.casefold()


@dataclass(frozen=True, slots=True)
class KeywordFilter:
    """Disjunction over keywords of a disjunction over :data:`SEARCH_FIELDS`."""

    keywords: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.keywords

    def matches(self, note: Any) -> bool:
        """Evaluate the filter against one note-like object."""
        return any(self._keyword_matches(keyword, note) for keyword in self.keywords)

    @staticmethod
    def _keyword_matches(keyword: str, note: Any) -> bool:
        if _contains(note.title, keyword) or _contains(note.content, keyword):
            return True
        if any(_contains(tag, keyword) for tag in note.tags or []):
            return True
        if any(_contains(tag, keyword) for tag in note.ai_tags or []):
            return True
        return _contains(note.category, keyword)

    def where_clause(self, dialect_name: str = DEFAULT_DIALECT) -> ColumnElement[bool]:
        """Render the filter as a SQLAlchemy boolean expression on :class:`Note`.

        Tag lists are JSON columns and are searched element by element with
        the JSON function of ``dialect_name``, so the result agrees with
        :meth:`matches`.  Keywords are literal text: LIKE wildcards are
        escaped.
        """
        if self.is_empty:
            return false()

        clauses = []
        for keyword in self.keywords:
            clauses.append(
                or_(
                    Note.title.icontains(keyword, autoescape=True),
                    Note.content.icontains(keyword, autoescape=True),
                    tag_contains(Note.tags, keyword, dialect_name),
                    tag_contains(Note.ai_tags, keyword, dialect_name),
                    Note.category.icontains(keyword, autoescape=True),
                )
            )
        return or_(*clauses)


def compose(keywords: Iterable[str]) -> KeywordFilter:
    """Build a :class:`KeywordFilter` from keywords, ignoring blank entries."""
    cleaned: list[str] = []
    for keyword in keywords:
        keyword = (keyword or "").strip()
        if keyword and keyword not in cleaned:
            cleaned.append(keyword)
    return KeywordFilter(tuple(cleaned))
