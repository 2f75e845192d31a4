"""Related-note matching by shared tags, category and vocabulary.

A candidate note is related to the target when any of these hold:

1. **Tag overlap** -- the notes share a label, user tags and AI tags
   being pooled on each side.
2. **Same category** -- both notes have a category and the labels are
   identical (case-sensitive).
3. **Lexical overlap** -- more than :data:`MIN_SHARED_WORDS` distinct words
   longer than :data:`MIN_WORD_LENGTH` characters appear in both notes'
   ``title + " " + content``.

Results keep candidate order and are capped at ``limit``; the strength of a
match does not affect ordering.

All functions are pure and accept any object exposing the note attributes
(ORM rows, dataclasses, test doubles).
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

MAX_RELATED = 5
MIN_WORD_LENGTH = 4  # words must be strictly longer than this
MIN_SHARED_WORDS = 3  # shared words must strictly exceed this

_NON_WORD_RE = re.compile(r"\W+")


class NoteView(Protocol):
    """Read-only shape of a note consumed by the matcher."""

    id: Any
    title: str
    content: str
    summary: str | None
    tags: list[str] | None
    ai_tags: list[str] | None
    category: str | None


@dataclass(slots=True)
class RelatedNote:
    """Projection of a matched candidate returned to the client."""

    id: Any
    title: str
    summary: str | None
    category: str | None
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "category": self.category,
            "tags": list(self.tags),
        }


def tokenize(text: str | None) -> set[str]:
    """Lower-case ``text`` and split it on runs of non-word characters."""
    if not text:
        return set()
    return {token for token in _NON_WORD_RE.split(text.lower()) if token}


def _note_words(note: NoteView) -> set[str]:
    return tokenize(f"{note.title or ''} {note.content or ''}")


def lexical_overlap(target: NoteView, candidate: NoteView) -> int:
    """Count distinct long words shared by both notes' title and content."""
    shared = _note_words(target) & _note_words(candidate)
    return sum(1 for word in shared if len(word) > MIN_WORD_LENGTH)


def all_tags(note: NoteView) -> set[str]:
    return set(note.tags or []) | set(note.ai_tags or [])


def shared_tags(target: NoteView, candidate: NoteView) -> set[str]:
    """Labels present on both notes, user and AI tags pooled."""
    return all_tags(target) & all_tags(candidate)


def same_category(target: NoteView, candidate: NoteView) -> bool:
    return bool(target.category) and target.category == candidate.category


def match_reasons(target: NoteView, candidate: NoteView) -> list[str]:
    """Return the names of the signals linking ``candidate`` to ``target``.

    Possible values, in evaluation order: ``"tags"``, ``"category"``,
    ``"words"``. An empty list means the notes are unrelated.
    """
    reasons: list[str] = []
    if shared_tags(target, candidate):
        reasons.append("tags")
    if same_category(target, candidate):
        reasons.append("category")
    if lexical_overlap(target, candidate) > MIN_SHARED_WORDS:
        reasons.append("words")
    return reasons


def is_related(target: NoteView, candidate: NoteView) -> bool:
    return (
        bool(shared_tags(target, candidate))
        or same_category(target, candidate)
        or lexical_overlap(target, candidate) > MIN_SHARED_WORDS
    )


def to_related_note(note: NoteView) -> RelatedNote:
    return RelatedNote(
        id=note.id,
        title=note.title,
        summary=note.summary,
        category=note.category,
        tags=[*(note.tags or []), *(note.ai_tags or [])],
    )


def find_related(
    target: NoteView,
    candidates: Iterable[NoteView],
    limit: int = MAX_RELATED,
) -> list[RelatedNote]:
    """Return up to ``limit`` candidates related to ``target``, in input order.

    Candidates must already be restricted to the target's owner. A
    candidate carrying the target's own id is skipped.
    """
    if limit <= 0:
        return []

    related: list[RelatedNote] = []
    for candidate in candidates:
        if candidate is target or candidate.id == target.id:
            continue
        if is_related(target, candidate):
            related.append(to_related_note(candidate))
            if len(related) >= limit:
                break
    return related


def related_payload(related: Sequence[RelatedNote]) -> list[dict[str, Any]]:
    """Serialize matcher output for the ``relatedNotes`` response key."""
    return [item.to_dict() for item in related]
