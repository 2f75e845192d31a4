"""Owner-scoped note persistence.

Every query here filters on ``owner_id``; callers never see another
user's notes through this module.
"""

from __future__ import annotations

import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from notewise.models import Note
from notewise.services.query_composer import KeywordFilter, tag_contains
from notewise.utils.note_utils import normalize_tags

logger = logging.getLogger(__name__)


class NoteNotFoundError(LookupError):
    """No note exists with the requested id."""


class NoteAccessError(PermissionError):
    """The note exists but belongs to another user."""


async def get_owned_note(db: AsyncSession, note_id: int, owner_id: int) -> Note:
    """Load a note and check ownership.

    Raises:
        NoteNotFoundError: If the note does not exist.
        NoteAccessError: If ``owner_id`` does not own it.
    """
    note = await db.get(Note, note_id)
    if note is None:
        raise NoteNotFoundError(note_id)
    if note.owner_id != owner_id:
        logger.warning("User %s denied access to note %s", owner_id, note_id)
        raise NoteAccessError(note_id)
    return note


async def list_notes(db: AsyncSession, owner_id: int) -> list[Note]:
    """All notes of one owner, most recently updated first."""
    stmt = select(Note).where(Note.owner_id == owner_id).order_by(Note.updated_at.desc(), Note.id.desc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_other_notes(db: AsyncSession, owner_id: int, exclude_id: int) -> list[Note]:
    """Owner's notes except ``exclude_id``, in creation order."""
    stmt = (
        select(Note)
        .where(Note.owner_id == owner_id, Note.id != exclude_id)
        .order_by(Note.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_note(
    db: AsyncSession,
    owner_id: int,
    title: str,
    content: str,
    tags: list[str] | None = None,
) -> Note:
    note = Note(
        owner_id=owner_id,
        title=title,
        content=content,
        tags=normalize_tags(tags),
        ai_tags=[],
    )
    db.add(note)
    await db.flush()
    logger.info("Created note %s for user %s", note.id, owner_id)
    return note


async def update_note(
    db: AsyncSession,
    note: Note,
    title: str,
    content: str,
    tags: list[str] | None = None,
) -> Note:
    """Overwrite title and content; tags change only when given."""
    note.title = title
    note.content = content
    if tags is not None:
        note.tags = normalize_tags(tags)
    await db.flush()
    return note


async def delete_note(db: AsyncSession, note: Note) -> None:
    await db.delete(note)
    await db.flush()
    logger.info("Deleted note %s", note.id)


async def search_notes(db: AsyncSession, owner_id: int, query: str) -> list[Note]:
    """Case-insensitive substring search over title, content and user tags."""
    stmt = (
        select(Note)
        .where(
            Note.owner_id == owner_id,
            or_(
                Note.title.icontains(query, autoescape=True),
                Note.content.icontains(query, autoescape=True),
                tag_contains(Note.tags, query, db.get_bind().dialect.name),
            ),
        )
        .order_by(Note.updated_at.desc(), Note.id.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def find_by_keywords(db: AsyncSession, owner_id: int, keyword_filter: KeywordFilter) -> list[Note]:
    """Run a composed keyword filter within one owner's notes.

    An empty filter returns no notes without touching the database.
    """
    if keyword_filter.is_empty:
        return []

    stmt = (
        select(Note)
        .where(Note.owner_id == owner_id, keyword_filter.where_clause(db.get_bind().dialect.name))
        .order_by(Note.updated_at.desc(), Note.id.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())
