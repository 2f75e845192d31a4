"""Notes API endpoints for Notewise.

Owner-scoped CRUD over the caller's notes, protected by JWT authentication.

Endpoints:
- ``GET    /notes``                 -- All notes, most recently updated first
- ``GET    /notes/search?query=``   -- Substring search over title, content, tags
- ``GET    /notes/{note_id}``       -- Single note
- ``POST   /notes``                 -- Create a note
- ``PUT    /notes/{note_id}``       -- Update a note
- ``DELETE /notes/{note_id}``       -- Delete a note
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from notewise.database import get_db
from notewise.models import Note
from notewise.services import note_service
from notewise.services.auth_service import get_current_user
from notewise.services.note_service import NoteAccessError, NoteNotFoundError
from notewise.utils.datetime_utils import datetime_to_iso

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notes"])


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class NoteResponse(BaseModel):
    """Full representation of a note."""

    id: int
    title: str
    content: str
    summary: str | None = None
    tags: list[str] = []
    ai_tags: list[str] = []
    category: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class NoteWriteRequest(BaseModel):
    """Request payload for creating or updating a note.

    ``tags`` omitted on update leaves the stored tags unchanged.
    """

    title: str
    content: str
    tags: list[str] | None = None

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class MessageResponse(BaseModel):
    message: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def note_to_response(note: Note) -> NoteResponse:
    return NoteResponse(
        id=note.id,
        title=note.title,
        content=note.content,
        summary=note.summary,
        tags=list(note.tags or []),
        ai_tags=list(note.ai_tags or []),
        category=note.category,
        created_at=datetime_to_iso(note.created_at),
        updated_at=datetime_to_iso(note.updated_at),
    )


async def load_owned_note(db: AsyncSession, note_id: int, current_user: dict) -> Note:
    """Fetch a note for the caller, mapping lookup failures to HTTP errors.

    Raises:
        HTTPException 404: If the note does not exist.
        HTTPException 401: If the note belongs to another user.
    """
    try:
        return await note_service.get_owned_note(db, note_id, current_user["user_id"])
    except NoteNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Note not found",
        ) from None
    except NoteAccessError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized",
        ) from None


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/notes", response_model=list[NoteResponse])
async def list_notes(
    current_user: dict = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> list[NoteResponse]:
    """List the caller's notes, most recently updated first."""
    notes = await note_service.list_notes(db, current_user["user_id"])
    return [note_to_response(n) for n in notes]


@router.get("/notes/search", response_model=list[NoteResponse])
async def search_notes(
    query: str | None = Query(None, description="Text to look for"),
    current_user: dict = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> list[NoteResponse]:
    """Case-insensitive substring search in title, content and tags."""
    if not query or not query.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required",
        )

    notes = await note_service.search_notes(db, current_user["user_id"], query.strip())
    return [note_to_response(n) for n in notes]


@router.get("/notes/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: int,
    current_user: dict = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> NoteResponse:
    note = await load_owned_note(db, note_id, current_user)
    return note_to_response(note)


@router.post("/notes", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteWriteRequest,
    current_user: dict = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> NoteResponse:
    note = await note_service.create_note(
        db,
        owner_id=current_user["user_id"],
        title=payload.title,
        content=payload.content,
        tags=payload.tags,
    )
    return note_to_response(note)


@router.put("/notes/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: int,
    payload: NoteWriteRequest,
    current_user: dict = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> NoteResponse:
    note = await load_owned_note(db, note_id, current_user)
    note = await note_service.update_note(
        db,
        note,
        title=payload.title,
        content=payload.content,
        tags=payload.tags,
    )
    return note_to_response(note)


@router.delete("/notes/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: int,
    current_user: dict = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> MessageResponse:
    note = await load_owned_note(db, note_id, current_user)
    await note_service.delete_note(db, note)
    return MessageResponse(message="Note removed")
