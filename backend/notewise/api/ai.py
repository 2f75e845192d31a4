"""AI API endpoints for Notewise.

Provides:
- ``POST /ai/completion``                -- Continue a piece of text
- ``POST /ai/notes/{note_id}/summary``    -- Summarize a note and store the summary
- ``POST /ai/notes/{note_id}/categorize`` -- Assign a category and AI tags to a note
- ``GET  /ai/notes/{note_id}/related``    -- Notes related by tags, category or wording
- ``POST /ai/search``                     -- Natural-language search via extracted keywords

All endpoints require JWT authentication via Bearer token.  Provider
failures and unusable model output are reported as ``502 AI service error``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from notewise.ai_router.router import AIRouter
from notewise.ai_router.schemas import ParseError, ProviderError
from notewise.api.notes import NoteResponse, load_owned_note, note_to_response
from notewise.config import get_settings
from notewise.database import get_db
from notewise.services import note_service
from notewise.services.auth_service import get_current_user
from notewise.services.note_assistant import NoteAssistant
from notewise.services.query_composer import compose
from notewise.services.relevance import find_related, related_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])

AI_SERVICE_ERROR = "AI service error"


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_ai_router(request: Request) -> AIRouter:
    """Return the application's AIRouter.

    The router is created in the app lifespan from the settings; when the
    lifespan did not run (e.g. a bare ASGI transport) it is built here once
    and cached on ``app.state``.
    """
    ai_router = getattr(request.app.state, "ai_router", None)
    if ai_router is None:
        ai_router = AIRouter.from_settings(get_settings())
        request.app.state.ai_router = ai_router
    return ai_router


def get_note_assistant(
    ai_router: AIRouter = Depends(get_ai_router),  # noqa: B008
) -> NoteAssistant:
    return NoteAssistant(ai_router)


def _service_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=AI_SERVICE_ERROR,
    )


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class CompletionRequest(BaseModel):
    text: str | None = None


class CompletionResponse(BaseModel):
    suggestion: str


class SummaryResponse(BaseModel):
    summary: str


class CategorizeResponse(BaseModel):
    category: str
    tags: list[str]


class RelatedNoteItem(BaseModel):
    id: int
    title: str
    summary: str | None = None
    category: str | None = None
    tags: list[str] = []


class RelatedNotesResponse(BaseModel):
    relatedNotes: list[RelatedNoteItem] = Field(default_factory=list)  # noqa: N815


class SearchRequest(BaseModel):
    query: str | None = None


class SearchResponse(BaseModel):
    notes: list[NoteResponse]
    keywords: list[str]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/completion", response_model=CompletionResponse)
async def completion(
    request: CompletionRequest,
    current_user: dict = Depends(get_current_user),  # noqa: B008
    assistant: NoteAssistant = Depends(get_note_assistant),  # noqa: B008
) -> CompletionResponse:
    """Suggest a continuation for the given text."""
    if not request.text or not request.text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Text is required",
        )

    try:
        suggestion = await assistant.suggest_completion(request.text)
    except ProviderError:
        logger.exception("Completion failed for user %s", current_user["user_id"])
        raise _service_error() from None

    return CompletionResponse(suggestion=suggestion)


@router.post("/notes/{note_id}/summary", response_model=SummaryResponse)
async def summarize_note(
    note_id: int,
    current_user: dict = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
    assistant: NoteAssistant = Depends(get_note_assistant),  # noqa: B008
) -> SummaryResponse:
    """Generate a summary for a note and store it on the note."""
    note = await load_owned_note(db, note_id, current_user)

    try:
        summary = await assistant.summarize(note.content)
    except ProviderError:
        logger.exception("Summary failed for note %s", note_id)
        raise _service_error() from None

    note.summary = summary
    await db.flush()
    return SummaryResponse(summary=summary)


@router.post("/notes/{note_id}/categorize", response_model=CategorizeResponse)
async def categorize_note(
    note_id: int,
    current_user: dict = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
    assistant: NoteAssistant = Depends(get_note_assistant),  # noqa: B008
) -> CategorizeResponse:
    """Assign a category and AI tags to a note."""
    note = await load_owned_note(db, note_id, current_user)

    try:
        result = await assistant.categorize(note.title, note.content)
    except (ProviderError, ParseError):
        logger.exception("Categorization failed for note %s", note_id)
        raise _service_error() from None

    note.category = result.category
    note.ai_tags = result.tags
    await db.flush()
    return CategorizeResponse(category=result.category, tags=result.tags)


@router.get("/notes/{note_id}/related", response_model=RelatedNotesResponse)
async def related_notes(
    note_id: int,
    current_user: dict = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> RelatedNotesResponse:
    """Find up to five of the caller's notes related to this one."""
    note = await load_owned_note(db, note_id, current_user)
    candidates = await note_service.list_other_notes(db, current_user["user_id"], note.id)
    if not candidates:
        return RelatedNotesResponse(relatedNotes=[])

    related = find_related(note, candidates)
    return RelatedNotesResponse(
        relatedNotes=[RelatedNoteItem(**item) for item in related_payload(related)]
    )


@router.post("/search", response_model=SearchResponse)
async def natural_language_search(
    request: SearchRequest,
    current_user: dict = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
    assistant: NoteAssistant = Depends(get_note_assistant),  # noqa: B008
) -> SearchResponse:
    """Search the caller's notes with keywords extracted from a question."""
    if not request.query or not request.query.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required",
        )

    try:
        keywords = await assistant.extract_keywords(request.query)
    except ProviderError:
        logger.exception("Keyword extraction failed for user %s", current_user["user_id"])
        raise _service_error() from None

    keyword_filter = compose(keywords)
    notes = await note_service.find_by_keywords(db, current_user["user_id"], keyword_filter)
    logger.debug("AI search: %d keywords, %d notes", len(keyword_filter.keywords), len(notes))

    return SearchResponse(
        notes=[note_to_response(n) for n in notes],
        keywords=keywords,
    )
