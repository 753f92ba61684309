"""
NoteKeeper Backend - Notes Route Handlers
==========================================

What:  CRUD, search and status endpoints for notes.
How:   Parses path/query/body, calls the Validator and the NoteStore,
       converts sentinel results into NotFoundError / ValidationError and
       wraps successes in the {success, data} envelope.
Who:   Mounted by main.create_app under settings.api_prefix.

Path ids:
    `{note_id}` is taken as a string and parsed here. Anything but plain ASCII
    digits ("1_0", " 1", "+1") is non-numeric; a non-numeric id can
    never match a stored note, so it answers 404 like any other unknown id
    (instead of FastAPI's automatic 422).

Bodies:
    Read as raw JSON and handed to the Validator untouched. Malformed JSON is
    a 400 with a single `body` violation. The body is validated before the id
    is looked up, so PUT with a bad body on a missing note answers 400.
"""

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from notekeeper.exceptions import NotFoundError, ValidationError
from notekeeper.schemas.note import (
    ErrorResponse,
    Note,
    NoteCreate,
    NoteEnvelope,
    NoteListEnvelope,
    NoteUpdate,
    PaginationInfo,
)
from notekeeper.services.filters import NoteFilters, parse_non_negative_int
from notekeeper.services.note_store import NoteStore
from notekeeper.services.validation import ValidationFailure, validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])

_NOT_FOUND = {404: {"description": "Note not found", "model": ErrorResponse}}
_INVALID = {400: {"description": "Validation error", "model": ErrorResponse}}


# ── Dependencies & helpers ────────────────────────────────────────────────

def get_note_store(request: Request) -> NoteStore:
    """The application's single NoteStore (created in create_app)."""
    return request.app.state.note_store


def parse_note_id(raw: str) -> Optional[int]:
    return parse_non_negative_int(raw)


def _found(note: Optional[Note], raw_id: str) -> Note:
    if note is None:
        raise NotFoundError(resource="note", resource_id=raw_id)
    return note


async def read_json_body(request: Request) -> Any:
    """Decode the request body; an empty body counts as an empty object."""
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return await request.json()
    except ValueError:
        raise ValidationError(
            violations=[{
                "field": "body",
                "rule": "invalid_json",
                "message": "Request body is not valid JSON",
            }],
        ) from None


def _raise_if_invalid(result: Any) -> None:
    if isinstance(result, ValidationFailure):
        raise ValidationError(violations=result.as_dicts())


# ── Collection ────────────────────────────────────────────────────────────

@router.get(
    "",
    response_model=NoteListEnvelope,
    summary="List notes with search, filters and pagination",
)
async def list_notes(
    request: Request,
    q: Optional[str] = Query(default=None, description="Case-insensitive search in title and content"),
    tags: Optional[List[str]] = Query(
        default=None,
        description="Match notes carrying at least one of these tags (repeat or comma-separate)",
    ),
    is_archived: Optional[str] = Query(default=None, alias="isArchived", description="true / false"),
    is_done: Optional[str] = Query(default=None, alias="isDone", description="true / false"),
    limit: Optional[str] = Query(default=None, description="Page size (default 10)"),
    offset: Optional[str] = Query(default=None, description="Matches to skip (default 0)"),
    store: NoteStore = Depends(get_note_store),
) -> NoteListEnvelope:
    filters = NoteFilters.from_query(
        q=q,
        tags=tags,
        is_archived=is_archived,
        is_done=is_done,
        limit=limit,
        offset=offset,
        default_limit=request.app.state.settings.default_page_limit,
    )
    page = store.list_notes(filters)
    return NoteListEnvelope(
        data=page.items,
        pagination=PaginationInfo(
            total=page.total,
            limit=page.limit,
            offset=page.offset,
            has_more=page.has_more,
        ),
    )


@router.post(
    "",
    response_model=NoteEnvelope,
    status_code=201,
    responses=_INVALID,
    summary="Create a note",
)
async def create_note(
    request: Request,
    store: NoteStore = Depends(get_note_store),
) -> NoteEnvelope:
    result = validate(NoteCreate, await read_json_body(request))
    _raise_if_invalid(result)
    return NoteEnvelope(data=store.create(result))


# ── Single note ───────────────────────────────────────────────────────────

@router.get(
    "/{note_id}",
    response_model=NoteEnvelope,
    responses=_NOT_FOUND,
    summary="Get a note by id",
)
async def get_note(note_id: str, store: NoteStore = Depends(get_note_store)) -> NoteEnvelope:
    parsed = parse_note_id(note_id)
    note = store.get_by_id(parsed) if parsed is not None else None
    return NoteEnvelope(data=_found(note, note_id))


@router.put(
    "/{note_id}",
    response_model=NoteEnvelope,
    responses={**_INVALID, **_NOT_FOUND},
    summary="Partially update a note",
)
async def update_note(
    note_id: str,
    request: Request,
    store: NoteStore = Depends(get_note_store),
) -> NoteEnvelope:
    result = validate(NoteUpdate, await read_json_body(request))
    _raise_if_invalid(result)

    parsed = parse_note_id(note_id)
    note = store.update(parsed, result) if parsed is not None else None
    return NoteEnvelope(data=_found(note, note_id))


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a note permanently",
)
async def delete_note(note_id: str, store: NoteStore = Depends(get_note_store)) -> Response:
    parsed = parse_note_id(note_id)
    if parsed is None or not store.delete(parsed):
        raise NotFoundError(resource="note", resource_id=note_id)
    return Response(status_code=204)


# ── Status toggles ────────────────────────────────────────────────────────

@router.patch("/{note_id}/archive", response_model=NoteEnvelope, responses=_NOT_FOUND, summary="Archive a note")
async def archive_note(note_id: str, store: NoteStore = Depends(get_note_store)) -> NoteEnvelope:
    parsed = parse_note_id(note_id)
    return NoteEnvelope(data=_found(store.archive(parsed) if parsed is not None else None, note_id))


@router.patch("/{note_id}/unarchive", response_model=NoteEnvelope, responses=_NOT_FOUND, summary="Unarchive a note")
async def unarchive_note(note_id: str, store: NoteStore = Depends(get_note_store)) -> NoteEnvelope:
    parsed = parse_note_id(note_id)
    return NoteEnvelope(data=_found(store.unarchive(parsed) if parsed is not None else None, note_id))


@router.patch("/{note_id}/done", response_model=NoteEnvelope, responses=_NOT_FOUND, summary="Mark a note as done")
async def mark_note_done(note_id: str, store: NoteStore = Depends(get_note_store)) -> NoteEnvelope:
    parsed = parse_note_id(note_id)
    return NoteEnvelope(data=_found(store.mark_as_done(parsed) if parsed is not None else None, note_id))


@router.patch("/{note_id}/undone", response_model=NoteEnvelope, responses=_NOT_FOUND, summary="Mark a note as not done")
async def mark_note_undone(note_id: str, store: NoteStore = Depends(get_note_store)) -> NoteEnvelope:
    parsed = parse_note_id(note_id)
    return NoteEnvelope(data=_found(store.mark_as_undone(parsed) if parsed is not None else None, note_id))
