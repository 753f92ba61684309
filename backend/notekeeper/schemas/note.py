"""
NoteKeeper Backend - Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract and the stored Note record.
How:   The Validator runs raw payloads through NoteCreate / NoteUpdate;
       the NoteStore keeps Note instances; routes wrap results in envelopes.
Who:   Used by the validation service, the store and the route handlers.

Wire format:
    Clients speak camelCase (dueDate, isArchived, createdAt...). Python code
    uses snake_case attributes. Every model shares an alias generator so both
    spellings are accepted on input and camelCase is emitted on output.
"""

import re
from datetime import datetime
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StringConstraints, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

# ── Field limits ──────────────────────────────────────────────────────────
TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 1000
TAG_MAX_LENGTH = 20
MAX_TAGS = 10

# Date AND time, joined by "T"; pydantic alone would accept "2024-01-15" or a space separator
_ISO_DATETIME_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")

Title = Annotated[str, StringConstraints(strict=True, min_length=1, max_length=TITLE_MAX_LENGTH)]
Content = Annotated[str, StringConstraints(strict=True, min_length=1, max_length=CONTENT_MAX_LENGTH)]
Tag = Annotated[str, StringConstraints(strict=True, min_length=1, max_length=TAG_MAX_LENGTH)]
TagList = Annotated[List[Tag], Field(max_length=MAX_TAGS)]


class CamelModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Input Schemas - what the Validator accepts
# ══════════════════════════════════════════════════════════════════════════


class _NotePayload(CamelModel):
    """
    Field rules shared by the create and update schemas.

    Unrecognized keys are dropped (extra="ignore"), which is also how the
    create schema discards isArchived/isDone: status flags cannot be set
    at creation time.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    due_date: Optional[datetime] = Field(
        default=None,
        description="Optional due date (ISO 8601 datetime); null clears it",
    )

    @field_validator("due_date", mode="before")
    @classmethod
    def require_iso_datetime_string(cls, v: Any) -> Any:
        if v is None or isinstance(v, datetime):
            return v
        if not isinstance(v, str):
            raise PydanticCustomError("wrong_type", "Input should be an ISO 8601 datetime string")
        if not _ISO_DATETIME_PREFIX.match(v):
            raise PydanticCustomError(
                "invalid_datetime",
                "Input should be an ISO 8601 datetime with both date and time",
            )
        return v


class NoteCreate(_NotePayload):
    """Schema for POST /notes."""

    title: Title = Field(description="Note title (1-100 characters)", examples=["Buy milk"])
    content: Content = Field(description="Note body (1-1000 characters)", examples=["2%"])
    tags: TagList = Field(
        default_factory=list,
        description="Up to 10 tags, 1-20 characters each",
        examples=[["errand"]],
    )

    @field_validator("title", "content", "tags", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise PydanticCustomError("null_not_allowed", "Field must not be null")
        return v


class NoteUpdate(_NotePayload):
    """
    Schema for PUT /notes/{id}: every field optional (partial update).

    Absent fields are left untouched by the store. Explicit null is only
    meaningful for dueDate; null anywhere else is rejected. Callers read
    the changes with `model_dump(exclude_unset=True)`.
    """

    title: Optional[Title] = Field(default=None, description="Note title (1-100 characters)")
    content: Optional[Content] = Field(default=None, description="Note body (1-1000 characters)")
    tags: Optional[TagList] = Field(
        default=None,
        description="Replaces the whole tag list",
    )
    is_archived: Optional[StrictBool] = Field(default=None, description="Archive flag")
    is_done: Optional[StrictBool] = Field(default=None, description="Done flag")

    @field_validator("title", "content", "tags", "is_archived", "is_done", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise PydanticCustomError("null_not_allowed", "Field may be omitted but must not be null")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Stored Record
# ══════════════════════════════════════════════════════════════════════════


class Note(CamelModel):
    """
    What:  A stored note, exactly as the NoteStore holds and returns it.
    Who:   Built only by NoteStore.create; mutated only by NoteStore.update.
    """

    id: int = Field(description="Store-assigned identifier (never reused)")
    title: str
    content: str
    tags: List[str] = Field(default_factory=list)
    due_date: Optional[datetime] = None
    is_archived: bool = False
    is_done: bool = False
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last mutation timestamp (UTC)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NotePage(CamelModel):
    """
    What:  One pagination window over the filtered note collection.
    Who:   Returned by NoteStore.list_notes.

    `total` counts every match before slicing; `has_more` is
    `offset + limit < total`.
    """

    items: List[Note]
    total: int
    limit: int
    offset: int
    has_more: bool


class PaginationInfo(CamelModel):
    total: int = Field(description="Number of notes matching the filters")
    limit: int = Field(description="Page size applied")
    offset: int = Field(description="Number of matching notes skipped")
    has_more: bool = Field(description="Whether notes exist past this page")


class NoteEnvelope(CamelModel):
    """Single-note response body: {success, data}."""

    success: bool = True
    data: Note


class NoteListEnvelope(CamelModel):
    """List response body: {success, data, pagination}."""

    success: bool = True
    data: List[Note]
    pagination: PaginationInfo


class Violation(CamelModel):
    """
    One failed rule for one field.

    field:   dotted camelCase path ("title", "tags.3", "body")
    rule:    required | too_short | too_long | too_many | wrong_type |
             invalid_datetime | null_not_allowed | invalid_json | invalid
    message: human-readable explanation
    """

    field: str
    rule: str
    message: str


class ErrorResponse(BaseModel):
    """
    Standardized error body for every non-2xx response.

    Example:
        {
            "success": false,
            "error": "not_found",
            "message": "note with ID '42' was not found",
            "request_id": "a1b2c3d4"
        }
    """

    success: bool = False
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[List[Violation]] = Field(default=None, description="Validation violations")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    notes: int = Field(description="Number of notes currently held in memory")
    uptime_seconds: float = Field(description="Seconds since service started")
