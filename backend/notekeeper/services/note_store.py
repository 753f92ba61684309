"""
NoteKeeper Backend - Note Store (In-Memory Record Manager)
===========================================================

What:  Sole owner of the note collection: assigns ids, filters, paginates,
       merges updates and toggles status flags.
How:   An insertion-ordered list of Note records plus a next-id counter,
       both private and guarded by one re-entrant lock.
Who:   One instance per application (created in main.create_app and reached
       through the get_note_store dependency); route handlers call it.
When:  For every note request.

Result conventions:
    The store never raises for a missing id. Lookups and mutations return
    None (or False for delete) and the caller chooses the HTTP status.

Concurrency:
    FastAPI may call into the store from worker threads. Id allocation
    (read-then-increment) and update (merge-then-write) must not interleave,
    so every public method holds `self._lock`. RLock because the status
    toggles call get_by_id and update while already holding it.

Ordering:
    list_notes preserves insertion order. Nothing is ever sorted, and an
    updated note keeps its position.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from notekeeper.schemas.note import Note, NoteCreate, NotePage, NoteUpdate
from notekeeper.services.filters import NoteFilters

logger = logging.getLogger(__name__)

# Fields an update may touch; id and timestamps belong to the store
MUTABLE_FIELDS = frozenset({"title", "content", "tags", "due_date", "is_archived", "is_done"})


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NoteStore:
    """
    In-memory note collection.

    Responsibilities:
        - list_notes(): filter + paginate, insertion order
        - get_by_id(), create(), update(), delete()
        - archive(), unarchive(), mark_as_done(), mark_as_undone()

    Returned notes are copies: mutating them never changes stored state.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._notes: List[Note] = []
        self._next_id = 1
        self._clock = clock
        self._lock = threading.RLock()

    # ── Queries ───────────────────────────────────────────────────────────

    def list_notes(self, filters: Optional[NoteFilters] = None) -> NotePage:
        """
        Return one page of the notes matching `filters`.

        Filtering is an O(n) scan. Pagination is applied after filtering:
        `total` is the match count before slicing and
        `has_more = offset + limit < total`. A limit of 0 yields no items
        but still reports the true total.
        """
        filters = filters or NoteFilters()
        with self._lock:
            matching = [note for note in self._notes if filters.matches(note)]

        total = len(matching)
        window = matching[filters.offset:filters.offset + filters.limit]
        return NotePage(
            items=[note.model_copy(deep=True) for note in window],
            total=total,
            limit=filters.limit,
            offset=filters.offset,
            has_more=filters.offset + filters.limit < total,
        )

    def get_by_id(self, note_id: int) -> Optional[Note]:
        with self._lock:
            index = self._index_of(note_id)
            if index is None:
                return None
            return self._notes[index].model_copy(deep=True)

    def count(self) -> int:
        with self._lock:
            return len(self._notes)

    # ── Mutations ─────────────────────────────────────────────────────────

    def create(self, payload: NoteCreate) -> Note:
        """
        Store a new note built from an already-validated payload.

        Assigns the next id, forces both status flags to False and sets
        created_at == updated_at. Never fails.
        """
        with self._lock:
            now = self._clock()
            note = Note(
                id=self._next_id,
                title=payload.title,
                content=payload.content,
                tags=list(payload.tags),
                due_date=payload.due_date,
                is_archived=False,
                is_done=False,
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            self._notes.append(note)

        logger.info("Note %d created (%d tags)", note.id, len(note.tags))
        return note.model_copy(deep=True)

    def update(
        self,
        note_id: int,
        payload: Union[NoteUpdate, Mapping[str, Any]],
    ) -> Optional[Note]:
        """
        Shallow-merge the fields present in `payload` onto note `note_id`.

        Args:
            note_id: Target note
            payload: A NoteUpdate (only explicitly set fields are applied)
                     or a mapping of snake_case field names to new values

        Returns:
            The updated note, or None if no note has that id.

        Raises:
            ValueError: payload names a field that is not client-mutable
        """
        changes = self._changes_from(payload)
        with self._lock:
            index = self._index_of(note_id)
            if index is None:
                return None

            current = self._notes[index]
            # updated_at may never fall behind created_at, even if the clock steps back
            changes["updated_at"] = max(self._clock(), current.created_at)
            updated = current.model_copy(update=changes, deep=True)
            self._notes[index] = updated

        logger.debug("Note %d updated: %s", note_id, sorted(k for k in changes if k != "updated_at"))
        return updated.model_copy(deep=True)

    def delete(self, note_id: int) -> bool:
        """Remove note `note_id` permanently. False when it did not exist."""
        with self._lock:
            index = self._index_of(note_id)
            if index is None:
                return False
            del self._notes[index]

        logger.info("Note %d deleted", note_id)
        return True

    # ── Status toggles ────────────────────────────────────────────────────
    # Each touches exactly one flag (plus updated_at) and nothing else.

    def archive(self, note_id: int) -> Optional[Note]:
        return self._set_flag(note_id, "is_archived", True)

    def unarchive(self, note_id: int) -> Optional[Note]:
        return self._set_flag(note_id, "is_archived", False)

    def mark_as_done(self, note_id: int) -> Optional[Note]:
        return self._set_flag(note_id, "is_done", True)

    def mark_as_undone(self, note_id: int) -> Optional[Note]:
        return self._set_flag(note_id, "is_done", False)

    # ── Internals ─────────────────────────────────────────────────────────

    def _set_flag(self, note_id: int, flag: str, value: bool) -> Optional[Note]:
        with self._lock:
            if self.get_by_id(note_id) is None:
                return None
            return self.update(note_id, {flag: value})

    def _index_of(self, note_id: int) -> Optional[int]:
        for index, note in enumerate(self._notes):
            if note.id == note_id:
                return index
        return None

    @staticmethod
    def _changes_from(payload: Union[NoteUpdate, Mapping[str, Any]]) -> Dict[str, Any]:
        if isinstance(payload, NoteUpdate):
            changes = payload.model_dump(exclude_unset=True)
        else:
            changes = dict(payload)

        unknown = set(changes) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")
        return changes
