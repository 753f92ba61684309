# Services package init
"""
NoteKeeper Backend - Services Layer
====================================

What:  The two components every note request passes through.
How:   Plain Python, no HTTP types. Routes call these and map the results
       to status codes.

Service Inventory:
    - validation.validate(): raw payload → NoteCreate/NoteUpdate or ValidationFailure
    - filters.NoteFilters:   lenient query parsing and the per-note match predicate
    - note_store.NoteStore:  in-memory collection (ids, CRUD, toggles, list/paginate)
"""
