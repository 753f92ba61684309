"""
NoteKeeper Backend - Application Package Initializer
=====================================================

What: Marks the `notekeeper` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Validator, NoteStore)   │  ← Rules, filtering, pagination
    ├─────────────────────────────────────┤
    │          Schemas (Pydantic)         │  ← Wire contracts and the Note record
    └─────────────────────────────────────┘

    Routes translate store/validator results into HTTP responses.
    Services never raise for "not found" or "invalid input"; they return
    sentinel values and the route layer decides the status code.
    There is no persistence layer: the NoteStore keeps every note in memory
    for the lifetime of the process.
"""

__version__ = "1.0.0"
