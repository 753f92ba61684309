"""
NoteKeeper Backend - Payload Validator
=======================================

What:  Gates every client-supplied note payload before it reaches the store.
How:   Runs the raw payload through a pydantic schema (NoteCreate or
       NoteUpdate) and either returns the parsed model or a
       ValidationFailure listing every violated rule.
Who:   Called by the notes route handlers for POST and PUT.

The function never raises for bad input: callers get a value back and decide
what to do with it (the routes turn a failure into a 400 response).

Rule names:
    pydantic error type          → rule
    ─────────────────────────────────────────────
    missing                      → required
    string_too_short             → too_short
    string_too_long              → too_long
    too_long (lists)             → too_many
    *_type                       → wrong_type
    datetime_* parsing errors    → invalid_datetime
    null_not_allowed (custom)    → null_not_allowed
    anything else                → invalid
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Type, TypeVar, Union

import pydantic
from pydantic_core import ErrorDetails

from notekeeper.schemas.note import NoteCreate, NoteUpdate, Violation

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", NoteCreate, NoteUpdate)

_RULES_BY_ERROR_TYPE = {
    "missing": "required",
    "string_too_short": "too_short",
    "string_too_long": "too_long",
    "too_short": "too_short",
    "too_long": "too_many",
    "wrong_type": "wrong_type",
    "invalid_datetime": "invalid_datetime",
    "datetime_parsing": "invalid_datetime",
    "datetime_from_date_parsing": "invalid_datetime",
    "datetime_object_invalid": "invalid_datetime",
    "null_not_allowed": "null_not_allowed",
}


@dataclass
class ValidationFailure:
    """Every violation found in one payload, in pydantic's reporting order."""

    violations: List[Violation] = field(default_factory=list)

    def as_dicts(self) -> List[dict]:
        return [v.model_dump() for v in self.violations]


def _rule_for(error_type: str) -> str:
    if error_type in _RULES_BY_ERROR_TYPE:
        return _RULES_BY_ERROR_TYPE[error_type]
    if error_type.endswith("_type"):
        return "wrong_type"
    return "invalid"


def _field_path(loc: tuple) -> str:
    # An empty loc means the payload itself was rejected (e.g. a JSON array)
    return ".".join(str(part) for part in loc) or "body"


def _to_violation(error: ErrorDetails) -> Violation:
    return Violation(
        field=_field_path(error["loc"]),
        rule=_rule_for(error["type"]),
        message=error["msg"],
    )


def validate(schema: Type[SchemaT], raw_payload: Any) -> Union[SchemaT, ValidationFailure]:
    """
    Validate an untyped payload against a note schema.

    Args:
        schema: NoteCreate or NoteUpdate
        raw_payload: Decoded JSON body (any type, client controlled)

    Returns:
        The parsed schema instance (unknown keys dropped, defaults applied),
        or a ValidationFailure with one entry per failing field location.
    """
    try:
        return schema.model_validate(raw_payload)
    except pydantic.ValidationError as exc:
        failure = ValidationFailure(
            violations=[_to_violation(error) for error in exc.errors(include_url=False)]
        )
        logger.debug(
            "%s payload rejected: %s",
            schema.__name__,
            ", ".join(f"{v.field}:{v.rule}" for v in failure.violations),
        )
        return failure
