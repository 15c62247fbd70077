"""
Turns an untrusted thought payload into a :class:`ThoughtRecord`.

The four required fields are checked by hand, in a fixed order, so the caller is told exactly
which one is wrong.  Everything else is handed to pydantic, which also validates nested step
recommendations.  The result is a tagged outcome (:class:`ValidThought` or :class:`InvalidThought`)
rather than a partially populated record.
"""

import logging
from typing import (
    Any,
    Mapping,
    Union,
)

from pydantic import (
    BaseModel,
    ValidationError,
)

from seqthink.core.schema import ThoughtRecord

logger = logging.getLogger(__name__)


class ThoughtValidationError(ValueError):
    """Raised when a thought payload is missing a field or has a field of the wrong shape."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class ValidThought(BaseModel):
    """Successful validation outcome."""

    record: ThoughtRecord


class InvalidThought(BaseModel):
    """Failed validation outcome, naming the offending field."""

    field: str
    message: str


ValidationOutcome = Union[ValidThought, InvalidThought]


# ---------------------------------------------------------------------------
# Field checks
# ---------------------------------------------------------------------------
def _is_number(value: Any) -> bool:
    # bool is an int subclass; true/false are not thought numbers
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_thought(payload: Mapping[str, Any]) -> None:
    value = payload.get("thought")
    if not isinstance(value, str) or not value:
        raise ThoughtValidationError("thought", "Invalid thought: must be a non-empty string")


def _check_positive_number(payload: Mapping[str, Any], field: str) -> None:
    value = payload.get(field)
    if not _is_number(value) or value < 1:
        raise ThoughtValidationError(field, f"Invalid {field}: must be a number >= 1")


def _check_next_thought_needed(payload: Mapping[str, Any]) -> None:
    if not isinstance(payload.get("next_thought_needed"), bool):
        raise ThoughtValidationError(
            "next_thought_needed", "Invalid next_thought_needed: must be a boolean"
        )


def _check_sequence(payload: Mapping[str, Any], field: str) -> None:
    value = payload.get(field)
    if value is not None and not isinstance(value, list):
        raise ThoughtValidationError(field, f"Invalid {field}: must be an array")


def _describe(exc: ValidationError) -> ThoughtValidationError:
    """Reduce a pydantic error to the first offending field path."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "input"
    return ThoughtValidationError(field, f"Invalid {field}: {first['msg']}")


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------
def parse_thought(payload: Any) -> ThoughtRecord:
    """
    Validate *payload* and build a record from it.

    Parameters
    ----------
    payload:
        Untrusted mapping as delivered by the transport.  Unknown keys are ignored.

    Returns
    -------
    ThoughtRecord
        The typed record, exactly as submitted (no normalization applied).

    Raises
    ------
    ThoughtValidationError
        If a required field is missing or a field has the wrong shape.
    """
    if not isinstance(payload, Mapping):
        raise ThoughtValidationError("input", "Invalid input: expected an object")

    _check_thought(payload)
    _check_positive_number(payload, "thought_number")
    _check_positive_number(payload, "total_thoughts")
    _check_next_thought_needed(payload)
    _check_sequence(payload, "previous_steps")
    _check_sequence(payload, "remaining_steps")

    known = {name: payload[name] for name in ThoughtRecord.model_fields if name in payload}
    try:
        return ThoughtRecord.model_validate(known)
    except ValidationError as exc:
        raise _describe(exc) from exc


def validate_thought(payload: Any) -> ValidationOutcome:
    """Like :func:`parse_thought`, but report failure as an :class:`InvalidThought`."""
    try:
        return ValidThought(record=parse_thought(payload))
    except ThoughtValidationError as exc:
        logger.debug("Rejected thought payload (%s): %s", exc.field, exc)
        return InvalidThought(field=exc.field, message=str(exc))
