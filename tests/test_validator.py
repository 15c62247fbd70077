"""
Tests for thought payload validation.

Run with:
$ pytest -q
"""

from typing import (
    Any,
    Dict,
)

import pytest

from seqthink.core.validator import (
    InvalidThought,
    ThoughtValidationError,
    ValidThought,
    parse_thought,
    validate_thought,
)


def _payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "thought": "start",
        "thought_number": 1,
        "total_thoughts": 3,
        "next_thought_needed": True,
    }
    payload.update(overrides)
    return payload


def _step(description: str = "search") -> Dict[str, Any]:
    return {
        "step_description": description,
        "recommended_tools": [
            {"tool_name": "search", "confidence": 0.8, "rationale": "find it", "priority": 1}
        ],
        "expected_outcome": "results",
    }


def test_minimal_payload_is_valid() -> None:
    """The four required fields are enough to build a record."""

    outcome = validate_thought(_payload())
    assert isinstance(outcome, ValidThought)
    assert outcome.record.thought == "start"
    assert outcome.record.previous_steps is None


@pytest.mark.parametrize(
    "field, bad_value",
    [
        ("thought", ""),
        ("thought", 42),
        ("thought_number", 0),
        ("thought_number", "1"),
        ("thought_number", True),
        ("total_thoughts", -3),
        ("next_thought_needed", "yes"),
        ("next_thought_needed", 1),
    ],
)
def test_required_field_wrong_shape(field: str, bad_value: Any) -> None:
    """Each required field is reported by name when it has the wrong shape."""

    outcome = validate_thought(_payload(**{field: bad_value}))
    assert isinstance(outcome, InvalidThought)
    assert outcome.field == field
    assert field in outcome.message


@pytest.mark.parametrize(
    "field", ["thought", "thought_number", "total_thoughts", "next_thought_needed"]
)
def test_required_field_missing(field: str) -> None:
    """A missing required field fails with a message naming it."""

    payload = _payload()
    del payload[field]
    outcome = validate_thought(payload)
    assert isinstance(outcome, InvalidThought)
    assert outcome.field == field


def test_required_fields_checked_in_order() -> None:
    """With several fields missing, the first in the fixed order is reported."""

    outcome = validate_thought({"total_thoughts": 0})
    assert isinstance(outcome, InvalidThought)
    assert outcome.field == "thought"

    outcome = validate_thought({"thought": "x", "next_thought_needed": "no"})
    assert isinstance(outcome, InvalidThought)
    assert outcome.field == "thought_number"


@pytest.mark.parametrize("field", ["previous_steps", "remaining_steps"])
def test_sequence_fields_must_be_lists(field: str) -> None:
    """previous_steps and remaining_steps must be arrays when present."""

    outcome = validate_thought(_payload(**{field: "not a list"}))
    assert isinstance(outcome, InvalidThought)
    assert outcome.field == field
    assert "array" in outcome.message


def test_nested_step_errors_name_the_path() -> None:
    """A malformed nested recommendation is reported with its field path."""

    step = _step()
    step["recommended_tools"][0]["confidence"] = 1.5
    outcome = validate_thought(_payload(current_step=step))
    assert isinstance(outcome, InvalidThought)
    assert outcome.field == "current_step.recommended_tools.0.confidence"


def test_unknown_fields_are_ignored() -> None:
    """Extra keys in the payload do not cause a failure."""

    outcome = validate_thought(_payload(mood="curious", tool_outputs=["x"]))
    assert isinstance(outcome, ValidThought)
    assert not hasattr(outcome.record, "mood")


def test_optional_fields_pass_through() -> None:
    """Revision, branch and step fields are carried into the record."""

    record = parse_thought(
        _payload(
            is_revision=True,
            revises_thought=1,
            branch_from_thought=1,
            branch_id="alt",
            current_step=_step(),
            remaining_steps=["summarize"],
            available_mcp_tools=["search"],
        )
    )
    assert record.is_revision is True
    assert record.revises_thought == 1
    assert record.branch_id == "alt"
    assert record.current_step is not None
    assert record.current_step.recommended_tools[0].tool_name == "search"
    assert record.remaining_steps == ["summarize"]
    assert record.available_mcp_tools == ["search"]


def test_revises_thought_not_checked_against_history() -> None:
    """Cross-field consistency is not enforced."""

    record = parse_thought(_payload(is_revision=True, revises_thought=99))
    assert record.revises_thought == 99


def test_parse_thought_raises() -> None:
    """parse_thought raises ThoughtValidationError with the field attached."""

    try:
        parse_thought(["not", "a", "mapping"])
    except ThoughtValidationError as exc:
        assert exc.field == "input"
    else:  # pragma: no cover
        raise AssertionError("ThoughtValidationError was not raised")
