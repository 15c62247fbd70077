"""
Tests for the sequential thinking server pipeline.

Run with:
$ pytest -q
"""

from typing import (
    Any,
    Dict,
)

import pytest

from seqthink.core.schema import ThoughtRecord
from seqthink.core.thinking import (
    SequentialThinkingServer,
    format_thought,
)
from seqthink.tools import (
    SEQUENTIAL_THINKING_TOOL_NAME,
    ToolDescriptor,
)


def _thought(number: int, total: int = 3, **extra: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "thought": f"thought {number}",
        "thought_number": number,
        "total_thoughts": total,
        "next_thought_needed": True,
    }
    payload.update(extra)
    return payload


def _step(description: str) -> Dict[str, Any]:
    return {
        "step_description": description,
        "recommended_tools": [
            {"tool_name": "search", "confidence": 0.7, "rationale": "lookup", "priority": 1}
        ],
        "expected_outcome": "facts",
    }


@pytest.fixture
def server() -> SequentialThinkingServer:
    return SequentialThinkingServer()


def test_first_thought_example(server: SequentialThinkingServer) -> None:
    """A minimal valid thought yields the progress report."""

    result = server.process_thought(
        {"thought": "start", "thought_number": 1, "total_thoughts": 3, "next_thought_needed": True}
    )
    assert result == {
        "thought_number": 1,
        "total_thoughts": 3,
        "next_thought_needed": True,
        "branches": [],
        "thought_history_length": 1,
    }


def test_invalid_thought_leaves_history_unchanged(server: SequentialThinkingServer) -> None:
    """An empty thought fails and does not touch the ledger."""

    server.process_thought(_thought(1))
    result = server.process_thought(
        {"thought": "", "thought_number": 1, "total_thoughts": 3, "next_thought_needed": True}
    )
    assert result["status"] == "failed"
    assert "thought" in result["error"]
    assert server.ledger.size() == 1


@pytest.mark.parametrize(
    "field", ["thought", "thought_number", "total_thoughts", "next_thought_needed"]
)
def test_missing_required_field_fails(server: SequentialThinkingServer, field: str) -> None:
    """Any missing required field gives a failure payload and no mutation."""

    payload = _thought(1)
    del payload[field]
    result = server.process_thought(payload)
    assert result == {"error": result["error"], "status": "failed"}
    assert field in result["error"]
    assert server.ledger.size() == 0


def test_total_thoughts_raised_to_thought_number(server: SequentialThinkingServer) -> None:
    """thought_number above total_thoughts lifts the stored and returned total."""

    result = server.process_thought(_thought(5, total=3))
    assert result["total_thoughts"] == 5
    assert server.ledger.history[-1].total_thoughts == 5


def test_history_bounded() -> None:
    """With max_history_size=2, thoughts 1, 2, 3 leave only 2 and 3."""

    server = SequentialThinkingServer(max_history_size=2)
    for number in (1, 2, 3):
        result = server.process_thought(_thought(number))
    assert result["thought_history_length"] == 2
    assert [r.thought_number for r in server.ledger.history] == [2, 3]


def test_branch_reported(server: SequentialThinkingServer) -> None:
    """A branching thought shows up in branches and in the response."""

    server.process_thought(_thought(3))
    result = server.process_thought(_thought(4, branch_from_thought=3, branch_id="A"))
    assert result["branches"] == ["A"]
    assert server.ledger.branches["A"][0].thought_number == 4


def test_current_step_folded_into_previous_steps(server: SequentialThinkingServer) -> None:
    """previous_steps [S0] with current_step S is stored and echoed as [S0, S]."""

    first, second = _step("first"), _step("second")
    result = server.process_thought(
        _thought(2, current_step=second, previous_steps=[first], remaining_steps=["wrap up"])
    )
    assert result["current_step"] == second
    assert result["previous_steps"] == [first, second]
    assert result["remaining_steps"] == ["wrap up"]
    stored = server.ledger.history[-1]
    assert [s.step_description for s in stored.previous_steps or []] == ["first", "second"]


def test_available_tools_echoed(server: SequentialThinkingServer) -> None:
    """available_mcp_tools is echoed back when supplied."""

    result = server.process_thought(_thought(1, available_mcp_tools=["search", "fetch"]))
    assert result["available_mcp_tools"] == ["search", "fetch"]


def test_unexpected_error_becomes_failure(
    server: SequentialThinkingServer, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Errors past validation are reported, not raised."""

    def _boom(record: ThoughtRecord) -> None:
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(server.ledger, "append", _boom)
    result = server.process_thought(_thought(1))
    assert result == {"error": "disk on fire", "status": "failed"}


def test_clear_history(server: SequentialThinkingServer) -> None:
    """clear_history empties the ledger."""

    server.process_thought(_thought(1, branch_from_thought=1, branch_id="A"))
    server.clear_history()
    result = server.process_thought(_thought(2))
    assert result["thought_history_length"] == 1
    assert result["branches"] == []


def test_list_tools_is_idempotent() -> None:
    """Listing the catalog twice returns the same descriptors."""

    server = SequentialThinkingServer(
        available_tools=[ToolDescriptor(name="search", description="web search")]
    )
    first = server.list_tools()
    assert first == server.list_tools()
    assert [tool["name"] for tool in first] == [SEQUENTIAL_THINKING_TOOL_NAME, "search"]


def test_format_thought_headers() -> None:
    """Revisions, branches and plain thoughts get their own headers."""

    base = {"thought": "hmm", "total_thoughts": 3, "next_thought_needed": True}
    revision = ThoughtRecord(thought_number=2, is_revision=True, revises_thought=1, **base)
    branch = ThoughtRecord(thought_number=3, branch_from_thought=1, branch_id="alt", **base)
    plain = ThoughtRecord(thought_number=1, **base)

    assert "🔄 Revision 2/3 (revising thought 1)" in format_thought(revision, color=False)
    assert "🌿 Branch 3/3 (from thought 1, ID: alt)" in format_thought(branch, color=False)
    assert "💭 Thought 1/3" in format_thought(plain, color=False)


def test_format_thought_includes_recommendation() -> None:
    """A current step is rendered under the thought text."""

    record = ThoughtRecord(
        thought="next",
        thought_number=1,
        total_thoughts=1,
        next_thought_needed=False,
        current_step=_step("search docs"),
    )
    text = format_thought(record, color=False)
    assert "Recommendation:\nStep: search docs" in text
    assert text.startswith("\n┌") and text.endswith("┘")
