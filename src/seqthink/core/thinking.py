"""
Request processing for the sequential thinking tool.

:class:`SequentialThinkingServer` owns the thought ledger and the tool catalog and runs one
thought through the pipeline::

    validate -> normalize total_thoughts -> aggregate steps -> render -> append/evict/index -> respond

A rejected thought short-circuits to a failure payload and leaves the ledger untouched.
"""

import logging
from typing import (
    Any,
    Dict,
    Iterable,
    List,
)

from seqthink.common import (
    AnsiColors,
    colorize,
)
from seqthink.core.eviction import DEFAULT_MAX_HISTORY_SIZE
from seqthink.core.ledger import ThoughtLedger
from seqthink.core.recommendations import (
    aggregate_steps,
    format_recommendation,
)
from seqthink.core.schema import (
    ThoughtFailure,
    ThoughtRecord,
    ThoughtResponse,
)
from seqthink.core.validator import (
    InvalidThought,
    validate_thought,
)
from seqthink.tools import (
    ToolCatalog,
    ToolDescriptor,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Console rendering
# ---------------------------------------------------------------------------
def format_thought(record: ThoughtRecord, color: bool = True) -> str:
    """Draw *record* as a bordered box headed by its kind and position."""
    if record.is_revision:
        label, tint = "🔄 Revision", AnsiColors.YELLOW
        context = f" (revising thought {record.revises_thought})"
    elif record.branch_from_thought:
        label, tint = "🌿 Branch", AnsiColors.GREEN
        context = f" (from thought {record.branch_from_thought}, ID: {record.branch_id})"
    else:
        label, tint = "💭 Thought", AnsiColors.BLUE
        context = ""

    position = f" {record.thought_number}/{record.total_thoughts}{context}"
    header_width = len(label) + len(position)
    header = (colorize(label, tint) if color else label) + position

    content = record.thought
    if record.current_step is not None:
        content = f"{content}\n\nRecommendation:\n{format_recommendation(record.current_step)}"

    border = "─" * (max(header_width, len(content)) + 4)
    return (
        f"\n┌{border}┐\n"
        f"│ {header} │\n"
        f"├{border}┤\n"
        f"│ {content.ljust(len(border) - 2)} │\n"
        f"└{border}┘"
    )


def failure_payload(message: str) -> Dict[str, Any]:
    """Structured failure returned to the caller instead of raising."""
    return ThoughtFailure(error=message).model_dump()


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
class SequentialThinkingServer:
    """Validates, links and bounds the thoughts submitted by the calling agent."""

    def __init__(
        self,
        max_history_size: int = DEFAULT_MAX_HISTORY_SIZE,
        available_tools: Iterable[ToolDescriptor] = (),
    ) -> None:
        self.ledger = ThoughtLedger(max_history_size=max_history_size)
        self.catalog = ToolCatalog(available_tools)

    def process_thought(self, payload: Any) -> Dict[str, Any]:
        """
        Record one thought and report progress.

        Parameters
        ----------
        payload:
            The untrusted tool arguments.  Unknown keys are ignored.

        Returns
        -------
        Dict[str, Any]
            On success: ``thought_number``, ``total_thoughts``, ``next_thought_needed``,
            ``branches``, ``thought_history_length`` and, when present, ``available_mcp_tools``,
            ``current_step``, ``previous_steps`` and ``remaining_steps``.
            On failure: ``{"error": <message>, "status": "failed"}``.
        """
        try:
            outcome = validate_thought(payload)
            if isinstance(outcome, InvalidThought):
                logger.warning("Thought rejected: %s", outcome.message)
                return failure_payload(outcome.message)

            record = outcome.record
            if record.thought_number > record.total_thoughts:
                record = record.model_copy(update={"total_thoughts": record.thought_number})
            record = aggregate_steps(record)

            logger.info("%s", format_thought(record))
            self.ledger.append(record)

            response = ThoughtResponse(
                thought_number=record.thought_number,
                total_thoughts=record.total_thoughts,
                next_thought_needed=record.next_thought_needed,
                branches=self.ledger.branch_ids(),
                thought_history_length=self.ledger.size(),
                available_mcp_tools=record.available_mcp_tools,
                current_step=record.current_step,
                previous_steps=record.previous_steps,
                remaining_steps=record.remaining_steps,
            )
            return response.model_dump(mode="json", exclude_none=True)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unhandled error while processing thought")
            return failure_payload(str(exc))

    def list_tools(self) -> List[Dict[str, Any]]:
        """Descriptors of every tool the agent can discover."""
        return self.catalog.list_tools()

    def clear_history(self) -> None:
        """Forget every recorded thought and branch."""
        self.ledger.clear()
