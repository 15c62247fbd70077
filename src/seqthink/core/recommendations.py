"""Step-recommendation bookkeeping and plain-text rendering."""

import json

from seqthink.core.schema import (
    StepRecommendation,
    ThoughtRecord,
    ToolRecommendation,
)


def aggregate_steps(record: ThoughtRecord) -> ThoughtRecord:
    """
    Fold the record's ``current_step`` into its ``previous_steps``.

    Returns a new record whose ``previous_steps`` ends with ``current_step``.  Records without a
    current step are returned unchanged.
    """
    if record.current_step is None:
        return record
    steps = list(record.previous_steps or [])
    steps.append(record.current_step)
    return record.model_copy(update={"previous_steps": steps})


def _format_tool(tool: ToolRecommendation) -> str:
    alternatives = (
        f" (alternatives: {', '.join(tool.alternatives)})" if tool.alternatives else ""
    )
    inputs = (
        f"\n    Suggested inputs: {json.dumps(tool.suggested_inputs, separators=(',', ':'))}"
        if tool.suggested_inputs is not None
        else ""
    )
    return (
        f"  - {tool.tool_name} (priority: {tool.priority}){alternatives}\n"
        f"    Rationale: {tool.rationale}{inputs}"
    )


def format_recommendation(step: StepRecommendation) -> str:
    """Render *step* for the console.  Never used for stored state."""
    tools = "\n".join(_format_tool(tool) for tool in step.recommended_tools)
    text = (
        f"Step: {step.step_description}\n"
        f"Recommended Tools:\n{tools}\n"
        f"Expected Outcome: {step.expected_outcome}"
    )
    if step.next_step_conditions is not None:
        text += "\nConditions for next step:\n  - " + "\n  - ".join(step.next_step_conditions)
    return text
