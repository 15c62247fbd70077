"""
Schema definitions for the thoughts, step recommendations and tool recommendations exchanged with
the calling agent.

These data models serve as the contract between the agent and the thought ledger.  We keep them
separate from runtime logic so they can be imported anywhere without side-effects.
"""

from typing import (
    Any,
    Dict,
    List,
    Optional,
)

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


class ToolRecommendation(BaseModel):
    """A single tool the agent is advised to use for a step."""

    tool_name: str = Field(..., description="Name of the tool being recommended")
    confidence: float = Field(
        ..., ge=0, le=1, description="0-1 indicating confidence in recommendation"
    )
    rationale: str = Field(..., description="Why this tool is recommended")
    priority: int = Field(..., description="Order in the recommendation sequence")
    suggested_inputs: Optional[Dict[str, Any]] = Field(
        None, description="Optional suggested parameters"
    )
    alternatives: Optional[List[str]] = Field(
        None, description="Alternative tools that could be used"
    )


class StepRecommendation(BaseModel):
    """Guidance for what to do next: a description, the tools to use and the expected outcome."""

    step_description: str = Field(..., description="What needs to be done")
    recommended_tools: List[ToolRecommendation] = Field(
        ..., description="Tools recommended for this step"
    )
    expected_outcome: str = Field(..., description="What to expect from this step")
    next_step_conditions: Optional[List[str]] = Field(
        None, description="Conditions to consider for the next step"
    )


class ThoughtRecord(BaseModel):
    """
    One validated reasoning step as stored in the ledger.

    Records are frozen: the ``total_thoughts`` correction and the ``previous_steps`` update are
    applied with :meth:`model_copy` before the record is appended.
    """

    model_config = ConfigDict(frozen=True)

    thought: str = Field(..., min_length=1, description="Your current thinking step")
    thought_number: int = Field(..., ge=1, description="Current thought number")
    total_thoughts: int = Field(..., ge=1, description="Estimated total thoughts needed")
    next_thought_needed: bool = Field(..., description="Whether another thought step is needed")
    available_mcp_tools: Optional[List[str]] = Field(
        None, description="Names of the MCP tools available for use"
    )
    is_revision: Optional[bool] = Field(None, description="Whether this revises previous thinking")
    revises_thought: Optional[int] = Field(
        None, ge=1, description="Which thought is being reconsidered"
    )
    branch_from_thought: Optional[int] = Field(
        None, ge=1, description="Branching point thought number"
    )
    branch_id: Optional[str] = Field(None, description="Branch identifier")
    needs_more_thoughts: Optional[bool] = Field(None, description="If more thoughts are needed")
    current_step: Optional[StepRecommendation] = Field(
        None, description="Current step recommendation"
    )
    previous_steps: Optional[List[StepRecommendation]] = Field(
        None, description="Steps already recommended"
    )
    remaining_steps: Optional[List[str]] = Field(
        None, description="High-level descriptions of upcoming steps"
    )


class ThoughtResponse(BaseModel):
    """Progress report returned for an accepted thought."""

    thought_number: int
    total_thoughts: int
    next_thought_needed: bool
    branches: List[str] = Field(default_factory=list)
    thought_history_length: int = 0
    available_mcp_tools: Optional[List[str]] = None
    current_step: Optional[StepRecommendation] = None
    previous_steps: Optional[List[StepRecommendation]] = None
    remaining_steps: Optional[List[str]] = None


class ThoughtFailure(BaseModel):
    """Failure report returned when a thought is rejected."""

    error: str
    status: str = "failed"
