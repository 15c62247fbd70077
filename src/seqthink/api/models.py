"""
Pydantic models for seqthink API requests and responses.
This module defines the tool-call envelope used by the seqthink API.
"""

from typing import (
    Any,
    Dict,
    List,
    Literal,
)

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


# ---------------------------------------------------------------------------
# Pydantic request / response schema
# ---------------------------------------------------------------------------
class ToolCallRequest(BaseModel):
    """Request to invoke a tool by name."""

    name: str = Field(..., description="Registered tool name")
    # Any shape is accepted here; the tool reports non-object arguments itself.
    arguments: Any = Field(
        default_factory=dict, description="Tool arguments, validated by the tool itself"
    )


class TextContent(BaseModel):
    """One block of text content in a tool result."""

    type: Literal["text"] = "text"
    text: str


class ToolCallResponse(BaseModel):
    """Result of a tool call; failures are reported with ``isError`` rather than an HTTP error."""

    model_config = ConfigDict(populate_by_name=True)

    content: List[TextContent]
    is_error: bool = Field(False, alias="isError")


class ToolListResponse(BaseModel):
    """Tool catalog as returned to the agent."""

    tools: List[Dict[str, Any]]


class AddToolResponse(BaseModel):
    """Outcome of registering a tool descriptor."""

    added: bool
    tools: List[str]
