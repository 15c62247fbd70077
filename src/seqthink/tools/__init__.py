"""
Tool catalog for seqthink.

The catalog lists the tool descriptors the calling agent can discover: the sequential thinking
tool itself plus any descriptors supplied at startup.  Descriptors are advertised only; seqthink
never executes the tools it lists.
"""

import json
import logging
from pathlib import Path
from typing import (
    Any,
    Dict,
    Iterable,
    List,
)

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    TypeAdapter,
    ValidationError,
)

from seqthink.core.schema import ThoughtRecord

logger = logging.getLogger(__name__)

SEQUENTIAL_THINKING_TOOL_NAME = "sequentialthinking_tools"

TOOL_DESCRIPTION = """\
A detailed tool for dynamic and reflective problem-solving through thoughts.
This tool helps analyze problems through a flexible thinking process that can adapt and evolve.
Each thought can build on, question, or revise previous insights as understanding deepens.

IMPORTANT: This server facilitates sequential thinking with MCP tool coordination. The LLM \
analyzes available tools and their descriptions to make intelligent recommendations, which are \
then tracked and organized by this server.

When to use this tool:
- Breaking down complex problems into steps
- Planning and design with room for revision
- Analysis that might need course correction
- Problems where the full scope might not be clear initially
- Problems that require a multi-step solution
- Tasks that need to maintain context over multiple steps
- Situations where irrelevant information needs to be filtered out
- When you need guidance on which tools to use and in what order

Key features:
- You can adjust total_thoughts up or down as you progress
- You can question or revise previous thoughts
- You can add more thoughts even after reaching what seemed like the end
- You can express uncertainty and explore alternative approaches
- Not every thought needs to build linearly - you can branch or backtrack
- Recommends appropriate tools for each step
- Provides rationale for tool recommendations
- Suggests tool execution order and parameters
- Tracks previous recommendations and remaining steps

Parameters explained:
- available_mcp_tools: Names of the MCP tools available for use
- thought: Your current thinking step
- next_thought_needed: True if you need more thinking, even if at what seemed like the end
- thought_number: Current number in sequence (can go beyond initial total if needed)
- total_thoughts: Current estimate of thoughts needed (can be adjusted up/down)
- is_revision: A boolean indicating if this thought revises previous thinking
- revises_thought: If is_revision is true, which thought number is being reconsidered
- branch_from_thought: If branching, which thought number is the branching point
- branch_id: Identifier for the current branch (if any)
- needs_more_thoughts: If reaching end but realizing more thoughts needed
- current_step: Current step recommendation (step_description, recommended_tools, \
expected_outcome, next_step_conditions)
- previous_steps: Steps already recommended
- remaining_steps: High-level descriptions of upcoming steps

Only set next_thought_needed to false when truly done and a satisfactory answer is reached."""


class ToolCatalogError(RuntimeError):
    """Raised when tool descriptors cannot be loaded."""


class ToolDescriptor(BaseModel):
    """Name, description and input JSON schema of a discoverable tool."""

    name: str = Field(..., min_length=1, description="Unique tool name")
    description: str = Field("", description="What the tool does")
    input_schema: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("input_schema", "inputSchema"),
        description="JSON schema of the tool arguments",
    )


_DESCRIPTOR_LIST = TypeAdapter(List[ToolDescriptor])


def sequential_thinking_descriptor() -> ToolDescriptor:
    """Descriptor advertising the sequential thinking operation itself."""
    return ToolDescriptor(
        name=SEQUENTIAL_THINKING_TOOL_NAME,
        description=TOOL_DESCRIPTION,
        input_schema=ThoughtRecord.model_json_schema(),
    )


class ToolCatalog:
    """Registry of tool descriptors keyed by name; the first registration of a name wins."""

    def __init__(self, tools: Iterable[ToolDescriptor] = ()) -> None:
        self._tools: Dict[str, ToolDescriptor] = {}
        for tool in [sequential_thinking_descriptor(), *tools]:
            if tool.name in self._tools:
                logger.warning(
                    "Duplicate tool name '%s' - using first occurrence", tool.name
                )
                continue
            self._tools[tool.name] = tool
        logger.info("Available tools: %s", self.names())

    def add_tool(self, tool: ToolDescriptor) -> bool:
        """
        Register *tool* unless its name is already taken.

        Returns
        -------
        bool
            *True* if the tool was added, *False* if the name already existed.
        """
        if tool.name in self:
            logger.warning("Tool '%s' already exists", tool.name)
            return False
        self._tools[tool.name] = tool
        logger.info("Added tool: %s", tool.name)
        return True

    def names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[Dict[str, Any]]:
        """Serialized descriptors, in registration order."""
        return [tool.model_dump() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools


def load_tool_descriptors(path: str | Path) -> List[ToolDescriptor]:
    """
    Read a JSON array of tool descriptors from *path*.

    Raises
    ------
    ToolCatalogError
        If the file cannot be read, is not JSON, or an entry is not a valid descriptor.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ToolCatalogError(f"Cannot read tool descriptors from {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ToolCatalogError(f"Tool descriptor file {path} is not valid JSON: {exc}") from exc

    try:
        tools = _DESCRIPTOR_LIST.validate_python(raw)
    except ValidationError as exc:
        raise ToolCatalogError(f"Invalid tool descriptors in {path}: {exc}") from exc

    logger.debug("Loaded %d tool descriptors from %s", len(tools), path)
    return tools
