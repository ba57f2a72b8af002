"""MCP server setup and tool registration for applovin-max-mcp."""

import asyncio
import logging
from typing import Optional, Sequence

from mcp.server import Server
from mcp.types import TextContent, Tool

# Import all tool handlers
from .tools.cohort import CohortRequestTool
from .tools.revenue import RevenueReportTool

logger = logging.getLogger(__name__)


class ToolInvocationError(Exception):
    """Raised to report a tool error result through the MCP layer."""
    pass


# Create MCP server
app = Server("applovin-max")

# Initialize all tool handlers
TOOL_HANDLERS = {
    "revenue_report": RevenueReportTool(),
    "cohort_request": CohortRequestTool(),
}


@app.list_tools()
async def list_tools() -> list[Tool]:
    """
    List all available MAX tools.

    Returns:
        List of Tool descriptions for MCP
    """
    return [handler.get_tool_description() for handler in TOOL_HANDLERS.values()]


# Arguments are validated by assemble_query, not against the advertised schema
@app.call_tool(validate_input=False)
async def call_tool(name: str, arguments: Optional[dict]) -> Sequence[TextContent]:
    """
    Execute a MAX tool with given arguments.

    The blocking HTTP call runs in a worker thread so concurrent
    invocations do not stall the event loop.

    Args:
        name: Tool name to execute
        arguments: Tool arguments from MCP

    Returns:
        Sequence of TextContent responses

    Raises:
        ToolInvocationError when the tool produced an error result; the MCP
        layer turns it into a result with isError set
    """
    handler = TOOL_HANDLERS.get(name)

    if not handler:
        raise ToolInvocationError(
            "Unknown tool: {}. Available tools: {}".format(name, ", ".join(TOOL_HANDLERS.keys()))
        )

    try:
        result = await asyncio.to_thread(handler.run_tool, arguments or {})
    except Exception as e:
        logger.exception("Unexpected error executing %s", name)
        raise ToolInvocationError(f"Error executing {name}: {type(e).__name__}: {e}") from e

    if result.is_error:
        raise ToolInvocationError(result.text)

    return result.content()
