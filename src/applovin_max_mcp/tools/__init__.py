"""Tool registry and base classes for MCP tools."""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

from mcp.types import TextContent, Tool

from ..config import MaxConfig
from ..errors import ToolError
from ..max_client import MaxClient
from ..query import assemble_query
from ..schema import ToolDescriptor
from ..security import AuditLogger

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """Outcome of one tool invocation: a raw payload or an error message."""
    text: str
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> 'ToolResult':
        return cls(text=text)

    @classmethod
    def error(cls, text: str) -> 'ToolResult':
        return cls(text=text, is_error=True)

    def content(self) -> Sequence[TextContent]:
        return [TextContent(type="text", text=self.text)]


class ToolHandler:
    """Base class for MCP tool handlers."""

    def __init__(self, name: str):
        """Initialize tool handler with name."""
        self.name = name

    def get_tool_description(self) -> Tool:
        """Tool name, description and inputSchema advertised by list_tools."""
        raise NotImplementedError

    def run_tool(self, arguments: Optional[Mapping[str, Any]]) -> ToolResult:
        """
        Run one invocation against the MAX API.

        Caller mistakes and upstream failures are returned as
        ToolResult.error(...) rather than raised; the server turns them into
        isError results. A successful result carries the raw response body.

        Args:
            arguments: Untyped argument bag from MCP, possibly None

        Returns:
            ToolResult with the report body or an error message
        """
        raise NotImplementedError


class MaxReportTool(ToolHandler):
    """
    Shared flow of the MAX reporting tools.

    The descriptor drives both the advertised input schema and the query
    assembly, so the two cannot drift apart. Subclasses choose the endpoint
    and may rewrite requested columns.
    """

    descriptor: ToolDescriptor

    def __init__(self, config: Optional[MaxConfig] = None, client: Optional[MaxClient] = None):
        """
        Args:
            config: Fixed configuration; loaded from the environment on each call when None
            client: Fixed HTTP client; built from the configuration when None
        """
        super().__init__(self.descriptor.name)
        self.config = config
        self.client = client

    def get_tool_description(self) -> Tool:
        return self.descriptor.to_tool()

    def endpoint(self, arguments: Mapping[str, Any]) -> str:
        raise NotImplementedError

    def expand_column(self, column: str, arguments: Mapping[str, Any]) -> List[str]:
        return [column]

    def run_tool(self, arguments: Optional[Mapping[str, Any]]) -> ToolResult:
        config = self.config or MaxConfig.from_environment()
        audit_logger = AuditLogger(config.audit_log)
        arguments = arguments or {}

        error = config.validate_or_error()
        if error:
            return ToolResult.error(error)

        try:
            query = assemble_query(
                self.descriptor.parameters,
                arguments,
                config.api_key,
                self.expand_column,
            )
        except ToolError as e:
            logger.info("%s rejected: %s", self.name, e)
            audit_logger.log(self.name, "REJECTED", str(e))
            return ToolResult.error(str(e))

        path = self.endpoint(arguments)
        if self.client is not None:
            response = self.client.get_report(path, query)
        else:
            with MaxClient(config.base_url, timeout=config.timeout) as client:
                response = client.get_report(path, query)

        if not response.success:
            logger.warning("%s failed: %s", self.name, response.error)
            audit_logger.log(self.name, "FAILED", f"path={path} http_code={response.http_code} error={response.error}")
            return ToolResult.error(response.error)

        audit_logger.log(self.name, "SUCCESS", f"path={path} http_code={response.http_code} bytes={len(response.body)}")
        return ToolResult.ok(response.body)
