"""Operations over the merged MCP server configuration."""

from .connectivity import ConnectivityProbe
from .mcp_server_service import MCPServerService

__all__ = ["ConnectivityProbe", "MCPServerService"]
