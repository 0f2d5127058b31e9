"""HTTP routes for MCP server management."""

from .mcp_servers_api import MCPServerRouter, RouteResponse, create_router

__all__ = ["MCPServerRouter", "RouteResponse", "create_router"]
