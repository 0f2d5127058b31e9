"""
Built-in MCP Server Definitions

The default table of servers provided by the host environment. The service
receives this mapping as a read-only collaborator and never mutates it.
"""

from collections.abc import Mapping
from types import MappingProxyType

from .models import HttpServerConfig, ServerConfig, StdioServerConfig

BuiltinRegistry = Mapping[str, ServerConfig]


def create_builtin_servers() -> BuiltinRegistry:
    """Create the built-in server table, in declaration order."""

    servers: dict[str, ServerConfig] = {}

    # Remote code search
    servers["grep"] = HttpServerConfig(url="https://mcp.grep.app")

    # Library documentation lookup
    servers["context7"] = HttpServerConfig(url="https://mcp.context7.com/mcp")

    # Headless browser automation
    servers["playwright"] = StdioServerConfig(
        command="npx",
        args=["-y", "@playwright/mcp@latest"],
    )

    # Structured reasoning scratchpad
    servers["sequential-thinking"] = StdioServerConfig(
        command="npx",
        args=["-y", "@modelcontextprotocol/server-sequential-thinking"],
    )

    return MappingProxyType(servers)
