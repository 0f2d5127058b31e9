"""
MCP Server Registry Module

Built-in server definitions, the overlay data model, and the merge that
combines them into the listing the API returns.
"""

from .builtin_servers import BuiltinRegistry, create_builtin_servers
from .models import (
    CreateServerRequest,
    HttpServerConfig,
    OverlayRecord,
    ProbeResult,
    ServerConfig,
    ServerDescriptor,
    StdioServerConfig,
)
from .server_registry import (
    default_overlay,
    effective_enabled,
    enabled_servers,
    humanize_server_id,
    project,
    resolve_server,
)

__all__ = [
    "BuiltinRegistry",
    "CreateServerRequest",
    "HttpServerConfig",
    "OverlayRecord",
    "ProbeResult",
    "ServerConfig",
    "ServerDescriptor",
    "StdioServerConfig",
    "create_builtin_servers",
    "default_overlay",
    "effective_enabled",
    "enabled_servers",
    "humanize_server_id",
    "project",
    "resolve_server",
]
