"""
MCP Server Service

The operations behind the HTTP API: list, toggle, create, delete and test.
Each mutation loads the overlay, applies a validated change and writes it back.
"""

import re
import threading

from fastapi.concurrency import run_in_threadpool

from ..config import mcp_logger
from ..exceptions import ConflictError, NotDeletableError, NotFoundError, ValidationError
from ..registry.builtin_servers import BuiltinRegistry
from ..registry.models import (
    CreateServerRequest,
    HttpServerConfig,
    ProbeResult,
    ServerConfig,
    ServerDescriptor,
    StdioServerConfig,
)
from ..registry.server_registry import effective_enabled, enabled_servers, project, resolve_server
from ..store.config_store import ConfigStore
from .connectivity import ConnectivityProbe

SERVER_ID_PATTERN = re.compile(r"[a-z0-9-]+")
SERVER_TYPES = ("http", "stdio")


class MCPServerService:
    """Reads and mutates MCP server configuration on behalf of the API."""

    def __init__(self, store: ConfigStore, builtin: BuiltinRegistry, probe: ConnectivityProbe | None = None):
        self.store = store
        self.builtin = builtin
        self.probe = probe or ConnectivityProbe()
        # Serializes load-modify-save across threadpool workers in this process
        self._lock = threading.Lock()

    def list_servers(self) -> list[ServerDescriptor]:
        """All built-in and custom servers with their effective enabled state."""
        return project(self.builtin, self.store.load())

    def enabled_servers(self) -> dict[str, ServerConfig]:
        """Configurations the agent runtime should connect to."""
        return enabled_servers(self.builtin, self.store.load())

    def toggle(self, server_id: str) -> bool:
        """Flip a server's enabled flag and return the new state."""
        with self._lock:
            overlay = self.store.load()

            if resolve_server(self.builtin, overlay, server_id) is None:
                mcp_logger.warning(f"Toggling unknown MCP server: {server_id}")

            enabled = not effective_enabled(overlay, server_id)
            overlay.enabled[server_id] = enabled
            self.store.save(overlay)

        mcp_logger.info(f"MCP server {server_id} {'enabled' if enabled else 'disabled'}")
        return enabled

    def create(self, request: CreateServerRequest) -> str:
        """Add a custom server. Returns its ID."""
        server_config = self._build_server_config(request)
        server_id = request.id

        with self._lock:
            overlay = self.store.load()

            if server_id in self.builtin or server_id in overlay.custom:
                raise ConflictError("MCP server with this ID already exists")

            overlay.custom[server_id] = server_config
            overlay.enabled[server_id] = True
            self.store.save(overlay)

        mcp_logger.info(f"Added custom MCP server {server_id} ({server_config.type})")
        return server_id

    def delete(self, server_id: str) -> str:
        """Remove a custom server and its enabled flag. Built-ins cannot be deleted."""
        with self._lock:
            overlay = self.store.load()

            if server_id not in overlay.custom:
                raise NotDeletableError("Cannot delete built-in MCP servers")

            del overlay.custom[server_id]
            overlay.enabled.pop(server_id, None)
            self.store.save(overlay)

        mcp_logger.info(f"Removed custom MCP server {server_id}")
        return server_id

    async def test(self, server_id: str) -> ProbeResult:
        """Run the connectivity probe against one server."""
        overlay = await run_in_threadpool(self.store.load)
        server_config = resolve_server(self.builtin, overlay, server_id)
        if server_config is None:
            raise NotFoundError("Server not found")

        return await self.probe.probe(server_config)

    def _build_server_config(self, request: CreateServerRequest) -> ServerConfig:
        """Validate a create request and turn it into a server record."""
        if not request.id or not request.type:
            raise ValidationError("Missing required fields: id, type")

        if request.type not in SERVER_TYPES:
            raise ValidationError(f"Server type must be one of: {', '.join(SERVER_TYPES)}")

        if request.type == "http" and not request.url:
            raise ValidationError("HTTP servers require a URL")

        if request.type == "stdio" and not request.command:
            raise ValidationError("Stdio servers require a command")

        if not SERVER_ID_PATTERN.fullmatch(request.id):
            raise ValidationError("Server ID must be lowercase alphanumeric with dashes")

        if request.type == "http":
            return HttpServerConfig(name=request.name, url=request.url, headers=request.headers)

        return StdioServerConfig(
            name=request.name,
            command=request.command,
            args=request.args,
            env=request.env
        )
