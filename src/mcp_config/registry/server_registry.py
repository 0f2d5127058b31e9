"""
MCP Server Registry Merge

Combines the read-only built-in registry with the persisted overlay into the
unified server listing. Every function here is pure: callers pass both halves in.
"""

from .builtin_servers import BuiltinRegistry
from .models import HttpServerConfig, OverlayRecord, ServerConfig, ServerDescriptor, StdioServerConfig


def humanize_server_id(server_id: str) -> str:
    """Turn 'sequential-thinking' into 'Sequential thinking'."""
    if not server_id:
        return server_id
    return server_id[0].upper() + server_id[1:].replace("-", " ")


def default_overlay(builtin: BuiltinRegistry) -> OverlayRecord:
    """Overlay used when nothing has been persisted yet: every built-in enabled."""
    return OverlayRecord(enabled={server_id: True for server_id in builtin}, custom={})


def effective_enabled(overlay: OverlayRecord, server_id: str) -> bool:
    """Servers without an explicit entry are enabled."""
    return overlay.enabled.get(server_id, True)


def resolve_server(builtin: BuiltinRegistry, overlay: OverlayRecord, server_id: str) -> ServerConfig | None:
    """Find a server's configuration, built-ins first."""
    if server_id in builtin:
        return builtin[server_id]
    return overlay.custom.get(server_id)


def _describe(server_id: str, name: str, server_config: ServerConfig,
              enabled: bool, builtin: bool) -> ServerDescriptor:
    if isinstance(server_config, HttpServerConfig):
        fields = {"url": server_config.url}
    elif isinstance(server_config, StdioServerConfig):
        fields = {"command": server_config.command, "args": server_config.args}
    else:
        raise TypeError(f"Unsupported server config: {type(server_config).__name__}")

    return ServerDescriptor(
        id=server_id,
        name=name,
        type=server_config.type,
        enabled=enabled,
        builtin=builtin,
        **fields
    )


def project(builtin: BuiltinRegistry, overlay: OverlayRecord) -> list[ServerDescriptor]:
    """List built-in servers in registry order, then custom servers in overlay order."""
    servers = []

    for server_id, server_config in builtin.items():
        servers.append(_describe(
            server_id,
            server_config.name or humanize_server_id(server_id),
            server_config,
            effective_enabled(overlay, server_id),
            builtin=True
        ))

    for server_id, server_config in overlay.custom.items():
        # A custom entry shadowing a built-in ID would break uniqueness; the built-in wins.
        if server_id in builtin:
            continue
        servers.append(_describe(
            server_id,
            server_config.name or server_id,
            server_config,
            effective_enabled(overlay, server_id),
            builtin=False
        ))

    return servers


def enabled_servers(builtin: BuiltinRegistry, overlay: OverlayRecord) -> dict[str, ServerConfig]:
    """Resolved configurations of every effectively enabled server, in listing order."""
    result: dict[str, ServerConfig] = {}
    for descriptor in project(builtin, overlay):
        if descriptor.enabled:
            result[descriptor.id] = resolve_server(builtin, overlay, descriptor.id)
    return result
