"""
MCP Configuration Service

A standalone FastAPI service for listing, toggling, adding, removing and
testing the MCP servers available to the agent runtime.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .api_routes.mcp_servers_api import MCPServerRouter, create_router
from .config import MCPConfigSettings, load_settings, mcp_logger
from .registry.builtin_servers import BuiltinRegistry, create_builtin_servers
from .services.connectivity import ConnectivityProbe
from .services.mcp_server_service import MCPServerService
from .store.config_store import ConfigStore


def create_service(settings: MCPConfigSettings, builtin: BuiltinRegistry) -> MCPServerService:
    """Wire the store, probe and service together."""
    store = ConfigStore(settings.config_path, builtin)
    probe = ConnectivityProbe(timeout=settings.probe_timeout)
    return MCPServerService(store, builtin, probe)


def create_app(settings: MCPConfigSettings | None = None,
               builtin: BuiltinRegistry | None = None,
               service: MCPServerService | None = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or load_settings()
    builtin = builtin if builtin is not None else create_builtin_servers()
    service = service or create_service(settings, builtin)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        mcp_logger.info(
            f"MCP config service started with {len(builtin)} built-in servers, "
            f"config at {service.store.path}"
        )
        yield
        mcp_logger.info("MCP config service shutdown complete")

    app = FastAPI(
        title="MCP Configuration Service",
        description="Manage built-in and custom MCP servers",
        version=__version__,
        lifespan=lifespan
    )
    app.state.mcp_service = service

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "mcp-config"}

    app.include_router(create_router(MCPServerRouter(service)))

    return app


def main():
    import uvicorn

    settings = load_settings()
    mcp_logger.info(f"Starting MCP config service on {settings.host}:{settings.port}")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
