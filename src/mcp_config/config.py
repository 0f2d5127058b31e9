"""
Service Configuration

Environment-driven settings and logging setup for the MCP configuration service.
"""

import logging
import os
from pathlib import Path

import structlog
from pydantic import BaseModel, Field

# Configure simple structured logging for the service
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

mcp_logger = structlog.get_logger("mcp_config")

DEFAULT_CONFIG_PATH = Path(".claude") / "mcp-servers.json"


class MCPConfigSettings(BaseModel):
    """Settings for the MCP configuration service."""

    config_path: Path = Field(
        default_factory=lambda: Path.cwd() / DEFAULT_CONFIG_PATH,
        description="Location of the persisted overlay file"
    )
    probe_timeout: float = Field(default=5.0, description="Connectivity probe timeout in seconds")
    host: str = Field(default="0.0.0.0", description="Bind address for the HTTP service")
    port: int = Field(default=8054, description="Port for the HTTP service")
    log_level: str = Field(default="INFO", description="Log level name")


def load_settings() -> MCPConfigSettings:
    """Build settings from environment variables, falling back to defaults."""
    settings = MCPConfigSettings()

    if config_path := os.getenv("MCP_SERVERS_CONFIG_PATH"):
        settings.config_path = Path(config_path)
    if probe_timeout := os.getenv("MCP_PROBE_TIMEOUT"):
        settings.probe_timeout = float(probe_timeout)

    settings.host = os.getenv("MCP_CONFIG_HOST", settings.host)
    settings.port = int(os.getenv("MCP_CONFIG_PORT", str(settings.port)))
    settings.log_level = os.getenv("LOG_LEVEL", settings.log_level).upper()

    return settings
