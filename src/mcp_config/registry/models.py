"""
MCP Registry Models

This module defines the data models shared by the registry merge, the config
store and the HTTP API.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter


class HttpServerConfig(BaseModel):
    """Connection parameters for an MCP server reached over HTTP."""

    type: Literal["http"] = "http"
    name: str | None = None
    url: str
    headers: dict[str, str] | None = None


class StdioServerConfig(BaseModel):
    """Connection parameters for an MCP server launched as a local process."""

    type: Literal["stdio"] = "stdio"
    name: str | None = None
    command: str
    args: list[str] | None = None
    env: dict[str, str] | None = None


ServerConfig = Annotated[HttpServerConfig | StdioServerConfig, Field(discriminator="type")]

server_config_adapter: TypeAdapter[ServerConfig] = TypeAdapter(ServerConfig)


class OverlayRecord(BaseModel):
    """Mutable state persisted on top of the built-in registry."""

    enabled: dict[str, bool] = Field(default_factory=dict)
    custom: dict[str, ServerConfig] = Field(default_factory=dict)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the on-disk JSON shape, omitting unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


class ServerDescriptor(BaseModel):
    """A merged view of one server as returned to API consumers."""

    id: str
    name: str
    type: Literal["http", "stdio"]
    url: str | None = None
    command: str | None = None
    args: list[str] | None = None
    enabled: bool
    builtin: bool


class ProbeResult(BaseModel):
    """Outcome of a connectivity test. A failed probe is a result, not an error."""

    success: bool
    error: str | None = None
    message: str | None = None


class CreateServerRequest(BaseModel):
    """Body of a create request. Every field is optional here; the service validates."""

    id: str | None = None
    name: str | None = None
    type: str | None = None
    url: str | None = None
    headers: dict[str, str] | None = None
    command: str | None = None
    args: list[str] | None = None
    env: dict[str, str] | None = None
