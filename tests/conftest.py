"""Shared fixtures: a small built-in table and a store rooted in tmp_path."""

from types import MappingProxyType

import httpx
import pytest

from mcp_config.registry.models import HttpServerConfig, StdioServerConfig
from mcp_config.services.connectivity import ConnectivityProbe
from mcp_config.services.mcp_server_service import MCPServerService
from mcp_config.store.config_store import ConfigStore


@pytest.fixture
def builtin():
    return MappingProxyType({
        "grep": HttpServerConfig(url="https://mcp.grep.app"),
        "sequential-thinking": StdioServerConfig(
            command="npx", args=["-y", "@modelcontextprotocol/server-sequential-thinking"]
        ),
        "web-search": HttpServerConfig(name="Web Search", url="https://search.example/mcp"),
    })


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / ".claude" / "mcp-servers.json"


@pytest.fixture
def store(config_path, builtin):
    return ConfigStore(config_path, builtin)


def _ok_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200)


@pytest.fixture
def service(store, builtin):
    probe = ConnectivityProbe(timeout=5.0, transport=httpx.MockTransport(_ok_handler))
    return MCPServerService(store, builtin, probe)
