"""
MCP Connectivity Probe

Checks whether a configured MCP server looks reachable. HTTP servers get a
single GET; stdio servers are only checked for a resolvable configuration and
are never spawned.
"""

import asyncio

import httpx

from ..config import mcp_logger
from ..registry.models import HttpServerConfig, ProbeResult, ServerConfig, StdioServerConfig

# Many MCP endpoints refuse plain GETs; these still prove the host answered.
REACHABLE_STATUS_CODES = {404, 405}


class ConnectivityProbe:
    """Tests reachability of one server configuration."""
    def __init__(self, timeout: float = 5.0, transport: httpx.AsyncBaseTransport | None = None):
        """
        Initialize the probe.

        Args:
            timeout: Upper bound in seconds for the whole HTTP exchange, from connect to status line
            transport: Optional httpx transport, used to route requests without a network
        """
        self.timeout = timeout
        self.transport = transport

    async def probe(self, server_config: ServerConfig) -> ProbeResult:
        """Probe a server. Failures come back as a result with success=False."""
        if isinstance(server_config, HttpServerConfig):
            return await self._probe_http(server_config)
        if isinstance(server_config, StdioServerConfig):
            return self._probe_stdio()
        raise TypeError(f"Unsupported server config: {type(server_config).__name__}")

    async def _probe_http(self, server_config: HttpServerConfig) -> ProbeResult:
        try:
            status_code = await asyncio.wait_for(self._fetch_status(server_config), self.timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError):
            mcp_logger.warning(f"Probe of {server_config.url} timed out after {self.timeout}s")
            return ProbeResult(success=False, error=f"Connection timed out after {self.timeout}s")
        except Exception as e:
            mcp_logger.warning(f"Probe of {server_config.url} failed: {e}")
            return ProbeResult(success=False, error=str(e) or "Connection failed")

        if 200 <= status_code < 300 or status_code in REACHABLE_STATUS_CODES:
            return ProbeResult(success=True)

        mcp_logger.info(f"Probe of {server_config.url} returned status {status_code}")
        return ProbeResult(success=False, error=f"Server returned status {status_code}")

    async def _fetch_status(self, server_config: HttpServerConfig) -> int:
        # Only the status line matters; the body is never read.
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            async with client.stream("GET", server_config.url, headers=server_config.headers or {}) as response:
                return response.status_code

    @staticmethod
    def _probe_stdio() -> ProbeResult:
        # Spawning the command is out of scope; a resolvable record is all we check.
        return ProbeResult(success=True, message="Stdio server configuration validated")
