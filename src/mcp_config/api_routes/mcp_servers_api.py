"""
MCP Server Management API

Maps method and path to the service operations and renders their results as
JSON payloads. Service calls that touch the config file run in the threadpool.
`MCPServerRouter.dispatch` returns None for requests it does not handle, so a
surrounding dispatcher can fall through to other handlers.
"""

import re
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from ..config import mcp_logger
from ..exceptions import MCPServerError, StorageError
from ..registry.models import CreateServerRequest
from ..services.mcp_server_service import MCPServerService

API_PREFIX = "/api/mcp-servers"

TOGGLE_PATH = re.compile(rf"^{API_PREFIX}/([^/]+)/toggle$")
TEST_PATH = re.compile(rf"^{API_PREFIX}/([^/]+)/test$")
SERVER_PATH = re.compile(rf"^{API_PREFIX}/([^/]+)$")


@dataclass
class RouteResponse:
    """A handled request: HTTP status plus JSON payload."""
    payload: dict[str, Any]
    status_code: int = 200


class MCPServerRouter:
    """Stateless request router over an MCPServerService."""

    def __init__(self, service: MCPServerService):
        self.service = service

    async def dispatch(self, method: str, path: str, body: Any = None) -> RouteResponse | None:
        """Route one request. Returns None when no route matches."""
        method = method.upper()

        try:
            if method == "GET" and path == API_PREFIX:
                servers = await run_in_threadpool(self.service.list_servers)
                return RouteResponse({
                    "success": True,
                    "servers": [s.model_dump(exclude_none=True) for s in servers]
                })

            if method == "POST" and (match := TOGGLE_PATH.match(path)):
                server_id = match.group(1)
                enabled = await run_in_threadpool(self.service.toggle, server_id)
                return RouteResponse({"success": True, "id": server_id, "enabled": enabled})

            if method == "POST" and (match := TEST_PATH.match(path)):
                result = await self.service.test(match.group(1))
                return RouteResponse(result.model_dump(exclude_none=True))

            if method == "DELETE" and (match := SERVER_PATH.match(path)):
                server_id = await run_in_threadpool(self.service.delete, match.group(1))
                return RouteResponse({"success": True, "id": server_id})

            if method == "POST" and path == API_PREFIX:
                request = CreateServerRequest.model_validate(body if isinstance(body, dict) else {})
                server_id = await run_in_threadpool(self.service.create, request)
                return RouteResponse({"success": True, "id": server_id})

        except StorageError:
            raise
        except MCPServerError as e:
            return RouteResponse({"success": False, "error": e.message}, status_code=e.status_code)
        except PydanticValidationError as e:
            return RouteResponse(
                {"success": False, "error": f"Invalid request body: {e.errors()[0]['msg']}"},
                status_code=400
            )

        return None


def create_router(mcp_router: MCPServerRouter) -> APIRouter:
    """Mount the MCP server routes on a FastAPI router."""
    router = APIRouter(tags=["mcp-servers"])

    @router.api_route(API_PREFIX, methods=["GET", "POST"])
    @router.api_route(API_PREFIX + "/{server_path:path}", methods=["GET", "POST", "DELETE"])
    async def mcp_servers(request: Request):
        """Delegate MCP server requests to the router."""
        body = None
        if request.method == "POST":
            try:
                body = await request.json()
            except ValueError:
                body = None

        try:
            result = await mcp_router.dispatch(request.method, request.url.path, body)
        except Exception as e:
            mcp_logger.error(f"MCP server request {request.method} {request.url.path} failed: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        if result is None:
            raise HTTPException(status_code=404, detail="Not Found")

        return JSONResponse(content=result.payload, status_code=result.status_code)

    return router
