"""
MCP Configuration Errors

Domain failures raised by the mutation and lookup operations. Each carries the
HTTP status the router renders it with.
"""


class MCPServerError(Exception):
    """Base class for MCP server configuration failures."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MCPServerError):
    """A request field is missing or malformed."""

    status_code = 400


class ConflictError(MCPServerError):
    """A server with the requested ID already exists."""

    status_code = 400


class NotFoundError(MCPServerError):
    """No built-in or custom server has the requested ID."""

    status_code = 404


class NotDeletableError(NotFoundError):
    """The ID is not a custom server, so there is nothing the caller may delete."""

    status_code = 400


class StorageError(MCPServerError):
    """The overlay file could not be written."""

    status_code = 500
