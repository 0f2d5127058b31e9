"""
MCP Server Configuration Service

Manages which MCP servers an agent runtime may use: the read-only built-in
registry, user-defined custom servers, and the enabled flags layered on top of
both. State is persisted to a single JSON file and exposed over a small HTTP API.
"""

__version__ = "1.0.0"
