"""Persistence for the MCP server overlay."""

from .config_store import ConfigStore

__all__ = ["ConfigStore"]
