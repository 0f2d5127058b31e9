"""
MCP Config Store

Loads and saves the overlay record (enabled flags and custom servers) to a
single JSON file. A missing or unreadable file is not an error: the caller gets
the default overlay instead. Individual bad entries are dropped, not the file.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..config import mcp_logger
from ..exceptions import StorageError
from ..registry.builtin_servers import BuiltinRegistry
from ..registry.models import OverlayRecord, ServerConfig, server_config_adapter
from ..registry.server_registry import default_overlay


class ConfigStore:
    """File-backed store for the overlay record."""

    def __init__(self, path: Path, builtin: BuiltinRegistry):
        self.path = Path(path)
        self.builtin = builtin

    def load(self) -> OverlayRecord:
        """Read the overlay, or return the default one if the file is absent or not a JSON object."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return default_overlay(self.builtin)
        except (OSError, ValueError) as e:
            mcp_logger.warning(f"Ignoring unreadable MCP config at {self.path}: {e}")
            return default_overlay(self.builtin)

        if not isinstance(data, dict):
            mcp_logger.warning(f"Ignoring MCP config at {self.path}: top level is not an object")
            return default_overlay(self.builtin)

        return OverlayRecord(
            enabled=self._parse_enabled(data.get("enabled")),
            custom=self._parse_custom(data.get("custom"))
        )

    def _parse_enabled(self, raw: Any) -> dict[str, bool]:
        if not isinstance(raw, dict):
            if raw is not None:
                mcp_logger.warning(f"Ignoring malformed 'enabled' section in {self.path}")
            return {}

        enabled = {}
        for server_id, value in raw.items():
            if isinstance(value, bool):
                enabled[server_id] = value
            else:
                mcp_logger.warning(f"Ignoring non-boolean enabled flag for {server_id}: {value!r}")
        return enabled

    def _parse_custom(self, raw: Any) -> dict[str, ServerConfig]:
        if not isinstance(raw, dict):
            if raw is not None:
                mcp_logger.warning(f"Ignoring malformed 'custom' section in {self.path}")
            return {}

        custom = {}
        for server_id, entry in raw.items():
            try:
                custom[server_id] = server_config_adapter.validate_python(entry)
            except PydanticValidationError as e:
                mcp_logger.warning(f"Dropping invalid custom MCP server {server_id}: {e.errors()[0]['msg']}")
        return custom

    def save(self, record: OverlayRecord) -> None:
        """Replace the file's contents with the full overlay."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(record.to_document(), indent=2), encoding="utf-8")
        except OSError as e:
            mcp_logger.error(f"Failed to write MCP config to {self.path}: {e}")
            raise StorageError(f"Failed to save MCP server configuration: {e}") from e
