"""
Reading and merging mcp_config.json.

The file is a JSON object mapping a server name to its config block. A merge
replaces whole blocks per name and leaves every other name untouched.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

from agent_setup.config.schema import McpServerConfig
from agent_setup.utils.logger import logger

if TYPE_CHECKING:
    from agent_setup.ui.console import Console

RegistryEntries = Mapping[str, Union[McpServerConfig, Dict[str, Any]]]


def _entry_to_dict(entry: Union[McpServerConfig, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(entry, McpServerConfig):
        return entry.to_registry_dict()
    return dict(entry)


def merge_registry(
    existing: Mapping[str, Dict[str, Any]], updates: RegistryEntries
) -> Dict[str, Dict[str, Any]]:
    """Return existing with each updated name fully replaced, order preserved."""
    merged = dict(existing)
    for name, entry in updates.items():
        merged[name] = _entry_to_dict(entry)
    return merged


def serialize_registry(registry: Mapping[str, Any]) -> str:
    return json.dumps(registry, indent=2)


class McpRegistry:
    """The project's MCP server registry file."""

    def __init__(self, path: Union[str, Path], console: Optional["Console"] = None):
        self.path = Path(path)
        self.console = console

    def load(self) -> Dict[str, Dict[str, Any]]:
        """
        Load the registry.

        Never raises: a missing, unreadable or malformed file is treated as
        an empty registry.
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning("Could not read MCP config", path=str(self.path), error=str(e))
            return {}

        try:
            text = raw.decode("utf-8")
            if not text.strip():
                return {}
            data = json.loads(text)
        except ValueError as e:
            logger.warning("Ignoring malformed MCP config", path=str(self.path), error=str(e))
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring MCP config that is not a JSON object", path=str(self.path))
            return {}

        return data

    def write(self, registry: Mapping[str, Any]) -> None:
        content = serialize_registry(registry)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def upsert(self, updates: RegistryEntries) -> Dict[str, Dict[str, Any]]:
        """Merge updates into the file on disk and report each server's new state."""
        merged = merge_registry(self.load(), updates)
        self.write(merged)

        for name in updates:
            disabled = bool(merged[name].get("disabled"))
            message = f"{'Disabled' if disabled else 'Enabled'} `{name}` MCP server"
            logger.info("Updated MCP server", server=name, disabled=disabled)
            if self.console:
                self.console.info(message)

        return merged
