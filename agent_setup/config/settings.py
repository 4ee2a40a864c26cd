"""
Runtime settings for the setup wizard.

Values default to what the deployment expects and can be overridden from the
process environment, e.g. ``TIGER_CMD=/usr/local/bin/tiger``.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_TIGER_CMD = "./download/tiger"


class SetupSettings(BaseModel):
    """Paths and tunables shared by the wizard and its providers."""

    root_dir: Path = Field(default_factory=Path.cwd)
    env_file: str = ".env"
    mcp_config_file: str = "mcp_config.json"
    tiger_cmd: str = DEFAULT_TIGER_CMD
    tiger_poll_interval: float = Field(default=30.0, gt=0)
    tiger_ready_timeout: float = Field(default=900.0, gt=0)
    http_timeout: float = Field(default=15.0, gt=0)

    @property
    def env_path(self) -> Path:
        return self.root_dir / self.env_file

    @property
    def mcp_config_path(self) -> Path:
        return self.root_dir / self.mcp_config_file

    @classmethod
    def from_env(cls, root_dir: Optional[str] = None) -> "SetupSettings":
        """Build settings, applying overrides from environment variables."""
        overrides = {}
        if root_dir:
            overrides["root_dir"] = Path(root_dir)

        env_map = {
            "TIGER_CMD": "tiger_cmd",
            "TIGER_POLL_INTERVAL": "tiger_poll_interval",
            "TIGER_READY_TIMEOUT": "tiger_ready_timeout",
            "SETUP_HTTP_TIMEOUT": "http_timeout",
        }
        for env_key, field_name in env_map.items():
            value = os.getenv(env_key)
            if value:
                overrides[field_name] = value

        return cls(**overrides)
