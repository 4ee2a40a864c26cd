"""
Base class for configuration providers.

A provider owns one external dependency of the deployment (the database, a
Slack app, an API key...). The wizard drives each provider through

    collect() -> validate() -> persist()

or, when the user skips an optional provider, disable() -> persist().
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

import httpx

from agent_setup.config.docker_profiles import set_docker_profile
from agent_setup.config.env_file import EnvFile, variables_to_dict
from agent_setup.config.schema import EnvironmentVariable, McpServerConfig
from agent_setup.errors import InvalidProviderStateError, UninitializedProviderError
from agent_setup.utils.logger import logger
from agent_setup.utils.platform import open_browser

if TYPE_CHECKING:
    from agent_setup.config.mcp_registry import McpRegistry
    from agent_setup.config.settings import SetupSettings
    from agent_setup.ui.console import Console
    from agent_setup.ui.prompts import Prompts
    from agent_setup.utils.tiger import TigerCLI


class ProviderState(str, Enum):
    """Lifecycle state of a provider within one run."""

    UNINITIALIZED = "uninitialized"
    COLLECTING = "collecting"
    VALID = "valid"
    INVALID = "invalid"
    PERSISTED = "persisted"
    DISABLED = "disabled"


@dataclass
class McpServerRegistration:
    """An MCP server a provider registers in mcp_config.json."""

    name: str
    config: McpServerConfig


@dataclass
class ProviderContext:
    """Shared collaborators handed to every provider."""

    console: "Console"
    prompts: "Prompts"
    http: httpx.Client
    settings: "SetupSettings"
    tiger: Optional["TigerCLI"] = None

    def get_tiger(self) -> "TigerCLI":
        if self.tiger is None:
            from agent_setup.utils.tiger import TigerCLI

            self.tiger = TigerCLI(self.settings.tiger_cmd)
        return self.tiger


class Provider(ABC):
    """
    Abstract base class for configuration providers.

    Subclasses implement _collect(), _validate() and _variables(). Providers
    that run an MCP server or a docker compose profile declare it through
    mcp_server and docker_profile.
    """

    # Provider metadata - override in subclasses
    name: str = "base"
    description: str = ""
    required: bool = True
    variable_keys: List[str] = []

    mcp_server: Optional[McpServerRegistration] = None
    docker_profile: Optional[str] = None

    def __init__(self, context: ProviderContext):
        self.context = context
        self.console = context.console
        self.prompts = context.prompts
        self.http = context.http
        self.settings = context.settings

        self.is_configured = False
        self.docker_profile_enabled = False
        self.state = ProviderState.UNINITIALIZED

    @property
    def can_start_services(self) -> bool:
        """False when the provider knows the services would fail to start."""
        return True

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} state={self.state.value}>"

    # -- hooks for subclasses -------------------------------------------------

    @abstractmethod
    def _collect(self) -> None:
        """Prompt for and store this provider's credentials."""

    @abstractmethod
    def _validate(self) -> bool:
        """Check the collected credentials against their remote authority."""

    @abstractmethod
    def _variables(self) -> List[EnvironmentVariable]:
        """Return the configured variables, in variable_keys order."""

    # -- lifecycle ------------------------------------------------------------

    def collect(self) -> None:
        """Interactively gather configuration. Errors from external tools propagate."""
        self.state = ProviderState.COLLECTING
        self._collect()
        self.is_configured = True

    def validate(self) -> bool:
        """
        Check the current configuration.

        An optional provider that was not configured is valid; a required one
        is not. Configured providers delegate to their remote check.
        """
        if not self.is_configured:
            valid = not self.required
        else:
            valid = self._validate()

        self.state = ProviderState.VALID if valid else ProviderState.INVALID
        logger.debug("Validated provider", provider=self.name, valid=valid)
        return valid

    def get_variables(self) -> List[EnvironmentVariable]:
        """Return the provider's variables. Keys are the same whether configured or not."""
        if not self.is_configured:
            return [EnvironmentVariable(key=key) for key in self.variable_keys]
        return self._variables()

    def get_registry_entry(self) -> Optional[Dict[str, McpServerConfig]]:
        """Return the mcp_config.json entry, disabled unless configured."""
        if self.mcp_server is None:
            return None
        config = self.mcp_server.config.model_copy(
            update={"disabled": not self.is_configured}
        )
        return {self.mcp_server.name: config}

    def is_already_configured(self, current: Iterable[EnvironmentVariable]) -> bool:
        """True when every expected key is present with a non-empty value."""
        values = variables_to_dict(current)
        return all(values.get(key) for key in self.variable_keys)

    def disable(self) -> None:
        """Turn the provider off. Collected values are kept but no longer written."""
        self.is_configured = False
        self.docker_profile_enabled = False
        self.state = ProviderState.DISABLED

    def mark_kept(self) -> None:
        """Record that the user kept the existing configuration untouched."""
        self.state = ProviderState.PERSISTED

    def persist(self, env_file: EnvFile, registry: "McpRegistry") -> None:
        """
        Write the provider's output to the .env file and MCP registry.

        Raises:
            InvalidProviderStateError: Unless the provider was validated or disabled
        """
        if self.state not in (ProviderState.VALID, ProviderState.DISABLED):
            raise InvalidProviderStateError(self.name, "persist", self.state.value)

        env_file.upsert(self.get_variables())

        entry = self.get_registry_entry()
        if entry is not None:
            registry.upsert(entry)

        if self.docker_profile:
            set_docker_profile(env_file, self.docker_profile, self.docker_profile_enabled)

        self.state = ProviderState.PERSISTED
        logger.info("Persisted provider", provider=self.name, configured=self.is_configured)

    def _require(self, value):
        """Return a collected value, or fail if collect() never stored it."""
        if value is None:
            raise UninitializedProviderError(self.name)
        return value

    # -- helpers --------------------------------------------------------------

    def info(self, message: str) -> None:
        """Print an info message."""
        self.console.info(message)

    def success(self, message: str) -> None:
        """Print a success message."""
        self.console.success(message)

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.warning(message)

    def error(self, message: str) -> None:
        """Print an error message."""
        self.console.error(message)

    def ask(self, *args, **kwargs) -> str:
        """Delegate to prompts.ask()."""
        return self.prompts.ask(*args, **kwargs)

    def ask_secret(self, *args, **kwargs) -> str:
        """Delegate to prompts.ask_secret()."""
        return self.prompts.ask_secret(*args, **kwargs)

    def ask_yes_no(self, *args, **kwargs) -> bool:
        """Delegate to prompts.ask_yes_no()."""
        return self.prompts.ask_yes_no(*args, **kwargs)

    def select(self, *args, **kwargs) -> str:
        """Delegate to prompts.select()."""
        return self.prompts.select(*args, **kwargs)

    def open_in_browser(self, url: str) -> None:
        """Open a URL, or tell the user to open it when no browser is available."""
        if not open_browser(url):
            self.console.print_link("Open this URL in your browser:", url)
