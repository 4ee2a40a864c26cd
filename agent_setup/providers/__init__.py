"""
Configuration providers, in the order the wizard runs them.

The database comes first since the Slack apps and the agent store their data
in it.
"""

from typing import List, Type

from agent_setup.providers.base import (
    McpServerRegistration,
    Provider,
    ProviderContext,
    ProviderState,
)
from agent_setup.providers.database import DatabaseProvider
from agent_setup.providers.anthropic import AnthropicProvider
from agent_setup.providers.slack import AgentSlackProvider, IngestSlackProvider, SlackProvider
from agent_setup.providers.github import GithubProvider
from agent_setup.providers.linear import LinearProvider
from agent_setup.providers.logfire import LogfireProvider

PROVIDER_CLASSES: List[Type[Provider]] = [
    DatabaseProvider,
    AnthropicProvider,
    IngestSlackProvider,
    AgentSlackProvider,
    GithubProvider,
    LinearProvider,
    LogfireProvider,
]


def default_providers(context: ProviderContext) -> List[Provider]:
    """Instantiate every provider for one run."""
    return [cls(context) for cls in PROVIDER_CLASSES]


__all__ = [
    "Provider",
    "ProviderContext",
    "ProviderState",
    "McpServerRegistration",
    "DatabaseProvider",
    "AnthropicProvider",
    "SlackProvider",
    "IngestSlackProvider",
    "AgentSlackProvider",
    "GithubProvider",
    "LinearProvider",
    "LogfireProvider",
    "PROVIDER_CLASSES",
    "default_providers",
]
