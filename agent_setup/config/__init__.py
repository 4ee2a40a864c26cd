"""
Configuration stores for the setup package.
"""

from agent_setup.config.schema import (
    EnvironmentVariable,
    McpServerConfig,
    DatabaseParameters,
    TigerService,
    SlackAppInfo,
    SlackTokens,
)
from agent_setup.config.settings import SetupSettings
from agent_setup.config.env_file import EnvFile, parse_env, merge_variables, serialize_env
from agent_setup.config.mcp_registry import McpRegistry, merge_registry, serialize_registry
from agent_setup.config.docker_profiles import COMPOSE_PROFILES_KEY, set_docker_profile

__all__ = [
    "EnvironmentVariable",
    "McpServerConfig",
    "DatabaseParameters",
    "TigerService",
    "SlackAppInfo",
    "SlackTokens",
    "SetupSettings",
    "EnvFile",
    "parse_env",
    "merge_variables",
    "serialize_env",
    "McpRegistry",
    "merge_registry",
    "serialize_registry",
    "COMPOSE_PROFILES_KEY",
    "set_docker_profile",
]
