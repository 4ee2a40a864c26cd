"""
Validation utilities for the setup package.
"""

from agent_setup.validators.tokens import (
    validate_token_prefix,
    prefix_validator,
    validate_non_empty,
    validate_github_org,
)
from agent_setup.validators.database import parse_connection_string

__all__ = [
    "validate_token_prefix",
    "prefix_validator",
    "validate_non_empty",
    "validate_github_org",
    "parse_connection_string",
]
