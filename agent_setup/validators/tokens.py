"""
Client-side checks for pasted tokens and identifiers.

These run at prompt time so an obviously wrong value is rejected before any
network round-trip.
"""

import re
from typing import Callable, Optional, Tuple

ValidationResult = Tuple[bool, Optional[str]]

ANTHROPIC_KEY_PREFIX = "sk-ant"
SLACK_APP_TOKEN_PREFIX = "xapp-"
SLACK_BOT_TOKEN_PREFIX = "xoxb-"
GITHUB_TOKEN_PREFIX = "ghp_"

GITHUB_ORG_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,37}[A-Za-z0-9])?$")


def validate_token_prefix(token: str, prefix: str) -> ValidationResult:
    """
    Check that a token starts with the prefix its issuer uses.

    Args:
        token: The pasted token
        prefix: Expected prefix, e.g. 'xoxb-'

    Returns:
        Tuple of (is_valid: bool, error_message: Optional[str])
    """
    if not token or not token.strip().startswith(prefix):
        return False, f"Please enter a valid token, should begin with '{prefix}'"
    if any(c.isspace() for c in token.strip()):
        return False, "Token cannot contain whitespace"
    return True, None


def prefix_validator(prefix: str) -> Callable[[str], ValidationResult]:
    """Build a prompt validator for the given token prefix."""
    return lambda token: validate_token_prefix(token, prefix)


def validate_non_empty(value: str) -> ValidationResult:
    if not value or not value.strip():
        return False, "This field cannot be empty."
    return True, None


def validate_github_org(org: str) -> ValidationResult:
    """Check a GitHub organization login."""
    if not org:
        return False, "Organization cannot be empty"
    if not GITHUB_ORG_PATTERN.match(org):
        return False, "Organization may only contain letters, digits and single hyphens"
    if "--" in org:
        return False, "Organization may only contain letters, digits and single hyphens"
    return True, None
