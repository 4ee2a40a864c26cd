"""
GitHub integration provider.

Token validation accepts either scope set: full private-repository access
(repo, read:org) or public-only access (repo:status, public_repo).
"""

from typing import FrozenSet, List, Optional, Set
from urllib.parse import quote

import httpx

from agent_setup.config.schema import EnvironmentVariable, McpServerConfig
from agent_setup.providers.base import McpServerRegistration, Provider
from agent_setup.utils.logger import logger
from agent_setup.validators.tokens import GITHUB_TOKEN_PREFIX, prefix_validator, validate_github_org

GITHUB_USER_URL = "https://api.github.com/user"
PRIVATE_SCOPES: FrozenSet[str] = frozenset({"repo", "read:org"})
PUBLIC_SCOPES: FrozenSet[str] = frozenset({"repo:status", "public_repo"})

# Ordered for the token creation URL
_PRIVATE_SCOPE_LIST = ["repo", "read:org"]
_PUBLIC_SCOPE_LIST = ["repo:status", "public_repo"]


def parse_scopes(header: Optional[str]) -> Set[str]:
    """Parse an X-OAuth-Scopes header value."""
    return {scope.strip() for scope in (header or "").split(",") if scope.strip()}


def token_creation_url(private_access: bool) -> str:
    scopes = ",".join(_PRIVATE_SCOPE_LIST if private_access else _PUBLIC_SCOPE_LIST)
    return (
        "https://github.com/settings/tokens/new"
        f"?description={quote('Tiger Agent')}&scopes={scopes}"
    )


class GithubProvider(Provider):
    """Configures the Tiger GitHub MCP server and its compose profile."""

    name = "GitHub"
    description = (
        "This will configure the Tiger GitHub MCP server "
        "(https://github.com/timescale/tiger-gh-mcp-server)"
    )
    required = False
    variable_keys = ["GITHUB_ORG", "GITHUB_TOKEN"]

    mcp_server = McpServerRegistration(
        name="github",
        config=McpServerConfig(url="http://tiger-gh-mcp-server/mcp"),
    )
    docker_profile = "github"

    def __init__(self, context):
        super().__init__(context)
        self.organization: Optional[str] = None
        self.token: Optional[str] = None

    def _collect(self) -> None:
        self.organization = self.ask("GITHUB_ORG", validator=validate_github_org)

        private_access = self.ask_yes_no(
            "Do you want to include access to private repositories?", default=False
        )
        url = token_creation_url(private_access)
        scopes = ",".join(_PRIVATE_SCOPE_LIST if private_access else _PUBLIC_SCOPE_LIST)

        if self.ask_yes_no("Open GitHub to create personal access token?", default=True):
            self.open_in_browser(url)

        self.info(f"Create a GitHub personal access token with '{scopes}' scopes")
        self.token = self.ask_secret(
            "GITHUB_TOKEN", validator=prefix_validator(GITHUB_TOKEN_PREFIX)
        )
        self.docker_profile_enabled = True

    def _validate(self) -> bool:
        token = self._require(self.token)
        try:
            response = self.http.get(
                GITHUB_USER_URL,
                headers={"Authorization": f"token {token}"},
            )
        except httpx.HTTPError as e:
            logger.warning("GitHub token check failed", error=str(e))
            self.error("Could not reach the GitHub API")
            return False

        if not response.is_success:
            logger.warning(
                "Failed to validate GitHub token",
                status=response.status_code,
                reason=response.reason_phrase,
            )
            self.error("Failed to validate GitHub token")
            return False

        scopes = parse_scopes(response.headers.get("X-OAuth-Scopes"))
        if PRIVATE_SCOPES <= scopes:
            self.success("Validated token has private repo scopes")
        elif PUBLIC_SCOPES <= scopes:
            self.success("Validated token has public repo scopes")
        else:
            logger.warning("GitHub token missing required scopes", scopes=sorted(scopes))
            self.error("Invalid GitHub token, missing required scopes")
            return False

        return True

    def _variables(self) -> List[EnvironmentVariable]:
        return [
            EnvironmentVariable(key="GITHUB_ORG", value=self.organization),
            EnvironmentVariable(key="GITHUB_TOKEN", value=self.token),
        ]
