"""
Linear integration provider.
"""

from typing import List, Optional

import httpx

from agent_setup.config.schema import EnvironmentVariable, McpServerConfig
from agent_setup.providers.base import McpServerRegistration, Provider
from agent_setup.utils.logger import logger
from agent_setup.validators.tokens import validate_non_empty

LINEAR_GRAPHQL_URL = "https://api.linear.app/graphql"
LINEAR_API_KEYS_URL = "https://linear.app/settings/account/security"
VIEWER_QUERY = "{ viewer { name email }}"


class LinearProvider(Provider):
    """Configures the Tiger Linear MCP server."""

    name = "Linear"
    description = (
        "This will configure the Tiger Linear MCP server "
        "(https://github.com/timescale/tiger-linear-mcp-server)"
    )
    required = False
    variable_keys = ["LINEAR_API_KEY"]

    mcp_server = McpServerRegistration(
        name="linear",
        config=McpServerConfig(url="http://tiger-linear-mcp-server/mcp"),
    )

    def __init__(self, context):
        super().__init__(context)
        self.api_key: Optional[str] = None

    def _collect(self) -> None:
        if self.ask_yes_no("Open Linear to create a personal API key?", default=True):
            self.open_in_browser(LINEAR_API_KEYS_URL)

        self.api_key = self.ask_secret("LINEAR_API_KEY", validator=validate_non_empty)

    def _validate(self) -> bool:
        api_key = self._require(self.api_key)
        try:
            response = self.http.post(
                LINEAR_GRAPHQL_URL,
                headers={"Authorization": api_key},
                json={"query": VIEWER_QUERY},
            )
            if not response.is_success:
                logger.warning("Linear API returned an error status", status=response.status_code)
                self.error("Failed to validate Linear API key")
                return False
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Linear key check failed", error=str(e))
            self.error("Could not reach the Linear API")
            return False

        if not isinstance(data, dict):
            logger.warning("Unexpected Linear API response", response=data)
            self.error("Failed to validate Linear API key")
            return False

        errors = data.get("errors")
        if errors:
            logger.warning("Linear API rejected key", errors=errors)
            self.error("Invalid Linear API key")
            return False

        payload = data.get("data")
        viewer = payload.get("viewer") if isinstance(payload, dict) else None
        if not isinstance(viewer, dict):
            viewer = {}

        self.success(f"Validated Linear API key for {viewer.get('name') or 'unknown user'}")
        return True

    def _variables(self) -> List[EnvironmentVariable]:
        return [EnvironmentVariable(key="LINEAR_API_KEY", value=self.api_key)]
