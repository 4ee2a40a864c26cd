"""
Anthropic API key provider.
"""

from typing import List, Optional

import httpx

from agent_setup.config.schema import EnvironmentVariable
from agent_setup.providers.base import Provider
from agent_setup.utils.logger import logger
from agent_setup.validators.tokens import ANTHROPIC_KEY_PREFIX, prefix_validator

ANTHROPIC_MODELS_URL = "https://api.anthropic.com/v1/models"
ANTHROPIC_API_VERSION = "2023-06-01"
ANTHROPIC_CONSOLE_URL = "https://console.anthropic.com/settings/keys"


class AnthropicProvider(Provider):
    """Collects the API key the agent uses to talk to Claude."""

    name = "Anthropic"
    description = "API key for the language model behind the agent"
    required = True
    variable_keys = ["ANTHROPIC_API_KEY"]

    def __init__(self, context):
        super().__init__(context)
        self.api_key: Optional[str] = None

    def _collect(self) -> None:
        if self.ask_yes_no("Open the Anthropic console to create an API key?", default=False):
            self.open_in_browser(ANTHROPIC_CONSOLE_URL)

        self.api_key = self.ask_secret(
            "ANTHROPIC_API_KEY",
            validator=prefix_validator(ANTHROPIC_KEY_PREFIX),
        )

    def _validate(self) -> bool:
        api_key = self._require(self.api_key)
        try:
            response = self.http.get(
                ANTHROPIC_MODELS_URL,
                headers={
                    "x-api-key": api_key,
                    "anthropic-version": ANTHROPIC_API_VERSION,
                },
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Anthropic key check failed", error=str(e))
            self.error("Could not reach the Anthropic API")
            return False

        if not response.is_success or (isinstance(data, dict) and data.get("type") == "error"):
            logger.warning("Anthropic rejected API key", status=response.status_code)
            self.error("Invalid Anthropic API key")
            return False

        self.success("Validated Anthropic API key")
        return True

    def _variables(self) -> List[EnvironmentVariable]:
        return [EnvironmentVariable(key="ANTHROPIC_API_KEY", value=self.api_key)]
