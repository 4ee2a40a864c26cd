"""
Logfire observability provider.
"""

from typing import List, Optional

from agent_setup.config.schema import EnvironmentVariable
from agent_setup.providers.base import Provider
from agent_setup.validators.tokens import validate_non_empty

LOGFIRE_TRACES_ENDPOINT = "https://logfire-api.pydantic.dev/v1/traces"
LOGFIRE_LOGS_ENDPOINT = "https://logfire-api.pydantic.dev/v1/logs"


class LogfireProvider(Provider):
    name = "Logfire"
    description = "Sends agent traces and logs to Pydantic Logfire"
    required = False
    variable_keys = [
        "LOGFIRE_TOKEN",
        "LOGFIRE_ENVIRONMENT",
        "LOGFIRE_TRACES_ENDPOINT",
        "LOGFIRE_LOGS_ENDPOINT",
    ]

    def __init__(self, context):
        super().__init__(context)
        self.token: Optional[str] = None
        self.environment: str = "development"

    def _collect(self) -> None:
        self.token = self.ask_secret("LOGFIRE_TOKEN", validator=validate_non_empty)
        self.environment = self.ask("LOGFIRE_ENVIRONMENT", default="development")

    def _validate(self) -> bool:
        # Logfire has no read-only endpoint to check a write token against.
        self._require(self.token)
        return True

    def _variables(self) -> List[EnvironmentVariable]:
        return [
            EnvironmentVariable(key="LOGFIRE_TOKEN", value=self.token),
            EnvironmentVariable(key="LOGFIRE_ENVIRONMENT", value=self.environment),
            EnvironmentVariable(key="LOGFIRE_TRACES_ENDPOINT", value=LOGFIRE_TRACES_ENDPOINT),
            EnvironmentVariable(key="LOGFIRE_LOGS_ENDPOINT", value=LOGFIRE_LOGS_ENDPOINT),
        ]
