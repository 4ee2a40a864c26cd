"""
Wrapper around the tiger CLI (https://github.com/timescale/tiger-cli).

Every command is run out of process. A non-zero exit or output that is not
the JSON we asked for raises TigerCLIError.
"""

import json
import subprocess
import time
from typing import Any, Callable, List, Optional

from pydantic import ValidationError

from agent_setup.config.schema import TigerService
from agent_setup.errors import ServiceNotReadyError, TigerCLIError
from agent_setup.utils.logger import logger

SERVICE_NAME = "tiger-eon"
READY_STATUS = "READY"


class TigerCLI:
    """Runs tiger subcommands and decodes their JSON output."""

    def __init__(
        self,
        command: str,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.command = command
        self._sleep = sleep
        self._clock = clock

    def _run(self, args: List[str], capture_output: bool = True) -> subprocess.CompletedProcess:
        cmd = [self.command] + args
        logger.debug("Running tiger command", args=args)
        try:
            return subprocess.run(cmd, capture_output=capture_output, text=True)
        except FileNotFoundError as e:
            raise TigerCLIError(
                f"tiger CLI not found at '{self.command}'. Set TIGER_CMD to its location."
            ) from e
        except OSError as e:
            raise TigerCLIError(f"Could not run tiger CLI: {e}") from e

    def _run_checked(self, args: List[str], action: str) -> str:
        result = self._run(args)
        if result.returncode != 0:
            raise TigerCLIError(f"Failed to {action}: {(result.stderr or '').strip()}")
        return result.stdout or ""

    @staticmethod
    def _parse_json(output: str, what: str) -> Any:
        try:
            return json.loads(output)
        except ValueError as e:
            raise TigerCLIError(f"Failed to parse {what}: {output.strip()}") from e

    def check_auth(self) -> bool:
        """Return True if the CLI holds valid credentials."""
        return self._run(["auth", "status"]).returncode == 0

    def login(self) -> None:
        """Run the interactive login flow on the user's terminal."""
        result = self._run(["auth", "login"], capture_output=False)
        if result.returncode != 0:
            raise TigerCLIError("Tiger login failed")

    def list_services(self) -> List[TigerService]:
        output = self._run_checked(["service", "list", "-o", "json"], "list services")
        if not output.strip():
            return []

        data = self._parse_json(output, "service list")
        if not isinstance(data, list):
            raise TigerCLIError(f"Failed to parse service list: {output.strip()}")
        try:
            return [TigerService.model_validate(item) for item in data]
        except ValidationError as e:
            raise TigerCLIError(f"Unexpected service list format: {e}") from e

    def get_connection_string(self, service_id: str, with_password: bool = True) -> str:
        args = ["db", "connection-string", service_id]
        if with_password:
            args.append("--with-password")
        return self._run_checked(args, "get connection string").strip()

    def create_service(self, name: str = SERVICE_NAME) -> TigerService:
        """Create a free-tier service without waiting for it to come up."""
        result = self._run(
            ["service", "create", "--no-wait", "--name", name, "--with-password", "-o", "json"]
        )

        if result.returncode != 0:
            error = (result.stderr or "").strip()
            if "free service limit" in error.lower():
                raise TigerCLIError(
                    "You have reached your free service limit. Please delete an existing "
                    "service or upgrade to a paid plan.\n\n"
                    f"To delete an existing service, run: {self.command} service delete <service-id>\n"
                    f"To list your services, run: {self.command} service list"
                )
            raise TigerCLIError(f"Failed to create Tiger service: {error}")

        data = self._parse_json(result.stdout or "", "service creation response")
        try:
            return TigerService.model_validate(data)
        except ValidationError as e:
            raise TigerCLIError(f"Unexpected service creation response: {e}") from e

    def get_service_status(self, service_id: str) -> Optional[str]:
        output = self._run_checked(
            ["service", "describe", "-o", "json", service_id], "get service status"
        )
        data = self._parse_json(output, "service status")
        if not isinstance(data, dict):
            raise TigerCLIError(f"Failed to parse service status: {output.strip()}")
        return data.get("status")

    def wait_for_service_ready(
        self,
        service_id: str,
        poll_interval: float = 30.0,
        timeout: float = 900.0,
    ) -> None:
        """
        Poll the service status until it reports READY.

        Raises:
            ServiceNotReadyError: If READY is not seen within timeout seconds
            TigerCLIError: If a status check itself fails
        """
        deadline = self._clock() + timeout

        while True:
            status = self.get_service_status(service_id)
            if status == READY_STATUS:
                logger.info("Tiger service ready", service_id=service_id)
                return

            remaining = deadline - self._clock()
            if remaining <= 0:
                raise ServiceNotReadyError(service_id, timeout)

            logger.debug("Tiger service not ready", service_id=service_id, status=status)
            self._sleep(min(poll_interval, remaining))
