"""
TimescaleDB provider.

The database is either a Tiger Cloud service, provisioned and described
through the tiger CLI, or the local container from docker-compose.yml.
"""

from typing import List, Optional

from agent_setup.config.schema import DatabaseParameters, EnvironmentVariable, TigerService
from agent_setup.errors import TigerCLIError
from agent_setup.providers.base import Provider
from agent_setup.utils.logger import logger
from agent_setup.utils.secrets import mask_connection_string
from agent_setup.validators.database import parse_connection_string

LOCAL_DATABASE = DatabaseParameters(
    host="db",
    port=5432,
    database="tsdb",
    user="tsdbadmin",
    password="password",
)

NEW_SERVICE = "__new__"


class DatabaseProvider(Provider):
    """Configures the database where Slack messages and agent events are stored."""

    name = "Database"
    description = "Configure a TimescaleDB instance, where Slack messages + agent events are stored."
    required = True
    variable_keys = ["PGHOST", "PGPORT", "PGDATABASE", "PGUSER", "PGPASSWORD"]

    def __init__(self, context):
        super().__init__(context)
        self.parameters: Optional[DatabaseParameters] = None

    @property
    def can_start_services(self) -> bool:
        return self.parameters is None or bool(self.parameters.password)

    def _collect(self) -> None:
        use_cloud = self.ask_yes_no(
            "Do you want to use a hosted Tiger Cloud Database?", default=True
        )
        if not use_cloud:
            self.info("Will use local docker-compose database")
            self.parameters = LOCAL_DATABASE.model_copy()
            return

        self.success(
            "Will use Tiger Cloud Database. Note: will use free services if you are on a free plan"
        )
        tiger = self.context.get_tiger()

        if not tiger.check_auth():
            self.info("Not authenticated with Tiger, starting login...")
            tiger.login()

        services = tiger.list_services()
        if services and self.ask_yes_no(
            "Do you want to use an existing Tiger Cloud instance?", default=False
        ):
            choices = [(s.service_id, s.label) for s in services]
            choices.append((NEW_SERVICE, "Create a new service"))
            selection = self.select("Select a service:", choices)

            if selection == NEW_SERVICE:
                self.parameters = self._create_service()
            else:
                service = next(s for s in services if s.service_id == selection)
                self.parameters = self._use_existing_service(service)
        else:
            self.info("Creating a new Tiger Cloud service...")
            self.parameters = self._create_service()

    def _create_service(self) -> DatabaseParameters:
        service = self.context.get_tiger().create_service()
        host = service.resolved_host
        if not host:
            raise TigerCLIError(f"Service {service.service_id} was created without a host")

        self.success(f"Tiger database created with service ID: {service.service_id}")
        return DatabaseParameters(
            service_id=service.service_id,
            host=host,
            port=service.resolved_port or 5432,
            database=service.database or "tsdb",
            user=service.role or "tsdbadmin",
            password=service.initial_password or "",
        )

    def _use_existing_service(self, service: TigerService) -> DatabaseParameters:
        tiger = self.context.get_tiger()
        self.success(f"Selected service: {service.service_id}")

        try:
            connection_string = tiger.get_connection_string(service.service_id, with_password=True)
        except TigerCLIError as e:
            message = str(e).lower()
            if "keyring" not in message and "password" not in message:
                raise
            logger.info("Connection string with password unavailable", error=str(e))
            return self._prompt_for_password(service)

        self.info(f"Using connection string: {mask_connection_string(connection_string)}")
        try:
            return parse_connection_string(connection_string, service_id=service.service_id)
        except ValueError as e:
            raise TigerCLIError(f"Unexpected connection string for {service.service_id}") from e

    def _prompt_for_password(self, service: TigerService) -> DatabaseParameters:
        self.warning("Password not found in keyring, fetching connection string without password...")
        self.warning("Database password is required for proper functionality.")
        self.warning("If no password is provided, services will not be started at the end of setup.")

        connection_string = self.context.get_tiger().get_connection_string(
            service.service_id, with_password=False
        )
        try:
            parameters = parse_connection_string(connection_string, service_id=service.service_id)
        except ValueError as e:
            raise TigerCLIError(f"Unexpected connection string for {service.service_id}") from e

        password = self.ask_secret(
            "Enter database password (or press Enter to skip)", allow_empty=True
        )
        if not password:
            self.warning("No password provided. Database connection will not work.")
            self.warning("You can manually set PGPASSWORD later in the .env file.")

        return parameters.model_copy(update={"password": password})

    def _validate(self) -> bool:
        parameters = self._require(self.parameters)
        if parameters.service_id:
            self.info("Waiting for Tiger database to be ready...")
            self.context.get_tiger().wait_for_service_ready(
                parameters.service_id,
                poll_interval=self.settings.tiger_poll_interval,
                timeout=self.settings.tiger_ready_timeout,
            )
            self.success("Tiger database is ready")
        return True

    def _variables(self) -> List[EnvironmentVariable]:
        p = self.parameters
        return [
            EnvironmentVariable(key="PGHOST", value=p.host),
            EnvironmentVariable(key="PGPORT", value=str(p.port)),
            EnvironmentVariable(key="PGDATABASE", value=p.database),
            EnvironmentVariable(key="PGUSER", value=p.user),
            EnvironmentVariable(key="PGPASSWORD", value=p.password),
        ]
