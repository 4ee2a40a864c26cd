"""
Setup Wizard - Main orchestrator for the setup process.
"""

from typing import List, Optional

import httpx

from agent_setup.config.env_file import EnvFile
from agent_setup.config.mcp_registry import McpRegistry
from agent_setup.config.schema import EnvironmentVariable
from agent_setup.config.settings import SetupSettings
from agent_setup.providers import Provider, ProviderContext, default_providers
from agent_setup.services import start_services
from agent_setup.ui.console import Console
from agent_setup.ui.prompts import Prompts
from agent_setup.utils.http import create_http_client
from agent_setup.utils.logger import logger

WORKFLOW = [
    "Choose between using free Tiger Cloud DB or local Docker DB",
    "Create Slack App for Ingest & gather tokens",
    "Create Slack App for Agent & gather tokens",
    "Gather Anthropic API token",
    "Determine which optional MCP servers to configure",
    "Gather required variables for optional MCP servers",
    "Write the .env file",
    "Optionally, spin up the selected services",
]

EXISTING_CONFIG_CHOICES = [
    ("modify", "Modify the existing configuration"),
    ("fresh", "Start fresh with new configuration (backs up the current .env)"),
    ("keep", "Keep existing configuration and exit"),
]


class SetupCancelled(Exception):
    """Raised internally when the user chooses to stop before any change."""


class SetupWizard:
    """
    Main setup wizard coordinator.

    Runs every provider in order through collect, validate and persist,
    writing the .env file and mcp_config.json after each one so an
    interrupted run keeps what was already configured.
    """

    def __init__(
        self,
        root_dir: Optional[str] = None,
        no_color: bool = False,
        start_services: bool = True,
        providers: Optional[List[Provider]] = None,
        console: Optional[Console] = None,
        prompts: Optional[Prompts] = None,
        http_client: Optional[httpx.Client] = None,
        settings: Optional[SetupSettings] = None,
    ):
        """
        Initialize the setup wizard.

        Args:
            root_dir: Root directory of the project
            no_color: Disable colored output
            start_services: Offer to start docker compose services at the end
            providers: Providers to run instead of the default set
            console: Console to print to
            prompts: Prompts to read answers from
            http_client: Client for remote credential checks
            settings: Settings to use instead of reading them from the environment
        """
        self.settings = settings or SetupSettings.from_env(root_dir)
        self.root_dir = self.settings.root_dir
        self.should_start_services = start_services

        self.console = console or Console(no_color=no_color)
        self.prompts = prompts or Prompts(self.console)
        self._owns_http = http_client is None
        self.http = http_client or create_http_client(self.settings.http_timeout)

        self.env_file = EnvFile(self.settings.env_path)
        self.registry = McpRegistry(self.settings.mcp_config_path, console=self.console)

        self.context = ProviderContext(
            console=self.console,
            prompts=self.prompts,
            http=self.http,
            settings=self.settings,
        )
        self.providers = providers if providers is not None else default_providers(self.context)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def run(self) -> int:
        """
        Run the full setup wizard.

        Returns:
            Exit code (0 for success, 1 on failure, 130 when interrupted)
        """
        try:
            return self._run()
        except SetupCancelled:
            return 0
        except KeyboardInterrupt:
            self.console.print()
            self.console.warning("Setup interrupted. Values configured so far have been saved.")
            return 130
        except Exception as e:
            logger.exception("Setup failed")
            self.console.error(f"Setup failed: {e}")
            return 1
        finally:
            self.close()

    def _run(self) -> int:
        self._show_intro()

        if not self.prompts.ask_yes_no("Do you want to continue with the setup?", default=True):
            self.console.info("Setup cancelled by user.")
            raise SetupCancelled()

        existing = self._check_existing_config()

        for provider in self.providers:
            self.configure_provider(provider, existing)

        if self.should_start_services:
            start_services(
                self.console,
                self.prompts,
                self.root_dir,
                allowed=all(p.can_start_services for p in self.providers),
            )
        else:
            self.console.success("Configuration written to .env")

        return 0

    def _show_intro(self) -> None:
        self.console.print_banner()
        self.console.print_list(
            [
                "a Slack App for the ingest service that will receive all messages/reactions from public channels",
                "a Slack App for the agent that will receive @mentions to it",
                "a TimescaleDB instance to store the above data",
            ],
            header="The core install includes the following:",
        )
        self.console.print("This is the workflow that we will use:")
        for number, item in enumerate(WORKFLOW, start=1):
            self.console.print(f"{number}. {item}")
        self.console.print()

    def _check_existing_config(self) -> List[EnvironmentVariable]:
        """
        Decide what to do with an existing .env file.

        Returns:
            The variables providers may keep, empty for a fresh setup
        """
        current = self.env_file.load()
        if not current:
            self.console.info("No .env file, starting with a fresh setup")
            return []

        action = self.prompts.select(
            "Found existing .env file. What would you like to do?",
            EXISTING_CONFIG_CHOICES,
            default="modify",
        )

        if action == "fresh":
            backup = self.env_file.backup()
            self.console.success(f"Backed up existing .env file to {backup.name}")
            return []
        if action == "keep":
            self.console.info("Keeping existing configuration. Exiting.")
            raise SetupCancelled()

        return current

    def configure_provider(self, provider: Provider, existing: List[EnvironmentVariable]) -> None:
        """Drive one provider from its current configuration to persisted output."""
        self.console.heading(f"{provider.name} Configuration")
        if provider.description:
            self.console.info(provider.description)

        if provider.is_already_configured(existing) and self.prompts.ask_yes_no(
            "This is already configured, do you want to keep existing config?",
            default=True,
        ):
            provider.mark_kept()
            logger.info("Kept existing configuration", provider=provider.name)
            return

        if not provider.required and not self.prompts.ask_yes_no(
            "This service is optional, do you wish to set this up?", default=True
        ):
            provider.disable()
            provider.persist(self.env_file, self.registry)
            return

        attempt = 1
        while True:
            provider.collect()
            if provider.validate():
                break
            logger.info("Provider validation failed", provider=provider.name, attempt=attempt)
            self.console.warning(f"{provider.name} configuration is not valid, let's try again.")
            attempt += 1

        provider.persist(self.env_file, self.registry)
        self.console.success(f"{provider.name} configured")

    def check(self) -> int:
        """
        Report which providers are configured in the current .env file.

        Returns:
            1 if a required provider is missing, else 0
        """
        try:
            current = self.env_file.load()
            rows = []
            missing_required = []

            for provider in self.providers:
                configured = provider.is_already_configured(current)
                status = "configured" if configured else "missing"
                rows.append((provider.name, "required" if provider.required else "optional", status))
                if provider.required and not configured:
                    missing_required.append(provider.name)

            self.console.print_table(f"Configuration in {self.env_file.path}", rows, ["Provider", "Kind", "Status"])

            if missing_required:
                self.console.error(f"Missing required configuration: {', '.join(missing_required)}")
                return 1

            self.console.success("All required configuration is present.")
            return 0
        finally:
            self.close()
