"""
Starting the docker compose services once configuration is written.
"""

from pathlib import Path
from typing import Union

from agent_setup.ui.console import Console
from agent_setup.ui.prompts import Prompts
from agent_setup.utils.docker import (
    detect_docker_compose_command,
    docker_compose_pull,
    docker_compose_up,
    format_compose_cmd,
)
from agent_setup.utils.logger import logger


def _print_completion(console: Console, compose_cmd_str: str, started: bool) -> None:
    console.print("\n🎉 Tiger Agent setup complete!\n")
    console.info("Started all services" if started else "Skipped service startup.")

    console.print("To control service containers, you can:")
    console.print(f"  • Start services: {compose_cmd_str} up -d --build")
    console.print(f"  • Stop services: {compose_cmd_str} down")
    console.print(f"  • Check logs: {compose_cmd_str} logs -f tiger-agent")
    console.print(f"  • View services: {compose_cmd_str} ps")

    if started:
        console.print("\nYour Tiger Agent is ready to use in Slack!")


def start_services(
    console: Console,
    prompts: Prompts,
    root_dir: Union[str, Path],
    allowed: bool = True,
) -> bool:
    """
    Offer to pull and start the compose services.

    A startup failure is reported but not raised: configuration is already
    on disk and the user can start the services by hand.

    Returns:
        True if the services were started
    """
    compose_cmd = detect_docker_compose_command()
    compose_cmd_str = format_compose_cmd(compose_cmd)

    console.heading("Starting Services")

    if not allowed:
        console.warning("Skipping service startup until the database password is set in .env.")
        _print_completion(console, compose_cmd_str, started=False)
        return False

    if not prompts.ask_yes_no("Do you want to start the selected services now?", default=True):
        _print_completion(console, compose_cmd_str, started=False)
        return False

    if not compose_cmd:
        console.error("Docker Compose not found. Install Docker and try again.")
        _print_completion(console, compose_cmd_str, started=False)
        return False

    console.info("Starting Tiger Agent services...")

    ok, error = docker_compose_pull(compose_cmd, cwd=root_dir)
    if ok:
        ok, error = docker_compose_up(compose_cmd, cwd=root_dir)

    if not ok:
        logger.error("Service startup failed", error=error)
        console.error(f"Failed to start services: {error}")
        console.print("Configuration written successfully, but service startup failed.")
        console.print(
            f"You can manually start services later by running: {compose_cmd_str} up -d --build"
        )
        return False

    _print_completion(console, compose_cmd_str, started=True)
    return True
