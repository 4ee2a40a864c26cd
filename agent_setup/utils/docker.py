"""
Docker Compose utilities.
"""

import subprocess
from pathlib import Path
from typing import List, Optional, Tuple, Union

from agent_setup.utils.logger import logger
from agent_setup.utils.platform import IS_WINDOWS


def detect_docker_compose_command() -> Optional[List[str]]:
    """
    Detect whether 'docker compose' or 'docker-compose' is available.

    Returns:
        The command list (e.g., ['docker', 'compose']), or None if not found.
    """
    candidates = [
        ["docker", "compose"],
        ["docker-compose"],
    ]

    for cmd in candidates:
        try:
            subprocess.run(
                cmd + ["version"],
                capture_output=True,
                text=True,
                check=True,
                shell=IS_WINDOWS,
            )
            return cmd
        except (subprocess.CalledProcessError, FileNotFoundError):
            continue

    return None


def format_compose_cmd(compose_cmd: Optional[List[str]]) -> str:
    """
    Format a docker compose command list for display.

    Args:
        compose_cmd: The command list, e.g., ['docker', 'compose']

    Returns:
        Human-readable command string, e.g., 'docker compose'
    """
    return " ".join(compose_cmd) if compose_cmd else "docker compose"


def _run_compose(compose_cmd: List[str], args: List[str], cwd: Union[str, Path]) -> Tuple[bool, str]:
    cmd = compose_cmd + args
    logger.debug("Running docker compose", cmd=cmd, cwd=str(cwd))
    try:
        subprocess.run(cmd, check=True, cwd=cwd, shell=IS_WINDOWS)
        return True, ""
    except subprocess.CalledProcessError as e:
        return False, f"'{' '.join(cmd)}' exited with status {e.returncode}"
    except (subprocess.SubprocessError, OSError) as e:
        return False, str(e)


def docker_compose_pull(compose_cmd: List[str], cwd: Union[str, Path]) -> Tuple[bool, str]:
    """
    Pull the latest images for all compose services.

    Returns:
        Tuple of (success: bool, error_message: str)
    """
    return _run_compose(compose_cmd, ["pull"], cwd)


def docker_compose_up(
    compose_cmd: List[str],
    cwd: Union[str, Path],
    detach: bool = True,
    build: bool = True,
) -> Tuple[bool, str]:
    """
    Start Docker Compose services.

    Args:
        compose_cmd: The compose command list
        cwd: Directory holding docker-compose.yml and .env
        detach: Run in detached mode
        build: Build images before starting

    Returns:
        Tuple of (success: bool, error_message: str)
    """
    args = ["up"]
    if detach:
        args.append("-d")
    if build:
        args.append("--build")
    return _run_compose(compose_cmd, args, cwd)
