"""
Editing the COMPOSE_PROFILES variable as a set of docker compose profiles.
"""

from typing import List, Optional

from agent_setup.config.env_file import EnvFile
from agent_setup.config.schema import EnvironmentVariable
from agent_setup.utils.logger import logger

COMPOSE_PROFILES_KEY = "COMPOSE_PROFILES"


def parse_profiles(value: Optional[str]) -> List[str]:
    """Split a comma-separated profile list, dropping blanks and duplicates."""
    profiles: List[str] = []
    for token in (value or "").split(","):
        token = token.strip()
        if token and token not in profiles:
            profiles.append(token)
    return profiles


def get_docker_profiles(env_file: EnvFile) -> List[str]:
    return parse_profiles(env_file.get(COMPOSE_PROFILES_KEY))


def set_docker_profile(env_file: EnvFile, profile: str, enabled: bool) -> bool:
    """
    Enable or disable a docker compose profile in the .env file.

    The file is only rewritten when membership actually changes.

    Args:
        env_file: The .env file holding COMPOSE_PROFILES
        profile: Profile name to add or remove
        enabled: Whether the profile should be active

    Returns:
        True if the file was written
    """
    profiles = get_docker_profiles(env_file)

    if enabled == (profile in profiles):
        return False

    if enabled:
        profiles.append(profile)
    else:
        profiles.remove(profile)

    env_file.upsert(
        [EnvironmentVariable(key=COMPOSE_PROFILES_KEY, value=",".join(profiles))]
    )
    logger.debug("Updated docker profiles", profile=profile, enabled=enabled, profiles=profiles)
    return True
