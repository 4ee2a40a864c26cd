"""
Utility modules for the setup package.
"""

from agent_setup.utils.platform import IS_WINDOWS, check_command_exists, open_browser, copy_to_clipboard
from agent_setup.utils.docker import detect_docker_compose_command, format_compose_cmd
from agent_setup.utils.secrets import mask_sensitive_value, mask_connection_string

__all__ = [
    "IS_WINDOWS",
    "check_command_exists",
    "open_browser",
    "copy_to_clipboard",
    "detect_docker_compose_command",
    "format_compose_cmd",
    "mask_sensitive_value",
    "mask_connection_string",
]
