"""
Platform detection and desktop integration utilities.
"""

import platform
import shutil
import subprocess
from typing import List, Optional

from agent_setup.errors import ClipboardError
from agent_setup.utils.logger import logger

IS_WINDOWS = platform.system() == "Windows"
IS_MACOS = platform.system() == "Darwin"


def check_command_exists(command: str) -> bool:
    """
    Check if a command exists in the system PATH.

    Args:
        command: The command name to check (e.g., 'docker', 'xclip')

    Returns:
        True if the command exists, False otherwise
    """
    return shutil.which(command) is not None


def _browser_command() -> Optional[List[str]]:
    if IS_MACOS:
        return ["open"]
    if IS_WINDOWS:
        return ["cmd", "/c", "start", ""]
    if check_command_exists("xdg-open"):
        return ["xdg-open"]
    return None


def open_browser(url: str) -> bool:
    """
    Open a URL in the default browser.

    Returns:
        True if a browser was launched, False if the user must open it manually
    """
    cmd = _browser_command()
    if cmd is None:
        return False

    try:
        subprocess.run(
            cmd + [url],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=True,
        )
        return True
    except (subprocess.SubprocessError, OSError) as e:
        logger.debug("Could not open browser", url=url, error=str(e))
        return False


def _clipboard_command() -> Optional[List[str]]:
    if IS_MACOS:
        return ["pbcopy"]
    if IS_WINDOWS:
        return ["clip"]
    if check_command_exists("wl-copy"):
        return ["wl-copy"]
    if check_command_exists("xclip"):
        return ["xclip", "-selection", "clipboard"]
    return None


def copy_to_clipboard(text: str) -> None:
    """
    Copy text to the system clipboard.

    Raises:
        ClipboardError: If no clipboard tool is available or it fails
    """
    cmd = _clipboard_command()
    if cmd is None:
        raise ClipboardError("No clipboard tool found (install pbcopy, wl-copy or xclip)")

    try:
        subprocess.run(cmd, input=text, text=True, check=True)
    except (subprocess.SubprocessError, OSError) as e:
        raise ClipboardError(f"Could not copy to clipboard: {e}") from e
