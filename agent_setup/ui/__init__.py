"""
UI components for the setup package.
"""

from agent_setup.ui.console import Console
from agent_setup.ui.prompts import Prompts

__all__ = ["Console", "Prompts"]
