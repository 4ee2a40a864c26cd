"""
CLI interface for the setup package.

Provides command-line argument parsing and main entry point.
"""

import argparse
import sys
from typing import List, Optional

from agent_setup import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="agent-setup",
        description="Tiger Agent Setup Wizard - Configure the Slack agent deployment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  agent-setup                       # Interactive wizard in the current directory
  agent-setup --root-dir ../deploy  # Configure another checkout
  agent-setup --check               # Validate current configuration
  agent-setup --list-providers      # List all configuration providers
  agent-setup --no-start            # Write configuration without starting services

Environment:
  TIGER_CMD             Path to the tiger CLI (default: ./download/tiger)
  TIGER_READY_TIMEOUT   Seconds to wait for a new database (default: 900)
  LOGGING_LEVEL         Diagnostic log level (default: WARNING)
""",
    )

    parser.add_argument(
        "--root-dir", "-C",
        type=str,
        metavar="DIR",
        help="Project directory holding .env and mcp_config.json (default: current directory)",
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate current configuration without running setup",
    )

    parser.add_argument(
        "--list-providers",
        action="store_true",
        help="List all configuration providers",
    )

    parser.add_argument(
        "--no-start",
        action="store_true",
        help="Do not offer to start docker compose services at the end",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show diagnostic logs",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    from agent_setup.ui.console import Console
    from agent_setup.utils.logger import configure_logging

    if parsed_args.verbose:
        configure_logging("DEBUG")

    console = Console(no_color=parsed_args.no_color)

    if parsed_args.list_providers:
        return list_providers(console)

    from agent_setup.wizard import SetupWizard

    try:
        wizard = SetupWizard(
            root_dir=parsed_args.root_dir,
            no_color=parsed_args.no_color,
            start_services=not parsed_args.no_start,
            console=console,
        )
    except Exception as e:
        console.error(f"Could not initialize setup: {e}")
        return 1

    if parsed_args.check:
        return wizard.check()

    return wizard.run()


def list_providers(console: "Console") -> int:
    """List all configuration providers."""
    from agent_setup.providers import PROVIDER_CLASSES

    console.print("\nConfiguration providers, in the order they run:\n")

    for cls in PROVIDER_CLASSES:
        req_str = "(required)" if cls.required else "(optional)"
        console.print(f"  {cls.name:20} {req_str}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
