"""
Entry point for running setup as a module: python -m agent_setup
"""

import sys

from agent_setup.cli import main

if __name__ == "__main__":
    sys.exit(main())
