"""
Tiger Agent Setup Package

Interactive wizard that collects credentials for the Tiger Agent deployment,
writes them to .env and mcp_config.json, and optionally starts the services.
"""

__version__ = "1.0.0"

# Lazy imports keep `import agent_setup` cheap for the CLI entry point
# Use: from agent_setup import SetupWizard, main
def __getattr__(name):
    if name == "SetupWizard":
        from agent_setup.wizard import SetupWizard
        return SetupWizard
    elif name == "main":
        from agent_setup.cli import main
        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = ["SetupWizard", "main", "__version__"]
