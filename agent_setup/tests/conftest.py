"""
Shared pytest fixtures for setup tests.
"""

import io
import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator, List, Optional

import httpx
import pytest
from rich.console import Console as RichConsole

from agent_setup.config.settings import SetupSettings
from agent_setup.providers.base import ProviderContext
from agent_setup.ui.console import Console
from agent_setup.ui.prompts import Prompts


class ScriptedPrompts(Prompts):
    """
    Prompts that read answers from a list instead of the terminal.

    The real validation loop still runs, so a rejected answer consumes the
    next one from the script.
    """

    def __init__(self, console: Console, answers: Optional[List[str]] = None):
        super().__init__(console)
        self.answers = list(answers or [])
        self.asked: List[str] = []

    def feed(self, *answers: str) -> None:
        self.answers.extend(answers)

    def _next(self, prompt: str) -> str:
        self.asked.append(prompt)
        if not self.answers:
            raise AssertionError(f"No scripted answer left for prompt: {prompt!r}")
        return self.answers.pop(0)

    def _input(self, prompt: str) -> str:
        return self._next(prompt)

    def _secret_input(self, prompt: str) -> str:
        return self._next(prompt)


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for tests."""
    temp = tempfile.mkdtemp()
    yield temp
    shutil.rmtree(temp, ignore_errors=True)


@pytest.fixture
def isolated_env(temp_dir: str) -> Generator[str, None, None]:
    """
    Create an isolated project checkout.

    Creates:
    - docker-compose.yml
    - mcp_config.json with a disabled slack server
    """
    with open(os.path.join(temp_dir, "docker-compose.yml"), "w") as f:
        f.write("services: {}\n")

    with open(os.path.join(temp_dir, "mcp_config.json"), "w") as f:
        json.dump({"slack": {"url": "http://tiger-slack-mcp-server/mcp", "disabled": True}}, f)

    yield temp_dir


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    """Console rendering plain text into the output buffer."""
    return Console(
        no_color=True,
        rich_console=RichConsole(file=output, color_system=None, width=200),
    )


@pytest.fixture
def prompts(console: Console) -> ScriptedPrompts:
    return ScriptedPrompts(console)


@pytest.fixture
def settings(isolated_env: str) -> SetupSettings:
    return SetupSettings(
        root_dir=Path(isolated_env),
        tiger_cmd="tiger",
        tiger_poll_interval=1,
        tiger_ready_timeout=5,
    )


@pytest.fixture
def make_http():
    """Build an httpx client whose requests are answered by a handler."""
    clients = []

    def factory(handler):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def make_context(console, prompts, settings, make_http):
    """Build a ProviderContext around an HTTP handler."""

    def factory(handler=None, tiger=None):
        if handler is None:
            def handler(request):
                raise AssertionError(f"Unexpected request: {request.method} {request.url}")

        return ProviderContext(
            console=console,
            prompts=prompts,
            http=make_http(handler),
            settings=settings,
            tiger=tiger,
        )

    return factory


@pytest.fixture(autouse=True)
def no_desktop(monkeypatch):
    """Never launch a browser or touch the clipboard from tests."""
    monkeypatch.setattr("agent_setup.providers.base.open_browser", lambda url: False)
    monkeypatch.setattr(
        "agent_setup.providers.slack.copy_to_clipboard",
        lambda text: None,
    )
