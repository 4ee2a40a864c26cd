"""
Tests for service startup.
"""

from unittest.mock import patch

import pytest

from agent_setup.services import start_services


@pytest.fixture
def compose():
    with patch("agent_setup.services.detect_docker_compose_command", return_value=["docker", "compose"]), \
            patch("agent_setup.services.docker_compose_pull", return_value=(True, "")) as pull, \
            patch("agent_setup.services.docker_compose_up", return_value=(True, "")) as up:
        yield pull, up


class TestStartServices:

    def test_declined(self, console, prompts, compose, output, temp_dir):
        pull, up = compose
        prompts.feed("n")

        assert start_services(console, prompts, temp_dir) is False
        pull.assert_not_called()
        assert "Skipped service startup." in output.getvalue()

    def test_pulls_then_starts(self, console, prompts, compose, output, temp_dir):
        pull, up = compose
        prompts.feed("y")

        assert start_services(console, prompts, temp_dir) is True
        pull.assert_called_once_with(["docker", "compose"], cwd=temp_dir)
        up.assert_called_once_with(["docker", "compose"], cwd=temp_dir)
        assert "ready to use in Slack" in output.getvalue()

    def test_failure_is_reported(self, console, prompts, compose, output, temp_dir):
        pull, up = compose
        up.return_value = (False, "exited with status 1")
        prompts.feed("")

        assert start_services(console, prompts, temp_dir) is False
        assert "Failed to start services: exited with status 1" in output.getvalue()

    def test_not_allowed_skips_prompt(self, console, prompts, compose, temp_dir):
        pull, up = compose

        assert start_services(console, prompts, temp_dir, allowed=False) is False
        assert prompts.asked == []
        pull.assert_not_called()
