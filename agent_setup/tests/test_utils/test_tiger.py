"""
Tests for the tiger CLI wrapper.
"""

import json
import subprocess
from unittest.mock import patch

import pytest

from agent_setup.errors import ServiceNotReadyError, TigerCLIError
from agent_setup.utils.tiger import TigerCLI


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def run():
    with patch("agent_setup.utils.tiger.subprocess.run") as mock_run:
        yield mock_run


class TestTigerCLI:

    def test_check_auth(self, run):
        run.return_value = completed(0)
        assert TigerCLI("tiger").check_auth() is True
        run.assert_called_once_with(["tiger", "auth", "status"], capture_output=True, text=True)

    def test_check_auth_failure(self, run):
        run.return_value = completed(1)
        assert TigerCLI("tiger").check_auth() is False

    def test_missing_binary(self, run):
        run.side_effect = FileNotFoundError()
        with pytest.raises(TigerCLIError, match="TIGER_CMD"):
            TigerCLI("./download/tiger").check_auth()

    def test_login_failure(self, run):
        run.return_value = completed(1)
        with pytest.raises(TigerCLIError):
            TigerCLI("tiger").login()

    def test_list_services(self, run):
        run.return_value = completed(stdout=json.dumps([
            {"service_id": "abc", "name": "tiger-eon", "status": "READY", "created": "2025-01-01"},
        ]))

        services = TigerCLI("tiger").list_services()

        assert [s.service_id for s in services] == ["abc"]
        assert services[0].label == "tiger-eon (abc) - READY"

    def test_list_services_empty_output(self, run):
        run.return_value = completed(stdout="  \n")
        assert TigerCLI("tiger").list_services() == []

    def test_list_services_bad_json(self, run):
        run.return_value = completed(stdout="not json")
        with pytest.raises(TigerCLIError, match="parse service list"):
            TigerCLI("tiger").list_services()

    def test_list_services_nonzero_exit(self, run):
        run.return_value = completed(1, stderr="boom")
        with pytest.raises(TigerCLIError, match="boom"):
            TigerCLI("tiger").list_services()

    def test_get_connection_string(self, run):
        run.return_value = completed(stdout="postgresql://u:p@h:1/d\n")

        assert TigerCLI("tiger").get_connection_string("abc") == "postgresql://u:p@h:1/d"
        assert run.call_args[0][0] == ["tiger", "db", "connection-string", "abc", "--with-password"]

    def test_get_connection_string_without_password(self, run):
        run.return_value = completed(stdout="postgresql://u@h:1/d")
        TigerCLI("tiger").get_connection_string("abc", with_password=False)
        assert run.call_args[0][0] == ["tiger", "db", "connection-string", "abc"]

    def test_create_service(self, run):
        run.return_value = completed(stdout=json.dumps({
            "service_id": "new1",
            "endpoint": {"host": "h.example.com", "port": 30000},
            "role": "tsdbadmin",
            "initial_password": "pw",
        }))

        service = TigerCLI("tiger").create_service()

        assert service.service_id == "new1"
        assert service.resolved_host == "h.example.com"
        assert service.resolved_port == 30000
        assert run.call_args[0][0] == [
            "tiger", "service", "create", "--no-wait", "--name", "tiger-eon",
            "--with-password", "-o", "json",
        ]

    def test_create_service_free_limit(self, run):
        run.return_value = completed(1, stderr="Error: Free service limit reached")
        with pytest.raises(TigerCLIError, match="free service limit"):
            TigerCLI("tiger").create_service()

    def test_get_service_status(self, run):
        run.return_value = completed(stdout='{"status": "QUEUED"}')
        assert TigerCLI("tiger").get_service_status("abc") == "QUEUED"


class TestWaitForServiceReady:

    def test_returns_when_ready(self, run):
        clock = FakeClock()
        run.side_effect = [
            completed(stdout='{"status": "QUEUED"}'),
            completed(stdout='{"status": "READY"}'),
        ]

        TigerCLI("tiger", sleep=clock.sleep, clock=clock).wait_for_service_ready(
            "abc", poll_interval=30, timeout=300
        )

        assert clock.sleeps == [30]

    def test_times_out(self, run):
        clock = FakeClock()
        run.return_value = completed(stdout='{"status": "QUEUED"}')

        with pytest.raises(ServiceNotReadyError) as exc_info:
            TigerCLI("tiger", sleep=clock.sleep, clock=clock).wait_for_service_ready(
                "abc", poll_interval=30, timeout=75
            )

        assert clock.sleeps == [30, 30, 15]
        assert exc_info.value.service_id == "abc"

    def test_status_failure_propagates(self, run):
        run.return_value = completed(1, stderr="not found")
        with pytest.raises(TigerCLIError, match="not found"):
            TigerCLI("tiger").wait_for_service_ready("abc")
