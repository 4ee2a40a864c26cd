"""
Tests for the COMPOSE_PROFILES editor.
"""

import os
from unittest.mock import patch

import pytest

from agent_setup.config.docker_profiles import parse_profiles, set_docker_profile
from agent_setup.config.env_file import EnvFile


@pytest.fixture
def env_file(temp_dir):
    return EnvFile(os.path.join(temp_dir, ".env"))


def write(env_file, text):
    with open(env_file.path, "w") as f:
        f.write(text)


def read(env_file):
    with open(env_file.path) as f:
        return f.read()


class TestParseProfiles:

    def test_empty(self):
        assert parse_profiles(None) == []
        assert parse_profiles("") == []

    def test_trims_and_drops_blanks(self):
        assert parse_profiles(" db , ,github,") == ["db", "github"]

    def test_drops_duplicates(self):
        assert parse_profiles("db,github,db") == ["db", "github"]


class TestSetDockerProfile:

    def test_disable_existing_profile(self, env_file):
        write(env_file, "COMPOSE_PROFILES=db,github")

        assert set_docker_profile(env_file, "github", False) is True
        assert read(env_file) == "COMPOSE_PROFILES=db"

    def test_disable_twice_writes_once(self, env_file):
        write(env_file, "COMPOSE_PROFILES=db,github")
        set_docker_profile(env_file, "github", False)

        with patch.object(EnvFile, "write") as mock_write:
            assert set_docker_profile(env_file, "github", False) is False
            mock_write.assert_not_called()

    def test_enable_when_variable_absent(self, env_file):
        write(env_file, "OTHER=1")

        assert set_docker_profile(env_file, "github", True) is True
        assert read(env_file) == "OTHER=1\nCOMPOSE_PROFILES=github"

    def test_enable_twice_writes_once(self, env_file):
        with patch.object(EnvFile, "write", wraps=env_file.write) as mock_write:
            set_docker_profile(env_file, "github", True)
            set_docker_profile(env_file, "github", True)
            assert mock_write.call_count == 1

    def test_disable_absent_profile_writes_nothing(self, env_file):
        with patch.object(EnvFile, "write") as mock_write:
            assert set_docker_profile(env_file, "github", False) is False
            mock_write.assert_not_called()
        assert not env_file.exists()

    def test_enable_appends_to_existing_set(self, env_file):
        write(env_file, "COMPOSE_PROFILES=db\nA=1")

        set_docker_profile(env_file, "github", True)

        assert read(env_file) == "COMPOSE_PROFILES=db,github\nA=1"
