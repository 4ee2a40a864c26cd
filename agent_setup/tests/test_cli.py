"""
Tests for the command line interface.
"""

from unittest.mock import patch

import pytest

from agent_setup.cli import create_parser, main


class TestParser:

    def test_defaults(self):
        args = create_parser().parse_args([])
        assert args.root_dir is None
        assert args.check is False
        assert args.no_start is False

    def test_flags(self):
        args = create_parser().parse_args(["-C", "/tmp/x", "--no-start", "-v", "--no-color"])
        assert args.root_dir == "/tmp/x"
        assert args.no_start is True
        assert args.verbose is True
        assert args.no_color is True

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "1.0.0" in capsys.readouterr().out


class TestMain:

    def test_list_providers(self, capsys):
        assert main(["--list-providers", "--no-color"]) == 0
        out = capsys.readouterr().out
        assert "Database" in out
        assert "Slack Agent App" in out
        assert "(optional)" in out

    def test_check_missing_configuration(self, isolated_env):
        assert main(["--check", "--root-dir", isolated_env, "--no-color"]) == 1

    def test_runs_wizard(self, isolated_env):
        with patch("agent_setup.wizard.SetupWizard.run", return_value=0) as mock_run:
            assert main(["--root-dir", isolated_env, "--no-start"]) == 0
        mock_run.assert_called_once()
