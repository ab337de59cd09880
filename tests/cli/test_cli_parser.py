"""
Tests for CLI argument parser.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from cargojni.cli.parser import CLI
from cargojni.core.exceptions import ConfigurationError


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_no_command_shows_help(self, capsys):
        result = CLI().run([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out.lower()

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "cargojni" in capsys.readouterr().out

    def test_global_options(self):
        args = CLI().parse_args(
            ["-v", "--config", "x.yaml", "--project-root", "/p", "targets"]
        )

        assert args.verbose is True
        assert args.config == Path("x.yaml")
        assert args.project_root == Path("/p")
        assert args.command == "targets"


class TestBuildCommandParsing:
    def test_defaults(self):
        args = CLI().parse_args(["build"])

        assert args.targets is None
        assert args.profile is None
        assert args.jobs == 1
        assert args.dry_run is False

    def test_repeated_targets(self):
        args = CLI().parse_args(
            ["build", "--target", "arm64", "--target", "x86", "--profile", "release", "-j", "2", "--dry-run"]
        )

        assert args.targets == ["arm64", "x86"]
        assert args.profile == "release"
        assert args.jobs == 2
        assert args.dry_run is True


class TestLinkerWrapperParsing:
    def test_build_dir(self):
        args = CLI().parse_args(["linker-wrapper", "--build-dir", "out"])

        assert args.command == "linker-wrapper"
        assert args.build_dir == Path("out")


class TestLogging:
    """Test logging configuration from flags."""

    @pytest.mark.parametrize(
        "flags,level",
        [(["-v"], logging.DEBUG), (["-q"], logging.ERROR), ([], logging.INFO)],
    )
    def test_levels(self, flags, level):
        cli = CLI()
        with patch("logging.basicConfig") as mock_config:
            cli._configure_logging(cli.parse_args(flags + ["targets"]))

        assert mock_config.call_args[1]["level"] == level
        assert mock_config.call_args[1]["force"] is True


class TestDispatch:
    """Test error handling around command dispatch."""

    @pytest.fixture(autouse=True)
    def keep_log_handlers(self):
        with patch("logging.basicConfig"):
            yield

    def test_dispatches_to_command_module(self):
        with patch("cargojni.cli.commands.targets.run", return_value=0) as mock_run:
            assert CLI().run(["targets"]) == 0

        mock_run.assert_called_once()

    def test_configuration_error_returns_one(self, caplog):
        with patch(
            "cargojni.cli.commands.build.run",
            side_effect=ConfigurationError("bad config"),
        ):
            with caplog.at_level(logging.ERROR):
                assert CLI().run(["build"]) == 1

        assert "bad config" in caplog.text

    def test_keyboard_interrupt(self):
        with patch("cargojni.cli.commands.build.run", side_effect=KeyboardInterrupt):
            assert CLI().run(["build"]) == 130
