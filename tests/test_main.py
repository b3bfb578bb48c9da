"""Unit tests for main.py, the CLI entry point."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from habo_data import __version__
from habo_data.main import app, main

runner = CliRunner()


def _invoke(*args):
    return runner.invoke(app, list(args))


class TestTopLevel:
    def test_help_lists_groups(self):
        result = _invoke("--help")
        assert result.exit_code == 0
        for group in ("habits", "events", "categories", "rules", "logs", "config"):
            assert group in result.output

    @pytest.mark.parametrize("group", ["habits", "events", "categories", "rules", "logs", "config"])
    def test_group_help(self, group):
        assert _invoke(group, "--help").exit_code == 0

    def test_version(self):
        result = _invoke("version")
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_typo_suggests_command(self):
        result = _invoke("habit")
        assert result.exit_code != 0
        assert "habits" in result.output

    def test_verbose_lowers_log_level(self):
        with patch("habo_data.main.set_level") as set_level:
            result = _invoke("--verbose", "version")
        assert result.exit_code == 0
        set_level.assert_called_once_with(logging.DEBUG)

    def test_default_keeps_log_level(self):
        with patch("habo_data.main.set_level") as set_level:
            _invoke("version")
        set_level.assert_not_called()

    def test_no_color_disables_styling(self):
        with patch("habo_data.main.set_color") as set_color:
            result = _invoke("--no-color", "version")
        assert result.exit_code == 0
        set_color.assert_called_once_with(False)


def test_main_invokes_app():
    with patch("habo_data.main.app") as mock_app:
        main()
    mock_app.assert_called_once_with()
