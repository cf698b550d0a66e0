"""Tests for ghostmail.cli."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from ghostmail.cli import build_parser, main
from ghostmail.config.schema import Config


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.mode == "polling"
    assert args.env_file is None
    assert args.log_level is None


def test_parser_rejects_unknown_mode():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["carrier-pigeon"])


def test_main_runs_selected_mode():
    config = Config()
    with patch("ghostmail.cli.load_config", return_value=config), \
         patch("ghostmail.cli.configure_logging") as configure, \
         patch("ghostmail.cli.run", new_callable=AsyncMock) as run:
        assert main(["webhook", "--log-level", "debug"]) == 0

    configure.assert_called_once_with("debug")
    run.assert_awaited_once_with(config, "webhook")
