"""Tests covering environment overrides in ``config``."""

import importlib
import logging
from typing import Dict

import pytest

import config as config_module

_ENV_VARS = [
    "SCOREBOARD_LEAGUE",
    "SCOREBOARD_INTERVAL",
    "SCOREBOARD_REQUEST_TIMEOUT",
    "SCOREBOARD_SHOW_LOGOS",
    "SCOREBOARD_TZ",
    "SCOREBOARD_LOG_FILE",
]


@pytest.fixture
def reload_config(monkeypatch):
    """Reload ``config`` with the provided environment overrides."""

    def _reload(overrides: Dict[str, str]):
        monkeypatch.setenv("SCOREBOARD_SKIP_DOTENV", "1")
        for key in _ENV_VARS:
            monkeypatch.delenv(key, raising=False)
        for key, value in overrides.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(config_module)

    yield _reload

    monkeypatch.undo()
    importlib.reload(config_module)


def test_defaults(reload_config):
    config = reload_config({})

    assert config.DEFAULT_LEAGUE == config.NFL_LEAGUE
    assert config.POLL_INTERVAL_SECONDS == 15
    assert config.REQUEST_TIMEOUT == 10.0
    assert config.SHOW_LOGOS is True
    assert config.LOCAL_TIME.zone == "America/Chicago"
    assert config.LOG_FILE.endswith("scoreboard.log")


@pytest.mark.parametrize("alias", ["college-football", "ncaa", "CFB", " college "])
def test_league_aliases(reload_config, alias):
    config = reload_config({"SCOREBOARD_LEAGUE": alias})
    assert config.DEFAULT_LEAGUE == config.NCAA_LEAGUE


def test_unknown_league_falls_back_to_nfl(reload_config, caplog):
    caplog.set_level(logging.WARNING)
    config = reload_config({"SCOREBOARD_LEAGUE": "xfl"})

    assert config.DEFAULT_LEAGUE == config.NFL_LEAGUE
    assert "Unknown SCOREBOARD_LEAGUE" in " ".join(caplog.messages)


@pytest.mark.parametrize("raw", ["soon", "0", "-5"])
def test_invalid_interval_uses_default(reload_config, caplog, raw):
    caplog.set_level(logging.WARNING)
    config = reload_config({"SCOREBOARD_INTERVAL": raw})

    assert config.POLL_INTERVAL_SECONDS == 15
    assert "SCOREBOARD_INTERVAL" in " ".join(caplog.messages)


def test_valid_overrides(reload_config):
    config = reload_config(
        {
            "SCOREBOARD_INTERVAL": "30",
            "SCOREBOARD_REQUEST_TIMEOUT": "2.5",
            "SCOREBOARD_SHOW_LOGOS": "off",
            "SCOREBOARD_TZ": "America/New_York",
            "SCOREBOARD_LOG_FILE": "/tmp/board.log",
        }
    )

    assert config.POLL_INTERVAL_SECONDS == 30
    assert config.REQUEST_TIMEOUT == 2.5
    assert config.SHOW_LOGOS is False
    assert config.LOCAL_TIME.zone == "America/New_York"
    assert config.LOG_FILE == "/tmp/board.log"


def test_bad_bool_and_timezone_fall_back(reload_config):
    config = reload_config({"SCOREBOARD_SHOW_LOGOS": "maybe", "SCOREBOARD_TZ": "Mars/Olympus"})

    assert config.SHOW_LOGOS is True
    assert config.LOCAL_TIME.zone == "America/Chicago"


def test_scoreboard_url_template():
    assert config_module.ESPN_SCOREBOARD_URL.format(league="nfl").endswith(
        "/sports/football/nfl/scoreboard"
    )
