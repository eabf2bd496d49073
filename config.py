# config.py

#!/usr/bin/env python3
import logging
import os
from pathlib import Path
from typing import Optional

import pytz

# ─── Environment helpers ───────────────────────────────────────────────────────

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))


def _initialise_env() -> None:
    """Load environment variables from `.env` if present."""

    from dotenv import load_dotenv

    candidate_paths = [Path(SCRIPT_DIR) / ".env"]

    cwd_path = Path.cwd() / ".env"
    if cwd_path != candidate_paths[0]:
        candidate_paths.append(cwd_path)

    for path in candidate_paths:
        if not path.is_file():
            continue
        try:
            load_dotenv(path, override=False)
        except Exception as exc:  # pragma: no cover - bad env files
            logging.warning("Failed to load %s with python-dotenv: %s", path, exc)


_ENV_LOADED = False


def _should_load_env() -> bool:
    """Return ``True`` when dotenv files should be loaded."""

    if os.environ.get("SCOREBOARD_SKIP_DOTENV"):
        return False

    # Skip filesystem scans when running under pytest to keep test startup fast.
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return False

    return True


def load_environment() -> None:
    """Load environment variables from `.env` files once, if allowed."""

    global _ENV_LOADED

    if _ENV_LOADED or not _should_load_env():
        return

    _initialise_env()
    _ENV_LOADED = True


load_environment()


def _get_first_env_var(*names: str) -> Optional[str]:
    """Return the first populated environment variable from *names.*"""

    for name in names:
        value = os.environ.get(name)
        if value:
            return value

    return None


def _int_from_env(name: str, default: int) -> int:
    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    try:
        value = int(raw_value)
    except (TypeError, ValueError):
        logging.warning("Invalid %s value %r; using default %d", name, raw_value, default)
        return default
    if value <= 0:
        logging.warning("%s must be greater than zero; using default %d", name, default)
        return default
    return value


def _float_from_env(name: str, default: float) -> float:
    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    try:
        value = float(raw_value)
    except (TypeError, ValueError):
        logging.warning("Invalid %s value %r; using default %s", name, raw_value, default)
        return default
    if value <= 0:
        logging.warning("%s must be greater than zero; using default %s", name, default)
        return default
    return value


def _bool_from_env(name: str, default: bool) -> bool:
    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    normalized = raw_value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    logging.warning("Invalid %s value %r; using default %s", name, raw_value, default)
    return default


def _timezone_from_env(name: str, default: str):
    raw_value = (os.environ.get(name) or default).strip()
    try:
        return pytz.timezone(raw_value)
    except pytz.UnknownTimeZoneError:
        logging.warning("Unknown timezone %r in %s; using %s", raw_value, name, default)
        return pytz.timezone(default)


# ─── Leagues / data provider ───────────────────────────────────────────────────

NFL_LEAGUE  = "nfl"
NCAA_LEAGUE = "college-football"
LEAGUES     = (NFL_LEAGUE, NCAA_LEAGUE)

ESPN_SCOREBOARD_URL = os.environ.get(
    "ESPN_SCOREBOARD_URL",
    "https://site.api.espn.com/apis/site/v2/sports/football/{league}/scoreboard",
)


def _league_from_env() -> str:
    raw_value = (os.environ.get("SCOREBOARD_LEAGUE") or NFL_LEAGUE).strip().lower()
    aliases = {"ncaa": NCAA_LEAGUE, "cfb": NCAA_LEAGUE, "college": NCAA_LEAGUE}
    raw_value = aliases.get(raw_value, raw_value)
    if raw_value not in LEAGUES:
        logging.warning("Unknown SCOREBOARD_LEAGUE %r; using %s", raw_value, NFL_LEAGUE)
        return NFL_LEAGUE
    return raw_value


DEFAULT_LEAGUE        = _league_from_env()
POLL_INTERVAL_SECONDS = _int_from_env("SCOREBOARD_INTERVAL", 15)
REQUEST_TIMEOUT       = _float_from_env("SCOREBOARD_REQUEST_TIMEOUT", 10.0)
LOGO_MAX_PIXELS       = _int_from_env("SCOREBOARD_LOGO_MAX_PIXELS", 96)

# ─── Runtime behaviour ─────────────────────────────────────────────────────────

CHANNEL_CAPACITY   = _int_from_env("SCOREBOARD_CHANNEL_CAPACITY", 100)
INPUT_POLL_SECONDS = _float_from_env("SCOREBOARD_INPUT_POLL_SECONDS", 0.1)
SHOW_LOGOS         = _bool_from_env("SCOREBOARD_SHOW_LOGOS", True)
LOG_FILE           = _get_first_env_var("SCOREBOARD_LOG_FILE") or os.path.join(
    SCRIPT_DIR, "scoreboard.log"
)
LOCAL_TIME         = _timezone_from_env("SCOREBOARD_TZ", "America/Chicago")

# ─── Layout ────────────────────────────────────────────────────────────────────

SIDEBAR_RATIO        = 1   # sidebar : main panel = 1 : 3 (25% / 75%)
MAIN_PANEL_RATIO     = 3
HEADER_HEIGHT        = 16
FIELD_MIN_HEIGHT     = 6
STATUS_BAR_HEIGHT    = 3
HEADER_SIDE_RATIO    = 2   # away : centre : home = 40% / 20% / 40%
HEADER_CENTRE_RATIO  = 1
LOGO_SLOT_WIDTH      = 22

# Below this many columns team abbreviations and scores render as plain text.
GLYPH_WIDTH_THRESHOLD = 25

# Field strip: nothing is painted below FIELD_MIN_WIDTH columns; team labels
# need more than FIELD_LABEL_MIN_WIDTH columns.
FIELD_MIN_WIDTH       = 20
FIELD_MIN_ROWS        = 2
FIELD_LABEL_MIN_WIDTH = 20
FIELD_LABEL_OFFSET    = 1

# Logo pixels with alpha at or below this value are treated as transparent.
LOGO_ALPHA_THRESHOLD = 128

# ─── Colours ───────────────────────────────────────────────────────────────────

NEUTRAL_TEAM_COLOR   = (64, 64, 64)
FIELD_COLOR          = (0, 150, 0)
YARD_LINE_COLOR      = (255, 255, 255)
SCRIMMAGE_COLOR      = (255, 255, 255)
FIRST_DOWN_COLOR     = (255, 215, 0)
LIVE_CLOCK_COLOR     = "red"
IDLE_CLOCK_COLOR     = "grey62"
SELECTION_STYLE      = "bold white on grey23"
BROADCAST_STYLE      = "cyan"
DOWN_DISTANCE_STYLE  = "bold black on white"
