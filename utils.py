#!/usr/bin/env python3
"""
utils.py

Core utilities for the scoreboard:
- Logging decorator
- Team colour parsing
- Rich colour/style helpers
- Game status and field-position text
"""
import datetime
import functools
import logging
import re
from typing import Optional, Tuple

import config
from models import Event, GameState

RGB = Tuple[int, int, int]

_HEX_COLOR_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")


# ─── Logging decorator ──────────────────────────────────────────────────────
def log_call(func):
    """
    Decorator that logs entry & exit at DEBUG level only.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logging.debug(f"→ {func.__name__}()")
        result = func(*args, **kwargs)
        logging.debug(f"← {func.__name__}()")
        return result
    return wrapper


# ─── Colours ────────────────────────────────────────────────────────────────
def parse_color(value: Optional[str], default: RGB = config.NEUTRAL_TEAM_COLOR) -> RGB:
    """Parse a 6-hex-digit team colour (``"E31837"`` or ``"#E31837"``).

    Missing or malformed values return *default*.
    """
    if not isinstance(value, str):
        return default
    match = _HEX_COLOR_RE.match(value.strip())
    if not match:
        return default
    digits = match.group(1)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb(color: RGB) -> str:
    """Rich colour string for an RGB triple."""
    r, g, b = color
    return f"rgb({r},{g},{b})"


# ─── Status text ────────────────────────────────────────────────────────────
def parse_event_date(value: Optional[str]) -> Optional[datetime.datetime]:
    """Parse ESPN's ISO kickoff (``2024-09-08T17:00Z``) into local time."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed.astimezone(config.LOCAL_TIME)


def format_kickoff(start_local: datetime.datetime) -> str:
    time_text = start_local.strftime("%I:%M %p").lstrip("0")
    return f"{start_local.strftime('%a')} {time_text}"


def sidebar_status(event: Event, phase: GameState) -> str:
    """Short status shown beside each game in the list."""
    if phase is GameState.POST:
        return "Final"
    if phase is GameState.IN:
        return event.status.display_clock or "Live"
    start_local = parse_event_date(event.date)
    if start_local is not None:
        return format_kickoff(start_local)
    return "Pre"


def yard_line_text(yard_line: int) -> str:
    """Describe a distance-to-goal as the possessing team sees it."""
    if yard_line > 50:
        return f"OWN {100 - yard_line}"
    if yard_line == 50:
        return "MID"
    return f"OPP {yard_line}"
