#!/usr/bin/env python3
"""
data_fetch.py

Remote data fetchers for the ESPN football scoreboard and team logos,
sharing one requests.Session. Every failure is logged and reported as
``None`` so the caller keeps its last good snapshot.
"""

import io
import logging
from typing import Optional

import requests
from PIL import Image, UnidentifiedImageError

from config import ESPN_SCOREBOARD_URL, LOGO_MAX_PIXELS, REQUEST_TIMEOUT
from models import Event, ScoreboardResponse

_LOGGER = logging.getLogger(__name__)

# ─── Shared HTTP session ─────────────────────────────────────────────────────
_HEADERS = {
    "User-Agent": "terminal-scoreboard/1.0",
    "Accept": "application/json",
}

_session: Optional[requests.Session] = None


def get_session() -> requests.Session:
    global _session
    if _session is None:
        _session = requests.Session()
        _session.headers.update(_HEADERS)
    return _session


# -----------------------------------------------------------------------------
# SCOREBOARD
# -----------------------------------------------------------------------------
def scoreboard_url(league: str) -> str:
    return ESPN_SCOREBOARD_URL.format(league=league)


def fetch_scoreboard(league: str) -> Optional[list[Event]]:
    """Return the current events for *league*, or ``None`` on any failure."""

    url = scoreboard_url(league)
    try:
        resp = get_session().get(url, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        payload = resp.json()
        response = ScoreboardResponse.from_dict(payload)
    except requests.RequestException as exc:
        _LOGGER.warning("Scoreboard fetch failed for %s: %s", league, exc)
        return None
    except ValueError as exc:
        _LOGGER.warning("Scoreboard payload for %s unusable: %s", league, exc)
        return None

    _LOGGER.debug("Fetched %d %s event(s)", len(response.events), league)
    return list(response.events)


# -----------------------------------------------------------------------------
# LOGOS
# -----------------------------------------------------------------------------
def decode_logo(data: bytes, max_pixels: int = LOGO_MAX_PIXELS) -> Image.Image:
    """Decode *data* into an RGBA image no larger than *max_pixels* square."""

    with Image.open(io.BytesIO(data)) as img:
        img = img.convert("RGBA")
    img.thumbnail((max_pixels, max_pixels), Image.Resampling.LANCZOS)
    return img


def fetch_logo(url: str) -> Optional[Image.Image]:
    """Download and decode the logo at *url*; ``None`` when anything fails."""

    try:
        resp = get_session().get(url, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        return decode_logo(resp.content)
    except requests.RequestException as exc:
        _LOGGER.warning("Logo fetch failed for %s: %s", url, exc)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        _LOGGER.warning("Logo decode failed for %s: %s", url, exc)
    return None
