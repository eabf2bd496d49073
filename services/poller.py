#!/usr/bin/env python3
"""
poller.py

Background scoreboard poller. Every interval it fetches the league's
scoreboard, downloads logos for teams it has not tried yet, and pushes the
results onto the update channel for the render loop to merge.
"""

import logging
import threading
from typing import Callable, Iterable, List, Optional, Set

from PIL import Image

import config
import data_fetch
from models import Event
from updates import LogoArrived, SnapshotReplaced, UpdateChannel

_LOGGER = logging.getLogger(__name__)

ScoreboardFetcher = Callable[[str], Optional[List[Event]]]
LogoFetcher = Callable[[str], Optional[Image.Image]]


def _logo_requests(events: Iterable[Event], attempted: Set[str]):
    """Yield ``(abbreviation, url)`` for every team not yet attempted."""
    seen: Set[str] = set()
    for event in events:
        for competition in event.competitions:
            for competitor in competition.competitors:
                team = competitor.team
                abbr = team.abbreviation
                if not abbr or not team.logo or abbr in attempted or abbr in seen:
                    continue
                seen.add(abbr)
                yield abbr, team.logo


def poll_once(
    channel: UpdateChannel,
    league: str,
    attempted_logos: Set[str],
    *,
    fetch_scoreboard: Optional[ScoreboardFetcher] = None,
    fetch_logo: Optional[LogoFetcher] = None,
) -> bool:
    """Run one fetch cycle. Returns ``False`` when the scoreboard fetch failed.

    Logos go onto the channel ahead of the snapshot that introduced their
    team. A team is attempted once per session whether or not its logo
    could be fetched.
    """
    fetch_scoreboard = fetch_scoreboard or data_fetch.fetch_scoreboard
    fetch_logo = fetch_logo or data_fetch.fetch_logo

    events = fetch_scoreboard(league)
    if events is None:
        return False

    for abbr, url in list(_logo_requests(events, attempted_logos)):
        attempted_logos.add(abbr)
        try:
            image = fetch_logo(url)
        except Exception:
            _LOGGER.exception("Logo fetch for %s crashed; continuing without it", abbr)
            continue
        if image is None:
            _LOGGER.debug("No logo for %s", abbr)
            continue
        channel.send(LogoArrived(abbr, image))

    channel.send(SnapshotReplaced(tuple(events)))
    return True


class Poller:
    """Owns the poll thread and its stop flag."""

    def __init__(
        self,
        channel: UpdateChannel,
        league: str = config.DEFAULT_LEAGUE,
        interval: float = config.POLL_INTERVAL_SECONDS,
    ) -> None:
        self.channel = channel
        self.league = league
        self.interval = interval
        self.attempted_logos: Set[str] = set()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def _loop(self) -> None:
        _LOGGER.info("📡 Polling %s every %ss", self.league, self.interval)
        while not self._stop_event.is_set():
            try:
                ok = poll_once(self.channel, self.league, self.attempted_logos)
            except Exception:
                _LOGGER.exception("Scoreboard poll crashed; retrying next cycle")
                ok = False
            if not ok:
                _LOGGER.info("⚠️  No scoreboard update this cycle")
            if self._stop_event.wait(self.interval):
                break
        _LOGGER.info("Poller thread exiting")

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="scoreboard-poller", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Ask the thread to finish after its current cycle. Does not join."""
        self._stop_event.set()

    @property
    def running(self) -> bool:
        return bool(self._thread and self._thread.is_alive())


def start_poller(
    channel: UpdateChannel,
    league: str = config.DEFAULT_LEAGUE,
    interval: float = config.POLL_INTERVAL_SECONDS,
) -> Poller:
    poller = Poller(channel, league, interval)
    poller.start()
    return poller
