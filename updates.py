#!/usr/bin/env python3
"""
updates.py

The pipe between the background poller and the render loop. The poller
sends snapshot replacements and logo arrivals; the render loop drains
everything available on each tick and merges it into ``AppState``.
"""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass
from typing import List, Sequence, Union

from PIL import Image

import config
from app_state import AppState
from models import Event

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotReplaced:
    events: Sequence[Event]


@dataclass(frozen=True)
class LogoArrived:
    abbreviation: str
    image: Image.Image


Update = Union[SnapshotReplaced, LogoArrived]


class UpdateChannel:
    """Bounded single-producer / single-consumer queue of updates.

    ``send`` blocks while the channel is full, so a slow render loop slows
    the poller down instead of losing updates.
    """

    def __init__(self, capacity: int = config.CHANNEL_CAPACITY) -> None:
        self._queue: "queue.Queue[Update]" = queue.Queue(maxsize=capacity)

    @property
    def capacity(self) -> int:
        return self._queue.maxsize

    def send(self, update: Update) -> None:
        self._queue.put(update)

    def drain(self) -> List[Update]:
        """Return every update currently queued, oldest first, without blocking."""
        pending: List[Update] = []
        while True:
            try:
                pending.append(self._queue.get_nowait())
            except queue.Empty:
                return pending

    def __len__(self) -> int:
        return self._queue.qsize()


# ─── Merge controller ────────────────────────────────────────────────────────

def apply_update(state: AppState, update: Update) -> None:
    """Merge one update into *state*. Selection is left for the list controller."""

    if isinstance(update, SnapshotReplaced):
        if not update.events:
            _LOGGER.debug("Empty snapshot; keeping %d event(s)", len(state.events))
            return
        for event in update.events:
            state.phases.observe(event)
        state.phases.prune(event.key for event in update.events)
        state.events = list(update.events)
    elif isinstance(update, LogoArrived):
        state.logos.put(update.abbreviation, update.image)
    else:
        raise TypeError(f"unsupported update {type(update).__name__}")


def drain_into(state: AppState, channel: UpdateChannel) -> int:
    """Apply every pending update; return how many were applied."""
    updates = channel.drain()
    for update in updates:
        apply_update(state, update)
    return len(updates)
