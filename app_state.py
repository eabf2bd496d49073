#!/usr/bin/env python3
"""
app_state.py

Application state owned by the render loop, plus the list/filter controller
that navigates it. The selection index always refers to the *filtered* view
and is re-clamped lazily whenever that view is read for rendering.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

import config
from logos import LogoCache
from models import Event, GameState

_LOGGER = logging.getLogger(__name__)


class Command(enum.Enum):
    QUIT = "quit"
    NEXT = "next"
    PREVIOUS = "previous"
    TOGGLE_FILTER = "toggle_filter"
    TOGGLE_LOGOS = "toggle_logos"


class PhaseLedger:
    """Remembers the furthest state each game has reached this session.

    Games only move ``pre → in → post``; a feed that briefly reports an
    earlier state for a game is ignored.
    """

    def __init__(self) -> None:
        self._phases: Dict[str, GameState] = {}

    def observe(self, event: Event) -> GameState:
        incoming = event.status.state
        known = self._phases.get(event.key)
        if known is not None and incoming.rank < known.rank:
            _LOGGER.debug(
                "Ignoring %s → %s regression for %s",
                known.value,
                incoming.value,
                event.key,
            )
            return known
        self._phases[event.key] = incoming
        return incoming

    def phase_of(self, event: Event) -> GameState:
        return self._phases.get(event.key, event.status.state)

    def prune(self, live_keys: Iterable[str]) -> int:
        """Forget finished games missing from *live_keys*; return how many went."""
        live = set(live_keys)
        stale = [key for key, phase in self._phases.items() if phase is GameState.POST and key not in live]
        for key in stale:
            del self._phases[key]
        return len(stale)

    def __len__(self) -> int:
        return len(self._phases)


@dataclass
class AppState:
    events: List[Event] = field(default_factory=list)
    selected: int = 0
    filter_live: bool = False
    show_logos: bool = config.SHOW_LOGOS
    logos: LogoCache = field(default_factory=LogoCache)
    phases: PhaseLedger = field(default_factory=PhaseLedger)
    should_quit: bool = False

    def phase_of(self, event: Event) -> GameState:
        return self.phases.phase_of(event)


# ─── List & filter controller ────────────────────────────────────────────────

def filtered_view(state: AppState) -> List[Event]:
    """Games eligible for display: all of them, or only live ones."""

    if not state.filter_live:
        return list(state.events)
    return [event for event in state.events if state.phase_of(event) is GameState.IN]


def clamp_selection(state: AppState, view: Optional[Sequence[Event]] = None) -> int:
    """Pull the selection back inside the current filtered view."""

    if view is None:
        view = filtered_view(state)
    if not view:
        state.selected = 0
    elif state.selected >= len(view):
        state.selected = len(view) - 1
    elif state.selected < 0:
        state.selected = 0
    return state.selected


def selected_event(state: AppState) -> Optional[Event]:
    view = filtered_view(state)
    if not view:
        return None
    return view[clamp_selection(state, view)]


def select_next(state: AppState) -> None:
    view = filtered_view(state)
    if not view:
        return
    clamp_selection(state, view)
    state.selected = (state.selected + 1) % len(view)


def select_previous(state: AppState) -> None:
    view = filtered_view(state)
    if not view:
        return
    clamp_selection(state, view)
    state.selected = (state.selected - 1) % len(view)


def toggle_filter(state: AppState) -> None:
    state.filter_live = not state.filter_live
    state.selected = 0
    _LOGGER.info("Live filter %s", "on" if state.filter_live else "off")


def toggle_logos(state: AppState) -> None:
    state.show_logos = not state.show_logos
    _LOGGER.info("Logos %s", "shown" if state.show_logos else "hidden")


def handle_command(state: AppState, command: Command) -> None:
    if command is Command.QUIT:
        state.should_quit = True
    elif command is Command.NEXT:
        select_next(state)
    elif command is Command.PREVIOUS:
        select_previous(state)
    elif command is Command.TOGGLE_FILTER:
        toggle_filter(state)
    elif command is Command.TOGGLE_LOGOS:
        toggle_logos(state)
