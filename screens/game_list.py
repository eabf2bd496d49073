#!/usr/bin/env python3
"""Sidebar listing the games in the current filtered view."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console, ConsoleOptions, RenderResult
from rich.panel import Panel
from rich.text import Text

import config
from app_state import AppState
from models import Event
from utils import sidebar_status

TITLE_ALL  = " GAMES "
TITLE_LIVE = " LIVE GAMES "


def game_row(event: Event, state: AppState) -> str:
    return f"{event.short_name}  [{sidebar_status(event, state.phase_of(event))}]"


def visible_window(count: int, selected: int, rows: int) -> range:
    """Indices to show so that *selected* stays on screen."""
    if rows <= 0 or count <= 0:
        return range(0)
    if count <= rows:
        return range(count)
    start = min(max(0, selected - rows + 1), count - rows)
    return range(start, start + rows)


class GameList:
    def __init__(self, events: Sequence[Event], state: AppState) -> None:
        self.events = events
        self.state = state

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        rows = options.height or len(self.events)
        lines = []
        for index in visible_window(len(self.events), self.state.selected, rows):
            style = config.SELECTION_STYLE if index == self.state.selected else ""
            line = Text(game_row(self.events[index], self.state), style=style, no_wrap=True)
            line.truncate(options.max_width, overflow="ellipsis", pad=True)
            lines.append(line)
        if lines:
            yield Text("\n").join(lines)


def build_sidebar(events: Sequence[Event], state: AppState) -> Panel:
    title = TITLE_LIVE if state.filter_live else TITLE_ALL
    return Panel(GameList(events, state), title=title, title_align="left")
