#!/usr/bin/env python3
"""
scoreboard.py

Compose the whole screen: the game list on the left and, for the selected
game, a header (teams, scores, logos, clock), the field strip, a status bar
and the last play.

Layout of the main panel (rows):
    header   16
    field    flexible, at least 6
    spacer   1
    status   3
    details  rest
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from PIL import Image
from rich import box
from rich.console import Console, ConsoleOptions, RenderableType, RenderResult
from rich.layout import Layout
from rich.panel import Panel
from rich.text import Text

import config
from app_state import AppState, filtered_view, selected_event
from logos import logo_lines
from models import Competition, Competitor, Event, GameState
from screens.field import AWAY, HOME, FieldStrip, possession_side
from screens.game_list import build_sidebar
from screens.glyphs import render_text
from utils import log_call, parse_color, rgb, yard_line_text

FOOTBALL = "🏈"
NO_GAME_MESSAGE = "No game selected"


@dataclass(frozen=True)
class Matchup:
    """The selected game resolved into its two sides."""

    event: Event
    competition: Competition
    away: Competitor
    home: Competitor
    phase: GameState

    @property
    def live(self) -> bool:
        return self.phase is GameState.IN

    @property
    def possession(self) -> Optional[str]:
        if not self.live:
            return None
        return possession_side(self.competition.situation, self.away, self.home)


def resolve_matchup(event: Event, state: AppState) -> Optional[Matchup]:
    """``None`` when the game lacks a competition or a home/away competitor."""
    competition = event.competition
    if competition is None:
        return None
    away, home = competition.away, competition.home
    if away is None or home is None:
        return None
    return Matchup(event, competition, away, home, state.phase_of(event))


def logo_slot_width(state: AppState, abbreviation: str) -> int:
    """Columns reserved for a team logo; zero collapses the slot."""
    if state.show_logos and abbreviation in state.logos:
        return config.LOGO_SLOT_WIDTH
    return 0


# ─── Header ──────────────────────────────────────────────────────────────────

def _fit(lines: List[Text], width: int, height: int, style: str) -> List[Text]:
    """Centre *lines* in a ``width`` x ``height`` block filled with *style*."""
    if height <= 0:
        return []
    lines = lines[:height]
    top = (height - len(lines)) // 2
    block = [Text(" " * width, style=style) for _ in range(top)]
    for line in lines:
        line = line.copy()
        line.style = style
        line.align("center", width)
        block.append(line)
    while len(block) < height:
        block.append(Text(" " * width, style=style))
    return block


def team_block_lines(
    competitor: Competitor,
    side: str,
    width: int,
    height: int,
    *,
    logo: Optional[Image.Image] = None,
    logo_width: int = 0,
    has_ball: bool = False,
) -> List[Text]:
    """Rows for one side of the header: abbreviation, score, possession.

    The away logo sits on the left edge and the home logo on the right.
    Abbreviation and score each pick plain or oversized text for the width
    left over once the logo slot is taken.
    """
    if width <= 0 or height <= 0:
        return []
    background = rgb(parse_color(competitor.team.color))
    style = f"bold white on {background}"
    if logo is None or logo_width >= width:
        logo_width = 0
    text_width = width - logo_width

    name_rows = height * 40 // 100
    score_rows = height * 40 // 100

    column: List[Text] = _fit([], text_width, 1, style)
    column += _fit(
        render_text(competitor.team.abbreviation, text_width, style, name_rows),
        text_width, name_rows, style,
    )
    column += _fit(
        render_text(competitor.score_text, text_width, style, score_rows),
        text_width, score_rows, style,
    )
    column += _fit([Text(FOOTBALL if has_ball else "")], text_width, 1, style)
    column += _fit([], text_width, height - len(column), style)
    column = column[:height]

    if not logo_width:
        return column

    art = logo_lines(logo, logo_width, height, background=background)
    rows = []
    for index, text_row in enumerate(column):
        art_row = art[index] if index < len(art) else Text(" " * logo_width, style=style)
        rows.append(Text.assemble(art_row, text_row) if side == AWAY else Text.assemble(text_row, art_row))
    return rows


class TeamBlock:
    def __init__(self, competitor: Competitor, side: str, state: AppState, *, has_ball: bool) -> None:
        self.competitor = competitor
        self.side = side
        self.state = state
        self.has_ball = has_ball

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        abbreviation = self.competitor.team.abbreviation
        logo_width = logo_slot_width(self.state, abbreviation)
        lines = team_block_lines(
            self.competitor,
            self.side,
            options.max_width,
            options.height or config.HEADER_HEIGHT,
            logo=self.state.logos.get(abbreviation) if logo_width else None,
            logo_width=logo_width,
            has_ball=self.has_ball,
        )
        yield Text("\n", no_wrap=True).join(lines)


def centre_text(matchup: Matchup) -> Text:
    status = matchup.event.status
    clock_color = config.LIVE_CLOCK_COLOR if matchup.live else config.IDLE_CLOCK_COLOR
    if matchup.phase is GameState.IN:
        clock, period = status.display_clock, f"Q{status.period}"
    else:
        clock, period = status.type.short_detail or status.display_clock, ""

    text = Text(justify="center")
    text.append("\n")
    text.append("VS", style="italic")
    text.append("\n\n")
    text.append(clock, style=f"bold {clock_color}")
    text.append("\n")
    text.append(period)
    return text


def build_header(matchup: Matchup, state: AppState) -> Layout:
    possession = matchup.possession
    header = Layout(name="header", size=config.HEADER_HEIGHT)
    header.split_row(
        Layout(
            TeamBlock(matchup.away, AWAY, state, has_ball=possession == AWAY),
            name="away",
            ratio=config.HEADER_SIDE_RATIO,
        ),
        Layout(centre_text(matchup), name="centre", ratio=config.HEADER_CENTRE_RATIO),
        Layout(
            TeamBlock(matchup.home, HOME, state, has_ball=possession == HOME),
            name="home",
            ratio=config.HEADER_SIDE_RATIO,
        ),
    )
    return header


# ─── Status bar & details ────────────────────────────────────────────────────

def status_line(matchup: Matchup) -> Text:
    line = Text(no_wrap=True, overflow="ellipsis")
    situation = matchup.competition.situation if matchup.live else None

    if situation is not None:
        if situation.short_down_distance_text:
            line.append(f" {situation.short_down_distance_text} ", style=config.DOWN_DISTANCE_STYLE)
        possession = matchup.possession
        if possession is not None:
            holder = matchup.away if possession == AWAY else matchup.home
            line.append(f"  Possession: {holder.team.abbreviation}")
        if situation.yard_line is not None:
            line.append(f"  at {yard_line_text(situation.yard_line)}")
    else:
        status_type = matchup.event.status.type
        line.append(f"  {status_type.detail or status_type.short_detail}")

    names = matchup.competition.broadcast_names
    if names:
        line.append(f"  [TV: {', '.join(names)}]", style=config.BROADCAST_STYLE)
    return line


def details_text(matchup: Matchup) -> Optional[Text]:
    situation = matchup.competition.situation
    if not matchup.live or situation is None or situation.last_play is None:
        return None
    text = Text()
    text.append("Last Play", style="underline")
    text.append("\n\n")
    text.append(situation.last_play.text)
    return text


# ─── Composition ─────────────────────────────────────────────────────────────

def build_game_body(matchup: Matchup, state: AppState) -> Layout:
    body = Layout(name="game")
    details = details_text(matchup)
    body.split_column(
        build_header(matchup, state),
        Layout(
            FieldStrip(matchup.competition.situation, matchup.away, matchup.home, live=matchup.live),
            name="field",
            ratio=1,
            minimum_size=config.FIELD_MIN_HEIGHT,
        ),
        Layout(Text(""), name="spacer", size=1),
        Layout(
            Panel(status_line(matchup), box=box.HORIZONTALS, padding=0),
            name="status",
            size=config.STATUS_BAR_HEIGHT,
        ),
        Layout(details if details is not None else Text(""), name="details", ratio=1),
    )
    return body


def build_main_panel(state: AppState) -> Panel:
    event = selected_event(state)
    if event is None:
        return Panel(Text(NO_GAME_MESSAGE, justify="center"))

    matchup = resolve_matchup(event, state)
    content: RenderableType = build_game_body(matchup, state) if matchup else Text("")
    return Panel(content)


@log_call
def compose_screen(state: AppState) -> Layout:
    """Build the full-screen layout for the current state."""
    view = filtered_view(state)
    selected_event(state)  # re-clamp before the sidebar reads the index

    root = Layout(name="root")
    root.split_row(
        Layout(build_sidebar(view, state), name="sidebar", ratio=config.SIDEBAR_RATIO),
        Layout(build_main_panel(state), name="main", ratio=config.MAIN_PANEL_RATIO),
    )
    return root
