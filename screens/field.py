#!/usr/bin/env python3
"""
field.py

Schematic football field strip. A game's situation is mapped onto a fixed
120-yard logical field (away end zone 0-10, playing field 10-110, home end
zone 110-120) and every marker column is derived from one linear mapping,
``yard_to_column``, so the drawing stays consistent at any width.

The away team always attacks left → right and the home team right → left.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from rich.console import Console, ConsoleOptions, RenderResult
from rich.style import Style
from rich.text import Text

import config
from models import Competitor, Situation
from utils import RGB, parse_color, rgb

FIELD_LENGTH        = 120.0
AWAY_GOAL_LINE      = 10.0
HOME_GOAL_LINE      = 110.0
YARD_LINE_POSITIONS = tuple(range(20, 101, 10))

AWAY = "away"
HOME = "home"

YARD_LINE_CHAR = "|"


@dataclass(frozen=True)
class ColumnSpan:
    start: int
    stop: int
    color: RGB

    def __contains__(self, column: int) -> bool:
        return self.start <= column < self.stop


@dataclass(frozen=True)
class FieldLabel:
    column: int
    text: str
    color: RGB


@dataclass(frozen=True)
class FieldPaint:
    """Column-indexed paint instructions for one field strip."""

    width: int
    away_zone: ColumnSpan
    home_zone: ColumnSpan
    yard_lines: Tuple[int, ...]
    scrimmage: Optional[int] = None
    first_down: Optional[int] = None
    labels: Tuple[FieldLabel, ...] = ()


# ─── Coordinate mapping ──────────────────────────────────────────────────────

def yard_to_column(logical_yard: float, width: int, left: int = 0) -> int:
    """Map a logical yard in [0, 120] onto a terminal column (round half up)."""
    return left + int(math.floor(logical_yard / FIELD_LENGTH * width + 0.5))


def _visible(column: int, width: int) -> Optional[int]:
    return column if 0 <= column < width else None


def possession_side(
    situation: Optional[Situation], away: Competitor, home: Competitor
) -> Optional[str]:
    """Which side holds the ball, matched on team id; ``None`` when unknown."""
    if situation is None or not situation.possession:
        return None
    possession = situation.possession.strip()
    if away.team.id and away.team.id.strip() == possession:
        return AWAY
    if home.team.id and home.team.id.strip() == possession:
        return HOME
    return None


def scrimmage_logical(yard_line: float, side: str) -> float:
    """Absolute logical yard of the line of scrimmage.

    ``yard_line`` is the distance the offence still has to travel to the
    opposing goal line.
    """
    if side == AWAY:
        return HOME_GOAL_LINE - yard_line
    return AWAY_GOAL_LINE + yard_line


def first_down_logical(scrimmage: float, distance: float, side: str) -> float:
    """Logical yard of the line to gain, ``distance`` yards downfield."""
    if side == AWAY:
        return scrimmage + distance
    return scrimmage - distance


def _clamp_logical(value: float) -> float:
    return min(FIELD_LENGTH, max(0.0, value))


# ─── Paint computation ───────────────────────────────────────────────────────

def compute_field(
    situation: Optional[Situation],
    away: Competitor,
    home: Competitor,
    width: int,
    height: int = config.FIELD_MIN_ROWS,
    *,
    live: bool = True,
) -> Optional[FieldPaint]:
    """Work out every column to paint, or ``None`` when the strip is too small.

    Scrimmage and first-down markers are produced only for a *live* game with
    a situation whose possession can be resolved; pre-game and final games
    show the bare field even if the feed still carries a stale situation.
    """
    if width < config.FIELD_MIN_WIDTH or height < config.FIELD_MIN_ROWS:
        return None

    away_color = parse_color(away.team.color)
    home_color = parse_color(home.team.color)

    away_zone = ColumnSpan(0, min(width, yard_to_column(AWAY_GOAL_LINE, width)), away_color)
    home_zone = ColumnSpan(min(width, yard_to_column(HOME_GOAL_LINE, width)), width, home_color)

    yard_lines = tuple(
        column
        for column in (yard_to_column(yard, width) for yard in YARD_LINE_POSITIONS)
        if _visible(column, width) is not None
    )

    scrimmage = first_down = None
    side = possession_side(situation, away, home) if live else None
    if side is not None and situation is not None and situation.yard_line is not None:
        logical = _clamp_logical(scrimmage_logical(situation.yard_line, side))
        scrimmage = _visible(yard_to_column(logical, width), width)

        if situation.distance is not None:
            target = _clamp_logical(first_down_logical(logical, situation.distance, side))
            first_down = _visible(yard_to_column(target, width), width)
            if first_down == scrimmage:
                first_down = None

    labels: List[FieldLabel] = []
    if width > config.FIELD_LABEL_MIN_WIDTH:
        # Each label stays inside its own end zone or is left out.
        away_label = away.team.abbreviation
        if away_label and config.FIELD_LABEL_OFFSET + len(away_label) <= away_zone.stop:
            labels.append(FieldLabel(config.FIELD_LABEL_OFFSET, away_label, away_color))
        home_label = home.team.abbreviation
        home_column = width - config.FIELD_LABEL_OFFSET - len(home_label)
        if home_label and home_column >= home_zone.start:
            labels.append(FieldLabel(home_column, home_label, home_color))

    return FieldPaint(
        width=width,
        away_zone=away_zone,
        home_zone=home_zone,
        yard_lines=yard_lines,
        scrimmage=scrimmage,
        first_down=first_down,
        labels=tuple(labels),
    )


# ─── Rendering ───────────────────────────────────────────────────────────────

def _base_cell(paint: FieldPaint, column: int) -> Tuple[str, Style]:
    # Scrimmage wins over the line to gain, and both sit on top of the turf.
    if column == paint.scrimmage:
        return " ", Style(bgcolor=rgb(config.SCRIMMAGE_COLOR))
    if column == paint.first_down:
        return " ", Style(bgcolor=rgb(config.FIRST_DOWN_COLOR))
    if column in paint.away_zone:
        return " ", Style(bgcolor=rgb(paint.away_zone.color))
    if column in paint.home_zone:
        return " ", Style(bgcolor=rgb(paint.home_zone.color))
    if column in paint.yard_lines:
        return YARD_LINE_CHAR, Style(color=rgb(config.YARD_LINE_COLOR), bgcolor=rgb(config.FIELD_COLOR))
    return " ", Style(bgcolor=rgb(config.FIELD_COLOR))


def _label_cells(labels: Iterable[FieldLabel], width: int) -> dict:
    cells = {}
    for label in labels:
        style = Style(color="white", bold=True, bgcolor=rgb(label.color))
        for offset, char in enumerate(label.text):
            column = label.column + offset
            if 0 <= column < width:
                cells[column] = (char, style)
    return cells


def paint_rows(paint: FieldPaint, height: int) -> List[Text]:
    """Turn paint instructions into ``height`` rows of styled text."""
    base = [_base_cell(paint, column) for column in range(paint.width)]
    label_row = height // 2
    label_cells = _label_cells(paint.labels, paint.width)
    markers = {paint.scrimmage, paint.first_down}

    rows = []
    for row in range(height):
        line = Text(no_wrap=True, overflow="crop")
        for column, (char, style) in enumerate(base):
            if row == label_row and column in label_cells and column not in markers:
                char, style = label_cells[column]
            line.append(char, style=style)
        rows.append(line)
    return rows


class FieldStrip:
    """Rich renderable that sizes the field to the region it is given."""

    def __init__(
        self,
        situation: Optional[Situation],
        away: Competitor,
        home: Competitor,
        *,
        live: bool,
    ) -> None:
        self.situation = situation
        self.away = away
        self.home = home
        self.live = live

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        width = options.max_width
        height = options.height or config.FIELD_MIN_HEIGHT
        paint = compute_field(
            self.situation, self.away, self.home, width, height, live=self.live
        )
        if paint is None:
            return
        yield Text("\n", no_wrap=True, overflow="crop").join(paint_rows(paint, height))
