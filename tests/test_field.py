"""Tests for mapping a game situation onto the field strip."""

import io

import pytest
from rich.console import Console

import config
from models import Competitor, Situation, Team
from screens.field import (
    AWAY,
    HOME,
    ColumnSpan,
    FieldLabel,
    FieldPaint,
    FieldStrip,
    compute_field,
    first_down_logical,
    paint_rows,
    possession_side,
    scrimmage_logical,
    yard_to_column,
)

AWAY_TEAM = Competitor(Team("KC", id="12", color="E31837"), "away", "10")
HOME_TEAM = Competitor(Team("CHI", id="3", color="0B162A"), "home", "14")


def _situation(possession="12", yard_line=35, distance=10) -> Situation:
    return Situation(down=1, distance=distance, yard_line=yard_line, possession=possession)


@pytest.mark.parametrize(
    "yard, width, expected",
    [(0, 120, 0), (60, 120, 60), (10, 100, 8), (110, 100, 92), (120, 80, 80), (60, 1, 1)],
)
def test_yard_to_column(yard, width, expected):
    assert yard_to_column(yard, width) == expected


def test_yard_to_column_honours_left_offset():
    assert yard_to_column(60, 120, left=5) == 65


def test_columns_are_monotonic():
    columns = [yard_to_column(yard, 73) for yard in range(121)]
    assert columns == sorted(columns)


def test_scrimmage_and_first_down_direction():
    assert scrimmage_logical(35, AWAY) == 75
    assert scrimmage_logical(35, HOME) == 45
    assert first_down_logical(75, 10, AWAY) == 85
    assert first_down_logical(45, 10, HOME) == 35


def test_possession_matches_team_id():
    assert possession_side(_situation("12"), AWAY_TEAM, HOME_TEAM) == AWAY
    assert possession_side(_situation(" 3 "), AWAY_TEAM, HOME_TEAM) == HOME
    assert possession_side(_situation("99"), AWAY_TEAM, HOME_TEAM) is None
    assert possession_side(_situation(None), AWAY_TEAM, HOME_TEAM) is None
    assert possession_side(None, AWAY_TEAM, HOME_TEAM) is None


def test_away_possession_markers():
    paint = compute_field(_situation("12", 35, 10), AWAY_TEAM, HOME_TEAM, 120)

    assert paint.scrimmage == 75
    assert paint.first_down == 85


def test_home_possession_markers():
    paint = compute_field(_situation("3", 35, 10), AWAY_TEAM, HOME_TEAM, 120)

    assert paint.scrimmage == 45
    assert paint.first_down == 35


def test_end_zones_and_yard_lines():
    paint = compute_field(None, AWAY_TEAM, HOME_TEAM, 120)

    assert (paint.away_zone.start, paint.away_zone.stop) == (0, 10)
    assert (paint.home_zone.start, paint.home_zone.stop) == (110, 120)
    assert paint.away_zone.color == (0xE3, 0x18, 0x37)
    assert paint.yard_lines == tuple(range(20, 101, 10))
    assert paint.scrimmage is None and paint.first_down is None


def test_unknown_possession_hides_markers():
    paint = compute_field(_situation("99"), AWAY_TEAM, HOME_TEAM, 120)
    assert paint.scrimmage is None
    assert paint.first_down is None


def test_markers_hidden_when_not_live():
    paint = compute_field(_situation("12"), AWAY_TEAM, HOME_TEAM, 120, live=False)
    assert paint.scrimmage is None


def test_first_down_suppressed_when_it_shares_scrimmage_column():
    paint = compute_field(_situation("12", 35, 0), AWAY_TEAM, HOME_TEAM, 120)
    assert paint.scrimmage == 75
    assert paint.first_down is None


def test_goal_to_go_first_down_clamped_to_field():
    paint = compute_field(_situation("12", 5, 20), AWAY_TEAM, HOME_TEAM, 120)
    assert paint.scrimmage == 105
    assert paint.first_down is None or 0 <= paint.first_down < 120


def test_neutral_colour_for_bad_team_colour():
    away = Competitor(Team("KC", id="12", color="red"), "away")
    paint = compute_field(None, away, HOME_TEAM, 60)
    assert paint.away_zone.color == config.NEUTRAL_TEAM_COLOR


@pytest.mark.parametrize("width, height", [(19, 6), (0, 6), (40, 1)])
def test_too_small_region_yields_nothing(width, height):
    assert compute_field(None, AWAY_TEAM, HOME_TEAM, width, height) is None


def test_labels_need_room():
    assert compute_field(None, AWAY_TEAM, HOME_TEAM, 20).labels == ()

    labels = compute_field(None, AWAY_TEAM, HOME_TEAM, 60).labels
    assert [label.text for label in labels] == ["KC", "CHI"]
    assert labels[0].column == 1
    assert labels[1].column == 60 - 1 - len("CHI")


def test_paint_rows_dimensions_and_labels():
    paint = compute_field(_situation("12"), AWAY_TEAM, HOME_TEAM, 60)
    rows = paint_rows(paint, 4)

    assert len(rows) == 4
    assert all(row.cell_len == 60 for row in rows)
    assert rows[2].plain[1:3] == "KC"
    assert rows[2].plain.rstrip().endswith("CHI")
    assert "|" in rows[0].plain


def test_field_strip_renders_to_region():
    console = Console(file=io.StringIO(), width=40, height=6, color_system=None, legacy_windows=False)
    lines = console.render_lines(FieldStrip(_situation(), AWAY_TEAM, HOME_TEAM, live=True), console.options.update(height=6))

    assert len(lines) == 6
    assert all(sum(segment.cell_length for segment in line) == 40 for line in lines)


@pytest.mark.parametrize(
    "side, yard_line, expected",
    [(AWAY, 20, 90), (HOME, 20, 30), (AWAY, 50, 60), (HOME, 50, 60), (AWAY, 100, 10), (HOME, 100, 110), (AWAY, 0, 110), (HOME, 0, 10)],
)
def test_scrimmage_logical_law(side, yard_line, expected):
    assert scrimmage_logical(yard_line, side) == expected


@pytest.mark.parametrize("possession, expected", [("12", 90), ("3", 30)])
def test_yard_line_twenty_marker_columns(possession, expected):
    paint = compute_field(_situation(possession, 20, 10), AWAY_TEAM, HOME_TEAM, 120)
    assert paint.scrimmage == expected
    assert paint.first_down == (100 if possession == "12" else 20)


@pytest.mark.parametrize("width", [15, 19, 20])
def test_narrow_strip_draws_no_labels(width):
    paint = compute_field(_situation(), AWAY_TEAM, HOME_TEAM, width)
    assert paint is None or paint.labels == ()


@pytest.mark.parametrize("width", range(21, 31))
def test_labels_stay_inside_their_end_zones(width):
    for situation in (_situation("12", 1, 10), _situation("3", 1, 10), _situation("3", 100, 10)):
        paint = compute_field(situation, AWAY_TEAM, HOME_TEAM, width)
        zones = {"KC": paint.away_zone, "CHI": paint.home_zone}
        for label in paint.labels:
            columns = range(label.column, label.column + len(label.text))
            assert all(column in zones[label.text] for column in columns)
            assert paint.scrimmage not in columns
            assert paint.first_down not in columns


def test_markers_win_over_labels_on_the_label_row():
    paint = FieldPaint(
        width=30,
        away_zone=ColumnSpan(0, 3, (200, 0, 0)),
        home_zone=ColumnSpan(28, 30, (0, 0, 200)),
        yard_lines=(),
        scrimmage=26,
        first_down=2,
        labels=(FieldLabel(1, "KC", (200, 0, 0)), FieldLabel(24, "CHI", (0, 0, 200))),
    )
    label_row = paint_rows(paint, 2)[1]

    assert label_row.plain[1] == "K"
    assert label_row.plain[2] == " "
    assert label_row.plain[24:26] == "CH"
    assert label_row.plain[26] == " "
