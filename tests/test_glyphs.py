"""Tests for choosing between plain and oversized text."""

import pytest

import config
from screens.glyphs import QUADRANT_CHARS, RenderStrategy, choose_text_renderer, glyph_rows, render_text


@pytest.mark.parametrize(
    "width, expected",
    [
        (0, RenderStrategy.PLAIN),
        (config.GLYPH_WIDTH_THRESHOLD - 1, RenderStrategy.PLAIN),
        (config.GLYPH_WIDTH_THRESHOLD, RenderStrategy.GLYPH),
        (200, RenderStrategy.GLYPH),
    ],
)
def test_choose_text_renderer(width, expected):
    assert choose_text_renderer(width) is expected


def test_glyph_rows_are_rectangular_quadrant_blocks():
    rows = glyph_rows("KC")

    assert len(rows) >= 2
    assert len({len(row) for row in rows}) == 1
    assert set("".join(rows)) <= set(QUADRANT_CHARS)
    assert any(ch != " " for ch in "".join(rows))


def test_glyph_rows_blank_text():
    assert glyph_rows("   ") == ()


def test_narrow_region_uses_plain_text():
    lines = render_text("KC", 10)
    assert [line.plain for line in lines] == ["KC"]


def test_wide_region_uses_glyphs():
    lines = render_text("KC", 60)
    assert len(lines) > 1
    assert [line.plain for line in lines] == list(glyph_rows("KC"))


def test_glyphs_fall_back_when_too_tall():
    assert [line.plain for line in render_text("KC", 60, height=1)] == ["KC"]


def test_glyphs_fall_back_when_too_wide():
    text = "TOUCHDOWN CHICAGO BEARS"
    assert max(len(row) for row in glyph_rows(text)) > config.GLYPH_WIDTH_THRESHOLD
    assert [line.plain for line in render_text(text, config.GLYPH_WIDTH_THRESHOLD)] == [text]
