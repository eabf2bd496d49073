#!/usr/bin/env python3
"""Plain and oversized text rendering for scoreboard labels.

Oversized glyphs are produced by rasterising the text with Pillow's built-in
font and packing every 2x2 pixel block into one quadrant block character,
so a three-letter abbreviation becomes a banner several rows tall.
"""

from __future__ import annotations

import enum
from functools import lru_cache
from typing import List, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont
from rich.style import Style
from rich.text import Text

import config

# Index = top-left | top-right << 1 | bottom-left << 2 | bottom-right << 3
QUADRANT_CHARS = " ▘▝▀▖▌▞▛▗▚▐▜▄▙▟█"


class RenderStrategy(enum.Enum):
    PLAIN = "plain"
    GLYPH = "glyph"


def choose_text_renderer(width: int) -> RenderStrategy:
    """Pick the text strategy for a region *width* columns wide."""
    if width < config.GLYPH_WIDTH_THRESHOLD:
        return RenderStrategy.PLAIN
    return RenderStrategy.GLYPH


@lru_cache(maxsize=1)
def _font():
    return ImageFont.load_default()


@lru_cache(maxsize=256)
def glyph_rows(text: str) -> Tuple[str, ...]:
    """Rasterise *text* into rows of quadrant block characters."""
    if not text.strip():
        return ()
    font = _font()
    left, top, right, bottom = font.getbbox(text)
    width, height = right - left, bottom - top
    if width <= 0 or height <= 0:
        return ()

    canvas = Image.new("L", (width + width % 2, height + height % 2), 0)
    ImageDraw.Draw(canvas).text((-left, -top), text, font=font, fill=255)
    pixels = canvas.load()

    rows = []
    for y in range(0, canvas.height, 2):
        chars = []
        for x in range(0, canvas.width, 2):
            index = (
                (1 if pixels[x, y] > 127 else 0)
                | (2 if pixels[x + 1, y] > 127 else 0)
                | (4 if pixels[x, y + 1] > 127 else 0)
                | (8 if pixels[x + 1, y + 1] > 127 else 0)
            )
            chars.append(QUADRANT_CHARS[index])
        rows.append("".join(chars))
    return tuple(rows)


def render_text(
    text: str,
    width: int,
    style: Union[str, Style] = "bold white",
    height: Optional[int] = None,
) -> List[Text]:
    """Lines for *text* in a region *width* columns (and *height* rows), centred.

    Glyphs that would not fit the region fall back to plain text.
    """
    if choose_text_renderer(width) is RenderStrategy.GLYPH:
        rows = glyph_rows(text)
        fits_height = height is None or len(rows) <= height
        if rows and fits_height and max(len(row) for row in rows) <= width:
            return [Text(row, style=style, justify="center", no_wrap=True) for row in rows]
    return [Text(text, style=style, justify="center", no_wrap=True, overflow="ellipsis")]

