"""Team logo storage and terminal rendering helpers.

Logos arrive one at a time from the poller and live for the whole process.
The cache is keyed by team abbreviation, so its size is bounded by the
number of distinct teams in one league's slate (well under 100 even for
college football's busiest Saturdays).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Dict, Iterator, List, Optional, Tuple

from PIL import Image
from rich.style import Style
from rich.text import Text

import config
from utils import RGB, rgb

_LOGGER = logging.getLogger(__name__)

UPPER_HALF_BLOCK = "▀"
LOWER_HALF_BLOCK = "▄"


class LogoCache(Mapping[str, Image.Image]):
    """Dictionary-like owner of decoded logos, keyed by team abbreviation."""

    def __init__(self) -> None:
        self._images: Dict[str, Image.Image] = {}

    def put(self, abbreviation: str, image: Image.Image) -> None:
        """Insert or overwrite the logo for *abbreviation*."""

        replaced = abbreviation in self._images
        self._images[abbreviation] = image
        _LOGGER.debug(
            "%s logo for %s (%d cached)",
            "Replaced" if replaced else "Stored",
            abbreviation,
            len(self._images),
        )

    def __getitem__(self, key: str) -> Image.Image:
        return self._images[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._images)

    def __len__(self) -> int:
        return len(self._images)


def sample_logo(
    image: Image.Image,
    columns: int,
    rows: int,
    *,
    alpha_threshold: int = config.LOGO_ALPHA_THRESHOLD,
) -> List[List[Tuple[Optional[RGB], Optional[RGB]]]]:
    """Sample *image* onto a ``columns`` x ``rows`` grid of half-block cells.

    Each cell covers two vertically stacked pixels; a pixel whose alpha is at
    or below *alpha_threshold* is transparent (``None``). The image keeps its
    aspect ratio and is centred in the grid.
    """

    if columns <= 0 or rows <= 0 or image.width <= 0 or image.height <= 0:
        return []

    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    target_h = rows * 2
    scale = min(columns / rgba.width, target_h / rgba.height)
    draw_w = max(1, int(rgba.width * scale))
    draw_h = max(1, int(rgba.height * scale))
    off_x = (columns - draw_w) // 2
    off_y = (target_h - draw_h) // 2

    def _pixel(x: int, y: int) -> Optional[RGB]:
        local_x, local_y = x - off_x, y - off_y
        if not (0 <= local_x < draw_w and 0 <= local_y < draw_h):
            return None
        src_x = min(rgba.width - 1, int(local_x / draw_w * rgba.width))
        src_y = min(rgba.height - 1, int(local_y / draw_h * rgba.height))
        r, g, b, a = rgba.getpixel((src_x, src_y))
        if a <= alpha_threshold:
            return None
        return (r, g, b)

    grid = []
    for row in range(rows):
        grid.append([(_pixel(col, row * 2), _pixel(col, row * 2 + 1)) for col in range(columns)])
    return grid


def _cell(top: Optional[RGB], bottom: Optional[RGB]) -> Tuple[str, Optional[Style]]:
    if top is None and bottom is None:
        return " ", None
    if top is None:
        return LOWER_HALF_BLOCK, Style(color=rgb(bottom))
    if bottom is None:
        return UPPER_HALF_BLOCK, Style(color=rgb(top))
    return UPPER_HALF_BLOCK, Style(color=rgb(top), bgcolor=rgb(bottom))


def logo_lines(
    image: Image.Image, columns: int, rows: int, *, background: Optional[str] = None
) -> List[Text]:
    """Render *image* as ``rows`` lines of half-block characters.

    Transparent cells show *background* (a Rich colour) when given.
    """

    base = Style(bgcolor=background) if background else ""
    lines = []
    for row in sample_logo(image, columns, rows):
        line = Text(style=base, no_wrap=True, overflow="crop")
        for top, bottom in row:
            char, style = _cell(top, bottom)
            line.append(char, style=style)
        lines.append(line)
    return lines
