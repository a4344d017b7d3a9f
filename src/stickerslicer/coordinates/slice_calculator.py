"""
Slice coordinate calculation utilities.

This module turns a grid, a pan offset and the display-to-native scale into
exact source-pixel rectangles, one per grid cell, and derives the names the
resulting tiles and archive are stored under.

Rectangles are never clamped against the image bounds; sampling outside the
source is the rasterizer's concern.
"""

import logging
import re
from typing import Iterator, List, NamedTuple, Optional, Tuple

from stickerslicer.config import (
    ARCHIVE_SUFFIX,
    MIN_INDEX_WIDTH,
    OUTPUT_EXTENSION,
    STICKER_PREFIX,
)
from stickerslicer.models import GridConfig, PanOffset, ViewportMetrics, resolve_pan

logger = logging.getLogger("stickerslicer.coordinates.slice_calculator")

# Trailing extension: a dot followed by anything but dots and slashes
_EXTENSION_RE = re.compile(r"\.[^/.]+$")


class Tile(NamedTuple):
    """One grid cell. index is 1-based in row-major order."""

    row: int
    col: int
    index: int


class SliceRect(NamedTuple):
    """Source region for one tile, in native source-pixel space."""

    sx: float
    sy: float
    width: float
    height: float

    @property
    def box(self) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom) of the rectangle."""
        return self.sx, self.sy, self.sx + self.width, self.sy + self.height

    def is_within(self, width: float, height: float) -> bool:
        """Check whether the rectangle lies entirely inside a width x height source."""
        left, top, right, bottom = self.box
        return left >= 0 and top >= 0 and right <= width and bottom <= height


def iter_tiles(config: GridConfig) -> Iterator[Tile]:
    """Yield every tile of the grid in row-major order (row outer, column inner)."""
    for row in range(config.rows):
        for col in range(config.cols):
            yield Tile(row, col, row * config.cols + col + 1)


def calculate_slice_rects(
    config: GridConfig,
    natural_size: Tuple[float, float],
    pan: Optional[PanOffset] = None,
    metrics: Optional[ViewportMetrics] = None,
) -> List[Tuple[Tile, SliceRect]]:
    """
    Calculate the source rectangle of every tile.

    Args:
        config: Grid to cut the image into
        natural_size: (width, height) of the decoded image in pixels
        pan: Pan offset in display pixels, or None for no pan
        metrics: Viewport metrics the pan was captured with; needed to convert
            the pan into source pixels

    Returns:
        List of (Tile, SliceRect) pairs in row-major order
    """
    natural_width, natural_height = natural_size
    slice_width = natural_width / config.cols
    slice_height = natural_height / config.rows
    source_x_offset, source_y_offset = resolve_pan(pan, metrics)

    slices = []
    for tile in iter_tiles(config):
        rect = SliceRect(
            sx=tile.col * slice_width + source_x_offset,
            sy=tile.row * slice_height + source_y_offset,
            width=slice_width,
            height=slice_height,
        )
        slices.append((tile, rect))

    logger.debug(
        f"Calculated {len(slices)} slices of {slice_width:.2f}x{slice_height:.2f} "
        f"with source offset ({source_x_offset:.2f}, {source_y_offset:.2f})"
    )
    return slices


def index_width(total: int) -> int:
    """Digits used for tile indices: at least 2, more once total exceeds 99."""
    return max(MIN_INDEX_WIDTH, len(str(total)))


def tile_filename(index: int, total: int) -> str:
    """
    Filename for a tile, e.g. sticker_01.png.

    Args:
        index: 1-based row-major tile index
        total: Number of tiles in the export
    """
    return f"{STICKER_PREFIX}{index:0{index_width(total)}d}{OUTPUT_EXTENSION}"


def archive_name(filename: str, fallback: str = "image") -> str:
    """
    Derive the archive filename from the uploaded filename.

    Only the trailing extension is stripped: sheet.PNG -> sheet_sliced.zip,
    pack.v2.jpg -> pack.v2_sliced.zip.
    """
    base = re.split(r"[\\/]", filename)[-1]
    stem = _EXTENSION_RE.sub("", base)
    if not stem:
        stem = fallback
    return f"{stem}{ARCHIVE_SUFFIX}"
