"""
Grid coordinate calculations.
"""

from stickerslicer.coordinates.slice_calculator import (
    SliceRect,
    Tile,
    archive_name,
    calculate_slice_rects,
    index_width,
    iter_tiles,
    tile_filename,
)

__all__ = [
    "SliceRect",
    "Tile",
    "archive_name",
    "calculate_slice_rects",
    "index_width",
    "iter_tiles",
    "tile_filename",
]
