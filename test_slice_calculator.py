"""
Tests for the slice rectangle calculation and tile naming.
"""

import pytest

from stickerslicer.coordinates.slice_calculator import (
    SliceRect,
    Tile,
    archive_name,
    calculate_slice_rects,
    iter_tiles,
    tile_filename,
)
from stickerslicer.models import GridConfig, PanOffset, ViewportMetrics


def test_sheet_6x4_without_pan():
    """A 1200x800 sheet cut 6 rows x 4 cols gives 24 tiles of 300x133.33."""
    slices = calculate_slice_rects(GridConfig(rows=6, cols=4), (1200, 800))

    assert len(slices) == 24
    for tile, rect in slices:
        assert rect.width == pytest.approx(300)
        assert rect.height == pytest.approx(800 / 6)

    tile, rect = slices[12]
    assert tile == Tile(row=3, col=0, index=13)
    assert rect.sx == pytest.approx(0)
    assert rect.sy == pytest.approx(400, abs=1e-6)


def test_row_major_order_and_indices():
    slices = calculate_slice_rects(GridConfig(rows=2, cols=3), (300, 200))
    positions = [(tile.row, tile.col) for tile, _ in slices]
    assert positions == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]
    assert [tile.index for tile, _ in slices] == [1, 2, 3, 4, 5, 6]


@pytest.mark.parametrize("rows", [1, 2, 7, 20])
@pytest.mark.parametrize("cols", [1, 3, 13, 20])
def test_zero_pan_formula(rows, cols):
    width, height = 1000, 700
    slices = calculate_slice_rects(
        GridConfig(rows=rows, cols=cols), (width, height), pan=PanOffset(x=0, y=0),
        metrics=ViewportMetrics.identity(width, height),
    )
    assert len(slices) == rows * cols
    for tile, rect in slices:
        assert rect.sx == pytest.approx(tile.col * width / cols)
        assert rect.sy == pytest.approx(tile.row * height / rows)
        assert rect.width == pytest.approx(width / cols)
        assert rect.height == pytest.approx(height / rows)


def test_pan_shifts_every_rect_by_scaled_offset():
    """Displayed at 600x400 (2x scale), a pan of (50, -20) shifts sources by (-100, 40)."""
    config = GridConfig(rows=6, cols=4)
    metrics = ViewportMetrics(
        natural_width=1200, natural_height=800, display_width=600, display_height=400
    )
    base = calculate_slice_rects(config, (1200, 800))
    panned = calculate_slice_rects(
        config, (1200, 800), pan=PanOffset(x=50, y=-20), metrics=metrics
    )

    for (tile, rect), (panned_tile, panned_rect) in zip(base, panned):
        assert tile == panned_tile
        assert panned_rect.sx - rect.sx == pytest.approx(-100)
        assert panned_rect.sy - rect.sy == pytest.approx(40)
        assert panned_rect.width == rect.width
        assert panned_rect.height == rect.height


def test_pan_without_metrics_is_ignored():
    config = GridConfig(rows=2, cols=2)
    assert calculate_slice_rects(
        config, (100, 100), pan=PanOffset(x=30, y=30)
    ) == calculate_slice_rects(config, (100, 100))


def test_rects_are_not_clamped():
    metrics = ViewportMetrics.identity(100, 100)
    slices = calculate_slice_rects(
        GridConfig(rows=1, cols=1), (100, 100), pan=PanOffset(x=250, y=-250), metrics=metrics
    )
    _, rect = slices[0]
    assert rect == SliceRect(sx=-250, sy=250, width=100, height=100)
    assert not rect.is_within(100, 100)


def test_3x3_preset_on_square_sheet():
    slices = calculate_slice_rects(GridConfig.from_preset("3x3"), (900, 900))
    assert [rect for _, rect in slices] == [
        SliceRect(col * 300.0, row * 300.0, 300.0, 300.0)
        for row in range(3)
        for col in range(3)
    ]
    assert [tile_filename(tile.index, 9) for tile, _ in slices] == [
        f"sticker_0{i}.png" for i in range(1, 10)
    ]


def test_iter_tiles_covers_grid():
    tiles = list(iter_tiles(GridConfig(rows=20, cols=20)))
    assert len(tiles) == 400
    assert tiles[-1] == Tile(19, 19, 400)


def test_tile_filename_padding():
    assert tile_filename(1, 24) == "sticker_01.png"
    assert tile_filename(24, 24) == "sticker_24.png"
    assert tile_filename(1, 1) == "sticker_01.png"
    assert tile_filename(99, 99) == "sticker_99.png"
    # Past 99 tiles the width grows so names still sort in order
    assert tile_filename(7, 400) == "sticker_007.png"
    assert tile_filename(400, 400) == "sticker_400.png"


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("sheet.PNG", "sheet_sliced.zip"),
        ("stickers.jpg", "stickers_sliced.zip"),
        ("pack.v2.webp", "pack.v2_sliced.zip"),
        ("noextension", "noextension_sliced.zip"),
        ("/home/user/pics/sheet.png", "sheet_sliced.zip"),
        ("C:\\Users\\me\\sheet.jpeg", "sheet_sliced.zip"),
        (".png", "image_sliced.zip"),
    ],
)
def test_archive_name(filename, expected):
    assert archive_name(filename) == expected
