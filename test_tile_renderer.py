"""
Tests for drawing and encoding individual tiles.
"""

import io

import numpy as np
import pytest
from PIL import Image

from stickerslicer.coordinates.slice_calculator import SliceRect, calculate_slice_rects
from stickerslicer.errors import EncodeError, SurfaceError
from stickerslicer.image_ops import Raster
from stickerslicer.models import GridConfig, PanOffset, ViewportMetrics
from stickerslicer.rendering.tile_renderer import DrawingSurface, TileRasterizer


def decode_png(data):
    with Image.open(io.BytesIO(data)) as img:
        assert img.format == "PNG"
        return img.convert("RGBA")


def test_tile_matches_source_region(make_image):
    source = make_image(120, 90)
    rasterizer = TileRasterizer(Raster(source))

    tile = decode_png(rasterizer.render(SliceRect(30, 60, 30, 30)))

    assert tile.size == (30, 30)
    assert np.array_equal(np.asarray(tile), np.asarray(source.crop((30, 60, 60, 90))))


def test_reassembled_tiles_reproduce_source(make_image):
    """Tiles pasted back at (col*w, row*h) rebuild the original image."""
    source = make_image(120, 90)
    config = GridConfig(rows=3, cols=4)
    rasterizer = TileRasterizer(Raster(source))
    canvas = Image.new("RGBA", source.size)

    for tile, rect in calculate_slice_rects(config, source.size):
        canvas.paste(decode_png(rasterizer.render(rect)), (int(rect.sx), int(rect.sy)))

    assert np.array_equal(np.asarray(canvas), np.asarray(source))


def test_fractional_slices_are_truncated(make_image):
    source = make_image(100, 100)
    rasterizer = TileRasterizer(Raster(source))
    sizes = {
        decode_png(rasterizer.render(rect)).size
        for _, rect in calculate_slice_rects(GridConfig(rows=3, cols=3), source.size)
    }
    assert sizes == {(33, 33)}


def test_outside_source_is_transparent(make_image):
    """Dragging right by 10 display px leaves a transparent 10 px strip on the left."""
    source = make_image(40, 40)
    metrics = ViewportMetrics.identity(40, 40)
    (_, rect), = calculate_slice_rects(
        GridConfig(rows=1, cols=1), source.size, pan=PanOffset(x=10, y=-5), metrics=metrics
    )
    tile = np.asarray(decode_png(TileRasterizer(Raster(source)).render(rect)))
    expected = np.asarray(source)

    assert tile.shape == (40, 40, 4)
    assert (tile[:, :10, 3] == 0).all()
    assert (tile[35:, :, 3] == 0).all()
    assert np.array_equal(tile[:35, 10:], expected[5:, :30])


def test_surface_is_reused_between_equal_tiles(make_image):
    rasterizer = TileRasterizer(Raster(make_image(60, 60)))
    rasterizer.render(SliceRect(0, 0, 30, 30))
    first_surface = rasterizer.surface.image
    rasterizer.render(SliceRect(30, 30, 30, 30))
    assert rasterizer.surface.image is first_surface


def test_surface_is_cleared_between_tiles(make_image):
    """A tile that is fully outside the source must not show the previous tile."""
    rasterizer = TileRasterizer(Raster(make_image(20, 20)))
    rasterizer.render(SliceRect(0, 0, 20, 20))
    empty = decode_png(rasterizer.render(SliceRect(500, 500, 20, 20)))
    assert (np.asarray(empty)[..., 3] == 0).all()


def test_subpixel_surface_raises(make_image):
    rasterizer = TileRasterizer(Raster(make_image(10, 10)))
    with pytest.raises(SurfaceError):
        rasterizer.render(SliceRect(0, 0, 0.5, 10))


def test_released_raster_raises(make_image):
    raster = Raster(make_image(10, 10))
    rasterizer = TileRasterizer(raster)
    raster.close()
    with pytest.raises(SurfaceError):
        rasterizer.render(SliceRect(0, 0, 5, 5))


def test_unsized_surface_cannot_encode():
    with pytest.raises(EncodeError):
        DrawingSurface().encode()


def test_unknown_format_raises_encode_error(make_image):
    rasterizer = TileRasterizer(Raster(make_image(10, 10)), image_format="NOT-A-FORMAT")
    with pytest.raises(EncodeError):
        rasterizer.render(SliceRect(0, 0, 10, 10))


def test_out_of_bounds_slice_logs_warning(make_image, caplog):
    source = make_image(20, 20)
    rect = SliceRect(sx=-5, sy=0, width=20, height=20)

    with caplog.at_level("WARNING", logger="stickerslicer.rendering.tile_renderer"):
        TileRasterizer(Raster(source)).render(rect)

    assert any(
        r.levelname == "WARNING" and "extends past the source" in r.getMessage()
        for r in caplog.records
    )
