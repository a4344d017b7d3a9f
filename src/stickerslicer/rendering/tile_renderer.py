"""
Tile rendering functionality.

Each slice rectangle is drawn 1:1 onto a single reusable RGBA surface and
encoded to PNG. The surface is shared by every tile of one export, so tiles
must be rendered strictly one after another.
"""

import io
import logging
import math

from PIL import Image

from stickerslicer.config import OUTPUT_FORMAT
from stickerslicer.errors import EncodeError, SurfaceError

logger = logging.getLogger("stickerslicer.rendering.tile_renderer")

TRANSPARENT = (0, 0, 0, 0)


class DrawingSurface:
    """A resizable RGBA drawing surface."""

    def __init__(self):
        self.image = None

    @property
    def size(self):
        return self.image.size if self.image is not None else (0, 0)

    def resize(self, width, height):
        """
        Make the surface width x height pixels, reallocating only when the size changes.

        Fractional sizes are truncated like an integer canvas size would be.

        Raises:
            SurfaceError: If the size is below one pixel or the allocation fails
        """
        width = math.floor(width)
        height = math.floor(height)
        if width < 1 or height < 1:
            raise SurfaceError(
                f"Cannot create a {width}x{height} drawing surface; "
                "the grid is finer than the image"
            )
        if self.image is not None and self.image.size == (width, height):
            return
        try:
            self.image = Image.new("RGBA", (width, height), TRANSPARENT)
        except (MemoryError, ValueError) as e:
            raise SurfaceError(
                f"Failed to allocate {width}x{height} drawing surface: {e}"
            ) from e

    def clear(self):
        if self.image is None:
            raise SurfaceError("Drawing surface has not been sized")
        self.image.paste(TRANSPARENT, (0, 0) + self.image.size)

    def draw(self, source, rect):
        """
        Draw the rect region of the source onto the surface at (0, 0), scaled 1:1.

        Pixels outside the source extent come out transparent.

        Args:
            source: RGBA PIL Image to sample
            rect: SliceRect in source-pixel space
        """
        if self.image is None:
            raise SurfaceError("Drawing surface has not been sized")
        try:
            region = source.transform(
                self.image.size,
                Image.Transform.AFFINE,
                (1, 0, rect.sx, 0, 1, rect.sy),
                resample=Image.Resampling.NEAREST,
                fillcolor=TRANSPARENT,
            )
        except (MemoryError, ValueError) as e:
            raise SurfaceError(f"Failed to draw source region: {e}") from e
        self.image.alpha_composite(region)

    def encode(self, image_format=OUTPUT_FORMAT):
        """
        Encode the surface contents.

        Returns:
            Encoded image bytes

        Raises:
            EncodeError: If the surface is empty or the encoder fails
        """
        if self.image is None:
            raise EncodeError("Nothing to encode: drawing surface has not been sized")
        buffer = io.BytesIO()
        try:
            self.image.save(buffer, format=image_format)
        except (OSError, ValueError, KeyError) as e:
            raise EncodeError(f"Failed to encode tile as {image_format}: {e}") from e
        data = buffer.getvalue()
        if not data:
            raise EncodeError(f"Encoder produced no {image_format} data")
        return data


class TileRasterizer:
    """
    Renders slice rectangles of one raster into encoded tiles.

    Owns a single DrawingSurface that is resized and cleared for every tile.
    """

    def __init__(self, raster, image_format=OUTPUT_FORMAT):
        self.raster = raster
        self.image_format = image_format
        self.surface = DrawingSurface()

    def render(self, rect):
        """
        Render one slice.

        Args:
            rect: SliceRect describing the source region

        Returns:
            Encoded image bytes for the tile
        """
        if self.raster.closed:
            raise SurfaceError("Source raster has already been released")

        if not rect.is_within(self.raster.natural_width, self.raster.natural_height):
            logger.warning(
                f"Slice at ({rect.sx:.2f}, {rect.sy:.2f}) extends past the source; "
                "outside pixels will be transparent"
            )

        self.surface.resize(rect.width, rect.height)
        self.surface.clear()
        self.surface.draw(self.raster.image, rect)
        return self.surface.encode(self.image_format)
