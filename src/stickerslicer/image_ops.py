"""
Basic image operations module.

Decodes raw upload bytes into a raster the rest of the pipeline can sample.
"""

import io
import logging
import os

from PIL import Image, ImageOps, UnidentifiedImageError

from stickerslicer.config import LARGE_IMAGE_PIXELS, MAX_FILE_SIZE, SUPPORTED_FORMATS
from stickerslicer.errors import DecodeError

logger = logging.getLogger("stickerslicer.image_ops")


class Raster:
    """
    A decoded RGBA image with known native dimensions.

    The raster owns its Pillow image; call close() (or use it as a context
    manager) once rasterization is done, on success and failure alike.
    """

    def __init__(self, image, source_format=None):
        self.image = image
        self.format = source_format
        self.natural_width, self.natural_height = image.size

    @property
    def size(self):
        return self.natural_width, self.natural_height

    @property
    def closed(self):
        return self.image is None

    def close(self):
        if self.image is not None:
            self.image.close()
            self.image = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self):
        return f"Raster({self.natural_width}x{self.natural_height}, format={self.format})"


def decode_image(data):
    """
    Decode raw image bytes.

    Args:
        data: Bytes of a PNG, JPEG or WEBP file

    Returns:
        Raster in RGBA mode, with EXIF orientation applied

    Raises:
        DecodeError: If the bytes are empty, too large, truncated, corrupt or
            not a supported format
    """
    if not data:
        raise DecodeError("No image data")
    if len(data) > MAX_FILE_SIZE:
        raise DecodeError(
            f"Image size {len(data)} bytes exceeds limit of {MAX_FILE_SIZE} bytes"
        )

    try:
        source = Image.open(io.BytesIO(data))
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Not a decodable image: {e}") from e

    try:
        source_format = source.format
        if source_format not in SUPPORTED_FORMATS:
            raise DecodeError(
                f"Unsupported image format: {source_format}. "
                f"Expected one of: {sorted(SUPPORTED_FORMATS)}"
            )
        # Force the full decode so truncated files fail here, not mid-export
        source.load()
        oriented = ImageOps.exif_transpose(source)
        image = oriented.convert("RGBA")
    except DecodeError:
        raise
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Corrupt or truncated image: {e}") from e
    finally:
        source.close()

    width, height = image.size
    if width * height > LARGE_IMAGE_PIXELS:
        logger.warning(f"Large image decoded: {width}x{height} = {width * height} pixels")
    logger.info(f"Decoded {source_format} image: {width}x{height}")
    return Raster(image, source_format)


def load_image(image_path):
    """
    Read and decode an image file from disk.

    Args:
        image_path: Path to the image file

    Returns:
        Raster for the file contents
    """
    if not os.path.isfile(image_path):
        raise DecodeError(f"Image file not found: {image_path}")
    with open(image_path, "rb") as f:
        data = f.read()
    return decode_image(data)
