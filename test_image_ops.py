"""
Tests for decoding uploaded sticker sheets.
"""

import io

import pytest
from PIL import Image

from stickerslicer.errors import DecodeError
from stickerslicer.image_ops import decode_image, load_image


@pytest.mark.parametrize("image_format", ["PNG", "JPEG", "WEBP"])
def test_supported_formats(make_image_bytes, image_format):
    with decode_image(make_image_bytes(32, 24, image_format)) as raster:
        assert raster.format == image_format
        assert raster.size == (32, 24)
        assert raster.image.mode == "RGBA"


@pytest.mark.parametrize("image_format", ["GIF", "BMP"])
def test_other_formats_are_rejected(make_image, image_format):
    buffer = io.BytesIO()
    make_image(8, 8).convert("RGB").save(buffer, format=image_format)
    with pytest.raises(DecodeError):
        decode_image(buffer.getvalue())


@pytest.mark.parametrize("data", [b"", b"hello world", b"\x89PNG\r\n\x1a\n"])
def test_garbage_is_rejected(data):
    with pytest.raises(DecodeError):
        decode_image(data)


def test_truncated_file_is_rejected(make_image_bytes):
    data = make_image_bytes(200, 200)
    with pytest.raises(DecodeError):
        decode_image(data[: len(data) // 2])


def test_exif_orientation_is_applied(make_image):
    exif = Image.Exif()
    exif[0x0112] = 6  # rotated 90 degrees clockwise
    buffer = io.BytesIO()
    make_image(40, 20).convert("RGB").save(buffer, format="JPEG", exif=exif)

    with decode_image(buffer.getvalue()) as raster:
        assert raster.size == (20, 40)


def test_close_releases_image(make_image_bytes):
    raster = decode_image(make_image_bytes(4, 4))
    assert not raster.closed
    raster.close()
    assert raster.closed
    raster.close()


def test_load_image(tmp_path, make_image_bytes):
    path = tmp_path / "sheet.png"
    path.write_bytes(make_image_bytes(10, 5))
    with load_image(str(path)) as raster:
        assert raster.size == (10, 5)

    with pytest.raises(DecodeError):
        load_image(str(tmp_path / "missing.png"))
