"""
Tests for the command-line slicing mode.
"""

import os
import zipfile

from stickerslicer.cli import main


def test_slice_mode_writes_archive(tmp_path, make_image_bytes, capsys):
    image_path = tmp_path / "sheet.png"
    image_path.write_bytes(make_image_bytes(80, 60))
    out_dir = tmp_path / "out"

    exit_code = main(
        [
            "--mode", "slice", str(image_path),
            "--rows", "3", "--cols", "4",
            "--output-dir", str(out_dir),
            "--lang", "en",
        ]
    )

    assert exit_code == 0
    archive_path = out_dir / "sheet_sliced.zip"
    with zipfile.ZipFile(archive_path) as zf:
        assert len([n for n in zf.namelist() if n.endswith(".png")]) == 12
    output = capsys.readouterr().out
    assert "Preview showing 4 columns x 3 rows" in output
    assert str(archive_path) in output


def test_slice_mode_with_preset_and_pan(tmp_path, make_image_bytes):
    image_path = tmp_path / "pack.png"
    image_path.write_bytes(make_image_bytes(90, 90))

    exit_code = main(
        [
            "--mode", "slice", str(image_path),
            "--preset", "3x3",
            "--pan-x", "10", "--pan-y", "-10",
            "--display-width", "45", "--display-height", "45",
            "--output-dir", str(tmp_path),
        ]
    )

    assert exit_code == 0
    assert os.path.isfile(tmp_path / "pack_sliced.zip")


def test_pan_requires_display_size(tmp_path, make_image_bytes):
    image_path = tmp_path / "pack.png"
    image_path.write_bytes(make_image_bytes(20, 20))
    assert main(["--mode", "slice", str(image_path), "--pan-x", "5"]) == 2


def test_bad_image_exits_with_error(tmp_path, capsys):
    image_path = tmp_path / "broken.png"
    image_path.write_bytes(b"not an image")

    exit_code = main(
        ["--mode", "slice", str(image_path), "--lang", "en", "--output-dir", str(tmp_path)]
    )

    assert exit_code == 1
    assert "not a readable PNG, JPG or WEBP image" in capsys.readouterr().out
    assert not os.path.exists(tmp_path / "broken_sliced.zip")


def test_unwritable_output_dir_exits_with_error(tmp_path, make_image_bytes, capsys):
    image_path = tmp_path / "sheet.png"
    image_path.write_bytes(make_image_bytes(20, 20))
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"")

    exit_code = main(
        [
            "--mode", "slice", str(image_path),
            "--rows", "1", "--cols", "1",
            "--output-dir", str(blocker / "out"),
            "--lang", "en",
        ]
    )

    assert exit_code == 1
    assert "The ZIP archive could not be created." in capsys.readouterr().out
