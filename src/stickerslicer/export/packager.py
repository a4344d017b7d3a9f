"""
Archive packaging for sliced stickers.

Encoded tiles are collected under deterministic names inside a single
folder, then compressed into one in-memory ZIP.
"""

import io
import logging
import os
import zipfile
from typing import Iterator, List, NamedTuple, Optional, Tuple

from stickerslicer.config import STICKER_FOLDER
from stickerslicer.coordinates.slice_calculator import tile_filename
from stickerslicer.errors import ArchiveError

logger = logging.getLogger("stickerslicer.export.packager")


class ExportArchive(NamedTuple):
    """A finished archive: its filename, ordered entries and ZIP bytes."""

    name: str
    entries: List[Tuple[str, bytes]]
    data: bytes

    @property
    def filenames(self) -> List[str]:
        return [filename for filename, _ in self.entries]


class StickerPackager:
    """
    Collects encoded tiles and builds the sticker archive.

    Usage: add_tile() for every tile in row-major order, then either
    generate() or iterate compress_entries() and call finalize().
    """

    def __init__(self, archive_name: str, total_count: int, folder: str = STICKER_FOLDER):
        """
        Create the archive builder and its sticker folder.

        Raises:
            ArchiveError: If the folder name is invalid or the ZIP cannot be created
        """
        folder = (folder or "").strip("/")
        if not folder or ".." in folder.split("/"):
            raise ArchiveError(f"Invalid archive folder name: {folder!r}")

        self.archive_name = archive_name
        self.total_count = total_count
        self.folder = folder
        self.entries = []
        self._written = 0
        self._buffer = io.BytesIO()
        try:
            self._zip = zipfile.ZipFile(self._buffer, "w", zipfile.ZIP_DEFLATED)
            self._zip.writestr(zipfile.ZipInfo(f"{folder}/"), b"")
        except (OSError, ValueError, RuntimeError) as e:
            raise ArchiveError(f"Failed to create archive folder {folder}: {e}") from e

    def add_tile(self, index: int, data: bytes) -> str:
        """
        Collect one encoded tile.

        Args:
            index: 1-based row-major tile index
            data: Encoded tile bytes

        Returns:
            Filename the tile is stored under (without the folder)
        """
        filename = tile_filename(index, self.total_count)
        self.entries.append((filename, data))
        return filename

    def compress_entries(self) -> Iterator[float]:
        """
        Write the collected tiles into the archive one by one.

        Yields:
            Compression progress (0-100) after each written entry
        """
        if len(self.entries) != self.total_count:
            raise ArchiveError(
                f"Expected {self.total_count} tiles, collected {len(self.entries)}"
            )
        total = len(self.entries)
        for filename, data in self.entries[self._written :]:
            try:
                self._zip.writestr(f"{self.folder}/{filename}", data)
            except (OSError, ValueError, RuntimeError) as e:
                raise ArchiveError(f"Failed to add {filename} to archive: {e}") from e
            self._written += 1
            yield self._written / total * 100

    def finalize(self) -> ExportArchive:
        """Close the ZIP and return the finished archive."""
        if self._written != self.total_count:
            raise ArchiveError(
                f"Archive incomplete: {self._written} of {self.total_count} entries written"
            )
        try:
            self._zip.close()
        except (OSError, ValueError) as e:
            raise ArchiveError(f"Failed to finalize archive: {e}") from e
        data = self._buffer.getvalue()
        logger.info(
            f"Packaged {self.total_count} stickers into {self.archive_name} ({len(data)} bytes)"
        )
        return ExportArchive(self.archive_name, list(self.entries), data)

    def generate(self, progress_callback=None) -> ExportArchive:
        """Compress every collected tile and return the archive."""
        for percent in self.compress_entries():
            if progress_callback:
                progress_callback(percent)
        return self.finalize()

    def discard(self):
        """Drop everything collected so far; nothing is delivered."""
        self.entries = []
        try:
            self._zip.close()
        except (OSError, ValueError) as e:
            logger.debug(f"Ignoring error while discarding archive: {e}")
        self._buffer = io.BytesIO()


def save_archive(archive: ExportArchive, output_dir: str, filename: Optional[str] = None) -> str:
    """
    Deliver an archive by writing it to disk.

    Args:
        archive: Finished ExportArchive
        output_dir: Directory to save into
        filename: Override for the archive filename

    Returns:
        Path of the written archive
    """
    path = os.path.join(output_dir, filename or archive.name)
    try:
        os.makedirs(output_dir, exist_ok=True)
        with open(path, "wb") as f:
            f.write(archive.data)
    except OSError as e:
        raise ArchiveError(f"Failed to write archive to {path}: {e}") from e
    logger.info(f"Saved archive to {path}")
    return path
