"""
Export functionality for sliced sticker sheets.
"""

from stickerslicer.export.export_manager import (
    ExportManager,
    ExportResult,
    export_stickers,
    process_and_zip_image,
)
from stickerslicer.export.packager import ExportArchive, StickerPackager, save_archive
from stickerslicer.export.progress import ProgressAggregator

__all__ = [
    "ExportArchive",
    "ExportManager",
    "ExportResult",
    "ProgressAggregator",
    "StickerPackager",
    "export_stickers",
    "process_and_zip_image",
    "save_archive",
]
