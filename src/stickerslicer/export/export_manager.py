"""
Export manager for sliced sticker sheets.

This module runs the whole export: decode the sheet once, map every grid
cell to a source rectangle, rasterize the tiles one at a time, package them
into a ZIP and hand the archive to a delivery function. Either every tile
is archived and delivered, or nothing is.
"""

import asyncio
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from functools import partial

from stickerslicer.config import DEFAULT_OUTPUT_DIR
from stickerslicer.coordinates.slice_calculator import archive_name, calculate_slice_rects
from stickerslicer.errors import DecodeError, SlicerError
from stickerslicer.export.packager import StickerPackager, save_archive
from stickerslicer.export.progress import ProgressAggregator
from stickerslicer.image_ops import decode_image
from stickerslicer.models import GridConfig
from stickerslicer.rendering.tile_renderer import TileRasterizer

logger = logging.getLogger("stickerslicer.export.export_manager")


class ExportResult:
    """Outcome of a successful export."""

    def __init__(self, archive, delivered_to, tile_count):
        self.archive = archive
        self.delivered_to = delivered_to
        self.tile_count = tile_count

    @property
    def filenames(self):
        return self.archive.filenames

    def __repr__(self):
        return (
            f"ExportResult(archive={self.archive.name!r}, tiles={self.tile_count}, "
            f"delivered_to={self.delivered_to!r})"
        )


class ExportManager:
    """
    Manages the export of sliced sticker sheets.

    Each export() call owns its own worker, drawing surface and archive
    builder; nothing is shared between calls.
    """

    def __init__(self, output_dir=DEFAULT_OUTPUT_DIR):
        """
        Initialize the export manager.

        Args:
            output_dir: Directory archives are saved to by default
        """
        self.output_dir = output_dir

    def deliver(self, archive):
        """Default delivery: save the archive into the output directory."""
        return save_archive(archive, self.output_dir)

    async def export(
        self,
        image_data,
        filename,
        config,
        pan=None,
        metrics=None,
        progress_callback=None,
        deliver=None,
    ):
        """
        Slice an image into a grid and deliver the tiles as one ZIP.

        Args:
            image_data: Raw bytes of the sticker sheet
            filename: Original filename, used to name the archive
            config: GridConfig (rows x cols)
            pan: Optional PanOffset in display pixels
            metrics: Optional ViewportMetrics the pan was captured with
            progress_callback: Function(percent) receiving 0-100 progress
            deliver: Function(ExportArchive) that hands the archive to the
                user; defaults to saving it into output_dir

        Returns:
            ExportResult

        Raises:
            DecodeError, SurfaceError, EncodeError, ArchiveError: On any failure;
                no archive is delivered and no progress is reported afterwards
        """
        deliver = deliver or self.deliver
        loop = asyncio.get_running_loop()
        progress = None
        packager = None
        raster = None

        # One worker per export keeps tile rendering strictly sequential
        with ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="stickerslicer-export"
        ) as worker:

            def run(func, *args):
                return loop.run_in_executor(worker, partial(func, *args))

            try:
                raster = await run(decode_image, image_data)

                if (
                    metrics is not None
                    and (metrics.natural_width, metrics.natural_height) != raster.size
                ):
                    logger.warning(
                        f"Viewport metrics report {metrics.natural_width}x{metrics.natural_height} "
                        f"but the decoded image is {raster.natural_width}x{raster.natural_height}"
                    )

                slices = calculate_slice_rects(config, raster.size, pan, metrics)
                total_count = len(slices)
                logger.info(
                    f"Slicing {filename} into {config.rows}x{config.cols} = {total_count} tiles"
                )

                progress = ProgressAggregator(progress_callback, total_count)
                packager = StickerPackager(archive_name(filename), total_count)
                rasterizer = TileRasterizer(raster)

                # Phase 1: draw and encode each tile in row-major order
                for tile, rect in slices:
                    data = await run(rasterizer.render, rect)
                    stored_as = packager.add_tile(tile.index, data)
                    logger.debug(
                        f"Rendered tile {tile.index} (row {tile.row}, col {tile.col}) "
                        f"as {stored_as}: {len(data)} bytes"
                    )
                    progress.tile_completed()

                # Phase 2: compress the archive entry by entry
                entries = packager.compress_entries()
                while True:
                    percent = await run(next, entries, None)
                    if percent is None:
                        break
                    progress.packaging_progress(percent)
                archive = await run(packager.finalize)

                delivered_to = await run(deliver, archive)
                progress.complete()
            except SlicerError as e:
                logger.error(f"Export of {filename} failed: {e}")
                if progress is not None:
                    progress.close()
                if packager is not None:
                    packager.discard()
                raise
            finally:
                if raster is not None:
                    raster.close()

        return ExportResult(archive, delivered_to, total_count)


async def process_and_zip_image(
    image_data,
    filename,
    config=None,
    pan=None,
    metrics=None,
    progress_callback=None,
    deliver=None,
    output_dir=DEFAULT_OUTPUT_DIR,
):
    """
    Convenience coroutine for slicing an image and delivering the ZIP.

    Args:
        image_data: Raw bytes of the sticker sheet
        filename: Original filename, used to name the archive
        config: GridConfig, or None for the default grid
        pan: Optional PanOffset in display pixels
        metrics: Optional ViewportMetrics matching the pan
        progress_callback: Function(percent) to report progress
        deliver: Optional delivery function(ExportArchive)
        output_dir: Directory for the default delivery

    Returns:
        ExportResult
    """
    manager = ExportManager(output_dir=output_dir)
    return await manager.export(
        image_data,
        filename,
        config or GridConfig(),
        pan=pan,
        metrics=metrics,
        progress_callback=progress_callback,
        deliver=deliver,
    )


def export_stickers(image_path, config=None, pan=None, metrics=None, **kwargs):
    """
    Blocking export of an image file on disk.

    Args:
        image_path: Path to the sticker sheet
        config: GridConfig, or None for the default grid
        pan: Optional PanOffset
        metrics: Optional ViewportMetrics
        **kwargs: progress_callback, deliver and output_dir, as for
            process_and_zip_image

    Returns:
        ExportResult
    """
    if not os.path.isfile(image_path):
        raise DecodeError(f"Image file not found: {image_path}")
    with open(image_path, "rb") as f:
        image_data = f.read()
    return asyncio.run(
        process_and_zip_image(
            image_data,
            os.path.basename(image_path),
            config,
            pan=pan,
            metrics=metrics,
            **kwargs,
        )
    )
