"""
Two-phase export progress.

Rasterization covers 0-50%, archive compression covers 50-100%. Both phases
publish into one callback that receives a single percentage.
"""

import logging

logger = logging.getLogger("stickerslicer.export.progress")

RASTER_PHASE_SHARE = 50.0


class ProgressAggregator:
    """
    Remaps per-phase progress into one 0-100 percentage.

    Once closed (after a failure) the aggregator never calls back again.
    """

    def __init__(self, callback=None, total_tiles=1):
        self.callback = callback
        self.total_tiles = max(1, total_tiles)
        self.tiles_processed = 0
        self.percent = None
        self.closed = False

    def _publish(self, percent):
        if self.closed:
            return
        percent = min(100.0, max(0.0, float(percent)))
        self.percent = percent
        if self.callback:
            self.callback(percent)

    def tile_completed(self):
        """Record one finished tile (phase 1)."""
        self.tiles_processed += 1
        self._publish(self.tiles_processed / self.total_tiles * RASTER_PHASE_SHARE)

    def packaging_progress(self, compressor_percent):
        """Forward the packager's own 0-100 progress (phase 2).

        The compressor's final 100 is held back; 100% is only reported by
        :meth:`complete` once the archive has been delivered.
        """
        percent = RASTER_PHASE_SHARE + compressor_percent / 2
        if percent >= 100.0:
            return
        self._publish(percent)

    def complete(self):
        """Report 100% after the archive is delivered."""
        if self.percent != 100.0:
            self._publish(100.0)

    def close(self):
        """Stop delivering callbacks; used when the export fails."""
        if not self.closed:
            logger.debug(f"Progress channel closed at {self.percent}")
        self.closed = True
