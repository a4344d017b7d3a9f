"""
Tests for the two-phase progress remapping.
"""

import pytest

from stickerslicer.export.progress import ProgressAggregator


def test_two_phase_mapping():
    reported = []
    progress = ProgressAggregator(reported.append, total_tiles=4)

    for _ in range(4):
        progress.tile_completed()
    progress.packaging_progress(0)
    progress.packaging_progress(50)
    progress.packaging_progress(100)
    progress.complete()

    assert reported == [12.5, 25, 37.5, 50, 50, 75, 100]


def test_complete_reports_100_once():
    reported = []
    progress = ProgressAggregator(reported.append, total_tiles=1)
    progress.tile_completed()
    progress.complete()
    progress.complete()
    assert reported == [50, 100]


def test_closed_channel_is_silent():
    reported = []
    progress = ProgressAggregator(reported.append, total_tiles=2)
    progress.tile_completed()
    progress.close()
    progress.tile_completed()
    progress.packaging_progress(100)
    progress.complete()
    assert reported == [25]


def test_values_are_clamped():
    reported = []
    progress = ProgressAggregator(reported.append, total_tiles=1)
    progress.packaging_progress(-300)
    progress.tile_completed()
    progress.tile_completed()
    assert reported == [0, 50, 100]


def test_without_callback():
    progress = ProgressAggregator(None, total_tiles=2)
    progress.tile_completed()
    assert progress.percent == pytest.approx(25)
