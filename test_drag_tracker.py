"""
Tests for turning pointer drags into pan snapshots.
"""

from stickerslicer.gui.drag_tracker import DragTracker
from stickerslicer.models import PanOffset


def test_drag_accumulates_offset():
    drag = DragTracker()
    drag.start(100, 100)
    assert drag.move(130, 90)
    drag.end()
    drag.start(10, 10)
    drag.move(30, 15)
    drag.end()
    assert (drag.x, drag.y) == (50, -5)


def test_move_without_press_is_ignored():
    drag = DragTracker()
    assert not drag.move(50, 50)
    assert (drag.x, drag.y) == (0, 0)


def test_pan_is_bounded_by_display_size():
    drag = DragTracker()
    drag.set_bounds(200, 100)
    drag.start(0, 0)
    drag.move(500, -500)
    assert (drag.x, drag.y) == (200, -100)

    # Shrinking the preview pulls an existing pan back inside
    drag.set_bounds(50, 50)
    assert (drag.x, drag.y) == (50, -50)


def test_snapshot_and_reset():
    drag = DragTracker()
    drag.start(0, 0)
    drag.move(25, -10)
    drag.end()

    pan, metrics = drag.snapshot((1200, 800), (600, 400))
    assert pan == PanOffset(x=25, y=-10)
    assert (metrics.scale_x, metrics.scale_y) == (2, 2)

    drag.reset()
    assert drag.snapshot((10, 10), (10, 10))[0] == PanOffset()
