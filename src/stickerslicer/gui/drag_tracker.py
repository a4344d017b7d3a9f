"""
Drag-to-pan tracking for the preview.

Turns pointer press/move/release events into a bounded pan offset and
snapshots it, together with the current viewport size, for an export.
"""

from stickerslicer.models import PanOffset, ViewportMetrics


class DragTracker:
    """Accumulates pointer drags into a pan offset in display pixels."""

    def __init__(self):
        self.x = 0.0
        self.y = 0.0
        self.bound_x = None
        self.bound_y = None
        self._anchor = None

    @property
    def dragging(self):
        return self._anchor is not None

    def set_bounds(self, display_width, display_height):
        """
        Limit the pan to the displayed image size in each direction.

        Called whenever the preview is re-laid out; an existing pan is
        clamped into the new bounds.
        """
        self.bound_x = abs(display_width)
        self.bound_y = abs(display_height)
        self.x, self.y = self._clamp(self.x, self.y)

    def _clamp(self, x, y):
        if self.bound_x is not None:
            x = max(-self.bound_x, min(self.bound_x, x))
        if self.bound_y is not None:
            y = max(-self.bound_y, min(self.bound_y, y))
        return x, y

    def start(self, pointer_x, pointer_y):
        self._anchor = (pointer_x - self.x, pointer_y - self.y)

    def move(self, pointer_x, pointer_y):
        """Update the pan from the pointer position; returns True if it changed."""
        if self._anchor is None:
            return False
        new_x, new_y = self._clamp(
            pointer_x - self._anchor[0], pointer_y - self._anchor[1]
        )
        changed = (new_x, new_y) != (self.x, self.y)
        self.x, self.y = new_x, new_y
        return changed

    def end(self):
        self._anchor = None

    def reset(self):
        self.x = 0.0
        self.y = 0.0
        self._anchor = None

    def snapshot(self, natural_size, display_size):
        """
        Freeze the current state for an export.

        Args:
            natural_size: (width, height) of the decoded image
            display_size: (width, height) the image is shown at

        Returns:
            Tuple of (PanOffset, ViewportMetrics)
        """
        natural_width, natural_height = natural_size
        display_width, display_height = display_size
        metrics = ViewportMetrics(
            natural_width=natural_width,
            natural_height=natural_height,
            display_width=display_width,
            display_height=display_height,
        )
        return PanOffset(x=self.x, y=self.y), metrics
