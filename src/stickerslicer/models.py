"""
Pydantic models for the slicing pipeline.

These models define the immutable inputs of one export call: the grid,
the user's pan offset and the viewport metrics captured with it.
"""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stickerslicer.config import (
    DEFAULT_COLS,
    DEFAULT_ROWS,
    GRID_PRESETS,
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
)

logger = logging.getLogger("stickerslicer.models")


def clamp_grid_value(value) -> int:
    """
    Clamp a row or column count into the supported range.

    Non-numeric and empty values fall back to the minimum, like an empty
    numeric input does.
    """
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = MIN_GRID_SIZE
    clamped = max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, number))
    if clamped != number:
        logger.warning(f"Grid value {value!r} clamped to {clamped}")
    return clamped


class GridConfig(BaseModel):
    """Rows and columns to cut the sheet into."""

    model_config = ConfigDict(frozen=True)

    rows: int = Field(default=DEFAULT_ROWS, description="Number of rows (Y)")
    cols: int = Field(default=DEFAULT_COLS, description="Number of columns (X)")

    @field_validator("rows", "cols", mode="before")
    @classmethod
    def _clamp(cls, value):
        return clamp_grid_value(value)

    @property
    def total(self) -> int:
        return self.rows * self.cols

    @classmethod
    def from_preset(cls, name: str) -> "GridConfig":
        """Build a grid from a named preset (see config.GRID_PRESETS)."""
        try:
            rows, cols = GRID_PRESETS[name]
        except KeyError:
            raise ValueError(
                f"Unknown grid preset: {name}. Expected one of: {list(GRID_PRESETS)}"
            )
        return cls(rows=rows, cols=cols)


class PanOffset(BaseModel):
    """How far the preview was dragged from its centered default, in display pixels."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(default=0.0, description="Positive means dragged right")
    y: float = Field(default=0.0, description="Positive means dragged down")


class ViewportMetrics(BaseModel):
    """Native image size and the size it was displayed at when the pan was captured."""

    model_config = ConfigDict(frozen=True)

    natural_width: float = Field(..., gt=0, description="Decoded width in pixels")
    natural_height: float = Field(..., gt=0, description="Decoded height in pixels")
    display_width: float = Field(..., gt=0, description="Rendered width on screen")
    display_height: float = Field(..., gt=0, description="Rendered height on screen")

    @property
    def scale_x(self) -> float:
        return self.natural_width / self.display_width

    @property
    def scale_y(self) -> float:
        return self.natural_height / self.display_height

    @classmethod
    def identity(cls, width: float, height: float) -> "ViewportMetrics":
        """Metrics for an image displayed at its native size."""
        return cls(
            natural_width=width,
            natural_height=height,
            display_width=width,
            display_height=height,
        )


def resolve_pan(
    pan: Optional[PanOffset], metrics: Optional[ViewportMetrics]
) -> tuple:
    """
    Convert a display-space pan into a source-space offset.

    Returns:
        Tuple of (source_x_offset, source_y_offset); (0, 0) when either the
        pan or the metrics are missing.
    """
    if pan is None or metrics is None:
        return 0.0, 0.0
    # Dragging the image right/down reveals content further left/up
    return -pan.x * metrics.scale_x, -pan.y * metrics.scale_y
