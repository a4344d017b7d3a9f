"""
Exceptions raised by the slicing and export pipeline.

Every failure is fatal for the export in progress: nothing is retried and
no partial archive is delivered.
"""


class SlicerError(Exception):
    """Base class for all export pipeline failures."""


class DecodeError(SlicerError):
    """Input bytes are not a decodable raster in a supported format."""


class SurfaceError(SlicerError):
    """The drawing surface could not be acquired or resized."""


class EncodeError(SlicerError):
    """A tile's pixel data could not be serialized to the output format."""


class ArchiveError(SlicerError):
    """The archive or its sticker folder could not be constructed."""
