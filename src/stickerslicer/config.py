"""
Configuration settings.
"""

import os

# Grid bounds (the numeric inputs allow 1..20)
MIN_GRID_SIZE = 1
MAX_GRID_SIZE = 20

DEFAULT_ROWS = 6
DEFAULT_COLS = 4

# Named presets: key -> (rows, cols)
GRID_PRESETS = {
    "default_4x6": (6, 4),
    "3x3": (3, 3),
}

# Archive layout
STICKER_FOLDER = "stickers"
STICKER_PREFIX = "sticker_"
MIN_INDEX_WIDTH = 2
ARCHIVE_SUFFIX = "_sliced.zip"

# Image formats
OUTPUT_FORMAT = "PNG"
OUTPUT_EXTENSION = ".png"
SUPPORTED_FORMATS = {"PNG", "JPEG", "WEBP"}

# Maximum allowed input size in bytes (e.g., 100MB)
MAX_FILE_SIZE = 100 * 1024 * 1024

# Images above this pixel count get a warning in the log
LARGE_IMAGE_PIXELS = 40_000_000

DEFAULT_OUTPUT_DIR = os.environ.get("STICKERSLICER_OUTPUT_DIR", "./out")
DEFAULT_LANGUAGE = os.environ.get("STICKERSLICER_LANG", "zh")
LOG_LEVEL = os.environ.get("STICKERSLICER_LOG_LEVEL", "info")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
