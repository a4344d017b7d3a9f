"""
Command-line interface for Sticker Slicer.

This module provides different operating modes:
- GUI (default): A graphical user interface with a draggable grid preview
- Slice: Non-interactive slicing driven by command-line arguments
- Interactive: Prompts for the grid settings on the terminal
"""

import argparse
import logging
import os
import sys

from pydantic import ValidationError

from stickerslicer.config import (
    DEFAULT_COLS,
    DEFAULT_LANGUAGE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_ROWS,
    GRID_PRESETS,
    LOG_FORMAT,
    LOG_LEVEL,
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
)
from stickerslicer.errors import SlicerError
from stickerslicer.export.export_manager import export_stickers
from stickerslicer.i18n import Language, error_message, format_preview_info, get_messages
from stickerslicer.models import GridConfig, PanOffset, ViewportMetrics

logger = logging.getLogger("stickerslicer.cli")


def build_export_inputs(args):
    """
    Turn parsed arguments into (GridConfig, PanOffset, ViewportMetrics).

    A preset overrides --rows/--cols. Pan values need the display size the
    pan was measured against; the native size is filled in from the image.
    """
    if args.preset:
        config = GridConfig.from_preset(args.preset)
    else:
        config = GridConfig(rows=args.rows, cols=args.cols)

    if not args.pan_x and not args.pan_y:
        return config, None, None

    if not args.display_width or not args.display_height:
        raise ValueError("--pan-x/--pan-y require --display-width and --display-height")

    from stickerslicer.image_ops import load_image

    with load_image(args.image) as raster:
        natural_width, natural_height = raster.size

    metrics = ViewportMetrics(
        natural_width=natural_width,
        natural_height=natural_height,
        display_width=args.display_width,
        display_height=args.display_height,
    )
    return config, PanOffset(x=args.pan_x, y=args.pan_y), metrics


def print_progress(percent):
    """Render a single-line progress bar on stdout."""
    filled = int(percent / 5)
    sys.stdout.write(f"\r[{'#' * filled}{'.' * (20 - filled)}] {percent:5.1f}%")
    if percent >= 100:
        sys.stdout.write("\n")
    sys.stdout.flush()


def run_slice(args):
    """
    Slice an image using the command-line arguments.

    Returns:
        Process exit code
    """
    messages = get_messages(args.lang)

    try:
        config, pan, metrics = build_export_inputs(args)
    except (ValueError, ValidationError) as e:
        print(f"Error: {e}")
        return 2
    except SlicerError as e:
        print(f"{error_message(messages, e)} ({e})")
        return 1

    print(format_preview_info(messages, config))

    try:
        result = export_stickers(
            args.image,
            config,
            pan=pan,
            metrics=metrics,
            progress_callback=print_progress,
            output_dir=args.output_dir,
        )
    except SlicerError as e:
        print()
        print(f"{error_message(messages, e)} ({e})")
        return 1

    print(messages.saved_to.format(path=result.delivered_to))
    return 0


def _prompt_int(prompt, default, minimum=MIN_GRID_SIZE, maximum=MAX_GRID_SIZE):
    value = input(f"{prompt} [{default}]: ").strip()
    if not value:
        return default
    try:
        return max(minimum, min(maximum, int(value)))
    except ValueError:
        print(f"Invalid number '{value}', using {default}")
        return default


def _prompt_float(prompt, default=0.0):
    value = input(f"{prompt} [{default:g}]: ").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        print(f"Invalid number '{value}', using {default:g}")
        return default


def run_interactive(args):
    """
    Prompt for the image and grid settings, then slice.

    Returns:
        Process exit code
    """
    messages = get_messages(args.lang)
    print(f"==== {messages.title} ====")
    print(messages.subtitle + "\n")

    args.image = args.image or input("Enter the path to your image: ").strip()
    if not os.path.isfile(args.image):
        print(f"Error: Could not find image '{args.image}'")
        return 1

    print(f"\n{messages.grid_settings}")
    print(f"Presets: {', '.join(GRID_PRESETS)} (leave empty for custom)")
    preset = input("Preset: ").strip()
    if preset in GRID_PRESETS:
        args.preset = preset
    else:
        args.preset = None
        args.cols = _prompt_int(messages.columns, args.cols)
        args.rows = _prompt_int(messages.rows, args.rows)

    print("\nOffset the grid? Enter the pan in display pixels (leave empty for none)")
    args.pan_x = _prompt_float("Pan X")
    args.pan_y = _prompt_float("Pan Y")
    if args.pan_x or args.pan_y:
        args.display_width = _prompt_float("Display width (px)", 0.0)
        args.display_height = _prompt_float("Display height (px)", 0.0)

    return run_slice(args)


def create_parser():
    parser = argparse.ArgumentParser(
        description="Sticker Slicer - split a sticker sheet into a grid of images"
    )

    parser.add_argument(
        "--mode",
        choices=["gui", "slice", "interactive"],
        default="gui",
        help="Operating mode: gui (default), slice (arguments only), or interactive (prompts)",
    )
    parser.add_argument("image", nargs="?", help="Sticker sheet to slice (PNG, JPG, WEBP)")
    parser.add_argument(
        "--rows", type=int, default=DEFAULT_ROWS, help=f"Rows (Y), {MIN_GRID_SIZE}-{MAX_GRID_SIZE}"
    )
    parser.add_argument(
        "--cols", type=int, default=DEFAULT_COLS, help=f"Columns (X), {MIN_GRID_SIZE}-{MAX_GRID_SIZE}"
    )
    parser.add_argument(
        "--preset", choices=sorted(GRID_PRESETS), help="Use a named grid preset"
    )
    parser.add_argument(
        "--pan-x", type=float, default=0.0, help="Horizontal pan in display pixels (positive = right)"
    )
    parser.add_argument(
        "--pan-y", type=float, default=0.0, help="Vertical pan in display pixels (positive = down)"
    )
    parser.add_argument(
        "--display-width", type=float, help="Width the image was displayed at when panned"
    )
    parser.add_argument(
        "--display-height", type=float, help="Height the image was displayed at when panned"
    )
    parser.add_argument(
        "--output-dir", default=DEFAULT_OUTPUT_DIR, help="Directory to save the ZIP archive to"
    )
    parser.add_argument(
        "--lang",
        choices=[v.value for v in Language],
        default=Language.parse(DEFAULT_LANGUAGE).value,
        help="Interface language",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default=LOG_LEVEL.lower(),
        help="Logging level",
    )
    return parser


def main(argv=None):
    """
    Main entry point for Sticker Slicer with command-line argument parsing.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging
    numeric_level = getattr(logging, args.log_level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)

    if args.mode == "gui":
        # Import GUI-related modules only when needed
        from stickerslicer.gui.app import SlicerApp
        import tkinter as tk

        root = tk.Tk()
        app = SlicerApp(root, language=args.lang, output_dir=args.output_dir)
        if args.image:
            app.load_image(args.image)
        root.mainloop()
        return 0
    elif args.mode == "slice":
        if not args.image:
            parser.error("an image path is required in slice mode")
        return run_slice(args)
    elif args.mode == "interactive":
        return run_interactive(args)

    # Should never happen due to argparse choices
    print(f"Unknown mode: {args.mode}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
