#!/usr/bin/env python3
"""
Sticker Slicer - split a sticker sheet into individual stickers.

This is the main entry point for the Sticker Slicer application.
It supports GUI, slice and interactive operating modes.

Available modes:
- GUI (default): A graphical user interface with a draggable grid preview
- Slice: Non-interactive slicing driven by command-line arguments
- Interactive: Prompts for the grid settings on the terminal
"""

import os
import sys

from stickerslicer.cli import main as cli_main
from stickerslicer.config import DEFAULT_OUTPUT_DIR


def ensure_output_dirs():
    """Ensure that the default output directory exists."""
    os.makedirs(DEFAULT_OUTPUT_DIR, exist_ok=True)


def main():
    """Main entry point for the application."""
    print("==== Sticker Slicer ====")

    ensure_output_dirs()

    # Add support for --silent command line option
    silent_mode = "--silent" in sys.argv
    if silent_mode:
        # Remove the argument so it doesn't interfere with argparse
        sys.argv.remove("--silent")
        sys.stdout = open(os.devnull, "w")

    try:
        # Hand off control to the CLI module, which handles mode selection
        exit_code = cli_main()
    except KeyboardInterrupt:
        print("\nExiting Sticker Slicer...")
        exit_code = 130
    except Exception as e:
        # Errors are always printed, even in silent mode
        if silent_mode:
            sys.stdout = sys.__stdout__
        print(f"An error occurred: {e}")
        print("Exiting Sticker Slicer...")
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
