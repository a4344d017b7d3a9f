"""
Grid settings UI component for Sticker Slicer.

This module provides the GUI controls for choosing the number of rows and
columns, including the preset buttons.
"""

import tkinter as tk
from tkinter import ttk

from stickerslicer.config import DEFAULT_COLS, DEFAULT_ROWS, MAX_GRID_SIZE, MIN_GRID_SIZE
from stickerslicer.models import GridConfig, clamp_grid_value


class GridSettingsFrame(ttk.LabelFrame):
    """Rows/columns inputs and presets."""

    def __init__(self, parent, messages, on_change=None, **kwargs):
        """
        Initialize the grid settings frame.

        Args:
            parent: Parent widget
            messages: i18n Messages record for the labels
            on_change: Function(GridConfig) called whenever the grid changes
        """
        super().__init__(parent, text=messages.grid_settings, padding="10", **kwargs)
        self.on_change = on_change

        self.cols_var = tk.StringVar(value=str(DEFAULT_COLS))
        self.rows_var = tk.StringVar(value=str(DEFAULT_ROWS))

        self.cols_label = ttk.Label(self, text=messages.columns)
        self.cols_label.grid(row=0, column=0, sticky=tk.W, padx=5)
        self.rows_label = ttk.Label(self, text=messages.rows)
        self.rows_label.grid(row=0, column=1, sticky=tk.W, padx=5)

        self.cols_spin = ttk.Spinbox(
            self,
            from_=MIN_GRID_SIZE,
            to=MAX_GRID_SIZE,
            textvariable=self.cols_var,
            width=8,
            command=self._changed,
        )
        self.cols_spin.grid(row=1, column=0, sticky=tk.EW, padx=5, pady=2)
        self.rows_spin = ttk.Spinbox(
            self,
            from_=MIN_GRID_SIZE,
            to=MAX_GRID_SIZE,
            textvariable=self.rows_var,
            width=8,
            command=self._changed,
        )
        self.rows_spin.grid(row=1, column=1, sticky=tk.EW, padx=5, pady=2)

        for spin in (self.cols_spin, self.rows_spin):
            spin.bind("<FocusOut>", lambda event: self._changed())
            spin.bind("<Return>", lambda event: self._changed())

        presets = ttk.Frame(self)
        presets.grid(row=2, column=0, columnspan=2, sticky=tk.W, pady=(8, 0))
        self.default_button = ttk.Button(
            presets,
            text=messages.default_4x6,
            command=lambda: self.set_config(GridConfig.from_preset("default_4x6")),
        )
        self.default_button.pack(side=tk.LEFT, padx=5)
        self.preset_3x3_button = ttk.Button(
            presets,
            text=messages.preset_3x3,
            command=lambda: self.set_config(GridConfig.from_preset("3x3")),
        )
        self.preset_3x3_button.pack(side=tk.LEFT, padx=5)

        self.columnconfigure(0, weight=1)
        self.columnconfigure(1, weight=1)

    def get_config(self):
        """Current grid; invalid or empty inputs count as 1."""
        return GridConfig(
            rows=clamp_grid_value(self.rows_var.get() or MIN_GRID_SIZE),
            cols=clamp_grid_value(self.cols_var.get() or MIN_GRID_SIZE),
        )

    def set_config(self, config):
        self.rows_var.set(str(config.rows))
        self.cols_var.set(str(config.cols))
        self._changed()

    def set_messages(self, messages):
        self.configure(text=messages.grid_settings)
        self.cols_label.configure(text=messages.columns)
        self.rows_label.configure(text=messages.rows)
        self.default_button.configure(text=messages.default_4x6)
        self.preset_3x3_button.configure(text=messages.preset_3x3)

    def set_enabled(self, enabled):
        state = tk.NORMAL if enabled else tk.DISABLED
        for widget in (
            self.cols_spin,
            self.rows_spin,
            self.default_button,
            self.preset_3x3_button,
        ):
            widget.configure(state=state)

    def _changed(self):
        config = self.get_config()
        # Write the clamped values back so the inputs never show out-of-range numbers
        self.rows_var.set(str(config.rows))
        self.cols_var.set(str(config.cols))
        if self.on_change:
            self.on_change(config)
