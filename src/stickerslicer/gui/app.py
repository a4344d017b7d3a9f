"""
Main GUI application for Sticker Slicer.
"""

import asyncio
import logging
import os
import platform
import subprocess
import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from PIL import Image, ImageTk

from stickerslicer.config import DEFAULT_OUTPUT_DIR, LOG_FORMAT
from stickerslicer.coordinates.slice_calculator import archive_name
from stickerslicer.errors import SlicerError
from stickerslicer.export.export_manager import process_and_zip_image
from stickerslicer.export.packager import save_archive
from stickerslicer.gui.drag_tracker import DragTracker
from stickerslicer.gui.grid_settings import GridSettingsFrame
from stickerslicer.i18n import Language, error_message, format_preview_info, get_messages
from stickerslicer.image_ops import decode_image

# Processing states shown in the status bar
STATUS_IDLE = "idle"
STATUS_PROCESSING = "processing"
STATUS_ZIPPING = "zipping"
STATUS_DONE = "done"
STATUS_ERROR = "error"

GRID_LINE_COLOR = "#ffffff"
GRID_SHADOW_COLOR = "#333333"


class SlicerApp:
    """Main GUI application class for Sticker Slicer."""

    def show_completion_alert(self, folder_path):
        """
        Show a success alert and ask if the user wants to open the output folder.

        Args:
            folder_path: Path to the folder containing the archive
        """
        result = messagebox.askquestion(
            self.messages.title, self.messages.open_folder, icon="info"
        )

        if result == "yes":
            self.open_folder(folder_path)

    def open_folder(self, path):
        """
        Open a folder in the file explorer.

        Args:
            path: Path to the folder to open
        """
        try:
            if platform.system() == "Windows":
                os.startfile(path)
            elif platform.system() == "Darwin":  # macOS
                subprocess.run(["open", path], check=True)
            else:  # Linux
                subprocess.run(["xdg-open", path], check=True)
            return True
        except (OSError, subprocess.CalledProcessError) as e:
            self.logger.error(f"Error opening folder: {e}")
            return False

    def __init__(self, root, language=Language.ZH, output_dir=DEFAULT_OUTPUT_DIR):
        """
        Initialize the application.

        Args:
            root: tkinter root window
            language: Initial interface language
            output_dir: Initial directory offered when saving archives
        """
        self.root = root
        self.language = Language.parse(language)
        self.messages = get_messages(self.language)
        self.output_dir = output_dir

        root.title(self.messages.title)
        root.geometry("1100x720")

        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        self.logger = logging.getLogger("stickerslicer.gui")
        self.logger.info("Application started")

        # Loaded image state
        self.image_data = None
        self.image_path = None
        self.preview_img = None
        self.photo_img = None  # To keep reference to prevent garbage collection
        self.display_size = None
        self.frame_origin = (0, 0)
        self.drag = DragTracker()
        self.status = STATUS_IDLE

        self._create_status_bar(root)

        main_frame = ttk.PanedWindow(root, orient=tk.HORIZONTAL)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        # Left side - controls
        settings_frame = ttk.Frame(main_frame)
        main_frame.add(settings_frame, weight=1)

        # Right side - preview
        self.preview_frame = ttk.LabelFrame(main_frame, padding="10")
        main_frame.add(self.preview_frame, weight=3)

        self._create_header(settings_frame)
        self._create_image_selection(settings_frame)
        self.grid_settings = GridSettingsFrame(
            settings_frame, self.messages, on_change=lambda config: self.redraw_preview()
        )
        self.grid_settings.pack(fill=tk.X, pady=5)
        self._create_action_section(settings_frame)
        self._create_preview(self.preview_frame)

        self.apply_language()

    def _create_header(self, parent):
        header = ttk.Frame(parent)
        header.pack(fill=tk.X, pady=(0, 10))

        self.title_label = ttk.Label(header, font=("TkDefaultFont", 14, "bold"))
        self.title_label.pack(anchor=tk.W)
        self.subtitle_label = ttk.Label(header, wraplength=300)
        self.subtitle_label.pack(anchor=tk.W)
        self.language_button = ttk.Button(
            header, command=self.toggle_language, width=10
        )
        self.language_button.pack(anchor=tk.W, pady=(5, 0))

    def _create_image_selection(self, parent):
        """Create image selection frame."""
        self.img_frame = ttk.LabelFrame(parent, padding="10")
        self.img_frame.pack(fill=tk.X, pady=5)

        self.img_state_label = ttk.Label(self.img_frame)
        self.img_state_label.pack(anchor=tk.W)
        self.formats_label = ttk.Label(self.img_frame, foreground="gray")
        self.formats_label.pack(anchor=tk.W)
        self.browse_button = ttk.Button(
            self.img_frame, command=self.browse_image
        )
        self.browse_button.pack(anchor=tk.W, pady=(5, 0))

    def _create_action_section(self, parent):
        action_frame = ttk.Frame(parent, padding="5")
        action_frame.pack(fill=tk.X, side=tk.BOTTOM, pady=10)

        self.progress_var = tk.DoubleVar(value=0)
        self.progress_label = ttk.Label(action_frame)
        self.progress_label.pack(fill=tk.X)
        self.progress_bar = ttk.Progressbar(
            action_frame, variable=self.progress_var, maximum=100
        )
        self.progress_bar.pack(fill=tk.X, pady=(2, 8))

        self.process_button = ttk.Button(action_frame, command=self.process_and_save)
        self.process_button.pack(fill=tk.X, ipady=6)

        self.privacy_label = ttk.Label(
            action_frame, foreground="gray", wraplength=300, justify=tk.CENTER
        )
        self.privacy_label.pack(fill=tk.X, pady=(8, 0))

    def _create_preview(self, parent):
        self.canvas = tk.Canvas(parent, background="#f1f5f9", highlightthickness=0)
        self.canvas.pack(fill=tk.BOTH, expand=True)

        self.canvas.bind("<Configure>", self._on_canvas_resize)
        self.canvas.bind("<ButtonPress-1>", self._on_drag_start)
        self.canvas.bind("<B1-Motion>", self._on_drag_move)
        self.canvas.bind("<ButtonRelease-1>", self._on_drag_end)

        bottom = ttk.Frame(parent)
        bottom.pack(fill=tk.X, pady=(5, 0))
        self.preview_info_label = ttk.Label(bottom, foreground="gray")
        self.preview_info_label.pack(side=tk.LEFT)
        self.reset_button = ttk.Button(bottom, command=self.reset_position)
        self.reset_button.pack(side=tk.RIGHT)

        self.steps_label = ttk.Label(parent, foreground="gray", justify=tk.LEFT)
        self.steps_label.pack(fill=tk.X, pady=(5, 0))

    def _create_status_bar(self, parent):
        self.status_var = tk.StringVar()
        status_bar = ttk.Label(
            parent, textvariable=self.status_var, relief=tk.SUNKEN, anchor=tk.W
        )
        status_bar.pack(side=tk.BOTTOM, fill=tk.X)

    def apply_language(self):
        """Refresh every label for the current language."""
        m = self.messages
        self.root.title(m.title)
        self.title_label.configure(text=m.title)
        self.subtitle_label.configure(text=m.subtitle)
        self.language_button.configure(text=m.switch_language)
        self.img_frame.configure(text=m.upload_title)
        self.img_state_label.configure(
            text=m.image_loaded if self.image_data else m.no_image
        )
        self.formats_label.configure(text=m.formats)
        self.browse_button.configure(
            text=m.click_to_change if self.image_data else m.click_to_upload
        )
        self.grid_settings.set_messages(m)
        self.process_button.configure(
            text=m.working if self.is_busy else m.slice_download
        )
        self.privacy_label.configure(text=m.privacy)
        self.reset_button.configure(text=m.reset_position)
        self.steps_label.configure(
            text="\n".join(
                f"{title}: {desc}"
                for title, desc in (
                    (m.step1_title, m.step1_desc),
                    (m.step2_title, m.step2_desc),
                    (m.step3_title, m.step3_desc),
                )
            )
        )
        self.set_status(self.status)
        self.redraw_preview()

    def toggle_language(self):
        self.language = self.language.toggled()
        self.messages = get_messages(self.language)
        self.logger.info(f"Language switched to {self.language.value}")
        self.apply_language()

    @property
    def is_busy(self):
        return self.status in (STATUS_PROCESSING, STATUS_ZIPPING)

    def set_status(self, status, detail=None):
        self.status = status
        m = self.messages
        text = {
            STATUS_IDLE: m.image_loaded if self.image_data else m.upload_to_preview,
            STATUS_PROCESSING: m.processing,
            STATUS_ZIPPING: m.zipping,
            STATUS_DONE: m.done,
            STATUS_ERROR: m.error,
        }[status]
        self.status_var.set(f"{text} {detail}" if detail else text)

    def browse_image(self):
        """Open a file dialog to select an image."""
        path = filedialog.askopenfilename(
            filetypes=[
                ("Image files", "*.png *.jpg *.jpeg *.webp"),
                ("All files", "*.*"),
            ]
        )
        if path:
            self.load_image(path)

    def load_image(self, path):
        """
        Load an image for slicing and show it in the preview.

        Returns:
            True if the image could be decoded
        """
        try:
            with open(path, "rb") as f:
                data = f.read()
            with decode_image(data) as raster:
                preview = raster.image.copy()
        except (OSError, SlicerError) as e:
            self.logger.error(f"Error loading image {path}: {e}")
            messagebox.showerror(self.messages.title, error_message(self.messages, e))
            return False

        self.image_data = data
        self.image_path = path
        self.preview_img = preview
        self.drag.reset()
        self.progress_var.set(0)
        self.logger.info(f"Loaded image {path}: {preview.width}x{preview.height}")
        self.set_status(STATUS_IDLE, os.path.basename(path))
        self.apply_language()
        return True

    def reset_position(self):
        self.drag.reset()
        self.redraw_preview()

    def _on_canvas_resize(self, event):
        """Handle canvas resize events to update the displayed image."""
        self.redraw_preview()

    def _on_drag_start(self, event):
        if self.preview_img is None or self.is_busy:
            return
        self.drag.start(event.x, event.y)
        self.canvas.configure(cursor="fleur")

    def _on_drag_move(self, event):
        if self.drag.move(event.x, event.y):
            left, top = self.frame_origin
            self.canvas.coords("image", left + self.drag.x, top + self.drag.y)

    def _on_drag_end(self, event):
        self.drag.end()
        self.canvas.configure(cursor="")

    def redraw_preview(self):
        """Draw the image, the fixed grid overlay and the tile numbers."""
        config = self.grid_settings.get_config()
        self.preview_frame.configure(text=format_preview_info(self.messages, config))
        self.preview_info_label.configure(text=format_preview_info(self.messages, config))

        self.canvas.delete("all")
        canvas_width = self.canvas.winfo_width()
        canvas_height = self.canvas.winfo_height()
        if canvas_width <= 1:  # Canvas not yet realized
            canvas_width = 600
            canvas_height = 450

        if self.preview_img is None:
            self.canvas.create_text(
                canvas_width // 2,
                canvas_height // 2,
                text=f"{self.messages.no_image}\n{self.messages.upload_to_preview}",
                fill="gray",
                justify=tk.CENTER,
            )
            return

        img_width, img_height = self.preview_img.size
        # Fit the image inside the canvas, never upscale
        scale = min(canvas_width / img_width, canvas_height / img_height, 1.0)
        display_width = max(1, int(img_width * scale))
        display_height = max(1, int(img_height * scale))
        self.display_size = (display_width, display_height)
        self.drag.set_bounds(display_width, display_height)

        left = (canvas_width - display_width) // 2
        top = (canvas_height - display_height) // 2
        self.frame_origin = (left, top)

        display_img = self.preview_img.resize(
            (display_width, display_height), Image.Resampling.BILINEAR
        )
        self.photo_img = ImageTk.PhotoImage(display_img)
        self.canvas.create_image(
            left + self.drag.x,
            top + self.drag.y,
            image=self.photo_img,
            anchor=tk.NW,
            tags="image",
        )

        # The grid stays where the centered image was; the image moves beneath it
        cell_width = display_width / config.cols
        cell_height = display_height / config.rows
        for i in range(config.cols + 1):
            x = left + i * cell_width
            self.canvas.create_line(x + 1, top, x + 1, top + display_height, fill=GRID_SHADOW_COLOR)
            self.canvas.create_line(x, top, x, top + display_height, fill=GRID_LINE_COLOR)
        for i in range(config.rows + 1):
            y = top + i * cell_height
            self.canvas.create_line(left, y + 1, left + display_width, y + 1, fill=GRID_SHADOW_COLOR)
            self.canvas.create_line(left, y, left + display_width, y, fill=GRID_LINE_COLOR)

        for row in range(config.rows):
            for col in range(config.cols):
                self.canvas.create_text(
                    left + (col + 0.5) * cell_width,
                    top + (row + 0.5) * cell_height,
                    text=str(row * config.cols + col + 1),
                    fill="white",
                    font=("TkDefaultFont", 8),
                )

    def _set_controls_enabled(self, enabled):
        state = tk.NORMAL if enabled else tk.DISABLED
        self.browse_button.configure(state=state)
        self.process_button.configure(state=state)
        self.reset_button.configure(state=state)
        self.grid_settings.set_enabled(enabled)

    def _on_progress(self, percent):
        self.progress_var.set(percent)
        self.progress_label.configure(text=f"{round(percent)}%")
        if percent > 50 and self.status != STATUS_ZIPPING:
            self.set_status(STATUS_ZIPPING)
        self.root.update_idletasks()

    def process_and_save(self):
        """Slice the loaded image and save the ZIP where the user chooses."""
        if self.image_data is None:
            self.status_var.set(self.messages.upload_to_preview)
            return

        config = self.grid_settings.get_config()
        filename = os.path.basename(self.image_path)
        save_path = filedialog.asksaveasfilename(
            defaultextension=".zip",
            initialdir=os.path.abspath(self.output_dir),
            initialfile=archive_name(filename),
            filetypes=[("ZIP archive", "*.zip")],
        )
        if not save_path:
            return

        pan, metrics = self.drag.snapshot(self.preview_img.size, self.display_size)

        def deliver(archive):
            return save_archive(
                archive, os.path.dirname(save_path), os.path.basename(save_path)
            )

        self.set_status(STATUS_PROCESSING)
        self.progress_var.set(0)
        self.process_button.configure(text=self.messages.working)
        self._set_controls_enabled(False)
        self.root.update_idletasks()

        try:
            result = asyncio.run(
                process_and_zip_image(
                    self.image_data,
                    filename,
                    config,
                    pan=pan,
                    metrics=metrics,
                    progress_callback=self._on_progress,
                    deliver=deliver,
                )
            )
        except SlicerError as e:
            self.logger.error(f"Error during slicing: {e}")
            self.set_status(STATUS_ERROR)
            messagebox.showerror(self.messages.title, error_message(self.messages, e))
            return
        finally:
            self._set_controls_enabled(True)
            self.process_button.configure(text=self.messages.slice_download)

        self.output_dir = os.path.dirname(result.delivered_to)
        self.set_status(
            STATUS_DONE, self.messages.saved_to.format(path=result.delivered_to)
        )
        self.show_completion_alert(self.output_dir)
        # Return to idle after a moment so the user sees "Done"
        self.root.after(2000, lambda: self.set_status(STATUS_IDLE))
