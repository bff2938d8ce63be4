# src/regionsnap/save/save_workflow.py

"""
The step that runs after a region has been captured.

SaveWorkflow decides where the capture goes (asking the user with a save
dialog, or deriving a unique name in the configured folder), writes the
image, and optionally puts the saved path on the clipboard.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

import numpy as np
from PyQt6.QtWidgets import QFileDialog

from regionsnap.errors import ExportError
from regionsnap.selection.region_selector import CaptureRectangle
from regionsnap.utils.clipboard import copy_to_clipboard
from regionsnap.utils.config import ConfigManager
from regionsnap.utils.image_export import default_filename, save_image, unique_path

logger = logging.getLogger(__name__)

FILE_DIALOG_FILTERS = {
    "PNG Image (*.png)": "png",
    "JPEG Image (*.jpg *.jpeg)": "jpg",
    "Bitmap (*.bmp)": "bmp",
    "TIFF Image (*.tiff)": "tiff",
    "WebP Image (*.webp)": "webp",
}


def apply_filter_extension(path: Path, selected_filter: str) -> Path:
    """Gives `path` the extension of the chosen dialog filter if the user typed none."""
    ext = FILE_DIALOG_FILTERS.get(selected_filter)
    if path.suffix or ext is None:
        return path
    return path.with_suffix(f".{ext}")


def ask_path_with_dialog(suggested: Path) -> Optional[Path]:
    """Shows a Qt save dialog. Returns None if the user cancels."""
    suggested_ext = suggested.suffix.lstrip(".").lower()
    initial_filter = next((f for f, ext in FILE_DIALOG_FILTERS.items() if ext == suggested_ext), "")
    filepath, selected_filter = QFileDialog.getSaveFileName(
        None, "Save Capture", str(suggested), ";;".join(FILE_DIALOG_FILTERS), initial_filter
    )
    if not filepath:
        return None
    return apply_filter_extension(Path(filepath), selected_filter)


class SaveWorkflow:
    """
    Writes a captured image to disk according to the user's settings.
    """

    def __init__(self, config: ConfigManager,
                 ask_path: Optional[Callable[[Path], Optional[Path]]] = None):
        """
        Args:
            config (ConfigManager): Source of the save settings.
            ask_path (callable, optional): Called with a suggested path when
                `ask_save_location` is enabled; returns the chosen path or None
                to cancel. Defaults to a Qt file dialog.
        """
        self._config = config
        self._ask_path = ask_path or ask_path_with_dialog

    def suggested_path(self, rect: CaptureRectangle) -> Path:
        filename = default_filename(
            rect,
            fmt=self._config.get("image_format", "png"),
            prefix=self._config.get("filename_prefix", "capture"),
        )
        try:
            directory = self._config.save_directory
        except TypeError as e:
            raise ExportError(
                f"save_directory {self._config.get('save_directory')!r} is not a usable folder"
            ) from e
        return unique_path(directory, filename)

    def run(self, image: np.ndarray, rect: CaptureRectangle) -> Optional[Path]:
        """
        Saves `image`, which was captured from `rect`.

        Returns:
            The written path, or None if the user cancelled the dialog.

        Raises:
            ExportError: If the image is empty or cannot be written.
        """
        if image is None or image.size == 0:
            raise ExportError(f"Nothing was captured for region {tuple(rect)}.")

        target = self.suggested_path(rect)
        if self._config.get("ask_save_location", True):
            target = self._ask_path(target)
            if target is None:
                logger.info("Save dialog cancelled; capture discarded.")
                return None

        # A name typed without an extension gets the configured format.
        fmt = None if target.suffix else self._config.get("image_format", "png")
        saved = save_image(image, target, fmt)

        if self._config.get("copy_path_to_clipboard", True):
            copy_to_clipboard(str(saved))

        return saved
