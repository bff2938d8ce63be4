# src/regionsnap/utils/image_export.py

"""
Writes captured screen images to disk with Pillow.

Captures arrive as BGR NumPy arrays (the layout mss produces). This module
flips them to RGB, picks the Pillow format from the requested extension,
and builds collision-free default file names.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image

from regionsnap.errors import ExportError
from regionsnap.selection.region_selector import CaptureRectangle

logger = logging.getLogger(__name__)

# Extension -> Pillow format name
SUPPORTED_FORMATS = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "bmp": "BMP",
    "tiff": "TIFF",
    "webp": "WEBP",
}

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def normalize_extension(fmt: str) -> str:
    """Lower-cases `fmt` and strips a leading dot. Raises ExportError if unsupported."""
    ext = fmt.lower().lstrip(".") if isinstance(fmt, str) else None
    if ext not in SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported image format '{fmt}'. Choose one of: {', '.join(sorted(SUPPORTED_FORMATS))}"
        )
    return ext


def default_filename(rect: CaptureRectangle, fmt: str = "png", prefix: str = "capture",
                     when: Optional[datetime] = None) -> str:
    """
    Builds a file name like `capture_2024-05-01_13-45-10_640x480.png`.
    """
    when = when or datetime.now()
    ext = normalize_extension(fmt)
    return f"{prefix}_{when.strftime(TIMESTAMP_FORMAT)}_{rect.width}x{rect.height}.{ext}"


def unique_path(directory: Union[str, Path], filename: str) -> Path:
    """
    Returns `directory / filename`, adding `_1`, `_2`, ... before the suffix
    until the path does not exist yet.
    """
    directory = Path(directory)
    candidate = directory / filename
    stem, suffix = candidate.stem, candidate.suffix
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem}_{counter}{suffix}"
        counter += 1
    return candidate


def save_image(image: np.ndarray, path: Union[str, Path], fmt: Optional[str] = None) -> Path:
    """
    Saves a BGR (or BGRA) image array to `path`.

    Args:
        image: The captured pixels, shape (height, width, 3 or 4).
        path: Destination file. Missing parent directories are created.
        fmt: Image format. Defaults to the suffix of `path`.

    Returns:
        The path that was written.

    Raises:
        ExportError: If the image is empty, the format is unsupported, or
                     the file cannot be written.
    """
    path = Path(path)
    if image is None or image.size == 0:
        raise ExportError("Refusing to save an empty image.")

    ext = normalize_extension(fmt or path.suffix or "png")
    if not path.suffix:
        path = path.with_suffix(f".{ext}")

    # BGR(A) -> RGB, dropping alpha which JPEG and BMP cannot store anyway.
    rgb = np.ascontiguousarray(image[:, :, 2::-1], dtype=np.uint8)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(rgb).save(path, format=SUPPORTED_FORMATS[ext])
    except (OSError, ValueError) as e:
        raise ExportError(f"Could not write image to {path}: {e}") from e

    logger.info(f"Saved {rgb.shape[1]}x{rgb.shape[0]} capture to {path}")
    return path
