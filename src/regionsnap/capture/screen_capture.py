# src/regionsnap/capture/screen_capture.py

"""
Utility module for screen capturing using the 'mss' library.

This module grabs a CaptureRectangle of the screen and returns it as a NumPy
array in BGR order, ready to be handed to the save workflow.
"""

import logging
from typing import NamedTuple, Sequence

import mss
import mss.exception
import numpy as np

from regionsnap.errors import CaptureError
from regionsnap.selection.region_selector import CaptureRectangle, Offset

logger = logging.getLogger(__name__)


class ScreenInfo(NamedTuple):
    """
    One monitor as the windowing layer sees it.

    geometry is in logical pixels, physical_origin is where the monitor's
    top-left corner sits in the physical pixel space mss grabs from.
    """
    geometry: CaptureRectangle
    ratio: float
    physical_origin: Offset

    def contains(self, x: float, y: float) -> bool:
        g = self.geometry
        return g.x <= x < g.x + g.width and g.y <= y < g.y + g.height


def to_physical(rect: CaptureRectangle, screens: Sequence[ScreenInfo]) -> CaptureRectangle:
    """
    Converts a rectangle from logical (Qt) pixels to physical (mss) pixels.

    The screen holding the rectangle's centre decides the ratio, and the
    position is measured from that screen's origin. With no matching screen
    the first entry (the primary) is used; with no screens the rectangle is
    returned unchanged.
    """
    if not screens:
        return rect
    center_x = rect.x + rect.width / 2
    center_y = rect.y + rect.height / 2
    screen = next((s for s in screens if s.contains(center_x, center_y)), screens[0])

    origin, ratio = screen.geometry, screen.ratio
    return CaptureRectangle(
        x=screen.physical_origin.x + round((rect.x - origin.x) * ratio),
        y=screen.physical_origin.y + round((rect.y - origin.y) * ratio),
        width=round(rect.width * ratio),
        height=round(rect.height * ratio),
    )


def capture_screen_area(rect: CaptureRectangle) -> np.ndarray:
    """
    Captures a specific area of the screen.

    Args:
        rect: The region to grab, in physical screen pixels (see `to_physical`).

    Returns:
        A NumPy array representing the captured image in BGR color format.
        Returns an empty array if the width or height is zero.

    Raises:
        CaptureError: If mss fails to grab the screen.
    """
    # Ensure the bounding box has a valid, positive area.
    if rect.width <= 0 or rect.height <= 0:
        return np.array([], dtype=np.uint8)

    try:
        with mss.mss() as sct:
            sct_img = sct.grab(rect.as_mss_monitor())

            # The raw format from mss is BGRA. Drop the alpha channel.
            img_bgra = np.array(sct_img)
            img_bgr = img_bgra[:, :, :3]

            logger.debug(f"Captured {img_bgr.shape[1]}x{img_bgr.shape[0]} pixels at ({rect.x}, {rect.y})")
            return img_bgr
    except mss.exception.ScreenShotError as e:
        raise CaptureError(f"Screen capture of {tuple(rect)} failed: {e}") from e


def virtual_screen_bounds() -> CaptureRectangle:
    """
    Returns the bounding box of all monitors as reported by mss.

    Monitor 0 in mss is the union of every attached display, so its origin is
    the virtual-screen origin (negative when a monitor sits left of or above
    the primary one).
    """
    with mss.mss() as sct:
        everything = sct.monitors[0]
    return CaptureRectangle(
        x=everything["left"],
        y=everything["top"],
        width=everything["width"],
        height=everything["height"],
    )
