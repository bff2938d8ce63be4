# src/regionsnap/selection/region_selector.py

"""
Turns a press / drag / release pointer gesture into a capture rectangle.

The RegionSelector knows nothing about windows or painting. The overlay
feeds it window-local pointer positions, and on release it returns a
CaptureRectangle in absolute screen coordinates: normalized so the origin
is the top-left corner whatever the drag direction, and shifted by the
virtual-screen offset of the overlay window.
"""

import logging
from typing import NamedTuple, Optional

from regionsnap.errors import InvalidGestureError

logger = logging.getLogger(__name__)


class PointerPoint(NamedTuple):
    """A pointer position in window-local pixels."""
    x: int
    y: int


class Offset(NamedTuple):
    """Origin of the overlay window relative to the primary display origin."""
    x: int
    y: int


class CaptureRectangle(NamedTuple):
    """A region of the screen in absolute coordinates. Width and height are never negative."""
    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def as_mss_monitor(self) -> dict:
        """Returns the rectangle in the dictionary form `mss.grab` expects."""
        return {"left": self.x, "top": self.y, "width": self.width, "height": self.height}


def rectangle_of(a: PointerPoint, b: PointerPoint) -> CaptureRectangle:
    """Normalized rectangle spanned by two corner points, in either order."""
    return CaptureRectangle(
        x=min(a.x, b.x),
        y=min(a.y, b.y),
        width=abs(a.x - b.x),
        height=abs(a.y - b.y),
    )


class RegionSelector:
    """
    Tracks one selection gesture at a time.

    Idle -> Armed on press, Armed -> Idle on release. Pressing again while
    armed moves the anchor to the new point. Drag events that arrive while
    idle are ignored. Not thread-safe; drive it from the GUI thread only.
    """

    def __init__(self):
        self.anchor: Optional[PointerPoint] = None
        self.current: Optional[PointerPoint] = None

    @property
    def is_armed(self) -> bool:
        return self.anchor is not None

    @property
    def live_rectangle(self) -> Optional[CaptureRectangle]:
        """
        The rectangle being dragged, in window-local coordinates.

        Only meant for on-screen feedback: no offset is applied. None while idle.
        """
        if self.anchor is None or self.current is None:
            return None
        return rectangle_of(self.anchor, self.current)

    def on_press(self, point: PointerPoint) -> None:
        self.anchor = point
        self.current = point
        logger.debug(f"Selection anchored at {tuple(point)}")

    def on_drag(self, point: PointerPoint) -> None:
        if self.anchor is None:
            logger.debug(f"Ignoring drag to {tuple(point)}: no selection in progress")
            return
        self.current = point

    def on_release(self, point: PointerPoint, offset: Offset) -> CaptureRectangle:
        """
        Finishes the gesture and returns the selected region in screen coordinates.

        Args:
            point: Window-local position where the button was released.
            offset: Screen position of the overlay window's origin.

        Returns:
            The normalized rectangle with `offset` added to its origin.

        Raises:
            InvalidGestureError: If no press was recorded for this gesture.
        """
        if self.anchor is None:
            raise InvalidGestureError(f"Pointer released at {tuple(point)} without a prior press")

        self.current = point
        local_rect = rectangle_of(self.anchor, self.current)
        self.reset()

        return local_rect._replace(x=local_rect.x + offset.x, y=local_rect.y + offset.y)

    def reset(self) -> None:
        """Drops any gesture in progress and returns to idle."""
        self.anchor = None
        self.current = None
