# src/regionsnap/ui/overlay_port.py
"""
Capability interface between the selection logic and a windowing layer.

Any toolkit that can show a full-screen overlay and report pointer events
can drive a RegionSelector by implementing OverlayPort.
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional

from regionsnap.selection.region_selector import CaptureRectangle, Offset, PointerPoint


class GestureListener(ABC):
    """Receives pointer events from an overlay, in window-local coordinates."""

    @abstractmethod
    def on_press(self, point: PointerPoint) -> None:
        pass

    @abstractmethod
    def on_drag(self, point: PointerPoint) -> None:
        pass

    @abstractmethod
    def on_release(self, point: PointerPoint) -> None:
        pass

    @abstractmethod
    def on_cancel(self) -> None:
        """The user aborted the selection (e.g. pressed Escape)."""
        pass


class OverlayPort(ABC):
    """A full-screen selection overlay."""

    @abstractmethod
    def bind(self, listener: GestureListener) -> None:
        """Route pointer events to `listener`."""
        pass

    @abstractmethod
    def display_overlay(self) -> None:
        pass

    @abstractmethod
    def hide_overlay(self, on_hidden: Optional[Callable[[], None]] = None) -> None:
        """
        Hide the overlay. `on_hidden` runs once the overlay is fully gone from
        the screen, so a capture taken inside it will not contain the overlay.
        """
        pass

    @abstractmethod
    def update_selection(self, rect: Optional[CaptureRectangle]) -> None:
        """Show live feedback for `rect` (window-local), or clear it with None."""
        pass

    @abstractmethod
    def screen_offset(self) -> Offset:
        """Screen position of the overlay's top-left corner."""
        pass

    @abstractmethod
    def to_physical(self, rect: CaptureRectangle) -> CaptureRectangle:
        """Converts an absolute logical rectangle to the physical pixels a screen grab uses."""
        pass
