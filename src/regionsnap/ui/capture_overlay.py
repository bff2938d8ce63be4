# src/regionsnap/ui/capture_overlay.py

"""
Defines the full-screen, semi-transparent overlay for screen capture.

This module contains the CaptureOverlay class, a PyQt6 QWidget that covers
the whole virtual desktop, reports mouse events in window-local coordinates
and paints the selection rectangle it is given. QtOverlayService wraps the
widget behind the OverlayPort interface used by the state machine.
"""

import logging
from typing import Callable, List, Optional

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, QRect, QTimer
from PyQt6.QtGui import QPainter, QPen, QBrush, QColor, QCursor, QGuiApplication

from regionsnap.capture.screen_capture import ScreenInfo, to_physical
from regionsnap.selection.region_selector import CaptureRectangle, Offset, PointerPoint
from regionsnap.ui.overlay_port import GestureListener, OverlayPort

logger = logging.getLogger(__name__)


class CaptureOverlay(QWidget):
    """
    A full-screen, semi-transparent overlay widget for selecting a screen region.

    The widget does not interpret the gesture itself. Left-button press, move
    and release are forwarded to the bound GestureListener; Escape and the
    right button cancel.
    """

    def __init__(self, opacity: float = 0.3, border_color: str = "#ffffff", parent=None):
        """
        Initializes the CaptureOverlay widget.

        Args:
            opacity (float): Opacity of the dimming layer, 0.0 - 1.0.
            border_color (str): Colour of the selection outline.
        """
        super().__init__(parent)

        self.listener: Optional[GestureListener] = None
        self.selection: Optional[QRect] = None
        self._on_hidden: Optional[Callable[[], None]] = None
        self._dim_color = QColor(0, 0, 0, round(255 * max(0.0, min(1.0, opacity))))
        self._border_color = QColor(border_color)

        # Set window flags for a borderless, stay-on-top overlay
        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint |
            Qt.WindowType.WindowStaysOnTopHint |
            Qt.WindowType.Tool
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setCursor(QCursor(Qt.CursorShape.CrossCursor))

    def cover_virtual_desktop(self, geometry: Optional[QRect]):
        """Stretches the overlay over `geometry`, the union of every attached monitor."""
        if geometry is not None:
            self.setGeometry(geometry)
        else:
            logger.warning("No primary screen reported; falling back to full-screen mode.")
            self.showFullScreen()

    def paintEvent(self, event):
        painter = QPainter(self)

        # 1. Dim the whole desktop
        painter.fillRect(self.rect(), QBrush(self._dim_color))

        if self.selection is not None:
            # 2. Punch the selection out of the dimming layer
            painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Clear)
            painter.fillRect(self.selection, Qt.BrushStyle.SolidPattern)
            painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceOver)

            # 3. Outline it
            painter.setPen(QPen(self._border_color, 1, Qt.PenStyle.SolidLine))
            painter.drawRect(self.selection)

    @staticmethod
    def _point(event) -> PointerPoint:
        pos = event.position().toPoint()
        return PointerPoint(pos.x(), pos.y())

    def mousePressEvent(self, event):
        if self.listener is None:
            return
        if event.button() == Qt.MouseButton.LeftButton:
            self.listener.on_press(self._point(event))
        elif event.button() == Qt.MouseButton.RightButton:
            self.listener.on_cancel()

    def mouseMoveEvent(self, event):
        # Only reported while a button is held, since mouse tracking is off
        if self.listener is not None and event.buttons() & Qt.MouseButton.LeftButton:
            self.listener.on_drag(self._point(event))

    def mouseReleaseEvent(self, event):
        if self.listener is not None and event.button() == Qt.MouseButton.LeftButton:
            self.listener.on_release(self._point(event))

    def keyPressEvent(self, event):
        """
        Allows the user to cancel the capture operation with the Escape key.
        """
        if event.key() == Qt.Key.Key_Escape and self.listener is not None:
            self.listener.on_cancel()
        else:
            super().keyPressEvent(event)

    def showEvent(self, event):
        """
        Ensures the cursor and keyboard focus are set every time the widget is shown.
        """
        self.setCursor(QCursor(Qt.CursorShape.CrossCursor))
        super().showEvent(event)
        self.activateWindow()
        self.setFocus()

    def hideEvent(self, event):
        super().hideEvent(event)
        if self._on_hidden is not None:
            callback, self._on_hidden = self._on_hidden, None
            # Let the event loop flush the unmap before anyone grabs the screen
            QTimer.singleShot(0, callback)

    def hide_then(self, on_hidden: Optional[Callable[[], None]]):
        """Hides the overlay and runs `on_hidden` once the hide has been processed."""
        if not self.isVisible():
            if on_hidden is not None:
                QTimer.singleShot(0, on_hidden)
            return
        self._on_hidden = on_hidden
        self.hide()


def describe_screens() -> List[ScreenInfo]:
    """
    Snapshot of the attached monitors, primary first.

    Qt keeps each screen's top-left corner in native pixels and scales only
    its size, so the logical origin doubles as the physical one.
    """
    primary_screen = QGuiApplication.primaryScreen()
    screens = QGuiApplication.screens()
    if primary_screen in screens:
        screens.remove(primary_screen)
        screens.insert(0, primary_screen)

    described = []
    for screen in screens:
        g = screen.geometry()
        described.append(ScreenInfo(
            geometry=CaptureRectangle(g.x(), g.y(), g.width(), g.height()),
            ratio=screen.devicePixelRatio(),
            physical_origin=Offset(g.x(), g.y()),
        ))
    return described


class QtOverlayService(OverlayPort):
    """
    OverlayPort backed by a CaptureOverlay widget.

    The desktop layout is read once here. Window-local positions plus
    screen_offset() only map to screen positions while that layout holds, so
    a monitor added or removed afterwards takes effect on the next start.
    """

    def __init__(self, opacity: float = 0.3, border_color: str = "#ffffff"):
        self._widget = CaptureOverlay(opacity=opacity, border_color=border_color)

        primary_screen = QGuiApplication.primaryScreen()
        self._geometry: Optional[QRect] = primary_screen.virtualGeometry() if primary_screen else None
        self._screens = describe_screens()

    def bind(self, listener: GestureListener) -> None:
        self._widget.listener = listener

    def display_overlay(self) -> None:
        self._widget.selection = None
        self._widget.cover_virtual_desktop(self._geometry)
        self._widget.show()
        self._widget.raise_()

    def hide_overlay(self, on_hidden: Optional[Callable[[], None]] = None) -> None:
        self._widget.selection = None
        self._widget.hide_then(on_hidden)

    def update_selection(self, rect: Optional[CaptureRectangle]) -> None:
        self._widget.selection = None if rect is None else QRect(rect.x, rect.y, rect.width, rect.height)
        self._widget.update()

    def screen_offset(self) -> Offset:
        if self._geometry is None:
            return Offset(0, 0)
        origin = self._geometry.topLeft()
        return Offset(origin.x(), origin.y())

    def to_physical(self, rect: CaptureRectangle) -> CaptureRectangle:
        return to_physical(rect, self._screens)
