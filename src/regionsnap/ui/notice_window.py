# src/regionsnap/ui/notice_window.py

"""
Defines a small, temporary window for short status messages.

This module contains the NoticeWindow class, a non-intrusive PyQt6 QWidget
that appears in the bottom-right corner of the screen, shows a title and
an optional detail line (e.g. "Saved" and the file path, or "No region
selected"), and disappears automatically after a few seconds.
"""

from PyQt6.QtCore import Qt, QTimer, QPoint
from PyQt6.QtWidgets import QApplication, QWidget, QVBoxLayout, QLabel


class NoticeWindow(QWidget):
    """
    A small, temporary pop-up window showing a status message.

    The window is frameless, stays on top of other applications, and closes
    itself after `duration_ms`.
    """

    def __init__(self, title: str, detail: str = "", duration_ms: int = 4000, parent: QWidget = None):
        """
        Initializes the notice window.

        Args:
            title (str): The headline, shown prominently.
            detail (str): Optional second line, e.g. a file path.
            duration_ms (int): Time in milliseconds before the window auto-closes.
            parent (QWidget, optional): The parent widget. Defaults to None.
        """
        super().__init__(parent)

        self.title = title
        self.detail = detail
        self._init_window_properties()
        self._init_ui()

        self.adjustSize()
        self.move(self._bottom_right_position())

        QTimer.singleShot(duration_ms, self.close)

    def _init_window_properties(self):
        """Sets the window flags and attributes for a non-intrusive popup."""
        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint |       # No title bar or border
            Qt.WindowType.WindowStaysOnTopHint |      # Always on top
            Qt.WindowType.ToolTip                     # Behaves like a tooltip
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)

    def _init_ui(self):
        """Creates and arranges the widgets within the window."""
        layout = QVBoxLayout()
        layout.setContentsMargins(15, 10, 15, 10)
        layout.setSpacing(4)

        title_label = QLabel(self.title)
        title_label.setObjectName("TitleLabel")
        layout.addWidget(title_label)

        if self.detail:
            detail_label = QLabel(self.detail)
            detail_label.setObjectName("DetailLabel")
            detail_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
            layout.addWidget(detail_label)

        self.setLayout(layout)
        self._apply_stylesheet()

    def _apply_stylesheet(self):
        self.setStyleSheet("""
            QWidget {
                background-color: rgba(35, 35, 35, 235);
                color: #FFFFFF;
                border: 1px solid #555555;
                border-radius: 6px;
                font-family: sans-serif;
            }
            QLabel#TitleLabel {
                font-size: 15px;
                font-weight: bold;
                color: #87CEEB; /* Sky Blue */
                border: none;
            }
            QLabel#DetailLabel {
                font-size: 12px;
                color: #DDDDDD;
                border: none;
            }
        """)

    def _bottom_right_position(self) -> QPoint:
        """Places the window in the bottom-right corner of the primary screen's free area."""
        screen_geometry = QApplication.primaryScreen().availableGeometry()
        window_size = self.sizeHint()
        return QPoint(screen_geometry.right() - window_size.width() - 20,
                      screen_geometry.bottom() - window_size.height() - 20)


def show_notice(title: str, detail: str = "", duration_ms: int = 4000) -> NoticeWindow:
    """Creates and shows a NoticeWindow. The window deletes itself on close."""
    window = NoticeWindow(title, detail, duration_ms=duration_ms)
    window.show()
    return window
