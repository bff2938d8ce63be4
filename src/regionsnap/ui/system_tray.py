# src/regionsnap/ui/system_tray.py

"""
Implements the system tray icon for the RegionSnap application.

This module provides the SystemTrayIcon class, which creates and manages the
application's icon in the system tray. Its context menu starts a capture,
opens the folder captures are saved to, and quits the application.
"""

import logging
from typing import Callable

from PyQt6.QtWidgets import QSystemTrayIcon, QMenu, QApplication, QStyle
from PyQt6.QtGui import QIcon, QAction, QDesktopServices
from PyQt6.QtCore import QCoreApplication, QUrl

from regionsnap.utils.config import ConfigManager

logger = logging.getLogger(__name__)

ICON_PATH = "assets/icon.png"


class SystemTrayIcon(QSystemTrayIcon):
    """
    Manages the application's system tray icon and its context menu.

    The main application logic (hotkey listening, state machine) runs
    independently; the tray provides the user-facing controls.
    """

    def __init__(self, on_capture: Callable[[], None], config: ConfigManager, parent=None):
        """
        Initializes the system tray icon and its context menu.

        Args:
            on_capture (callable): Invoked when "Capture Region" is chosen.
            config (ConfigManager): Used to find the save directory and hotkey.
        """
        super().__init__(parent)
        self._on_capture = on_capture
        self._config = config

        self._set_icon()
        self.setToolTip(f"RegionSnap - Press {config.get('hotkey')} to Capture")
        self.setVisible(True)

        self.menu = QMenu()
        self._create_actions()
        self.setContextMenu(self.menu)
        self.activated.connect(self._on_activated)

    def _set_icon(self):
        """
        Loads the application icon, falling back to a standard Qt icon.
        """
        icon = QIcon(ICON_PATH)
        if icon.isNull():
            logger.warning(f"Could not load icon from '{ICON_PATH}'. Using the default icon.")
            icon = QApplication.style().standardIcon(QStyle.StandardPixmap.SP_ComputerIcon)
        self.setIcon(icon)

    def _create_actions(self):
        capture_action = QAction("Capture Region", self)
        capture_action.triggered.connect(self._on_capture)

        open_folder_action = QAction("Open Captures Folder", self)
        open_folder_action.triggered.connect(self.open_save_directory)

        quit_action = QAction("Quit RegionSnap", self)
        quit_action.triggered.connect(self.quit_application)

        self.menu.addAction(capture_action)
        self.menu.addAction(open_folder_action)
        self.menu.addSeparator()
        self.menu.addAction(quit_action)

    def _on_activated(self, reason):
        # Left click on the icon starts a capture directly
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self._on_capture()

    def open_save_directory(self):
        directory = self._config.save_directory
        directory.mkdir(parents=True, exist_ok=True)
        QDesktopServices.openUrl(QUrl.fromLocalFile(str(directory)))

    def quit_application(self):
        """
        Quits the entire application by exiting the event loop.
        """
        logger.info("Quitting RegionSnap via system tray.")
        QCoreApplication.instance().quit()
