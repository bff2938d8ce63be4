#!/usr/bin/env python3
# src/regionsnap/main.py

"""
Main entry point for the RegionSnap application.

This script initializes the QApplication, sets up the system tray icon,
registers the global hotkey listener, and starts the application event loop.
It orchestrates the overall application lifecycle.
"""

import sys
import logging

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtWidgets import QApplication
from mss.exception import ScreenShotError
from pynput import keyboard

from regionsnap.app_logic.state_machine import StateMachine
from regionsnap.capture.screen_capture import virtual_screen_bounds
from regionsnap.save.save_workflow import SaveWorkflow
from regionsnap.ui.capture_overlay import QtOverlayService
from regionsnap.ui.system_tray import SystemTrayIcon
from regionsnap.utils.config import get_config


def setup_logging(level_name: str = "INFO"):
    """Configures basic logging for the application."""
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout,
    )
    # Reduce verbosity from libraries that use logging
    logging.getLogger("pynput").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.info("RegionSnap application starting...")


class HotkeyBridge(QObject):
    """
    Carries hotkey presses from the pynput listener thread to the GUI thread.

    pynput calls back on its own thread; emitting a signal from there queues
    the connected slot on the thread that owns the receiver.
    """
    activated = pyqtSignal()


def main():
    """Main execution function for RegionSnap."""
    config = get_config()
    setup_logging(config.get("log_level", "INFO"))

    app = QApplication(sys.argv)
    # Keep running in the tray after the overlay or a notice closes.
    app.setQuitOnLastWindowClosed(False)

    overlay = QtOverlayService(
        opacity=float(config.get("overlay_opacity", 0.3)),
        border_color=config.get("selection_border_color", "#ffffff"),
    )
    state_machine = StateMachine(overlay, SaveWorkflow(config), config)

    try:
        bounds = virtual_screen_bounds()
        logging.info(f"Virtual desktop spans {bounds.width}x{bounds.height} at ({bounds.x}, {bounds.y})")
    except ScreenShotError as e:
        logging.warning(f"Could not query monitor layout via mss: {e}")

    hotkey = config.get("hotkey", "<ctrl>+<alt>+s")
    bridge = HotkeyBridge()
    bridge.activated.connect(state_machine.start_capture)

    def on_hotkey_activate():
        """Runs on the pynput thread; only hands the event over to Qt."""
        logging.info(f"Hotkey '{hotkey}' activated. Starting capture sequence.")
        bridge.activated.emit()

    try:
        hotkey_listener = keyboard.GlobalHotKeys({hotkey: on_hotkey_activate})
    except ValueError as e:
        logging.error(f"Invalid hotkey '{hotkey}' in configuration: {e}")
        sys.exit(1)

    try:
        tray_icon = SystemTrayIcon(state_machine.start_capture, config)
        tray_icon.show()
        logging.info(f"System tray icon created. Listening for hotkey: {hotkey}")
    except Exception as e:
        logging.error(f"Failed to create system tray icon: {e}", exc_info=True)
        sys.exit(1)

    exit_code = 1
    try:
        hotkey_listener.start()
        logging.info("Global hotkey listener started successfully.")

        # Blocks until the application is quit (e.g., via the tray icon's quit action).
        exit_code = app.exec()
    except Exception as e:
        logging.error(f"An unhandled exception occurred in the main loop: {e}", exc_info=True)
    finally:
        if hotkey_listener.is_alive():
            hotkey_listener.stop()
            logging.info("Global hotkey listener stopped.")
        logging.info("RegionSnap application has shut down.")

    sys.exit(exit_code)


if __name__ == '__main__':
    main()
