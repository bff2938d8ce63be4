# src/regionsnap/app_logic/state_machine.py

"""
Defines and manages the core application state machine.

This module is the central orchestrator of the RegionSnap application. It
handles the workflow transitions: Idle -> Selecting -> Capturing -> Saving.
It is triggered by the global hotkey or the tray menu, routes overlay pointer
events through a RegionSelector, waits for the overlay to be fully hidden,
grabs the selected region and hands it to the save workflow.
"""

import logging
from enum import Enum, auto
from typing import Callable, Optional

import numpy as np
from PyQt6.QtCore import QObject, pyqtSignal

from regionsnap.capture.screen_capture import capture_screen_area
from regionsnap.errors import CaptureError, ExportError, InvalidGestureError
from regionsnap.save.save_workflow import SaveWorkflow
from regionsnap.selection.region_selector import CaptureRectangle, Offset, PointerPoint, RegionSelector
from regionsnap.ui.notice_window import show_notice
from regionsnap.ui.overlay_port import GestureListener, OverlayPort
from regionsnap.utils.config import ConfigManager

logger = logging.getLogger(__name__)

NO_SELECTION_TITLE = "No region selected"


class AppState(Enum):
    """Enumeration for the application's possible states."""
    IDLE = auto()
    SELECTING = auto()
    CAPTURING = auto()
    SAVING = auto()


class SelectionSession(GestureListener):
    """
    Drives one RegionSelector from overlay events.

    Press and drag update the overlay's live rectangle. Release resolves the
    gesture into a screen rectangle (`on_selected`) or, when no press was
    seen, reports the InvalidGestureError to `on_invalid`.
    """

    def __init__(self, overlay: OverlayPort, offset: Offset,
                 on_selected: Callable[[CaptureRectangle], None],
                 on_invalid: Callable[[InvalidGestureError], None],
                 on_cancelled: Callable[[], None]):
        self.selector = RegionSelector()
        self._overlay = overlay
        self._offset = offset
        self._on_selected = on_selected
        self._on_invalid = on_invalid
        self._on_cancelled = on_cancelled

    def on_press(self, point: PointerPoint) -> None:
        self.selector.on_press(point)
        self._overlay.update_selection(self.selector.live_rectangle)

    def on_drag(self, point: PointerPoint) -> None:
        self.selector.on_drag(point)
        if self.selector.is_armed:
            self._overlay.update_selection(self.selector.live_rectangle)

    def on_release(self, point: PointerPoint) -> None:
        try:
            rect = self.selector.on_release(point, self._offset)
        except InvalidGestureError as e:
            self._on_invalid(e)
            return
        self._on_selected(rect)

    def on_cancel(self) -> None:
        self.selector.reset()
        self._on_cancelled()


class StateMachine(QObject):
    """
    Manages the application's state and orchestrates the workflow.

    It connects overlay events to the selection logic and the selection
    result to screen capture and saving, and manages the transitions between
    states.
    """
    # Signal to notify the main application of a failed capture or save
    error_occurred = pyqtSignal(str)
    # Emitted with the written file path after a successful save
    capture_saved = pyqtSignal(str)

    def __init__(self, overlay: OverlayPort, save_workflow: SaveWorkflow, config: ConfigManager,
                 capture: Callable[..., np.ndarray] = capture_screen_area,
                 notify: Callable[..., object] = show_notice,
                 parent=None):
        """
        Args:
            overlay (OverlayPort): The selection overlay.
            save_workflow (SaveWorkflow): Writes the captured image.
            config (ConfigManager): Application settings.
            capture (callable): `capture(rect)` -> BGR image array, `rect` in physical pixels.
            notify (callable): `notify(title, detail, duration_ms)` shows a status message.
        """
        super().__init__(parent)
        self._state = AppState.IDLE
        self._overlay = overlay
        self._save_workflow = save_workflow
        self._config = config
        self._capture = capture
        self._notify = notify
        self._session: Optional[SelectionSession] = None

        # The overlay geometry is fixed for the lifetime of the application
        self._offset = overlay.screen_offset()
        self._min_size = max(0, self._int_setting("min_selection_size", 1))

        logger.info(f"State machine initialized (screen offset {tuple(self._offset)}).")

    @property
    def state(self) -> AppState:
        return self._state

    def _set_state(self, new_state: AppState):
        """Sets and logs the application state."""
        if self._state != new_state:
            logger.info(f"State transition: {self._state.name} -> {new_state.name}")
            self._state = new_state

    def _int_setting(self, key: str, default: int) -> int:
        value = self._config.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning(f"Config value {key}={value!r} is not a number; using {default}.")
            return default

    def _show_notice(self, title: str, detail: str = ""):
        self._notify(title, detail, self._int_setting("notice_duration_ms", 4000))

    def start_capture(self):
        """
        Entry point for the workflow, triggered by the hotkey or the tray.
        """
        if self._state != AppState.IDLE:
            logger.warning(f"Capture attempted while in non-idle state: {self._state.name}")
            return

        self._session = SelectionSession(
            self._overlay,
            self._offset,
            on_selected=self._on_region_selected,
            on_invalid=self._on_invalid_gesture,
            on_cancelled=self._on_selection_cancelled,
        )
        self._overlay.bind(self._session)
        self._set_state(AppState.SELECTING)
        self._overlay.display_overlay()

    def _on_region_selected(self, rect: CaptureRectangle):
        if self._state != AppState.SELECTING:
            return

        if rect.is_empty or rect.width < self._min_size or rect.height < self._min_size:
            logger.warning(f"Selection {rect.width}x{rect.height} is below the minimum size; ignoring it.")
            self._abort_selection(f"The selected area was {rect.width}x{rect.height} pixels.")
            return

        logger.info(f"Region selected: x={rect.x}, y={rect.y}, w={rect.width}, h={rect.height}")
        self._set_state(AppState.CAPTURING)
        self._session = None
        # Grab only after the overlay is gone, or it would end up in the capture
        self._overlay.hide_overlay(on_hidden=lambda: self._capture_and_save(rect))

    def _on_invalid_gesture(self, error: InvalidGestureError):
        if self._state != AppState.SELECTING:
            return
        logger.warning(f"Invalid selection gesture: {error}")
        self._abort_selection(str(error))

    def _abort_selection(self, detail: str):
        self._session = None
        self._overlay.hide_overlay()
        self._show_notice(NO_SELECTION_TITLE, detail)
        self._set_state(AppState.IDLE)

    def _on_selection_cancelled(self):
        if self._state != AppState.SELECTING:
            return
        logger.info("Selection cancelled by user.")
        self._session = None
        self._overlay.hide_overlay()
        self._set_state(AppState.IDLE)

    def _capture_and_save(self, rect: CaptureRectangle):
        """
        Runs once the overlay is hidden: grabs the region and saves it.
        """
        if self._state != AppState.CAPTURING:
            return

        try:
            image = self._capture(self._overlay.to_physical(rect))
            self._set_state(AppState.SAVING)
            saved_path = self._save_workflow.run(image, rect)
        except (CaptureError, ExportError) as e:
            logger.error(f"Capture of {tuple(rect)} failed: {e}", exc_info=True)
            self.error_occurred.emit(str(e))
            self._show_notice("Capture failed", str(e))
            return
        except Exception as e:
            # Runs from a Qt timer; an exception escaping here would abort the process
            logger.error(f"Unexpected error while capturing {tuple(rect)}: {e}", exc_info=True)
            self.error_occurred.emit(f"Unexpected error: {e}")
            self._show_notice("Capture failed", str(e))
            return
        finally:
            self._set_state(AppState.IDLE)

        if saved_path is None:
            return

        self.capture_saved.emit(str(saved_path))
        self._show_notice("Capture saved", str(saved_path))
