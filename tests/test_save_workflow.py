import numpy as np
import pytest

pytest.importorskip("PyQt6.QtWidgets")

from regionsnap.errors import ExportError
from regionsnap.save import save_workflow
from regionsnap.save.save_workflow import SaveWorkflow
from regionsnap.selection.region_selector import CaptureRectangle
from regionsnap.utils.config import ConfigManager

RECT = CaptureRectangle(5, 5, 4, 3)


@pytest.fixture
def config(tmp_path):
    cfg = ConfigManager(config_dir=tmp_path / "cfg")
    cfg.config["save_directory"] = str(tmp_path / "captures")
    cfg.config["copy_path_to_clipboard"] = False
    return cfg


@pytest.fixture
def image():
    return np.zeros((3, 4, 3), dtype=np.uint8)


def test_saves_to_configured_directory_without_asking(config, image, tmp_path):
    config.config["ask_save_location"] = False
    asked = []
    workflow = SaveWorkflow(config, ask_path=asked.append)

    saved = workflow.run(image, RECT)

    assert asked == []
    assert saved.parent == tmp_path / "captures"
    assert saved.name.startswith("capture_") and saved.name.endswith("_4x3.png")
    assert saved.exists()


def test_asks_for_location(config, image, tmp_path):
    chosen = tmp_path / "picked" / "mine.png"
    suggestions = []

    def ask(suggested):
        suggestions.append(suggested)
        return chosen

    saved = SaveWorkflow(config, ask_path=ask).run(image, RECT)

    assert saved == chosen
    assert chosen.exists()
    assert suggestions[0].parent == tmp_path / "captures"


def test_typed_name_without_extension_gets_configured_format(config, image, tmp_path):
    config.config["image_format"] = "bmp"
    saved = SaveWorkflow(config, ask_path=lambda suggested: tmp_path / "noext").run(image, RECT)
    assert saved == tmp_path / "noext.bmp"


def test_cancelled_dialog_writes_nothing(config, image, tmp_path):
    saved = SaveWorkflow(config, ask_path=lambda suggested: None).run(image, RECT)
    assert saved is None
    assert not (tmp_path / "captures").exists()


def test_empty_image_raises(config):
    with pytest.raises(ExportError):
        SaveWorkflow(config, ask_path=lambda s: s).run(np.array([], dtype=np.uint8), RECT)


def test_copies_saved_path_to_clipboard(config, image, monkeypatch):
    config.config["ask_save_location"] = False
    config.config["copy_path_to_clipboard"] = True
    copied = []
    monkeypatch.setattr(save_workflow, "copy_to_clipboard", copied.append)

    saved = SaveWorkflow(config).run(image, RECT)

    assert copied == [str(saved)]


def test_filter_extension_applies_only_when_name_has_none(tmp_path):
    jpeg = "JPEG Image (*.jpg *.jpeg)"
    assert save_workflow.apply_filter_extension(tmp_path / "shot", jpeg) == tmp_path / "shot.jpg"
    assert save_workflow.apply_filter_extension(tmp_path / "shot.png", jpeg) == tmp_path / "shot.png"
    assert save_workflow.apply_filter_extension(tmp_path / "shot", "") == tmp_path / "shot"


def test_dialog_uses_selected_filter(monkeypatch, tmp_path):
    requests = []

    class FakeDialog:
        @staticmethod
        def getSaveFileName(parent, caption, directory, filters, initial_filter):
            requests.append((directory, initial_filter))
            return str(tmp_path / "typed"), "Bitmap (*.bmp)"

    monkeypatch.setattr(save_workflow, "QFileDialog", FakeDialog)

    chosen = save_workflow.ask_path_with_dialog(tmp_path / "capture.png")

    assert chosen == tmp_path / "typed.bmp"
    assert requests == [(str(tmp_path / "capture.png"), "PNG Image (*.png)")]


def test_dialog_cancel_returns_none(monkeypatch, tmp_path):
    class CancelledDialog:
        @staticmethod
        def getSaveFileName(*args):
            return "", ""

    monkeypatch.setattr(save_workflow, "QFileDialog", CancelledDialog)
    assert save_workflow.ask_path_with_dialog(tmp_path / "capture.png") is None


def test_unusable_save_directory_raises_export_error(config, image):
    config.config["save_directory"] = None
    config.config["ask_save_location"] = False
    with pytest.raises(ExportError):
        SaveWorkflow(config).run(image, RECT)
