from datetime import datetime

import numpy as np
import pytest
from PIL import Image

from regionsnap.errors import ExportError
from regionsnap.selection.region_selector import CaptureRectangle
from regionsnap.utils.image_export import default_filename, save_image, unique_path


def bgr_image(width=4, height=3):
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:, :, 0] = 255  # pure blue in BGR
    return image


def test_default_filename():
    name = default_filename(CaptureRectangle(0, 0, 640, 480), "PNG", "shot", when=datetime(2024, 5, 1, 13, 45, 10))
    assert name == "shot_2024-05-01_13-45-10_640x480.png"


def test_default_filename_rejects_unknown_format():
    with pytest.raises(ExportError):
        default_filename(CaptureRectangle(0, 0, 1, 1), "gif")


def test_unique_path_adds_counter(tmp_path):
    (tmp_path / "a.png").touch()
    (tmp_path / "a_1.png").touch()
    assert unique_path(tmp_path, "a.png") == tmp_path / "a_2.png"
    assert unique_path(tmp_path, "b.png") == tmp_path / "b.png"


def test_save_image_writes_rgb(tmp_path):
    path = save_image(bgr_image(), tmp_path / "nested" / "out.png")
    assert path.exists()
    with Image.open(path) as img:
        assert img.size == (4, 3)
        assert img.convert("RGB").getpixel((0, 0)) == (0, 0, 255)


def test_save_image_uses_format_when_suffix_missing(tmp_path):
    path = save_image(bgr_image(), tmp_path / "out", fmt="jpg")
    assert path.suffix == ".jpg"
    with Image.open(path) as img:
        assert img.format == "JPEG"


def test_save_image_rejects_empty(tmp_path):
    with pytest.raises(ExportError):
        save_image(np.array([], dtype=np.uint8), tmp_path / "out.png")


def test_save_image_rejects_unsupported_suffix(tmp_path):
    with pytest.raises(ExportError):
        save_image(bgr_image(), tmp_path / "out.xyz")
