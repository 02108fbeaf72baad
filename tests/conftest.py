import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from tests.utils.images import solid_png, rect_png


@pytest.fixture
def white_png():
    return solid_png(100, 100, 255, 255, 255)


@pytest.fixture
def black_png():
    return solid_png(100, 100, 0, 0, 0)


@pytest.fixture
def one_black_pixel_png():
    return rect_png(100, 100, (0, 0, 1, 1), (255, 255, 255), (0, 0, 0))


@pytest.fixture
def image_dir(tmp_path, white_png, black_png):
    """Folder with one matching, one differing, one broken image and a non-image."""
    folder = tmp_path / "screenshots"
    folder.mkdir()
    (folder / "same.png").write_bytes(white_png)
    (folder / "different.png").write_bytes(black_png)
    (folder / "broken.png").write_bytes(b"not an image at all")
    (folder / "notes.txt").write_text("ignore me")
    return folder


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "VISUAL_DIFF_THRESHOLD",
        "VISUAL_DIFF_COLOR_A",
        "VISUAL_DIFF_COLOR_B",
        "VISUAL_DIFF_COLOR_THRESHOLD",
        "VALID_IMAGE_EXTENSIONS",
    ):
        monkeypatch.delenv(name, raising=False)
