"""Shared pytest configuration and fixtures for the text camera test suite."""

from pathlib import Path
import sys

from PIL import Image
import pytest


path_project_root = Path(__file__).resolve().parents[1]
path_src = path_project_root / "src"
if str(path_src) not in sys.path:
    sys.path.insert(0, str(path_src))

from textcamera.grayscale_buffer import GrayscaleBuffer  # noqa: E402


class ReleaseRecorder:
    """Count release callbacks issued for a capture frame."""

    def __init__(self) -> None:
        self.int_release_calls = 0

    def release(self) -> None:
        self.int_release_calls += 1


@pytest.fixture
def obj_sample_buffer() -> GrayscaleBuffer:
    """Return the 4x3 buffer holding samples 1 through 12."""
    obj_buffer = GrayscaleBuffer(4, 3, list(range(1, 13)))
    return obj_buffer


@pytest.fixture
def obj_release_recorder() -> ReleaseRecorder:
    return ReleaseRecorder()


@pytest.fixture
def path_input_image(tmp_path: Path) -> Path:
    """Create a small deterministic RGB test image and return its path."""
    path_image = tmp_path / "input_image.png"
    image_input = Image.new("RGB", (20, 20), (200, 200, 200))
    for int_x in range(10):
        for int_y in range(20):
            image_input.putpixel((int_x, int_y), (10, 30, 80))
    image_input.save(path_image)
    return path_image
