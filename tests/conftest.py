import os
import pytest
import sys
from pathlib import Path
from PIL import Image

# GUI tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to sys.path so we can import report_export
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from report_export.core.models import CaptureResult, PageSpec


# Common test fixtures
@pytest.fixture
def a4():
    """A4 portrait in millimetres."""
    return PageSpec(210, 297)


@pytest.fixture
def make_capture():
    """Factory for captures of a given pixel size (placeholder 1x1 raster, for planning)."""
    def _create(width: int, height: int):
        img = Image.new("RGB", (1, 1), color="white")
        return CaptureResult(image=img, pixel_width=width, pixel_height=height)
    return _create


@pytest.fixture
def two_tone_image():
    """1000x2000 image, top half red and bottom half blue."""
    img = Image.new("RGB", (1000, 2000), color=(255, 0, 0))
    img.paste((0, 0, 255), (0, 1000, 1000, 2000))
    return img


@pytest.fixture
def sample_image(tmp_path: Path):
    """Write a small PNG and return its path."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
