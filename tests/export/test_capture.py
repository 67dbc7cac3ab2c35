"""
Tests for export.capture

Test Coverage:
- CaptureOptions validation
- flatten(): transparency onto background colour
- ImageCaptureAdapter: files, in-memory images, scaling, failures
- PdfCaptureAdapter: page stacking, page selection, failures
"""
import asyncio
from pathlib import Path

import fitz
import pytest
from PIL import Image

from report_export.core.errors import CaptureFailed, ExportErrorKind
from report_export.export.capture import (
    CaptureOptions,
    ImageCaptureAdapter,
    PdfCaptureAdapter,
    flatten,
)


@pytest.fixture
def two_page_pdf(tmp_path: Path) -> Path:
    """A 200x100pt page followed by a 100x50pt page."""
    path = tmp_path / "report.pdf"
    doc = fitz.open()
    first = doc.new_page(width=200, height=100)
    first.draw_rect(first.rect, color=(1, 0, 0), fill=(1, 0, 0))
    second = doc.new_page(width=100, height=50)
    second.draw_rect(second.rect, color=(0, 0, 1), fill=(0, 0, 1))
    doc.save(path)
    doc.close()
    return path


class TestCaptureOptions:

    def test_defaults(self):
        options = CaptureOptions()
        assert options.scale_factor == 2.0
        assert options.background_rgb == (255, 255, 255)

    @pytest.mark.parametrize("scale", [0, -1.5])
    def test_rejects_non_positive_scale(self, scale):
        with pytest.raises(ValueError, match="scale_factor"):
            CaptureOptions(scale_factor=scale)

    def test_rejects_unknown_colour(self):
        with pytest.raises(ValueError, match="background_color"):
            CaptureOptions(background_color="not-a-colour")


class TestFlatten:

    def test_transparent_pixels_take_background(self):
        img = Image.new("RGBA", (4, 4), (0, 0, 0, 0))
        img.putpixel((0, 0), (10, 20, 30, 255))

        result = flatten(img, (0, 128, 0))

        assert result.mode == "RGB"
        assert result.getpixel((0, 0)) == (10, 20, 30)
        assert result.getpixel((3, 3)) == (0, 128, 0)

    def test_grayscale_converted_to_rgb(self):
        result = flatten(Image.new("L", (2, 2), 200), (255, 255, 255))
        assert result.mode == "RGB"
        assert result.getpixel((1, 1)) == (200, 200, 200)


class TestImageCaptureAdapter:

    def test_captures_file_at_scale(self, sample_image):
        adapter = ImageCaptureAdapter(sample_image)

        capture = asyncio.run(adapter.capture(CaptureOptions(scale_factor=2.0)))

        assert (capture.pixel_width, capture.pixel_height) == (400, 200)
        assert capture.image.size == (400, 200)

    def test_captures_in_memory_image_without_mutating_it(self):
        source = Image.new("RGBA", (30, 60), (0, 0, 0, 0))
        adapter = ImageCaptureAdapter(source)

        capture = asyncio.run(adapter.capture(CaptureOptions(scale_factor=1.0, background_color="#ff0000")))

        assert capture.image is not source
        assert capture.image.getpixel((5, 5)) == (255, 0, 0)
        assert source.mode == "RGBA"

    def test_accepts_string_path(self, sample_image):
        adapter = ImageCaptureAdapter(str(sample_image))

        capture = asyncio.run(adapter.capture(CaptureOptions(scale_factor=1.0)))

        assert capture.pixel_width == 200

    def test_missing_file_raises_capture_failed(self, tmp_path):
        adapter = ImageCaptureAdapter(tmp_path / "missing.png")

        with pytest.raises(CaptureFailed) as excinfo:
            asyncio.run(adapter.capture(CaptureOptions()))

        assert excinfo.value.kind is ExportErrorKind.CAPTURE_FAILED
        assert isinstance(excinfo.value.cause, FileNotFoundError)

    def test_non_image_file_raises_capture_failed(self, tmp_path):
        path = tmp_path / "notes.png"
        path.write_text("definitely not a png")

        with pytest.raises(CaptureFailed):
            asyncio.run(ImageCaptureAdapter(path).capture(CaptureOptions()))


class TestPdfCaptureAdapter:

    def test_stacks_pages_vertically(self, two_page_pdf):
        adapter = PdfCaptureAdapter(two_page_pdf)

        capture = asyncio.run(adapter.capture(CaptureOptions(scale_factor=1.0)))

        # Width of the widest page, heights summed
        assert (capture.pixel_width, capture.pixel_height) == (200, 150)
        assert capture.image.getpixel((100, 50)) == (255, 0, 0)
        assert capture.image.getpixel((50, 125)) == (0, 0, 255)
        # Narrower second page leaves background to its right
        assert capture.image.getpixel((150, 125)) == (255, 255, 255)

    def test_scale_factor_sets_dpi(self, two_page_pdf):
        capture = asyncio.run(PdfCaptureAdapter(two_page_pdf).capture(CaptureOptions(scale_factor=2.0)))

        assert (capture.pixel_width, capture.pixel_height) == (400, 300)

    def test_page_selection(self, two_page_pdf):
        adapter = PdfCaptureAdapter(two_page_pdf, pages=[1])

        capture = asyncio.run(adapter.capture(CaptureOptions(scale_factor=1.0)))

        assert (capture.pixel_width, capture.pixel_height) == (100, 50)

    def test_out_of_range_page_raises_capture_failed(self, two_page_pdf):
        adapter = PdfCaptureAdapter(two_page_pdf, pages=[5])

        with pytest.raises(CaptureFailed):
            asyncio.run(adapter.capture(CaptureOptions()))

    def test_missing_pdf_raises_capture_failed(self, tmp_path):
        with pytest.raises(CaptureFailed):
            asyncio.run(PdfCaptureAdapter(tmp_path / "missing.pdf").capture(CaptureOptions()))
