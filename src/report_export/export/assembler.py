"""
Module: export.assembler

Purpose:
    Assemble planned page placements into a PDF using ReportLab.
    Each PagePlacement becomes one page of the planned size with the
    capture drawn at the placement's offset, clipped to the page.

Key Functions:
    - assemble(): Main assembly function

Dependencies:
    - reportlab: PDF generation
    - PIL: Image encoding
    - export.cropper: Per-page slices (crop_slices mode)

Used By:
    - export.orchestrator: Export pipeline
"""

from __future__ import annotations

import io
import logging
from typing import Optional, Sequence

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from report_export import __version__
from report_export.core.errors import AssemblyFailed, InvalidInputError
from report_export.core.models import (
    CaptureResult,
    PagePlacement,
    PageSpec,
    SerializedDocument,
)

from .cropper import crop_page_window

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Report"


def assemble(
    capture: CaptureResult,
    placements: Sequence[PagePlacement],
    spec: PageSpec,
    *,
    crop_slices: bool = False,
    title: Optional[str] = None,
) -> SerializedDocument:
    """
    Render placements to PDF bytes.

    The canvas starts with one implicit page; every later placement
    starts a new page before drawing. By default the whole capture is
    drawn on every page and clipped to the page rectangle. With
    crop_slices=True only the slice visible on each page is drawn.

    Args:
        capture: Captured raster
        placements: Placements from the paginator, in page order
        spec: Page size the placements were planned for
        crop_slices: Crop the raster per page instead of clipping
        title: Document title metadata

    Returns:
        SerializedDocument with the PDF bytes

    Raises:
        InvalidInputError: If placements is empty
        AssemblyFailed: If Pillow or ReportLab reject the image or a page

    Example:
        >>> document = assemble(capture, plan(capture, spec), spec)
        >>> document.page_count
        2
    """
    if not placements:
        raise InvalidInputError("Cannot assemble a document with no placements")

    buffer = io.BytesIO()
    try:
        c = canvas.Canvas(buffer, pagesize=(spec.width_pt, spec.height_pt))
        c.setTitle(title or DEFAULT_TITLE)
        c.setCreator(f"report-export {__version__}")

        # Encoded once, on the first page that has something to draw
        full_image = None

        for placement in placements:
            if placement.image_display_height > 0:
                if crop_slices:
                    _draw_slice(c, capture, placement, spec)
                else:
                    if full_image is None:
                        full_image = _pil_to_reader(capture.image)
                    _draw_clipped(c, full_image, placement, spec)
            c.showPage()

        c.save()
    except Exception as e:
        raise AssemblyFailed(f"Failed to assemble PDF: {e}", cause=e) from e

    data = buffer.getvalue()
    logger.info(
        f"Assembled {len(placements)} page(s), {len(data)} bytes "
        f"({'cropped slices' if crop_slices else 'clipped full image'})"
    )
    return SerializedDocument(data=data, page_count=len(placements), page_spec=spec)


def _draw_clipped(
    c: canvas.Canvas,
    img_reader: ImageReader,
    placement: PagePlacement,
    spec: PageSpec,
) -> None:
    """
    Draw the full image at the placement offset, clipped to the page.

    Args:
        c: ReportLab canvas
        img_reader: Encoded capture
        placement: Placement for this page
        spec: Page size
    """
    width_pt = spec.to_points(placement.image_display_width)
    height_pt = spec.to_points(placement.image_display_height)
    y_pt = _transform_y(spec, placement.vertical_offset, placement.image_display_height)

    c.saveState()
    clip = c.beginPath()
    clip.rect(0, 0, spec.width_pt, spec.height_pt)
    c.clipPath(clip, stroke=0, fill=0)
    c.drawImage(img_reader, 0, y_pt, width=width_pt, height=height_pt, mask="auto")
    c.restoreState()


def _draw_slice(
    c: canvas.Canvas,
    capture: CaptureResult,
    placement: PagePlacement,
    spec: PageSpec,
) -> None:
    """Draw only the slice of the capture visible on this page, at the page top."""
    slice_img = crop_page_window(capture, placement, spec)
    if slice_img is None:
        logger.debug(f"Page {placement.page_index} has an empty window, nothing drawn")
        return

    px_per_unit = capture.pixel_width / placement.image_display_width
    slice_height = slice_img.height / px_per_unit

    c.drawImage(
        _pil_to_reader(slice_img),
        0,
        _transform_y(spec, 0.0, slice_height),
        width=spec.to_points(placement.image_display_width),
        height=spec.to_points(slice_height),
        mask="auto",
    )


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _transform_y(spec: PageSpec, top: float, height: float) -> float:
    """
    Convert a top-down position in document units to bottom-up PDF Y.

    Args:
        spec: Page size
        top: Y of the element top, measured down from the page top
        height: Element height in document units

    Returns:
        Y of the element bottom in points, measured up from the page bottom
    """
    return spec.height_pt - spec.to_points(top) - spec.to_points(height)
