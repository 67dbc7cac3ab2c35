"""
Module: export.paginator

Purpose:
    Work out how many pages a tall capture needs and where the full
    image must be drawn on each page so the right vertical slice shows
    through that page's window.

Key Functions:
    - plan(): Main pagination function
    - display_size(): Capture size scaled to the page width

Algorithm:
    1. Scale the capture to the page width (aspect ratio preserved)
    2. remaining = displayed height
    3. Emit page i at offset -i * page_height, subtract a page height
    4. Continue while height remains (always at least one page)

Dependencies:
    - core.models: CaptureResult, PageSpec, PagePlacement

Used By:
    - export.orchestrator: Export pipeline
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from report_export.core.errors import InvalidInputError
from report_export.core.models import CaptureResult, PagePlacement, PageSpec

logger = logging.getLogger(__name__)

# Residues below this fraction of a page height are float noise, not content
REMAINDER_TOLERANCE = 1e-9


def display_size(capture: CaptureResult, spec: PageSpec) -> Tuple[float, float]:
    """
    Size of the capture once scaled to fill the page width.

    Args:
        capture: Captured raster
        spec: Page size

    Returns:
        (display_width, display_height) in document units

    Raises:
        InvalidInputError: If any dimension is out of range
    """
    _validate(capture, spec)
    display_width = float(spec.width)
    display_height = capture.pixel_height * display_width / capture.pixel_width
    return display_width, display_height


def plan(capture: CaptureResult, spec: PageSpec) -> Tuple[PagePlacement, ...]:
    """
    Compute one placement per page for a capture.

    Every placement draws the whole image at the same displayed size;
    page i is offset by -i * spec.height so that slice
    [i * height, (i + 1) * height) lines up with the page.

    Args:
        capture: Captured raster (pixel_width > 0, pixel_height >= 0)
        spec: Page size (width, height > 0)

    Returns:
        Tuple of PagePlacements, ceil(display_height / height) long, minimum 1

    Raises:
        InvalidInputError: If pixel_width <= 0, pixel_height < 0 or the page
            dimensions are not positive

    Example:
        >>> placements = plan(capture_1000x2000, PageSpec(210, 297))
        >>> [p.vertical_offset for p in placements]
        [0.0, -297.0]
    """
    display_width, display_height = display_size(capture, spec)
    page_height = float(spec.height)
    tolerance = page_height * REMAINDER_TOLERANCE

    placements: List[PagePlacement] = []
    remaining = display_height
    page_index = 0

    while True:
        placements.append(PagePlacement(
            page_index=page_index,
            image_display_width=display_width,
            image_display_height=display_height,
            vertical_offset=-page_index * page_height if page_index else 0.0,
        ))
        remaining -= page_height
        page_index += 1
        if remaining <= tolerance:
            break

    logger.debug(
        f"Planned {len(placements)} page(s) for {capture.pixel_width}x{capture.pixel_height}px "
        f"capture displayed at {display_width:.2f}x{display_height:.2f}{spec.unit}"
    )
    return tuple(placements)


def _validate(capture: CaptureResult, spec: PageSpec) -> None:
    """Reject geometry that cannot be paginated."""
    if capture.pixel_width <= 0:
        raise InvalidInputError(f"pixel_width must be positive: {capture.pixel_width}")
    if capture.pixel_height < 0:
        raise InvalidInputError(f"pixel_height must be non-negative: {capture.pixel_height}")
    if spec.width <= 0:
        raise InvalidInputError(f"page width must be positive: {spec.width}")
    if spec.height <= 0:
        raise InvalidInputError(f"page height must be positive: {spec.height}")
