"""
Module: export.cropper

Purpose:
    Cut the slice of a capture that is visible through one page's
    window. Used when pages are assembled from explicit per-page
    slices instead of relying on the page boundary to clip the full
    image.

Key Functions:
    - page_window_px(): Pixel rows [top, bottom) for a placement
    - crop_page_window(): Crop that slice from the capture

Dependencies:
    - PIL: Image cropping
    - core.models: CaptureResult, PagePlacement, PageSpec

Used By:
    - export.assembler: crop_slices mode
"""

from __future__ import annotations

from typing import Optional, Tuple

from PIL import Image

from report_export.core.models import CaptureResult, PagePlacement, PageSpec


def page_window_px(
    capture: CaptureResult,
    placement: PagePlacement,
    spec: PageSpec,
) -> Tuple[int, int]:
    """
    Pixel rows of the capture that fall inside a page.

    Args:
        capture: Source capture
        placement: Placement for the page
        spec: Page size the placement was planned for

    Returns:
        (top, bottom) pixel rows, bottom exclusive and clamped to the
        capture height. top == bottom means nothing is visible.

    Example:
        >>> page_window_px(capture_1000x2000, placements[1], PageSpec(210, 297))
        (1414, 2000)
    """
    px_per_unit = capture.pixel_width / placement.image_display_width
    top = round(placement.window_top * px_per_unit)
    bottom = round(placement.window_bottom(spec.height) * px_per_unit)
    top = max(0, min(top, capture.pixel_height))
    bottom = max(top, min(bottom, capture.pixel_height))
    return top, bottom


def crop_page_window(
    capture: CaptureResult,
    placement: PagePlacement,
    spec: PageSpec,
) -> Optional[Image.Image]:
    """
    Crop the visible slice for one page.

    Args:
        capture: Source capture
        placement: Placement for the page
        spec: Page size the placement was planned for

    Returns:
        Cropped image (new copy, not a view), or None when the window is empty
    """
    top, bottom = page_window_px(capture, placement, spec)
    if bottom <= top:
        return None
    return capture.image.crop((0, top, capture.pixel_width, bottom))
