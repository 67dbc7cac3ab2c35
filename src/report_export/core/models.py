"""
Module: core.models

Purpose:
    Immutable data models for the paginated raster export pipeline:
    the captured raster, the physical page size, the per-page
    placements computed by the paginator, and the assembled output.

Key Classes:
    - CaptureResult: Raster image plus its pixel dimensions
    - PageSpec: Physical page size in document units
    - PagePlacement: Where the full image sits on one page
    - SerializedDocument: Assembled PDF bytes
    - ExportResult: Outcome of a delivered export

Dependencies:
    - PIL: Image type
    - reportlab.lib.units: Unit to point conversion
    - core.errors: InvalidInputError for unusable dimensions
    - dataclasses (std)

Used By:
    - export.paginator: CaptureResult, PageSpec -> PagePlacement
    - export.assembler: PagePlacement -> SerializedDocument
    - export.orchestrator: ExportResult
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

from PIL import Image
from reportlab.lib.units import cm, inch, mm

from report_export.core.errors import InvalidInputError

# Points per document unit (PDF points are 1/72 inch)
UNIT_POINTS: Dict[str, float] = {
    "mm": mm,
    "cm": cm,
    "in": inch,
    "pt": 1.0,
}

# Portrait page sizes in millimetres
PAGE_SIZES_MM: Dict[str, Tuple[float, float]] = {
    "a3": (297.0, 420.0),
    "a4": (210.0, 297.0),
    "a5": (148.0, 210.0),
    "letter": (215.9, 279.4),
    "legal": (215.9, 355.6),
}

ORIENTATIONS = ("portrait", "landscape")


@dataclass(frozen=True)
class CaptureResult:
    """
    Rasterized snapshot of a rendered region (immutable).

    Attributes:
        image: PIL Image holding the pixels
        pixel_width: Width in pixels (> 0)
        pixel_height: Height in pixels (>= 0; 0 is an empty capture)

    Example:
        >>> capture = CaptureResult.from_image(Image.new("RGB", (1000, 2000)))
        >>> capture.aspect_ratio
        2.0
    """

    image: Image.Image
    pixel_width: int
    pixel_height: int

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if self.pixel_width <= 0:
            raise InvalidInputError(f"pixel_width must be positive: {self.pixel_width}")
        if self.pixel_height < 0:
            raise InvalidInputError(f"pixel_height must be non-negative: {self.pixel_height}")

    @classmethod
    def from_image(cls, image: Image.Image) -> "CaptureResult":
        """Build a capture from a PIL image using its own size."""
        width, height = image.size
        return cls(image=image, pixel_width=width, pixel_height=height)

    @property
    def aspect_ratio(self) -> float:
        """Height over width."""
        return self.pixel_height / self.pixel_width


@dataclass(frozen=True)
class PageSpec:
    """
    Physical page dimensions in document units (immutable).

    Attributes:
        width: Page width in `unit`
        height: Page height in `unit`
        unit: One of "mm", "cm", "in", "pt"

    Example:
        >>> spec = PageSpec.named("a4")
        >>> (spec.width, spec.height)
        (210.0, 297.0)
    """

    width: float
    height: float
    unit: str = "mm"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.width <= 0:
            raise InvalidInputError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise InvalidInputError(f"height must be positive: {self.height}")
        if self.unit not in UNIT_POINTS:
            raise ValueError(
                f"unit must be one of {sorted(UNIT_POINTS)}: {self.unit!r}"
            )

    @classmethod
    def named(cls, name: str, orientation: str = "portrait") -> "PageSpec":
        """
        Build a page spec (in millimetres) from a named paper size.

        Args:
            name: Paper size like "a4" or "letter" (case-insensitive)
            orientation: "portrait" or "landscape"

        Raises:
            ValueError: Unknown size or orientation
        """
        key = name.strip().lower()
        if key not in PAGE_SIZES_MM:
            raise ValueError(
                f"Unknown page size {name!r}, expected one of {sorted(PAGE_SIZES_MM)}"
            )
        if orientation not in ORIENTATIONS:
            raise ValueError(
                f"orientation must be 'portrait' or 'landscape': {orientation!r}"
            )
        width, height = PAGE_SIZES_MM[key]
        if orientation == "landscape":
            width, height = height, width
        return cls(width=width, height=height, unit="mm")

    @property
    def points_per_unit(self) -> float:
        """PDF points per document unit."""
        return UNIT_POINTS[self.unit]

    def to_points(self, value: float) -> float:
        """Convert a length in document units to PDF points."""
        return value * self.points_per_unit

    @property
    def width_pt(self) -> float:
        """Page width in PDF points."""
        return self.to_points(self.width)

    @property
    def height_pt(self) -> float:
        """Page height in PDF points."""
        return self.to_points(self.height)


@dataclass(frozen=True)
class PagePlacement:
    """
    The full image drawn on one page (immutable).

    The image is drawn at `vertical_offset` (<= 0) from the page top so
    that slice [window_top, window_bottom) of it is visible on the page.

    Attributes:
        page_index: Page number (0-indexed, sequential)
        image_display_width: Displayed image width in document units
        image_display_height: Displayed image height in document units
        vertical_offset: Y offset of the image top from the page top

    Example:
        >>> placement = PagePlacement(1, 210.0, 420.0, -297.0)
        >>> placement.window_top
        297.0
    """

    page_index: int
    image_display_width: float
    image_display_height: float
    vertical_offset: float

    @property
    def window_top(self) -> float:
        """Top of the visible slice, measured down the displayed image."""
        return -self.vertical_offset

    def window_bottom(self, page_height: float) -> float:
        """Bottom of the visible slice, clamped to the image height."""
        return min(self.window_top + page_height, self.image_display_height)


@dataclass(frozen=True)
class SerializedDocument:
    """
    Assembled PDF ready for delivery.

    Attributes:
        data: PDF bytes
        page_count: Number of pages written
        page_spec: Page size every page was created with
    """

    data: bytes
    page_count: int
    page_spec: PageSpec

    @property
    def byte_size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ExportResult:
    """
    Outcome of one successful export.

    Attributes:
        destination: Where the document was delivered
        page_count: Number of pages in the document
        byte_size: Size of the delivered document in bytes
        elapsed_seconds: Wall-clock time of the whole export
    """

    destination: Path
    page_count: int
    byte_size: int
    elapsed_seconds: float
