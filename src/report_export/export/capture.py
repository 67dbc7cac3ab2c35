"""
Module: export.capture

Purpose:
    Capture adapters: turn a rendered source into one tall raster.
    The export pipeline only sees the CaptureAdapter interface; the
    source region is bound when an adapter is constructed.

Key Classes:
    - CaptureOptions: Scale factor and background colour
    - CaptureAdapter: Abstract async capture interface
    - ImageCaptureAdapter: Image file or PIL image source
    - PdfCaptureAdapter: Rasterizes PDF pages into one tall image

Key Functions:
    - flatten(): Composite transparency onto the background colour

Dependencies:
    - PIL: Image loading, resizing and compositing
    - fitz (PyMuPDF): PDF rasterization
    - asyncio (std): Work runs off the event loop thread

Used By:
    - export.orchestrator: First pipeline stage
    - gui.capture: WidgetCaptureAdapter subclass
    - cli: File inputs
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

import fitz
from PIL import Image, ImageColor, UnidentifiedImageError

from report_export.core.errors import CaptureFailed
from report_export.core.models import CaptureResult

logger = logging.getLogger(__name__)

DEFAULT_SCALE_FACTOR = 2.0
DEFAULT_BACKGROUND = "#ffffff"
PDF_BASE_DPI = 72


@dataclass(frozen=True)
class CaptureOptions:
    """
    Options passed to every capture (immutable).

    Attributes:
        scale_factor: Output pixels per source pixel (2.0 = retina-like)
        background_color: Colour painted behind transparent content

    Example:
        >>> CaptureOptions(scale_factor=1.5).background_rgb
        (255, 255, 255)
    """

    scale_factor: float = DEFAULT_SCALE_FACTOR
    background_color: str = DEFAULT_BACKGROUND

    def __post_init__(self) -> None:
        """Validate options on construction."""
        if self.scale_factor <= 0:
            raise ValueError(f"scale_factor must be positive: {self.scale_factor}")
        try:
            ImageColor.getrgb(self.background_color)
        except ValueError as e:
            raise ValueError(f"Invalid background_color {self.background_color!r}") from e

    @property
    def background_rgb(self) -> tuple:
        """Background colour as an (r, g, b) tuple."""
        return ImageColor.getrgb(self.background_color)[:3]


class CaptureAdapter(ABC):
    """
    Abstract capture interface.

    Implementations rasterize the region they were constructed with.
    capture() is the single suspension point of an export.
    """

    @abstractmethod
    async def capture(self, options: CaptureOptions) -> CaptureResult:
        """
        Rasterize the bound region.

        Args:
            options: Scale factor and background colour

        Returns:
            CaptureResult with the raster and its pixel size

        Raises:
            CaptureFailed: If the region cannot be rendered
        """

    @property
    def description(self) -> str:
        """Short human-readable name of the captured source, for logs."""
        return type(self).__name__


def flatten(image: Image.Image, background_rgb: tuple) -> Image.Image:
    """
    Composite an image onto a solid background.

    Images without an alpha channel are converted to RGB unchanged.

    Args:
        image: Source image in any mode
        background_rgb: (r, g, b) background

    Returns:
        RGB image of the same size
    """
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        base = Image.new("RGB", rgba.size, background_rgb)
        base.paste(rgba, mask=rgba.getchannel("A"))
        return base
    if image.mode != "RGB":
        return image.convert("RGB")
    return image


class ImageCaptureAdapter(CaptureAdapter):
    """
    Capture from an image file or an in-memory PIL image.

    The image is flattened onto the background colour and resized by
    the scale factor.

    Example:
        >>> adapter = ImageCaptureAdapter(Path("dashboard.png"))
        >>> capture = await adapter.capture(CaptureOptions(scale_factor=1.0))
    """

    def __init__(self, source: Union[Path, str, Image.Image]) -> None:
        self._source = Path(source) if isinstance(source, str) else source

    @property
    def description(self) -> str:
        if isinstance(self._source, Path):
            return str(self._source)
        return f"<image {self._source.size[0]}x{self._source.size[1]}>"

    async def capture(self, options: CaptureOptions) -> CaptureResult:
        try:
            image = await asyncio.to_thread(self._render, options)
        except (OSError, UnidentifiedImageError, ValueError) as e:
            raise CaptureFailed(f"Could not capture {self.description}", cause=e) from e
        logger.info(f"Captured {self.description} at {image.width}x{image.height}px")
        return CaptureResult.from_image(image)

    def _render(self, options: CaptureOptions) -> Image.Image:
        if isinstance(self._source, Path):
            with Image.open(self._source) as opened:
                opened.load()
                image = flatten(opened, options.background_rgb)
        else:
            image = flatten(self._source, options.background_rgb)

        if options.scale_factor != 1.0:
            size = (
                max(1, round(image.width * options.scale_factor)),
                max(0, round(image.height * options.scale_factor)),
            )
            image = image.resize(size, Image.Resampling.LANCZOS)
        elif image is self._source:
            image = image.copy()
        return image


class PdfCaptureAdapter(CaptureAdapter):
    """
    Capture a PDF by rasterizing its pages and stacking them vertically.

    Pages are rendered at 72 * scale_factor dpi. Pages narrower than
    the widest page are left-aligned on the background colour.

    Example:
        >>> adapter = PdfCaptureAdapter(Path("report.pdf"), pages=[0, 1])
        >>> capture = await adapter.capture(CaptureOptions())
    """

    def __init__(self, path: Union[Path, str], pages: Optional[Sequence[int]] = None) -> None:
        self._path = Path(path)
        self._pages = list(pages) if pages is not None else None

    @property
    def description(self) -> str:
        return str(self._path)

    async def capture(self, options: CaptureOptions) -> CaptureResult:
        try:
            image = await asyncio.to_thread(self._render, options)
        except (RuntimeError, ValueError, OSError, IndexError) as e:
            raise CaptureFailed(f"Could not rasterize {self._path}", cause=e) from e
        logger.info(f"Captured {self._path} at {image.width}x{image.height}px")
        return CaptureResult.from_image(image)

    def _render(self, options: CaptureOptions) -> Image.Image:
        if not self._path.exists():
            raise FileNotFoundError(f"PDF not found: {self._path}")

        zoom = options.scale_factor
        matrix = fitz.Matrix(zoom, zoom)
        rendered: List[Image.Image] = []

        with fitz.open(self._path) as doc:
            indices = self._pages if self._pages is not None else range(doc.page_count)
            for index in indices:
                if index < 0 or index >= doc.page_count:
                    raise IndexError(f"Page {index} out of range (0-{doc.page_count - 1})")
                pix = doc[index].get_pixmap(matrix=matrix, alpha=False)
                rendered.append(Image.frombytes("RGB", (pix.width, pix.height), pix.samples))

        if not rendered:
            raise ValueError(f"No pages selected from {self._path}")

        logger.debug(
            f"Rasterized {len(rendered)} page(s) at {PDF_BASE_DPI * zoom:.0f} dpi"
        )
        return _stack_vertically(rendered, options.background_rgb)


def _stack_vertically(images: List[Image.Image], background_rgb: tuple) -> Image.Image:
    """Paste images top to bottom on one canvas as wide as the widest image."""
    width = max(img.width for img in images)
    height = sum(img.height for img in images)
    tall = Image.new("RGB", (width, height), background_rgb)
    y = 0
    for img in images:
        tall.paste(img, (0, y))
        y += img.height
    return tall
