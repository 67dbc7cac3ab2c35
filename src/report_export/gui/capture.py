"""
Capture adapter for live Qt widgets.

Qt widgets may only be painted on the GUI thread. The adapter owns a
bridge QObject living on that thread; capture() emits a request to it
and awaits the result, so an export running in a worker thread
suspends while the GUI thread rasterizes the widget.
"""
from __future__ import annotations

import asyncio
import io
import logging
from concurrent.futures import Future

from PIL import Image
from PySide6.QtCore import QBuffer, QIODevice, QObject, QPoint, Signal, Slot
from PySide6.QtGui import QColor, QImage, QPainter
from PySide6.QtWidgets import QWidget

from report_export.core.errors import CaptureFailed
from report_export.core.models import CaptureResult
from report_export.export.capture import CaptureAdapter, CaptureOptions, flatten

logger = logging.getLogger(__name__)


def render_widget(widget: QWidget, options: CaptureOptions) -> Image.Image:
    """
    Rasterize a widget and its children at options.scale_factor.

    Must run on the GUI thread.

    Args:
        widget: Widget to render (need not be visible on screen)
        options: Scale factor and background colour

    Returns:
        RGB PIL image of size widget.size() * scale_factor

    Raises:
        ValueError: If the widget has no area
    """
    size = widget.size()
    if size.width() <= 0 or size.height() <= 0:
        raise ValueError(f"Widget has no visible area: {size.width()}x{size.height()}")

    scale = options.scale_factor
    image = QImage(
        max(1, round(size.width() * scale)),
        max(1, round(size.height() * scale)),
        QImage.Format.Format_ARGB32,
    )
    image.setDevicePixelRatio(scale)
    image.fill(QColor(options.background_color))

    painter = QPainter(image)
    try:
        widget.render(painter, QPoint(0, 0))
    finally:
        painter.end()

    return qimage_to_pil(image, options)


def qimage_to_pil(image: QImage, options: CaptureOptions) -> Image.Image:
    """Convert a QImage to an RGB PIL image via an in-memory PNG."""
    buffer = QBuffer()
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    if not image.save(buffer, "PNG"):
        raise ValueError("Qt could not encode the rendered widget")
    buffer.close()
    pil_image = Image.open(io.BytesIO(bytes(buffer.data())))
    pil_image.load()
    return flatten(pil_image, options.background_rgb)


class _RenderBridge(QObject):
    """Runs render requests on the thread the bridge lives in."""

    render_requested = Signal(object, object)

    def __init__(self, widget: QWidget):
        super().__init__(widget)
        self._widget = widget
        self.render_requested.connect(self._render)

    @Slot(object, object)
    def _render(self, options: CaptureOptions, future: Future) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(render_widget(self._widget, options))
        except Exception as e:
            # Re-raised on the awaiting side
            future.set_exception(e)


class WidgetCaptureAdapter(CaptureAdapter):
    """
    Capture a QWidget, from any thread.

    Construct on the GUI thread. Awaiting capture() from the GUI thread
    renders immediately; from a worker thread the render is queued to
    the GUI thread's event loop.
    """

    def __init__(self, widget: QWidget):
        self._widget = widget
        self._bridge = _RenderBridge(widget)

    @property
    def description(self) -> str:
        name = self._widget.objectName() or type(self._widget).__name__
        return f"widget {name}"

    async def capture(self, options: CaptureOptions) -> CaptureResult:
        future: Future = Future()
        self._bridge.render_requested.emit(options, future)
        try:
            image = await asyncio.wrap_future(future)
        except (ValueError, RuntimeError, OSError) as e:
            raise CaptureFailed(f"Could not render {self.description}", cause=e) from e

        logger.info(f"Captured {self.description} at {image.width}x{image.height}px")
        return CaptureResult.from_image(image)
