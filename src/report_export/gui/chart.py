"""
Grouped bar chart widget painted with QPainter.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from report_export.gui.theme import Colors


@dataclass(frozen=True)
class ChartPoint:
    """One category on the x axis with a value per series."""
    name: str
    values: Tuple[float, ...]


@dataclass(frozen=True)
class Series:
    label: str
    color: str


def nice_axis_max(value: float, ticks: int = 4) -> Tuple[float, float]:
    """
    Round an axis maximum up to a readable value.

    Args:
        value: Largest data value
        ticks: Number of intervals on the axis

    Returns:
        (axis_max, tick_step) with axis_max = ticks * tick_step >= value

    Example:
        >>> nice_axis_max(9800)
        (10000.0, 2500.0)
    """
    if value <= 0:
        return float(ticks), 1.0
    raw_step = value / ticks
    magnitude = 10 ** math.floor(math.log10(raw_step))
    for multiplier in (1, 2, 2.5, 3, 5, 10):
        step = multiplier * magnitude
        if step >= raw_step:
            return float(step * ticks), float(step)
    return float(10 * magnitude * ticks), float(10 * magnitude)


class BarChartWidget(QWidget):
    """
    Grouped vertical bar chart with grid, axes and legend.
    """

    MARGIN_TOP = 20
    MARGIN_RIGHT = 30
    MARGIN_LEFT = 56
    MARGIN_BOTTOM = 56
    TICKS = 4

    def __init__(self, points: Sequence[ChartPoint], series: Sequence[Series], height: int = 400, parent=None):
        super().__init__(parent)
        for point in points:
            if len(point.values) != len(series):
                raise ValueError(f"{point.name}: expected {len(series)} values, got {len(point.values)}")
        self._points: List[ChartPoint] = list(points)
        self._series: List[Series] = list(series)
        self.setFixedHeight(height)
        self.setMinimumWidth(320)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)

    @property
    def points(self) -> List[ChartPoint]:
        return list(self._points)

    def plot_rect(self) -> QRectF:
        """Area inside the axes."""
        return QRectF(
            self.MARGIN_LEFT,
            self.MARGIN_TOP,
            max(0, self.width() - self.MARGIN_LEFT - self.MARGIN_RIGHT),
            max(0, self.height() - self.MARGIN_TOP - self.MARGIN_BOTTOM),
        )

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(Colors.SURFACE))

        plot = self.plot_rect()
        if plot.width() <= 0 or plot.height() <= 0:
            painter.end()
            return

        largest = max((v for p in self._points for v in p.values), default=0)
        axis_max, step = nice_axis_max(largest, self.TICKS)

        font = QFont(self.font())
        font.setPointSize(9)
        painter.setFont(font)

        self._draw_grid(painter, plot, axis_max, step)
        self._draw_bars(painter, plot, axis_max)
        self._draw_legend(painter, plot)
        painter.end()

    def _draw_grid(self, painter: QPainter, plot: QRectF, axis_max: float, step: float) -> None:
        dashed = QPen(QColor(Colors.GRID))
        dashed.setDashPattern([3, 3])
        axis = QPen(QColor(Colors.TEXT_SECONDARY))

        # Horizontal grid lines with y tick labels
        for i in range(self.TICKS + 1):
            value = i * step
            y = plot.bottom() - plot.height() * value / axis_max
            painter.setPen(dashed)
            painter.drawLine(QPointF(plot.left(), y), QPointF(plot.right(), y))
            painter.setPen(axis)
            label_rect = QRectF(0, y - 8, self.MARGIN_LEFT - 6, 16)
            painter.drawText(label_rect, Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter, f"{value:g}")

        # Vertical grid lines between categories
        if self._points:
            group_w = plot.width() / len(self._points)
            painter.setPen(dashed)
            for i in range(len(self._points) + 1):
                x = plot.left() + i * group_w
                painter.drawLine(QPointF(x, plot.top()), QPointF(x, plot.bottom()))

        painter.setPen(axis)
        painter.drawLine(QPointF(plot.left(), plot.bottom()), QPointF(plot.right(), plot.bottom()))
        painter.drawLine(QPointF(plot.left(), plot.top()), QPointF(plot.left(), plot.bottom()))

    def _draw_bars(self, painter: QPainter, plot: QRectF, axis_max: float) -> None:
        if not self._points or not self._series:
            return
        group_w = plot.width() / len(self._points)
        bar_w = group_w * 0.8 / len(self._series)
        axis_pen = QPen(QColor(Colors.TEXT_SECONDARY))

        for i, point in enumerate(self._points):
            group_left = plot.left() + i * group_w + group_w * 0.1
            for j, value in enumerate(point.values):
                bar_h = plot.height() * value / axis_max
                painter.fillRect(
                    QRectF(group_left + j * bar_w, plot.bottom() - bar_h, bar_w, bar_h),
                    QColor(self._series[j].color),
                )
            painter.setPen(axis_pen)
            painter.drawText(
                QRectF(plot.left() + i * group_w, plot.bottom() + 4, group_w, 16),
                Qt.AlignmentFlag.AlignCenter,
                point.name,
            )

    def _draw_legend(self, painter: QPainter, plot: QRectF) -> None:
        swatch = 10
        gap = 16
        metrics = painter.fontMetrics()
        entries = [(s, metrics.horizontalAdvance(s.label)) for s in self._series]
        total_w = sum(swatch + 4 + w for _, w in entries) + gap * max(0, len(entries) - 1)

        x = plot.center().x() - total_w / 2
        y = self.height() - 20
        for series, text_w in entries:
            painter.fillRect(QRectF(x, y - swatch / 2, swatch, swatch), QColor(series.color))
            painter.setPen(QColor(series.color))
            painter.drawText(
                QRectF(x + swatch + 4, y - 8, text_w + 2, 16),
                Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter,
                series.label,
            )
            x += swatch + 4 + text_w + gap
