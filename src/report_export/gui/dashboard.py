"""
Sales dashboard window with "Download as PDF".
"""
from __future__ import annotations

import asyncio
import logging
import threading
from datetime import date
from typing import Optional, Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QMainWindow, QMessageBox, QPushButton,
    QScrollArea, QVBoxLayout, QWidget,
)

from report_export.core.errors import ExportError, InvalidInputError
from report_export.core.models import ExportResult
from report_export.export.config import ExportConfig
from report_export.export.delivery import FileDelivery
from report_export.export.orchestrator import ExportOrchestrator
from report_export.gui.capture import WidgetCaptureAdapter
from report_export.gui.chart import BarChartWidget, ChartPoint, Series
from report_export.gui.theme import Colors, Styles

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to generate PDF. Please try again."

SALES_SERIES = (
    Series("Sales", Colors.SERIES_SALES),
    Series("Revenue", Colors.SERIES_REVENUE),
)

SAMPLE_DATA = (
    ChartPoint("Jan", (4000, 2400)),
    ChartPoint("Feb", (3000, 1398)),
    ChartPoint("Mar", (2000, 9800)),
    ChartPoint("Apr", (2780, 3908)),
    ChartPoint("May", (1890, 4800)),
    ChartPoint("Jun", (2390, 3800)),
)

OVERVIEW = (
    "This dashboard provides a comprehensive overview of our sales and revenue performance "
    "across the first six months of the year. The data shows consistent growth in both "
    "sales volume and revenue streams, with notable peaks in March and strong recovery in "
    "May and June.",
    "Key metrics indicate a positive trend in customer acquisition and engagement. The "
    "revenue performance demonstrates the effectiveness of our recent marketing initiatives "
    "and product improvements.",
)

KEY_INSIGHTS = (
    "Sales peaked in March at 4,000 units with corresponding revenue of 9,800",
    "A dip occurred in April, but recovery was swift with strong June performance",
    "Overall trend shows 25% improvement from January to June",
    "Revenue maintains a steady upward trajectory month-over-month",
)


def _label(text: str, object_name: str) -> QLabel:
    label = QLabel(text)
    label.setObjectName(object_name)
    label.setWordWrap(True)
    label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
    return label


class DashboardView(QWidget):
    """
    The report content. This is the region captured on export.
    """

    def __init__(
        self,
        points: Sequence[ChartPoint] = SAMPLE_DATA,
        generated_on: Optional[date] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.setObjectName("dashboardContent")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(Styles.DASHBOARD)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 32, 32, 32)
        layout.setSpacing(10)

        # Header
        layout.addWidget(_label("Sales Dashboard", "title"))
        layout.addWidget(_label("Monthly Performance Report", "subtitle"))

        # Overview
        layout.addWidget(_label("Overview", "sectionHeading"))
        for paragraph in OVERVIEW:
            layout.addWidget(_label(paragraph, "body"))

        # Chart
        layout.addWidget(_label("Sales vs Revenue Trend", "sectionHeading"))
        self.chart = BarChartWidget(points, SALES_SERIES, height=400)
        layout.addWidget(self.chart)

        # Insights
        layout.addWidget(_label("Key Insights", "sectionHeading"))
        for insight in KEY_INSIGHTS:
            layout.addWidget(_label(f"•  {insight}", "body"))

        # Footer
        generated_on = generated_on or date.today()
        self.footer = _label(f"Generated on {generated_on.strftime('%x')}", "footer")
        layout.addSpacing(16)
        layout.addWidget(self.footer)


class DashboardWindow(QMainWindow):
    # Emitted from the export thread; delivered on the GUI thread
    export_failed = Signal(object)
    export_finished = Signal(object)

    def __init__(self, config: Optional[ExportConfig] = None, parent=None):
        super().__init__(parent)
        self.config = config or ExportConfig()
        self.setWindowTitle(self.config.title)
        self.resize(900, 800)

        central = QWidget()
        central.setStyleSheet(f"background-color: {Colors.BACKGROUND};")
        outer = QVBoxLayout(central)
        outer.setContentsMargins(16, 16, 16, 16)
        outer.setSpacing(12)

        self.view = DashboardView()
        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.scroll.setWidget(self.view)
        outer.addWidget(self.scroll, stretch=1)

        # Button row sits outside the captured view
        button_row = QHBoxLayout()
        self.status_label = QLabel("")
        self.status_label.setStyleSheet(f"color: {Colors.TEXT_SECONDARY};")
        button_row.addWidget(self.status_label, stretch=1)
        self.download_btn = QPushButton("\U0001F4E5 Download as PDF")
        self.download_btn.setStyleSheet(Styles.BUTTON_PRIMARY)
        self.download_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self.download_btn.clicked.connect(self._on_download_clicked)
        button_row.addWidget(self.download_btn)
        outer.addLayout(button_row)

        self.setCentralWidget(central)

        self._capture_adapter = WidgetCaptureAdapter(self.view)
        self._orchestrator = ExportOrchestrator(
            FileDelivery(self.config.output_dir),
            capture_options=self.config.capture_options,
            crop_slices=self.config.crop_slices,
            title=self.config.title,
            notify=self.export_failed.emit,
        )
        self.export_failed.connect(self._show_failure)
        self.export_finished.connect(self._finish_export)

    @property
    def orchestrator(self) -> ExportOrchestrator:
        return self._orchestrator

    def _on_download_clicked(self):
        if not self.download_btn.isEnabled():
            return
        self.download_btn.setEnabled(False)
        self.status_label.setText("Generating PDF...")

        thread = threading.Thread(target=self._run_export, daemon=True)
        thread.start()

    def _run_export(self):
        """Worker thread body: one asyncio run per export."""
        try:
            result = asyncio.run(self._orchestrator.export_document(
                self._capture_adapter,
                self.config.page_spec,
                self.config.filename,
            ))
        except (ExportError, InvalidInputError):
            # Already reported through export_failed
            self.export_finished.emit(None)
            return
        self.export_finished.emit(result)

    def _finish_export(self, result: Optional[ExportResult]):
        self.download_btn.setEnabled(True)
        if result is None:
            self.status_label.setText("Export failed")
            self.status_label.setStyleSheet(f"color: {Colors.ERROR};")
            return
        self.status_label.setText(f"Saved {result.page_count} page(s) to {result.destination}")
        self.status_label.setStyleSheet(f"color: {Colors.SUCCESS};")

    def _show_failure(self, error):
        detail = error.detail if isinstance(error, ExportError) else str(error)
        QMessageBox.warning(self, "Export Failed", f"{FAILURE_MESSAGE}\n\n{detail}")
