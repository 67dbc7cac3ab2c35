"""
Module: export

Purpose:
    Paginated raster export pipeline. Captures one tall image of a
    rendered view, plans one placement per page, assembles a PDF
    with ReportLab and delivers it.

Key Functions:
    - plan(): Pagination Planner
    - assemble(): Document Assembler
    - export_document(): One-shot export

Key Classes:
    - ExportOrchestrator: Capture → Paginate → Assemble → Deliver
    - CaptureAdapter, ImageCaptureAdapter, PdfCaptureAdapter
    - FileDelivery
    - ExportConfig

Dependencies:
    - PIL, reportlab, fitz (PyMuPDF)

Used By:
    - report_export.gui: Dashboard download button
    - report_export.cli: Command line exports
"""

from .paginator import plan, display_size
from .assembler import assemble
from .capture import (
    CaptureAdapter,
    CaptureOptions,
    ImageCaptureAdapter,
    PdfCaptureAdapter,
)
from .delivery import Delivery, FileDelivery
from .orchestrator import ExportOrchestrator, export_document
from .config import ExportConfig, load_export_config

__all__ = [
    # Stages
    "plan",
    "display_size",
    "assemble",
    # Capture
    "CaptureAdapter",
    "CaptureOptions",
    "ImageCaptureAdapter",
    "PdfCaptureAdapter",
    # Delivery
    "Delivery",
    "FileDelivery",
    # Orchestration
    "ExportOrchestrator",
    "export_document",
    # Config
    "ExportConfig",
    "load_export_config",
]
