"""
Module: core

Purpose:
    Shared data models and error taxonomy for the export pipeline.

Key Classes:
    - CaptureResult, PageSpec, PagePlacement: Pipeline geometry
    - SerializedDocument, ExportResult: Pipeline outputs
    - ExportError (+ CaptureFailed, AssemblyFailed, DeliveryFailed)
    - InvalidInputError

Used By:
    - report_export.export: Pipeline stages
    - report_export.gui: Dashboard export
"""

from .errors import (
    AssemblyFailed,
    CaptureFailed,
    DeliveryFailed,
    ExportError,
    ExportErrorKind,
    InvalidInputError,
)
from .models import (
    CaptureResult,
    ExportResult,
    PAGE_SIZES_MM,
    PagePlacement,
    PageSpec,
    SerializedDocument,
)

__all__ = [
    # Models
    "CaptureResult",
    "PageSpec",
    "PagePlacement",
    "SerializedDocument",
    "ExportResult",
    "PAGE_SIZES_MM",
    # Errors
    "ExportError",
    "ExportErrorKind",
    "CaptureFailed",
    "AssemblyFailed",
    "DeliveryFailed",
    "InvalidInputError",
]
