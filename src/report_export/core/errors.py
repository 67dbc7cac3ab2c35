"""
Module: core.errors

Purpose:
    Error taxonomy for the export pipeline. Every stage failure that
    reaches the user is an ExportError tagged with the stage that failed;
    InvalidInputError marks geometry the pipeline should never be handed.

Key Classes:
    - ExportErrorKind: Tag for the failing stage
    - ExportError: Base export failure carrying an optional cause
    - CaptureFailed / AssemblyFailed / DeliveryFailed: One per stage
    - InvalidInputError: Zero/negative dimensions, empty placements

Dependencies:
    - enum (std)

Used By:
    - export.paginator, export.assembler: Raise InvalidInputError / AssemblyFailed
    - export.capture, gui.capture: Raise CaptureFailed
    - export.delivery: Raises DeliveryFailed
    - export.orchestrator: Maps unexpected stage failures to the tags above
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ExportErrorKind(Enum):
    """Stage of the export pipeline that failed."""

    CAPTURE_FAILED = "capture_failed"
    ASSEMBLY_FAILED = "assembly_failed"
    DELIVERY_FAILED = "delivery_failed"


class InvalidInputError(ValueError):
    """Geometry or placement input the pipeline cannot work with."""
    pass


class ExportError(Exception):
    """
    Export failure tagged with the stage that produced it.

    Attributes:
        kind: Which stage failed
        cause: Underlying exception, if any (also chained as __cause__)

    Example:
        >>> try:
        ...     await orchestrator.export_document(adapter, spec, "report.pdf")
        ... except ExportError as e:
        ...     print(e.kind, e.cause)
    """

    kind: ExportErrorKind

    def __init__(
        self,
        kind: ExportErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def detail(self) -> str:
        """Message plus underlying cause, for diagnostics."""
        if self.cause is None:
            return str(self)
        return f"{self}: {type(self.cause).__name__}: {self.cause}"


class CaptureFailed(ExportError):
    """The capture provider could not rasterize the source region."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(ExportErrorKind.CAPTURE_FAILED, message, cause)


class AssemblyFailed(ExportError):
    """The document writer rejected the image or a page."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(ExportErrorKind.ASSEMBLY_FAILED, message, cause)


class DeliveryFailed(ExportError):
    """The serialized document could not be saved/delivered."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(ExportErrorKind.DELIVERY_FAILED, message, cause)
