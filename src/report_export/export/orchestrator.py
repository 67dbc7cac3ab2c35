"""
Module: export.orchestrator

Purpose:
    Orchestrate one export of the current view.
    Capture → Paginate → Assemble → Deliver

Key Functions:
    - export_document(): One-shot convenience wrapper

Key Classes:
    - ExportOrchestrator: Runs exports with its own delivery/options

Dependencies:
    - export.capture: CaptureAdapter, CaptureOptions
    - export.paginator: plan
    - export.assembler: assemble
    - export.delivery: Delivery

Used By:
    - gui.dashboard: "Download as PDF"
    - cli: File exports
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Union

from report_export.core.errors import (
    AssemblyFailed,
    CaptureFailed,
    DeliveryFailed,
    ExportError,
    InvalidInputError,
)
from report_export.core.models import ExportResult, PageSpec

from .assembler import assemble
from .capture import CaptureAdapter, CaptureOptions
from .delivery import Delivery, FileDelivery
from .paginator import plan

logger = logging.getLogger(__name__)

FailureNotifier = Callable[[Union[ExportError, InvalidInputError]], None]


class ExportOrchestrator:
    """
    Runs the export pipeline.

    Each call to export_document() is independent: it captures, plans
    and assembles its own document. The only state kept between calls
    is configuration and a count of exports in flight, which callers
    can use to disable the trigger while an export runs.

    Attributes:
        delivery: Where finished documents go
        capture_options: Passed to every capture
        crop_slices: Assemble from per-page slices instead of clipping
        title: Document title metadata

    Example:
        >>> orchestrator = ExportOrchestrator(FileDelivery(Path("out")))
        >>> result = await orchestrator.export_document(
        ...     ImageCaptureAdapter(Path("dashboard.png")),
        ...     PageSpec.named("a4"),
        ...     "dashboard.pdf",
        ... )
        >>> result.page_count
        2
    """

    def __init__(
        self,
        delivery: Delivery,
        *,
        capture_options: Optional[CaptureOptions] = None,
        crop_slices: bool = False,
        title: Optional[str] = None,
        notify: Optional[FailureNotifier] = None,
    ) -> None:
        self.delivery = delivery
        self.capture_options = capture_options or CaptureOptions()
        self.crop_slices = crop_slices
        self.title = title
        self._notify = notify
        self._active_exports = 0

    @property
    def active_exports(self) -> int:
        """Number of exports currently running on this orchestrator."""
        return self._active_exports

    @property
    def is_busy(self) -> bool:
        return self._active_exports > 0

    async def export_document(
        self,
        capture_adapter: CaptureAdapter,
        page_spec: PageSpec,
        filename: str,
    ) -> ExportResult:
        """
        Export the adapter's region as a paginated PDF.

        Either the complete document is delivered or nothing is. On
        failure the notifier is called once and the error re-raised.

        Args:
            capture_adapter: Source of the raster
            page_spec: Page size for every page
            filename: Output file name

        Returns:
            ExportResult describing the delivered document

        Raises:
            CaptureFailed: Capture stage failed
            InvalidInputError: Capture or page geometry unusable
            AssemblyFailed: Document could not be built
            DeliveryFailed: Document could not be saved
        """
        self._active_exports += 1
        start_time = time.perf_counter()
        logger.info(f"Starting export of {capture_adapter.description} to {filename}")
        try:
            result = await self._run(capture_adapter, page_spec, filename, start_time)
        except (ExportError, InvalidInputError) as e:
            self._report_failure(e)
            raise
        finally:
            self._active_exports -= 1

        logger.info(
            f"Export completed in {result.elapsed_seconds:.2f}s: "
            f"{result.page_count} page(s) -> {result.destination}"
        )
        return result

    async def _run(
        self,
        capture_adapter: CaptureAdapter,
        page_spec: PageSpec,
        filename: str,
        start_time: float,
    ) -> ExportResult:
        # 1. Capture (the only suspension point)
        try:
            capture = await capture_adapter.capture(self.capture_options)
        except (ExportError, InvalidInputError):
            raise
        except Exception as e:
            raise CaptureFailed(f"Capture of {capture_adapter.description} failed", cause=e) from e

        # 2. Paginate
        placements = plan(capture, page_spec)
        logger.info(f"Paginated capture onto {len(placements)} page(s)")

        # 3. Assemble
        try:
            document = assemble(
                capture,
                placements,
                page_spec,
                crop_slices=self.crop_slices,
                title=self.title,
            )
        except (ExportError, InvalidInputError):
            raise
        except Exception as e:
            raise AssemblyFailed("Document assembly failed", cause=e) from e

        # 4. Deliver
        try:
            destination = self.delivery.deliver(document.data, filename)
        except ExportError:
            raise
        except Exception as e:
            raise DeliveryFailed(f"Delivery of {filename} failed", cause=e) from e

        return ExportResult(
            destination=destination,
            page_count=document.page_count,
            byte_size=document.byte_size,
            elapsed_seconds=time.perf_counter() - start_time,
        )

    def _report_failure(self, error: Union[ExportError, InvalidInputError]) -> None:
        """Log the failure with its cause and raise the single user notification."""
        if isinstance(error, ExportError):
            logger.error(f"Export failed ({error.kind.value}): {error.detail}")
        else:
            logger.error(f"Export failed (invalid input): {error}")
        if self._notify is not None:
            try:
                self._notify(error)
            except Exception:
                # The stage error is still raised to the caller
                logger.exception("Failure notifier raised")


async def export_document(
    capture_adapter: CaptureAdapter,
    page_spec: PageSpec,
    filename: str,
    *,
    delivery: Optional[Delivery] = None,
    capture_options: Optional[CaptureOptions] = None,
    crop_slices: bool = False,
    title: Optional[str] = None,
    notify: Optional[FailureNotifier] = None,
) -> ExportResult:
    """
    Run a single export with a throwaway orchestrator.

    Args:
        capture_adapter: Source of the raster
        page_spec: Page size for every page
        filename: Output file name
        delivery: Defaults to saving in the current directory
        capture_options: Defaults to CaptureOptions()
        crop_slices: Assemble from per-page slices
        title: Document title metadata
        notify: Called once on failure

    Returns:
        ExportResult describing the delivered document
    """
    orchestrator = ExportOrchestrator(
        delivery or FileDelivery(),
        capture_options=capture_options,
        crop_slices=crop_slices,
        title=title,
        notify=notify,
    )
    return await orchestrator.export_document(capture_adapter, page_spec, filename)
