"""
Module: export.delivery

Purpose:
    Hand serialized document bytes to the user under a filename.
    FileDelivery is the desktop counterpart of a browser download:
    it saves into a directory, never overwrites an earlier export
    unless asked to, and never leaves a half-written file behind.

Key Classes:
    - Delivery: Abstract delivery interface
    - FileDelivery: Save into a directory

Dependencies:
    - tempfile, os (std): Atomic replace

Used By:
    - export.orchestrator: Last pipeline stage
"""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from report_export.core.errors import DeliveryFailed

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".pdf"


class Delivery(ABC):
    """Abstract delivery interface."""

    @abstractmethod
    def deliver(self, data: bytes, filename: str) -> Path:
        """
        Deliver document bytes.

        Args:
            data: Complete serialized document
            filename: Requested file name

        Returns:
            Where the document ended up

        Raises:
            DeliveryFailed: If the document could not be delivered
        """


class FileDelivery(Delivery):
    """
    Save documents into a directory.

    Attributes:
        output_dir: Target directory (created on first delivery)
        overwrite: Replace an existing file instead of picking a new name

    Example:
        >>> delivery = FileDelivery(Path("~/Downloads").expanduser())
        >>> delivery.deliver(pdf_bytes, "dashboard.pdf")
        PosixPath('/home/me/Downloads/dashboard(1).pdf')
    """

    def __init__(self, output_dir: Optional[Union[Path, str]] = None, *, overwrite: bool = False) -> None:
        self.output_dir = Path(output_dir) if output_dir is not None else Path.cwd()
        self.overwrite = overwrite

    def deliver(self, data: bytes, filename: str) -> Path:
        name = normalize_filename(filename)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            target = self.output_dir / name
            if not self.overwrite:
                target = _unique_path(target)
            _write_atomic(target, data)
        except OSError as e:
            raise DeliveryFailed(f"Could not save {name} to {self.output_dir}", cause=e) from e

        logger.info(f"Saved {len(data)} bytes to {target}")
        return target


def normalize_filename(filename: str) -> str:
    """
    Validate a delivery file name and add the .pdf suffix when missing.

    Converts:
        "dashboard"       -> "dashboard.pdf"
        " report.pdf "    -> "report.pdf"

    Raises:
        DeliveryFailed: If the name is empty or contains a path separator
    """
    name = filename.strip()
    if not name or name in (".", ".."):
        raise DeliveryFailed(f"Invalid file name: {filename!r}")
    if "/" in name or "\\" in name:
        raise DeliveryFailed(f"File name must not contain a path: {filename!r}")
    if not Path(name).suffix:
        name += DEFAULT_SUFFIX
    return name


def _unique_path(target: Path) -> Path:
    """Pick name(1).pdf, name(2).pdf... when target already exists."""
    if not target.exists():
        return target
    counter = 1
    while (target.with_name(f"{target.stem}({counter}){target.suffix}")).exists():
        counter += 1
    return target.with_name(f"{target.stem}({counter}){target.suffix}")


def _write_atomic(target: Path, data: bytes) -> None:
    """Write to a temporary file beside target, then move it into place."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.stem}-", suffix=".part", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
