"""
Module: export.config

Purpose:
    Configuration dataclass for exports. Immutable configuration with
    validation on construction, plus a forgiving JSON loader.

Key Classes:
    - ExportConfig: Page size, capture and output options

Key Functions:
    - load_export_config(): Read ExportConfig from a JSON file

Dependencies:
    - dataclasses (std)
    - json (std)

Used By:
    - cli: Defaults and --config
    - gui.dashboard: Export settings
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from report_export.core.models import ORIENTATIONS, PAGE_SIZES_MM, PageSpec

from .capture import DEFAULT_BACKGROUND, DEFAULT_SCALE_FACTOR, CaptureOptions

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "dashboard.pdf"


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for exporting a view (immutable).

    Attributes:
        page_size: Named paper size ("a4", "letter", ...)
        orientation: "portrait" or "landscape"
        filename: Output file name
        scale_factor: Capture scale (2.0 doubles the pixel density)
        background_color: Colour behind transparent content
        crop_slices: Assemble from per-page slices instead of clipping
        title: PDF title metadata
        output_dir: Where to save (None = current directory)

    Example:
        >>> config = ExportConfig(page_size="letter")
        >>> config.page_spec.width
        215.9
    """

    page_size: str = "a4"
    orientation: str = "portrait"
    filename: str = DEFAULT_FILENAME
    scale_factor: float = DEFAULT_SCALE_FACTOR
    background_color: str = DEFAULT_BACKGROUND
    crop_slices: bool = False
    title: str = "Sales Dashboard"
    output_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_size.lower() not in PAGE_SIZES_MM:
            raise ValueError(
                f"page_size must be one of {sorted(PAGE_SIZES_MM)}: {self.page_size!r}"
            )
        if self.orientation not in ORIENTATIONS:
            raise ValueError(f"orientation must be 'portrait' or 'landscape': {self.orientation!r}")
        if not self.filename or not self.filename.strip():
            raise ValueError("filename must not be empty")
        # Delegates scale/colour validation
        CaptureOptions(self.scale_factor, self.background_color)
        if self.output_dir is not None and not isinstance(self.output_dir, Path):
            object.__setattr__(self, "output_dir", Path(self.output_dir))

    @property
    def page_spec(self) -> PageSpec:
        return PageSpec.named(self.page_size, self.orientation)

    @property
    def capture_options(self) -> CaptureOptions:
        return CaptureOptions(
            scale_factor=self.scale_factor,
            background_color=self.background_color,
        )

    def with_overrides(self, **overrides: Any) -> "ExportConfig":
        """Copy with the given non-None fields replaced."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def load_export_config(path: Optional[Path]) -> ExportConfig:
    """
    Load export configuration from a JSON object file.

    Malformed data never stops an export: a missing file, bad JSON or
    invalid values fall back to defaults with a warning. Unknown keys
    are ignored.

    Args:
        path: JSON file, or None for defaults

    Returns:
        ExportConfig
    """
    if path is None or not path.exists():
        return ExportConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read export config {path}: {e}; using defaults")
        return ExportConfig()

    if not isinstance(data, dict):
        logger.warning(f"Export config {path} is not a JSON object; using defaults")
        return ExportConfig()

    known = {f.name for f in fields(ExportConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning(f"Ignoring unknown export config keys: {', '.join(unknown)}")

    values: Dict[str, Any] = {k: v for k, v in data.items() if k in known}
    if values.get("output_dir") is not None:
        values["output_dir"] = Path(values["output_dir"]).expanduser()

    try:
        return ExportConfig(**values)
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning(f"Invalid export config {path}: {e}; using defaults")
        return ExportConfig()
