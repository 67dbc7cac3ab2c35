"""
Command line export of an image or PDF into a paginated PDF.

    report-export dashboard.png -o out/dashboard.pdf --page-size letter
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from report_export import __version__
from report_export.core.errors import ExportError, InvalidInputError
from report_export.core.models import ORIENTATIONS, PAGE_SIZES_MM
from report_export.export.capture import CaptureAdapter, ImageCaptureAdapter, PdfCaptureAdapter
from report_export.export.config import ExportConfig, load_export_config
from report_export.export.delivery import FileDelivery
from report_export.export.orchestrator import ExportOrchestrator

logger = logging.getLogger("report_export.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="report-export",
        description="Export a tall image or PDF as a paginated PDF",
    )
    parser.add_argument("input", type=Path, help="Image (PNG, JPEG, ...) or PDF to export")
    parser.add_argument("-o", "--output", type=Path, help="Output PDF path (default: <config filename> in output dir)")
    parser.add_argument("--config", type=Path, help="JSON export config")
    parser.add_argument("--page-size", choices=sorted(PAGE_SIZES_MM), help="Paper size")
    parser.add_argument("--orientation", choices=ORIENTATIONS, help="Page orientation")
    parser.add_argument("--scale", type=float, dest="scale_factor", help="Capture scale factor")
    parser.add_argument("--background", dest="background_color", help="Background colour, e.g. '#ffffff'")
    parser.add_argument("--crop-slices", action="store_true", default=None, help="Crop the raster per page instead of clipping")
    parser.add_argument("--title", help="PDF title metadata")
    parser.add_argument("--overwrite", action="store_true", help="Replace an existing output file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def adapter_for(path: Path) -> CaptureAdapter:
    """Pick the capture adapter for an input file by extension."""
    if path.suffix.lower() == ".pdf":
        return PdfCaptureAdapter(path)
    return ImageCaptureAdapter(path)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_export_config(args.config).with_overrides(
            page_size=args.page_size,
            orientation=args.orientation,
            scale_factor=args.scale_factor,
            background_color=args.background_color,
            crop_slices=args.crop_slices,
            title=args.title,
        )
        if args.output is not None:
            config = config.with_overrides(
                filename=args.output.name,
                output_dir=args.output.parent,
            )
    except ValueError as e:
        parser.error(str(e))

    logger.debug(f"Export config: {config}")
    return run_export(config, adapter_for(args.input), overwrite=args.overwrite)


def run_export(config: ExportConfig, adapter: CaptureAdapter, *, overwrite: bool = False) -> int:
    """Run one export and translate the outcome into an exit status."""
    orchestrator = ExportOrchestrator(
        FileDelivery(config.output_dir, overwrite=overwrite),
        capture_options=config.capture_options,
        crop_slices=config.crop_slices,
        title=config.title,
    )
    try:
        result = asyncio.run(
            orchestrator.export_document(adapter, config.page_spec, config.filename)
        )
    except ExportError as e:
        print(f"error: {e.detail}", file=sys.stderr)
        return 1
    except InvalidInputError as e:
        print(f"error: invalid input: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {result.page_count} page(s) to {result.destination}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
