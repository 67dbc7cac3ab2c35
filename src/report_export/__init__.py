"""Top-level package for report-export.

Provides subpackages:
- report_export.core – data models and the export error taxonomy
- report_export.export – capture, pagination, assembly and delivery pipeline
- report_export.gui – PySide6 dashboard with "Download as PDF"
"""

def _get_version() -> str:
    """Get version from importlib.metadata (installed) or pyproject.toml (dev)."""
    try:
        from importlib.metadata import version as pkg_version, PackageNotFoundError
        try:
            return pkg_version("report-export")
        except PackageNotFoundError:
            pass
    except ImportError:
        pass

    # Dev checkout: read directly from pyproject.toml
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            for line in pyproject.read_text(encoding="utf-8").splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.1"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass
    return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
