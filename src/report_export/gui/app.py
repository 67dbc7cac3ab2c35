"""
Entry point for the dashboard GUI (PySide6).
"""
import argparse
import logging
import sys
from pathlib import Path


def run(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="report-export-gui", description="Sales dashboard with PDF export")
    parser.add_argument("--config", type=Path, help="JSON export config")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from PySide6.QtWidgets import QApplication

    from report_export.export.config import load_export_config
    from report_export.gui.dashboard import DashboardWindow

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName("Report Export")

    window = DashboardWindow(load_export_config(args.config))
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(run())
