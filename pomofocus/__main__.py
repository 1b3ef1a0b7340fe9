"""Allow running PomoFocus as a module: python -m pomofocus."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .app import PomoFocusApp


def configure_logging() -> None:
    level = os.environ.get("POMOFOCUS_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    configure_logging()

    app = QApplication(sys.argv)
    app.setApplicationName("PomoFocus")
    app.setOrganizationName("PomoFocus")

    window = PomoFocusApp()
    window.show()
    logging.getLogger(__name__).info("PomoFocus ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
