from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication

import sys
import os

ORG_ID = "asciipet"
APP_ID = "asciipet"
VISIBLE_APP_NAME = "asciipet"


def create_app(argv: list[str] | None = None) -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)

    app = QApplication(sys.argv if argv is None else argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)

    return app
