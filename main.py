"""Lens Sketch — Entry Point."""
import logging
import os
import sys

from lenssketch.application import create_application
from lenssketch.main_window import MainWindow


def main():
    logging.basicConfig(
        level=os.environ.get("LENSSKETCH_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_application(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
