"""Chart load worker — background thread for reading a chart image.

Decodes the file off the UI thread. Each worker carries the request id
it was started for so the panel can drop results from superseded loads.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QThread, pyqtSignal
from PyQt6.QtGui import QImage

logger = logging.getLogger(__name__)


class ChartLoadWorker(QThread):
    """Background thread decoding one chart image.

    Emits result_ready(request_id, QImage) on success,
    error_occurred(request_id, message) on failure.

    Usage:
        worker = ChartLoadWorker(path, request_id)
        worker.result_ready.connect(on_result)
        worker.error_occurred.connect(on_error)
        worker.start()
    """

    result_ready = pyqtSignal(int, object)  # request_id, QImage
    error_occurred = pyqtSignal(int, str)

    def __init__(self, path: str, request_id: int, parent=None):
        super().__init__(parent)
        self._path = path
        self._request_id = request_id

    @property
    def request_id(self) -> int:
        return self._request_id

    def run(self) -> None:
        """Decode the image in the background thread."""
        image = QImage(self._path)
        if image.isNull():
            logger.warning("Chart image could not be loaded: %s", self._path)
            self.error_occurred.emit(
                self._request_id, f"Chart load failed: {self._path}",
            )
            return
        self.result_ready.emit(self._request_id, image)
