"""Chart panel — reference test-chart preview.

Loads a chart image from disk on a worker thread. Only the most recent
request is honoured: results from an older request id are dropped.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QImage, QPixmap, QResizeEvent
from PyQt6.QtWidgets import QLabel, QSizePolicy, QVBoxLayout, QWidget

from lenssketch.workers.chart_load_worker import ChartLoadWorker

PLACEHOLDER_TEXT = "No chart"


class ChartPanel(QWidget):
    """Scaled preview of an external chart image.

    Signals:
        status_message(str): Load success / failure text.
    """

    status_message = pyqtSignal(str)

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._request_id = 0
        self._workers: list[ChartLoadWorker] = []
        self._image: QImage | None = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        self._label = QLabel(PLACEHOLDER_TEXT)
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setMinimumSize(160, 120)
        self._label.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        self._label.setStyleSheet("color: #64748B; background: #0B1220;")
        layout.addWidget(self._label)

    @property
    def image(self) -> QImage | None:
        return self._image

    @property
    def has_chart(self) -> bool:
        return self._image is not None

    @property
    def current_request_id(self) -> int:
        return self._request_id

    def load_chart(self, path: str) -> int:
        """Start loading ``path``; supersedes any pending load.

        Returns:
            The request id of this load.
        """
        self._request_id += 1
        worker = ChartLoadWorker(path, self._request_id, self)
        worker.result_ready.connect(self._on_result)
        worker.error_occurred.connect(self._on_error)
        worker.finished.connect(lambda w=worker: self._on_finished(w))
        self._workers.append(worker)
        worker.start()
        return self._request_id

    def clear_chart(self) -> None:
        self._request_id += 1
        self._show_placeholder()

    # ------------------------------------------------------------------
    # Worker slots
    # ------------------------------------------------------------------

    def _on_result(self, request_id: int, image: QImage) -> None:
        if request_id != self._request_id:
            return
        self._image = image
        self._update_pixmap()
        self.status_message.emit(f"Chart loaded ({image.width()}×{image.height()})")

    def _on_error(self, request_id: int, message: str) -> None:
        if request_id != self._request_id:
            return
        self._show_placeholder()
        self.status_message.emit(message)

    def _on_finished(self, worker: ChartLoadWorker) -> None:
        if worker in self._workers:
            self._workers.remove(worker)
        worker.deleteLater()

    def wait_for_workers(self, msecs: int = 5000) -> None:
        for worker in list(self._workers):
            worker.wait(msecs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def _show_placeholder(self) -> None:
        self._image = None
        self._label.clear()
        self._label.setText(PLACEHOLDER_TEXT)

    def _update_pixmap(self) -> None:
        if self._image is None:
            return
        pixmap = QPixmap.fromImage(self._image).scaled(
            self._label.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self._label.setPixmap(pixmap)

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self._update_pixmap()
