# workers.py
"""
Background task execution utilities for Grid Collage.
Defines a generic Worker for QRunnable tasks and the task that builds a collage
off the UI thread.
"""
import logging
from pathlib import Path
from typing import Callable, Optional, Union

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from utils.collage_builder import CollageError, create_collage

from .controllers.selection import BuildRequest, ImageSelection

logger = logging.getLogger("gridcollage.workers")


class WorkerSignals(QObject):
    started = Signal()
    finished = Signal()
    error = Signal(str)
    result = Signal(object)


class Worker(QRunnable):
    """Wraps any function to run in a QThreadPool."""
    def __init__(self, fn: Callable, *args, **kwargs):
        super().__init__()
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.signals = WorkerSignals()

    def run(self) -> None:
        try:
            self.signals.started.emit()
            result = self.fn(*self.args, **self.kwargs)
            self.signals.result.emit(result)
        except CollageError as e:
            logger.error("Collage build failed: %s", e)
            self.signals.error.emit(str(e))
        except Exception as e:
            logger.exception("Worker error: %s", e)
            self.signals.error.emit(str(e))
        finally:
            self.signals.finished.emit()


class CollageBuildTask:
    """Runs one collage build for an :class:`ImageSelection` in the background.

    The selection is flagged as building from :meth:`start` until the worker
    finishes, so the UI can disable its controls in the meantime.  Connect to
    ``signals.result`` for the saved path and ``signals.error`` for a message
    ready to show to the user.
    """
    def __init__(
        self,
        selection: ImageSelection,
        output_path: Union[str, Path],
        thread_pool: Optional[QThreadPool] = None,
    ):
        self.selection = selection
        self.output_path = Path(output_path)
        self.request: Optional[BuildRequest] = None
        self.thread_pool = thread_pool or QThreadPool.globalInstance()
        self.worker = Worker(self._build)
        self.worker.setAutoDelete(False)
        self.worker.signals.finished.connect(self._on_finished)

    @property
    def signals(self) -> WorkerSignals:
        return self.worker.signals

    def start(self) -> None:
        """Flag the selection as building and queue the worker."""
        self._begin()
        logger.info(
            "Queued collage build: %d images -> %s",
            len(self.request.image_paths),
            self.request.output_path,
        )
        self.thread_pool.start(self.worker)

    def run_blocking(self) -> None:
        """Run the build on the calling thread, emitting the same signals."""
        self._begin()
        self.worker.run()

    def _begin(self) -> None:
        # Snapshot taken once the selection is locked against changes
        self.selection.begin_build()
        self.request = self.selection.build_request(self.output_path)

    def _build(self) -> Path:
        request = self.request
        return create_collage(request.image_paths, request.output_path, request.images_per_row)

    def _on_finished(self) -> None:
        self.selection.end_build()
