"""Запуск блокирующих удалённых вызовов вне GUI-потока."""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from PySide6.QtCore import QObject, QThread, Signal, Slot

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[BaseException], None]


class TaskRunner(Protocol):
    def submit(
        self,
        func: Callable[[], Any],
        on_success: SuccessCallback,
        on_error: ErrorCallback,
    ) -> None: ...


class _Worker(QThread):
    succeeded = Signal(object)
    failed = Signal(object)

    def __init__(self, func: Callable[[], Any], parent: QObject | None = None):
        super().__init__(parent)
        self._func = func

    def run(self):
        try:
            result = self._func()
        except Exception as exc:  # noqa: BLE001 - передаём в GUI-поток
            self.failed.emit(exc)
            return
        self.succeeded.emit(result)


class _Callbacks(QObject):
    """Получатель сигналов воркера; живёт в GUI-потоке."""

    def __init__(self, on_success: SuccessCallback, on_error: ErrorCallback):
        super().__init__()
        self._on_success = on_success
        self._on_error = on_error

    @Slot(object)
    def handle_success(self, result):
        self._on_success(result)

    @Slot(object)
    def handle_error(self, exc):
        self._on_error(exc)


class QtTaskRunner(QObject):
    """Выполняет задачи в отдельных ``QThread``.

    Колбэки вызываются в GUI-потоке в порядке завершения задач.
    """

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        self._active: dict[_Worker, _Callbacks] = {}

    def submit(
        self,
        func: Callable[[], Any],
        on_success: SuccessCallback,
        on_error: ErrorCallback,
    ) -> None:
        worker = _Worker(func)
        callbacks = _Callbacks(on_success, on_error)
        worker.succeeded.connect(callbacks.handle_success)
        worker.failed.connect(callbacks.handle_error)
        worker.finished.connect(self._on_finished)
        self._active[worker] = callbacks
        worker.start()

    @Slot()
    def _on_finished(self):
        worker = self.sender()
        if worker in self._active:
            self._active.pop(worker)
            worker.deleteLater()

    @property
    def pending_count(self) -> int:
        return len(self._active)

    def wait_all(self, timeout_ms: int = 5000) -> None:
        """Дождаться завершения всех задач (используется при закрытии окна)."""
        for worker in list(self._active):
            if not worker.wait(timeout_ms):
                logger.warning("Фоновая задача не завершилась за %d мс", timeout_ms)


__all__ = ["QtTaskRunner", "TaskRunner"]
