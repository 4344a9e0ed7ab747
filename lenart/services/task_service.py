"""Фоновые задачи: декодирование и экспорт вне основного потока.

Результаты не применяются из рабочих потоков: они складываются в очередь,
а основной поток забирает их вызовом `drain()`.
"""
from __future__ import annotations

import logging
import queue
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

DoneCallback = Callable[[Any, Optional[BaseException]], None]


class TaskService:
    def __init__(self, max_workers: int = 1) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="lenart-worker")
        self._results: "queue.Queue[Tuple[DoneCallback, Any, Optional[BaseException]]]" = queue.Queue()
        self._pending = 0

    @property
    def pending(self) -> int:
        """Число задач, результат которых ещё не обработан в `drain`."""
        return self._pending

    def submit(self, fn: Callable[[], Any], on_done: DoneCallback) -> Future:
        self._pending += 1
        future = self._executor.submit(fn)
        future.add_done_callback(lambda f: self._collect(f, on_done))
        return future

    def drain(self) -> int:
        """Выполняет готовые колбэки в текущем потоке. Возвращает их число."""
        handled = 0
        while True:
            try:
                on_done, result, error = self._results.get_nowait()
            except queue.Empty:
                return handled
            self._pending -= 1
            handled += 1
            on_done(result, error)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _collect(self, future: Future, on_done: DoneCallback) -> None:
        error = future.exception()
        if error is not None:
            logger.debug("Worker task failed: %r", error)
        result = None if error is not None else future.result()
        self._results.put((on_done, result, error))
