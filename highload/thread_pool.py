"""A fixed-size pool of worker threads fed from a FIFO task queue."""

from __future__ import annotations

import logging
import os
import threading
from collections import deque
from typing import Callable, Deque, List, Optional

logger = logging.getLogger(__name__)


class ThreadPool:
    """Runs submitted callables on a fixed set of worker threads.

    Tasks are taken in submission order. After :meth:`shutdown` new tasks
    are ignored, while already queued tasks still run to completion.
    """

    def __init__(self, num_threads: Optional[int] = None) -> None:
        if num_threads is None:
            num_threads = os.cpu_count() or 1
        if num_threads <= 0:
            num_threads = 1

        self._tasks: Deque[Callable[[], object]] = deque()
        self._condition = threading.Condition()
        self._stop = False
        self._threads: List[threading.Thread] = [
            threading.Thread(target=self._worker, name=f"pool-worker-{i}", daemon=True)
            for i in range(num_threads)
        ]
        for thread in self._threads:
            thread.start()

    def _worker(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._stop or self._tasks)
                if self._stop and not self._tasks:
                    return
                task = self._tasks.popleft()
            try:
                task()
            except Exception:
                logger.exception("Task raised in worker thread")

    def enqueue(self, task: Callable[[], object]) -> None:
        """Queue a task; silently ignored once the pool is shutting down."""
        with self._condition:
            if self._stop:
                return
            self._tasks.append(task)
            self._condition.notify()

    def shutdown(self) -> None:
        """Stop accepting tasks, let queued ones finish and join the workers."""
        with self._condition:
            self._stop = True
            self._condition.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *args: object) -> None:
        self.shutdown()