"""A fixed-size worker pool returning futures."""

from __future__ import annotations

import os
import threading
from collections import deque
from concurrent.futures import Future
from typing import Any, Callable


class ThreadPool:
    """Runs submitted callables on a fixed set of worker threads."""

    def __init__(self, thread_count: int | None = None) -> None:
        if thread_count is None:
            thread_count = os.cpu_count() or 1
        if thread_count < 1:
            raise ValueError("thread_count must be at least 1")
        self._cond = threading.Condition()
        self._tasks: deque[tuple[Future, Callable[..., Any], tuple, dict]] = deque()
        self._pending = 0
        self._running = True
        self._threads = [
            threading.Thread(target=self._worker, name=f"pool-worker-{i}", daemon=True)
            for i in range(thread_count)
        ]
        for thread in self._threads:
            thread.start()

    @property
    def thread_count(self) -> int:
        return len(self._threads)

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Queue fn(*args, **kwargs) and return a future for its result."""
        future: Future = Future()
        with self._cond:
            if not self._running:
                raise RuntimeError("thread pool has been shut down")
            self._tasks.append((future, fn, args, kwargs))
            self._pending += 1
            self._cond.notify_all()
        return future

    def wait_tasks_finish(self) -> None:
        """Block until every submitted task has finished."""
        with self._cond:
            self._cond.wait_for(lambda: self._pending == 0)

    def shutdown(self) -> None:
        """Finish outstanding tasks, then stop and join the workers."""
        self.wait_tasks_finish()
        with self._cond:
            self._running = False
            self._cond.notify_all()
        for thread in self._threads:
            if thread is not threading.current_thread():
                thread.join()

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _worker(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._tasks or not self._running)
                if not self._tasks:
                    return
                future, fn, args, kwargs = self._tasks.popleft()
            if future.set_running_or_notify_cancel():
                try:
                    result = fn(*args, **kwargs)
                except BaseException as exc:  # delivered through the future
                    future.set_exception(exc)
                else:
                    future.set_result(result)
            with self._cond:
                self._pending -= 1
                if self._pending == 0:
                    self._cond.notify_all()


_pool: ThreadPool | None = None
_pool_lock = threading.Lock()


def get_pool() -> ThreadPool:
    """Return the process-wide pool, creating it on first use."""
    global _pool
    if _pool is None:
        with _pool_lock:
            if _pool is None:
                _pool = ThreadPool()
    return _pool