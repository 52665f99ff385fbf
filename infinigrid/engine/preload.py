"""Preload gate: load every image once and report readiness after a settle delay."""

from __future__ import annotations

import threading
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Sequence

from infinigrid.engine.errors import ResourceLoadFailure


class PreloadGate:
    """Counts finished loads; becomes ready `settle_seconds` after the last one."""

    def __init__(self, total_count: int, settle_seconds: float = 0.4):
        self.total_count = max(0, int(total_count))
        self.settle_seconds = max(0.0, float(settle_seconds))
        self.loaded_count = 0
        self.failed: list[Any] = []
        self.completed_at: float | None = None
        self._lock = threading.Lock()
        if self.total_count == 0:
            self.completed_at = time.monotonic()

    @property
    def done(self) -> bool:
        return self.loaded_count >= self.total_count

    def mark_done(self, resource=None, *, failed: bool = False,
                  now: float | None = None) -> tuple[int, int]:
        """Record one finished resource (loaded or failed) and return progress."""
        with self._lock:
            if self.done:
                return self.loaded_count, self.total_count
            self.loaded_count += 1
            if failed:
                self.failed.append(resource)
            if self.done:
                self.completed_at = time.monotonic() if now is None else float(now)
            return self.loaded_count, self.total_count

    def is_ready(self, *, now: float | None = None) -> bool:
        if self.completed_at is None:
            return False
        now = time.monotonic() if now is None else float(now)
        return now - self.completed_at >= self.settle_seconds

    def progress(self) -> float:
        if self.total_count == 0:
            return 1.0
        return self.loaded_count / self.total_count


def preload_all(
    catalog: Sequence[Any],
    loader: Callable[[Any], Any],
    *,
    gate: PreloadGate | None = None,
    executor: Executor | None = None,
    on_loaded: Callable[[Any, Any], None] | None = None,
    on_progress: Callable[[int, int], None] | None = None,
) -> Future:
    """
    Load every resource with `loader` and resolve once all have finished.

    A loader raising ResourceLoadFailure (or any other exception) counts the
    resource as done; the returned future never fails because of a single
    image. Callbacks run on the worker thread that finished the resource.

    Returns:
        Future resolving to the PreloadGate once every resource is done.
    """
    gate = gate if gate is not None else PreloadGate(len(catalog))
    result: Future = Future()
    if not catalog:
        result.set_result(gate)
        return result

    owns_executor = executor is None
    if owns_executor:
        executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix='preload')

    def _load_one(resource):
        failed = False
        try:
            data = loader(resource)
        except ResourceLoadFailure as e:
            print(f'[PRELOAD] {e}')
            data, failed = None, True
        except Exception as e:
            print(f'[PRELOAD] Failed to load {resource}: {e}')
            data, failed = None, True
        try:
            if on_loaded is not None:
                on_loaded(resource, data)
        finally:
            # Always count the resource so the gate can never hang.
            loaded, total = gate.mark_done(resource, failed=failed)
            try:
                if on_progress is not None:
                    on_progress(loaded, total)
            finally:
                if loaded >= total and not result.done():
                    result.set_result(gate)

    for resource in catalog:
        executor.submit(_load_one, resource)
    if owns_executor:
        executor.shutdown(wait=False)
    return result
