"""Caller-side async driver for photo entry points.

Architecture:
    caller (async) -> asyncio.Semaphore(N) -> ThreadPoolExecutor(N) -> entry point -> callback

Entry points themselves never schedule. This driver runs one on a worker
thread, collects what it delivers to its callback, and resolves to those
handles, or raises ``PhotoError`` carrying the returned ``Status``.
Submissions beyond the semaphore limit wait up to ``queue_timeout`` seconds,
then raise ``TimeoutError``.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from photoshim.core.status import PhotoError, Status, StatusKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from photoshim.config import Settings
    from photoshim.core.handles import Handle

logger = logging.getLogger(__name__)


class PhotoDriver:
    """Dispatches entry points onto a bounded worker pool."""

    def __init__(self, settings: Settings) -> None:
        self._semaphore = asyncio.Semaphore(settings.max_concurrent)
        self._executor = ThreadPoolExecutor(
            max_workers=settings.max_concurrent,
            thread_name_prefix="photoshim",
        )
        self._timeout = settings.queue_timeout
        self._active_count: int = 0
        self._queue_depth: int = 0
        self._counter_lock = threading.Lock()

    async def run(self, entry_point: Callable[..., Status | None], *args: object) -> Any:
        """Run ``entry_point(*args, callback)`` on a worker thread.

        Returns the delivered handle, or a tuple when the entry point delivers
        more than one.

        Raises:
            PhotoError: If the entry point returned a non-OK status.
            TimeoutError: If no worker slot frees up within the queue timeout.
        """
        with self._counter_lock:
            self._queue_depth += 1
        try:
            await asyncio.wait_for(self._semaphore.acquire(), timeout=self._timeout)
        finally:
            with self._counter_lock:
                self._queue_depth -= 1

        with self._counter_lock:
            self._active_count += 1
        try:
            loop = asyncio.get_running_loop()
            outputs = await loop.run_in_executor(self._executor, _invoke, entry_point, args)
        finally:
            self._semaphore.release()
            with self._counter_lock:
                self._active_count -= 1

        return outputs[0] if len(outputs) == 1 else outputs

    @property
    def active_count(self) -> int:
        """Number of entry points currently running."""
        with self._counter_lock:
            return self._active_count

    @property
    def queue_depth(self) -> int:
        """Number of submissions waiting for a worker slot."""
        with self._counter_lock:
            return self._queue_depth

    def shutdown(self) -> None:
        """Shut down the worker pool, waiting for running entry points."""
        self._executor.shutdown(wait=True)
        logger.info("Photo driver shut down")


def _invoke(entry_point: Callable[..., Status | None], args: tuple[object, ...]) -> tuple[Handle, ...]:
    delivered: list[tuple[Handle, ...]] = []

    def collect(*handles: Handle) -> None:
        delivered.append(handles)

    status = entry_point(*args, collect)
    if status is not None and status.kind is not StatusKind.OK:
        raise PhotoError(status)
    if len(delivered) != 1:
        raise PhotoError(
            Status(
                kind=StatusKind.INTERNAL_ERROR,
                message=f"callback invoked {len(delivered)} times",
                func=getattr(entry_point, "__name__", repr(entry_point)),
            )
        )
    return delivered[0]
