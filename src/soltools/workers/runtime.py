"""Persistent asyncio event loop on a background thread.

The Helius client keeps one httpx.AsyncClient for the life of the process,
and an AsyncClient is bound to the loop it runs on. AsyncRuntime owns that
loop: fetch coroutines are scheduled on it from the UI thread, and
synchronous callers block on the returned future.
"""

import asyncio
import threading
from collections.abc import Coroutine
from concurrent.futures import Future
from typing import Any, TypeVar

import structlog

log = structlog.get_logger(__name__)

T = TypeVar("T")


class AsyncRuntime:
    """Event loop running forever on a daemon thread.

    Example:
        runtime = AsyncRuntime()
        runtime.start()
        page = runtime.run(client.list_transactions(address, key), timeout=30)
        runtime.stop()
    """

    def __init__(self, name: str = "soltools-runtime") -> None:
        self.name = name
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._ready = threading.Event()

    @property
    def running(self) -> bool:
        """True while the loop thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the loop thread (no-op if already running)."""
        if self.running:
            return

        self._ready.clear()
        self._thread = threading.Thread(target=self._thread_target, name=self.name, daemon=True)
        self._thread.start()
        self._ready.wait()
        log.debug("async_runtime_started", thread=self.name)

    def _thread_target(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._ready.set()
        try:
            loop.run_forever()
        finally:
            self._cancel_pending(loop)
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.close()

    def _cancel_pending(self, loop: asyncio.AbstractEventLoop) -> None:
        """Cancel tasks still scheduled on the stopped loop and let them unwind."""
        pending = asyncio.all_tasks(loop)
        if not pending:
            return

        for task in pending:
            task.cancel()
        loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
        log.debug("async_runtime_tasks_cancelled", thread=self.name, count=len(pending))

    def submit(self, coro: Coroutine[Any, Any, T]) -> Future[T]:
        """Schedule a coroutine on the loop and return its future.

        Raises:
            RuntimeError: If the runtime is not started.
        """
        if self._loop is None or not self.running:
            coro.close()
            raise RuntimeError("AsyncRuntime is not running")
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def run(self, coro: Coroutine[Any, Any, T], timeout: float | None = None) -> T:
        """Run a coroutine on the loop and block until it finishes.

        Args:
            coro: Coroutine to run.
            timeout: Seconds to wait before raising TimeoutError.

        Returns:
            The coroutine result.

        Raises:
            TimeoutError: If the coroutine does not finish in time.
            Exception: Any exception raised by the coroutine.
        """
        return self.submit(coro).result(timeout=timeout)

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the loop and join its thread."""
        if self._loop is None or self._thread is None:
            return

        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            log.warning("async_runtime_stop_timeout", thread=self.name)
        else:
            log.debug("async_runtime_stopped", thread=self.name)
        self._loop = None
        self._thread = None
