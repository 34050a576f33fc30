"""
Background asyncio event loop for running controller commands.

Dash callbacks execute on the web server's worker threads. Controller
commands are coroutines that must all run on a single loop so that state
mutation stays single-threaded; EventLoopThread owns that loop and lets
any thread submit a coroutine and wait for its result.
"""

import asyncio
import threading
from concurrent.futures import Future
from typing import Any, Coroutine, TypeVar

from customer_inquiry.lib import logs

LOG = logs.logger(__file__)

T = TypeVar("T")


class EventLoopThread:
    """
    Runs an asyncio event loop on a daemon thread.

    Attributes:
        name: Thread name, useful in log output.
    """

    def __init__(self, name: str = "customer-inquiry-loop") -> None:
        self.name = name
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> asyncio.AbstractEventLoop:
        """Start the loop thread if needed and return the loop."""
        with self._lock:
            if self._loop is not None and self.running:
                return self._loop
            loop = asyncio.new_event_loop()
            ready = threading.Event()

            def _run() -> None:
                asyncio.set_event_loop(loop)
                loop.call_soon(ready.set)
                loop.run_forever()

            self._thread = threading.Thread(target=_run, name=self.name, daemon=True)
            self._thread.start()
            ready.wait()
            self._loop = loop
            LOG.info("Event loop thread started: %s", self.name)
            return loop

    def submit(self, coro: Coroutine[Any, Any, T]) -> Future:
        """Schedule a coroutine on the loop and return a concurrent Future."""
        loop = self.start()
        return asyncio.run_coroutine_threadsafe(coro, loop)

    def run(self, coro: Coroutine[Any, Any, T], timeout: float | None = None) -> T:
        """Run a coroutine on the loop and block until it completes."""
        return self.submit(coro).result(timeout=timeout)

    def stop(self) -> None:
        """Stop the loop and wait for the thread to exit."""
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None
        if loop is None or thread is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=5)
        loop.close()
        LOG.info("Event loop thread stopped: %s", self.name)
