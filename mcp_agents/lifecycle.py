"""
Process lifecycle: keepalive timer and the process-wide fault net.

The keepalive holds the event loop open while the stdio transport is
connected, independent of whether any tool call is in flight. It is torn
down exactly once, when the transport closes:

    guard = KeepAlive(on_close=lambda: logger.info("transport closed"))
    guard.start()
    try:
        await server.run(...)
    finally:
        guard.close()
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

KEEPALIVE_INTERVAL_S = 60.0


@dataclass
class ProcessState:
    """Exit status the process will report once the loop has finished."""
    exit_code: int = 0

    def mark_failed(self) -> None:
        self.exit_code = 1


class KeepAlive:
    """Recurring no-op timer that keeps the event loop alive."""

    def __init__(
        self,
        interval: float = KEEPALIVE_INTERVAL_S,
        on_close: Callable[[], Any] | None = None,
    ):
        self.interval = interval
        self._on_close = on_close
        self._task: asyncio.Task | None = None
        self._closed = False

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the timer on the running loop."""
        if self._closed:
            raise RuntimeError("KeepAlive already closed")
        if self.active:
            return
        self._task = asyncio.get_running_loop().create_task(self._tick())

    def close(self) -> None:
        """Cancel the timer, then run the close callback. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True

        if self._task is not None:
            self._task.cancel()
            self._task = None

        if self._on_close is not None:
            self._on_close()

    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(self.interval)


def install_fault_handler(loop: asyncio.AbstractEventLoop, state: ProcessState) -> None:
    """
    Log unhandled asynchronous faults and mark the process for exit status 1.

    An exception nobody awaited means an invariant broke somewhere; the
    server keeps running but will not report success on exit.
    """

    def handler(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        exc = context.get("exception")
        message = context.get("message", "Unhandled exception in event loop")
        if exc is not None:
            logger.error(f"Unhandled async fault: {message}", exc_info=exc)
        else:
            logger.error(f"Unhandled async fault: {message}")
        state.mark_failed()

    loop.set_exception_handler(handler)
