# SPDX-License-Identifier: MIT
"""Publish/subscribe delivery of events to sinks.

Each subscribed sink gets its own FIFO queue and worker thread, so a slow
sink never reorders or delays delivery to another. `Reporter.publish` only
enqueues. `Reporter.flush` is the barrier: it returns once every event
published before the call has been handled by every sink.
"""

from __future__ import annotations

import queue
import threading
from typing import Final, Protocol

import structlog

from msrv.core.errors import ReportError
from msrv.core.result import Err, Ok, Result
from msrv.reporter.event import Event

__all__ = ["Sink", "Reporter", "DEFAULT_PUT_TIMEOUT", "DEFAULT_CLOSE_TIMEOUT"]

log = structlog.get_logger("msrv.reporter")

DEFAULT_PUT_TIMEOUT: Final = 1.0
DEFAULT_CLOSE_TIMEOUT: Final = 5.0


class Sink(Protocol):
    def handle(self, event: Event) -> None: ...


class _Stop:
    pass


_STOP: Final = _Stop()


class _Subscription:
    def __init__(self, sink: Sink, *, maxsize: int) -> None:
        self.sink = sink
        self._queue: queue.Queue[Event | _Stop] = queue.Queue(maxsize=maxsize)
        self._cond = threading.Condition()
        self._enqueued = 0
        self._handled = 0
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name=f"msrv-sink-{type(sink).__name__}",
        )
        self._thread.start()

    def put(self, event: Event, timeout: float | None) -> bool:
        # Counted before the handoff so a concurrent flush never misses it.
        with self._cond:
            self._enqueued += 1
        try:
            self._queue.put(event, timeout=timeout)
        except queue.Full:
            with self._cond:
                self._enqueued -= 1
                self._cond.notify_all()
            return False
        return True

    def wait(self, timeout: float | None) -> bool:
        with self._cond:
            target = self._enqueued
            # A failed put lowers _enqueued again; never wait on it.
            return self._cond.wait_for(
                lambda: self._handled >= min(target, self._enqueued), timeout=timeout
            )

    def stop(self, timeout: float | None) -> bool:
        """Ask the worker to finish what is queued; False if it did not stop in time."""
        try:
            self._queue.put(_STOP, timeout=timeout)
        except queue.Full:
            return False
        self._thread.join(timeout=timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if isinstance(item, _Stop):
                return
            try:
                self.sink.handle(item)
            except Exception:
                log.error(
                    "sink failed to handle event",
                    sink=type(self.sink).__name__,
                    event_kind=item.kind,
                    exc_info=True,
                )
            finally:
                with self._cond:
                    self._handled += 1
                    self._cond.notify_all()


class Reporter:
    """Fans events out to subscribed sinks.

    Args:
        queue_size: Per-sink queue bound; 0 means unbounded.
        put_timeout: Seconds `publish` waits for room in a full queue.
    """

    def __init__(self, *, queue_size: int = 0, put_timeout: float = DEFAULT_PUT_TIMEOUT) -> None:
        self._queue_size = queue_size
        self._put_timeout = put_timeout
        self._subscriptions: list[_Subscription] = []
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, sink: Sink) -> Result[None, ReportError]:
        with self._lock:
            if self._closed:
                return Err(ReportError("reporter is closed"))
            self._subscriptions.append(_Subscription(sink, maxsize=self._queue_size))
        log.debug("sink subscribed", sink=type(sink).__name__)
        return Ok(None)

    def publish(self, event: Event) -> Result[None, ReportError]:
        """Hand `event` to every sink without waiting for delivery."""
        if not isinstance(event, Event):
            raise TypeError(f"expected Event, got {type(event).__name__}")

        # Held across all sinks so every sink sees the same total order.
        with self._lock:
            if self._closed:
                return Err(ReportError(f"reporter is closed, dropped {event.kind}"))
            failed = [
                type(sub.sink).__name__
                for sub in self._subscriptions
                if not sub.put(event, self._put_timeout)
            ]
        if failed:
            return Err(ReportError(f"queue full, {event.kind} not delivered to: {', '.join(failed)}"))
        return Ok(None)

    def flush(self, timeout: float | None = None) -> bool:
        """Block until all events published so far are handled.

        Returns False if `timeout` expired first. Returns immediately when
        nothing is pending, including after a `close` that drained every sink.
        """
        with self._lock:
            subscriptions = list(self._subscriptions)
        return all(sub.wait(timeout) for sub in subscriptions)

    def close(self, timeout: float | None = DEFAULT_CLOSE_TIMEOUT) -> None:
        """Deliver what is queued, then stop the workers. Idempotent.

        Each sink gets up to `timeout` seconds to drain. A sink still busy
        after that is abandoned: its daemon worker keeps running, and
        whatever it has not handled yet is lost.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            subscriptions = list(self._subscriptions)
        for sub in subscriptions:
            if not sub.stop(timeout):
                log.warning("sink did not drain before close", sink=type(sub.sink).__name__)
        log.debug("reporter closed", sinks=len(subscriptions))

    def __enter__(self) -> Reporter:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close(DEFAULT_CLOSE_TIMEOUT)
