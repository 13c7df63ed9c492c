# SPDX-License-Identifier: MIT
"""Event sinks: human console, JSON lines, and an in-memory recorder."""

from __future__ import annotations

import json
import threading
from typing import TextIO

from msrv.output.console import ConsoleProtocol, Style
from msrv.reporter.bus import Reporter
from msrv.reporter.event import (
    AuxiliaryOutput,
    Event,
    FetchIndex,
    MsrvItem,
    SetOutputMessage,
    ToolchainFileItem,
)

__all__ = ["HumanSink", "JsonSink", "RecordingSink", "TestReporter", "describe"]


def describe(event: Event) -> str:
    """One-line human description of an event."""
    match event.message:
        case FetchIndex(source=source):
            return f"fetching release index ({source.value})"
        case AuxiliaryOutput(destination=dest, item=MsrvItem(kind=kind)):
            return f"found MSRV via {kind.value} in {dest.file}"
        case AuxiliaryOutput(destination=dest, item=ToolchainFileItem(kind=kind)):
            return f"found toolchain file ({kind.value}): {dest.file}"
        case SetOutputMessage(version=version, manifest_path=None):
            return f"MSRV: {version}"
        case SetOutputMessage(version=version, manifest_path=path):
            return f"MSRV for {path}: {version}"
        case _:
            return event.kind


class HumanSink:
    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def handle(self, event: Event) -> None:
        if isinstance(event.message, SetOutputMessage):
            self._console.success(describe(event))
        else:
            self._console.print(describe(event), Style.DIM)


class JsonSink:
    """Writes one compact JSON document per event."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def handle(self, event: Event) -> None:
        self._stream.write(json.dumps(event.to_dict(), separators=(",", ":")) + "\n")
        self._stream.flush()


class RecordingSink:
    def __init__(self) -> None:
        self._events: list[Event] = []
        self._lock = threading.Lock()

    def handle(self, event: Event) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[Event]:
        with self._lock:
            return list(self._events)


class TestReporter:
    """Reporter wired to a `RecordingSink`, for assertions in tests."""

    __test__ = False

    def __init__(self) -> None:
        self._sink = RecordingSink()
        self._reporter = Reporter()
        self._reporter.subscribe(self._sink)

    @property
    def reporter(self) -> Reporter:
        return self._reporter

    def wait_for_events(self, timeout: float | None = 5.0) -> list[Event]:
        """Events delivered so far, after waiting for the ones in flight."""
        if not self._reporter.flush(timeout):
            raise TimeoutError("events were not delivered in time")
        return self._sink.events

    def close(self) -> None:
        self._reporter.close()

    def __enter__(self) -> TestReporter:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
