# SPDX-License-Identifier: MIT
"""Console output abstraction.

Services write through `ConsoleProtocol` so tests can swap in `MockConsole`
and assert on what would have been printed.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, TextIO

from rich.console import Console
from rich.markup import escape

__all__ = ["Style", "ConsoleProtocol", "RichConsole", "MockConsole", "Message"]


class Style(Enum):
    DEFAULT = ""
    DIM = "dim"
    INFO = "cyan"
    SUCCESS = "green"
    WARNING = "yellow"
    ERROR = "bold red"
    HEADER = "bold"


class ConsoleProtocol(Protocol):
    def print(self, msg: str, style: Style = Style.DEFAULT) -> None: ...

    def raw(self, text: str) -> None: ...

    def header(self, title: str) -> None: ...

    def success(self, msg: str) -> None: ...

    def warning(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...

    def newline(self) -> None: ...


class RichConsole:
    """Console backed by rich; errors and warnings go to stderr."""

    def __init__(self, *, file: TextIO | None = None, err_file: TextIO | None = None) -> None:
        self._out = Console(file=file or sys.stdout, highlight=False, soft_wrap=True)
        self._err = Console(file=err_file or sys.stderr, highlight=False, soft_wrap=True)

    def print(self, msg: str, style: Style = Style.DEFAULT) -> None:
        self._out.print(escape(msg), style=style.value or None)

    def raw(self, text: str) -> None:
        # Pre-rendered text (tables, JSON): no markup, no wrapping.
        self._out.out(text, highlight=False)

    def header(self, title: str) -> None:
        self._out.print(escape(title), style=Style.HEADER.value)

    def success(self, msg: str) -> None:
        self._out.print(escape(msg), style=Style.SUCCESS.value)

    def warning(self, msg: str) -> None:
        self._err.print(f"warning: {escape(msg)}", style=Style.WARNING.value)

    def error(self, msg: str) -> None:
        self._err.print(f"error: {escape(msg)}", style=Style.ERROR.value)

    def newline(self) -> None:
        self._out.print()


@dataclass(frozen=True, slots=True)
class Message:
    kind: str
    text: str
    style: Style = Style.DEFAULT


@dataclass
class MockConsole:
    """Records output instead of printing it."""

    messages: list[Message] = field(default_factory=list)

    def print(self, msg: str, style: Style = Style.DEFAULT) -> None:
        self.messages.append(Message("print", msg, style))

    def raw(self, text: str) -> None:
        self.messages.append(Message("raw", text))

    def header(self, title: str) -> None:
        self.messages.append(Message("header", title, Style.HEADER))

    def success(self, msg: str) -> None:
        self.messages.append(Message("success", msg, Style.SUCCESS))

    def warning(self, msg: str) -> None:
        self.messages.append(Message("warning", msg, Style.WARNING))

    def error(self, msg: str) -> None:
        self.messages.append(Message("error", msg, Style.ERROR))

    def newline(self) -> None:
        self.messages.append(Message("newline", ""))

    def texts(self, kind: str | None = None) -> list[str]:
        return [m.text for m in self.messages if kind is None or m.kind == kind]
