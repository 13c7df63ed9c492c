# SPDX-License-Identifier: MIT
"""Exit codes and error payloads shared across services and the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

__all__ = [
    "ErrorCode",
    "ConfigError",
    "GraphError",
    "RenderError",
    "ReportError",
]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    IO_ERROR = 3
    RENDER_ERROR = 4


@dataclass(frozen=True, slots=True)
class ConfigError:
    message: str


@dataclass(frozen=True, slots=True)
class GraphError:
    """The dependency metadata document could not be turned into a graph."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class RenderError:
    message: str


@dataclass(frozen=True, slots=True)
class ReportError:
    """An event could not be handed to the reporter."""

    message: str
