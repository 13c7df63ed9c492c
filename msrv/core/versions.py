# SPDX-License-Identifier: MIT
"""Bare toolchain versions and requirement parsing.

A requirement such as ``rust-version = "1.56"`` or ``">=1.40, <2"`` is
reduced to a single `BareVersion`: the first comparator, with any omitted
minor/patch component defaulting to zero. Pre-release and build suffixes
are dropped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "BareVersion",
    "UNKNOWN",
    "format_version",
    "parse_bare_version",
    "parse_requirement",
]

UNKNOWN = "unknown"

_COMPARATOR_RE = re.compile(
    r"""
    ^\s*
    (?:>=|<=|=|>|<|~|\^)?\s*
    (?P<major>\d+)
    (?:\.(?P<minor>\d+|\*|x|X)
        (?:\.(?P<patch>\d+|\*|x|X))?
    )?
    (?:[-+][0-9A-Za-z.\-+]*)?
    \s*$
    """,
    re.VERBOSE,
)

_BARE_RE = re.compile(r"^\s*(\d+)\.(\d+)(?:\.(\d+))?\s*$")


@dataclass(frozen=True, slots=True, order=True)
class BareVersion:
    major: int
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)


def _component(raw: str | None) -> int:
    if raw is None or not raw.isdigit():
        return 0
    return int(raw)


def parse_requirement(expr: str) -> BareVersion | None:
    """Reduce a requirement expression to the version of its first comparator.

    Returns None if the first comparator is not a recognizable version.
    """
    first = expr.split(",", 1)[0]
    m = _COMPARATOR_RE.match(first)
    if m is None:
        return None
    return BareVersion(
        int(m.group("major")),
        _component(m.group("minor")),
        _component(m.group("patch")),
    )


def parse_bare_version(text: str) -> BareVersion | None:
    """Parse ``major.minor`` or ``major.minor.patch``."""
    m = _BARE_RE.match(text)
    if m is None:
        return None
    return BareVersion(int(m.group(1)), int(m.group(2)), _component(m.group(3)))


def format_version(version: BareVersion | None) -> str:
    return str(version) if version is not None else UNKNOWN
