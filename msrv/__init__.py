"""msrv: minimum supported toolchain version reporting for dependency graphs."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("msrv-report")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = ["__version__"]
