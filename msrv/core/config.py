# SPDX-License-Identifier: MIT
"""Tool configuration (``msrv.toml``).

Example::

    output_format = "json"
    manifest_scan = false
    metadata_key = "msrv"
    queue_size = 0

    [logging]
    level = "DEBUG"
    format = "json"
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Literal

from msrv.core.errors import ConfigError
from msrv.core.result import Err, Ok, Result

__all__ = ["Config", "OutputFormat", "DEFAULT_CONFIG_NAME", "load_config", "find_config"]

OutputFormat = Literal["human", "json"]

DEFAULT_CONFIG_NAME = "msrv.toml"


@dataclass(frozen=True, slots=True)
class Config:
    output_format: OutputFormat = "human"
    manifest_scan: bool = True
    metadata_key: str = "msrv"
    queue_size: int = 0
    log_level: str = "WARNING"
    log_format: str = "console"

    def with_env(self) -> Config:
        """Apply MSRV_LOG_LEVEL / MSRV_LOG_FORMAT overrides."""
        level = os.environ.get("MSRV_LOG_LEVEL")
        fmt = os.environ.get("MSRV_LOG_FORMAT")
        return replace(
            self,
            log_level=level.upper() if level else self.log_level,
            log_format=fmt.lower() if fmt else self.log_format,
        )


def find_config(cwd: Path) -> Path | None:
    candidate = cwd / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_file() else None


def _expect(data: dict[str, object], key: str, kind: type, default: object) -> object:
    value = data.get(key, default)
    # bool is an int subclass; keep them apart.
    if kind is int and isinstance(value, bool):
        raise TypeError(key)
    if not isinstance(value, kind):
        raise TypeError(key)
    return value


def load_config(path: Path | None) -> Result[Config, ConfigError]:
    """Load configuration from `path`; None yields the defaults."""
    if path is None:
        return Ok(Config())

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        return Err(ConfigError(f"cannot read {path}: {e}"))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"invalid TOML in {path}: {e}"))

    defaults = Config()
    logging_table = data.get("logging", {})
    if not isinstance(logging_table, dict):
        return Err(ConfigError(f"{path}: [logging] must be a table"))

    try:
        output_format = str(_expect(data, "output_format", str, defaults.output_format))
        manifest_scan = bool(_expect(data, "manifest_scan", bool, defaults.manifest_scan))
        metadata_key = str(_expect(data, "metadata_key", str, defaults.metadata_key))
        queue_size = _expect(data, "queue_size", int, defaults.queue_size)
        log_level = str(_expect(logging_table, "level", str, defaults.log_level))
        log_format = str(_expect(logging_table, "format", str, defaults.log_format))
    except TypeError as e:
        return Err(ConfigError(f"{path}: wrong type for '{e.args[0]}'"))

    if output_format not in ("human", "json"):
        return Err(ConfigError(f"{path}: output_format must be 'human' or 'json'"))
    assert isinstance(queue_size, int)
    if queue_size < 0:
        return Err(ConfigError(f"{path}: queue_size must be >= 0"))

    return Ok(
        Config(
            output_format="json" if output_format == "json" else "human",
            manifest_scan=manifest_scan,
            metadata_key=metadata_key,
            queue_size=queue_size,
            log_level=log_level.upper(),
            log_format=log_format.lower(),
        )
    )
