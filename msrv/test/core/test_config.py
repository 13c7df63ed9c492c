from __future__ import annotations

from pathlib import Path

import pytest

from msrv.core.config import Config, find_config, load_config
from msrv.core.errors import ConfigError
from msrv.core.result import Err, Ok


def test_no_path_yields_defaults() -> None:
    assert load_config(None) == Ok(Config())


def test_load_config_reads_all_keys(tmp_path: Path) -> None:
    path = tmp_path / "msrv.toml"
    path.write_text(
        'output_format = "json"\n'
        "manifest_scan = false\n"
        'metadata_key = "min-rust"\n'
        "queue_size = 16\n"
        "[logging]\n"
        'level = "debug"\n'
        'format = "JSON"\n',
        encoding="utf-8",
    )

    result = load_config(path)

    assert result == Ok(
        Config(
            output_format="json",
            manifest_scan=False,
            metadata_key="min-rust",
            queue_size=16,
            log_level="DEBUG",
            log_format="json",
        )
    )


def test_unknown_keys_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "msrv.toml"
    path.write_text('something_else = 1\n[extra]\nx = "y"\n', encoding="utf-8")
    assert load_config(path) == Ok(Config())


@pytest.mark.parametrize(
    ("body", "needle"),
    [
        ("manifest_scan = 1\n", "manifest_scan"),
        ("queue_size = true\n", "queue_size"),
        ('output_format = "yaml"\n', "output_format"),
        ("queue_size = -1\n", "queue_size"),
        ('logging = "loud"\n', "[logging]"),
        ("[logging]\nlevel = 10\n", "level"),
    ],
)
def test_invalid_values_are_reported(tmp_path: Path, body: str, needle: str) -> None:
    path = tmp_path / "msrv.toml"
    path.write_text(body, encoding="utf-8")

    result = load_config(path)

    assert isinstance(result, Err)
    assert isinstance(result.error, ConfigError)
    assert needle in result.error.message


def test_invalid_toml_is_reported(tmp_path: Path) -> None:
    path = tmp_path / "msrv.toml"
    path.write_text("output_format = \n", encoding="utf-8")

    result = load_config(path)

    assert isinstance(result, Err)
    assert "invalid TOML" in result.error.message


def test_missing_file_is_reported(tmp_path: Path) -> None:
    result = load_config(tmp_path / "nope.toml")
    assert isinstance(result, Err)
    assert "cannot read" in result.error.message


def test_find_config_looks_in_cwd(tmp_path: Path) -> None:
    assert find_config(tmp_path) is None
    (tmp_path / "msrv.toml").write_text("", encoding="utf-8")
    assert find_config(tmp_path) == tmp_path / "msrv.toml"


def test_env_overrides_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MSRV_LOG_LEVEL", "info")
    monkeypatch.setenv("MSRV_LOG_FORMAT", "JSON")

    cfg = Config(log_level="ERROR").with_env()

    assert cfg.log_level == "INFO"
    assert cfg.log_format == "json"


def test_env_absent_keeps_file_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MSRV_LOG_LEVEL", raising=False)
    monkeypatch.delenv("MSRV_LOG_FORMAT", raising=False)
    assert Config(log_level="ERROR").with_env().log_level == "ERROR"
