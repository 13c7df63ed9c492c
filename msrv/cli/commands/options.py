"""Options shared by several commands."""

from __future__ import annotations

from typing import Optional

import typer

from msrv.core.config import Config, OutputFormat

MetadataOption = typer.Option(
    "-",
    "--metadata",
    "-m",
    help="Output of `cargo metadata --format-version 1` ('-' reads stdin).",
)
FormatOption = typer.Option(None, "--format", "-f", help="Output format: human | json.")
ConfigOption = typer.Option(None, "--config", help="Path to msrv.toml.")


def pick_format(requested: Optional[str], config: Config) -> OutputFormat | None:
    """Resolve the --format flag against the config; None if invalid."""
    match requested:
        case None:
            return config.output_format
        case "human":
            return "human"
        case "json":
            return "json"
        case _:
            return None
