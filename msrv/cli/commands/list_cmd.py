"""List command - dependencies grouped by MSRV."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from msrv.cli.commands.options import ConfigOption, FormatOption, MetadataOption, pick_format
from msrv.cli.context import build_context, load_graph_or_exit
from msrv.core.errors import ErrorCode
from msrv.core.result import Err, Ok
from msrv.dependencies.formatter import ByMsrvFormatter
from msrv.dependencies.resolve import RequirementResolver


def list_deps(
    metadata: str = MetadataOption,
    output_format: Optional[str] = FormatOption,
    no_manifest_scan: bool = typer.Option(
        False, "--no-manifest-scan", help="Never read Cargo.toml files as a last resort."
    ),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Show every dependency grouped by its minimum supported Rust version."""
    ctx = build_context(config)

    fmt = pick_format(output_format, ctx.config)
    if fmt is None:
        ctx.console.error(f"unknown format: {output_format} (expected human or json)")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    graph = load_graph_or_exit(ctx, metadata)
    resolver = RequirementResolver(
        metadata_key=ctx.config.metadata_key,
        manifest_scan=ctx.config.manifest_scan and not no_manifest_scan,
    )

    match ByMsrvFormatter(graph, resolver).render(fmt):
        case Err(e):
            ctx.console.error(e.message)
            raise typer.Exit(code=int(ErrorCode.RENDER_ERROR))
        case Ok(text):
            ctx.console.raw(text)
