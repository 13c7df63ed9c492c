"""Show command - the MSRV the whole dependency graph requires."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from msrv.cli.commands.options import ConfigOption, FormatOption, MetadataOption, pick_format
from msrv.cli.context import CLIContext, build_context, load_graph_or_exit
from msrv.core.errors import ErrorCode
from msrv.core.result import Err
from msrv.dependencies.formatter import ByMsrvFormatter
from msrv.dependencies.graph import Package
from msrv.dependencies.resolve import RequirementResolver, RequirementSource
from msrv.reporter.bus import Reporter
from msrv.reporter.event import (
    AuxiliaryOutput,
    Destination,
    Event,
    MsrvItem,
    MsrvKind,
    SetOutputMessage,
    ToolchainFileItem,
    ToolchainFileKind,
)
from msrv.reporter.sinks import HumanSink, JsonSink

TOOLCHAIN_FILE = "rust-toolchain.toml"

_KIND_BY_SOURCE: dict[RequirementSource, MsrvKind] = {
    RequirementSource.RUST_VERSION: MsrvKind.RUST_VERSION,
    RequirementSource.METADATA_FALLBACK: MsrvKind.METADATA_FALLBACK,
}


def collect_events(
    root: Package, formatter: ByMsrvFormatter, resolver: RequirementResolver
) -> list[Event]:
    """Events describing how the root's MSRV was found and what the graph requires."""
    events: list[Event] = []
    manifest = root.manifest_path

    resolved = resolver.resolve(root)
    if manifest is not None and resolved.version is not None and resolved.source is not None:
        kind = _KIND_BY_SOURCE[resolved.source]
        events.append(AuxiliaryOutput(Destination(manifest), MsrvItem(kind)).to_event())

    if manifest is not None and (toolchain_file := manifest.parent / TOOLCHAIN_FILE).is_file():
        events.append(
            AuxiliaryOutput(
                Destination(toolchain_file), ToolchainFileItem(ToolchainFileKind.TOML)
            ).to_event()
        )

    required = formatter.most_restrictive()
    if required is not None:
        events.append(SetOutputMessage(required, manifest).to_event())
    return events


def _publish_all(ctx: CLIContext, reporter: Reporter, events: list[Event]) -> None:
    for event in events:
        if isinstance(res := reporter.publish(event), Err):
            ctx.console.error(res.error.message)
            raise typer.Exit(code=int(ErrorCode.IO_ERROR))


def show(
    metadata: str = MetadataOption,
    output_format: Optional[str] = FormatOption,
    config: Optional[Path] = ConfigOption,
) -> None:
    """Report the highest MSRV declared anywhere in the dependency graph."""
    ctx = build_context(config)

    fmt = pick_format(output_format, ctx.config)
    if fmt is None:
        ctx.console.error(f"unknown format: {output_format} (expected human or json)")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    graph = load_graph_or_exit(ctx, metadata)
    resolver = RequirementResolver(
        metadata_key=ctx.config.metadata_key,
        manifest_scan=ctx.config.manifest_scan,
    )
    formatter = ByMsrvFormatter(graph, resolver)
    events = collect_events(graph.root_package, formatter, resolver)

    with Reporter(queue_size=ctx.config.queue_size) as reporter:
        sink = JsonSink(sys.stdout) if fmt == "json" else HumanSink(ctx.console)
        reporter.subscribe(sink)
        _publish_all(ctx, reporter, events)

    if not any(isinstance(e.message, SetOutputMessage) for e in events):
        ctx.console.warning("no package in the graph declares an MSRV")
