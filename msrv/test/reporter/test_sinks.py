from __future__ import annotations

import io
import json
from pathlib import Path

from msrv.core.versions import BareVersion
from msrv.output.console import MockConsole, Style
from msrv.reporter.bus import Reporter
from msrv.reporter.event import (
    AuxiliaryOutput,
    Destination,
    FetchIndex,
    MsrvItem,
    MsrvKind,
    ReleaseSource,
    SetOutputMessage,
    ToolchainFileItem,
    ToolchainFileKind,
)
from msrv.reporter.sinks import HumanSink, JsonSink, describe


def test_describe_each_message() -> None:
    cargo = Path("crate") / "Cargo.toml"
    toolchain = Path("crate") / "rust-toolchain.toml"

    assert describe(FetchIndex(ReleaseSource.RUST_CHANGELOG).to_event()) == (
        "fetching release index (rust_changelog)"
    )
    assert describe(
        AuxiliaryOutput(Destination(cargo), MsrvItem(MsrvKind.METADATA_FALLBACK)).to_event()
    ) == f"found MSRV via metadata_fallback in {cargo}"
    assert describe(
        AuxiliaryOutput(
            Destination(toolchain), ToolchainFileItem(ToolchainFileKind.TOML)
        ).to_event()
    ) == f"found toolchain file (toml): {toolchain}"
    assert describe(SetOutputMessage(BareVersion(1, 56), cargo).to_event()) == (
        f"MSRV for {cargo}: 1.56.0"
    )
    assert describe(SetOutputMessage(BareVersion(1, 56), None).to_event()) == "MSRV: 1.56.0"


def test_human_sink_prints_through_console() -> None:
    console = MockConsole()
    sink = HumanSink(console)

    sink.handle(FetchIndex(ReleaseSource.RUST_DIST).to_event())
    sink.handle(SetOutputMessage(BareVersion(1, 60), Path("Cargo.toml")).to_event())

    assert [(m.kind, m.style) for m in console.messages] == [
        ("print", Style.DIM),
        ("success", Style.SUCCESS),
    ]
    assert console.texts("success") == ["MSRV for Cargo.toml: 1.60.0"]


def test_json_sink_writes_one_document_per_line() -> None:
    stream = io.StringIO()
    events = [
        FetchIndex(ReleaseSource.RUST_CHANGELOG).to_event(),
        SetOutputMessage(BareVersion(1, 60), Path("Cargo.toml")).to_event(),
    ]

    with Reporter() as reporter:
        reporter.subscribe(JsonSink(stream))
        for event in events:
            reporter.publish(event)

    lines = stream.getvalue().splitlines()
    assert [json.loads(line) for line in lines] == [e.to_dict() for e in events]
    assert all(" " not in line for line in lines)
