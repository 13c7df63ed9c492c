from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from msrv.core.versions import BareVersion
from msrv.reporter.event import (
    AuxiliaryOutput,
    Destination,
    Event,
    FetchIndex,
    Item,
    MsrvItem,
    MsrvKind,
    ReleaseSource,
    SetOutputMessage,
    ToolchainFileItem,
    ToolchainFileKind,
)
from msrv.reporter.sinks import TestReporter


@pytest.mark.parametrize("source", list(ReleaseSource))
def test_reported_fetch_index(source: ReleaseSource, reporter: TestReporter) -> None:
    event = FetchIndex(source)

    assert reporter.reporter.publish(event.to_event()).is_ok()

    assert reporter.wait_for_events() == [Event(event)]


@pytest.mark.parametrize(
    "item",
    [
        pytest.param(MsrvItem(MsrvKind.RUST_VERSION), id="rust_version_msrv"),
        pytest.param(MsrvItem(MsrvKind.METADATA_FALLBACK), id="metadata_fallback_msrv"),
        pytest.param(ToolchainFileItem(ToolchainFileKind.TOML), id="toolchain_file_toml"),
    ],
)
def test_reported_auxiliary_output(item: Item, reporter: TestReporter) -> None:
    event = AuxiliaryOutput(Destination(Path("hello")), item)

    reporter.reporter.publish(event.to_event())

    assert reporter.wait_for_events() == [Event(event)]


def test_reported_set_output(reporter: TestReporter) -> None:
    event = SetOutputMessage(BareVersion(1, 56), Path("crate/Cargo.toml"))

    reporter.reporter.publish(event.to_event())

    events = reporter.wait_for_events()
    assert events == [Event(event)]
    assert events[0].kind == "set_output"


def test_fetch_index_serialization() -> None:
    assert FetchIndex(ReleaseSource.RUST_DIST).to_event().to_dict() == {
        "type": "fetch_index",
        "source": "rust_dist",
    }


def test_auxiliary_output_serialization() -> None:
    msrv = AuxiliaryOutput(Destination(Path("a/Cargo.toml")), MsrvItem(MsrvKind.RUST_VERSION))
    toolchain = AuxiliaryOutput(
        Destination(Path("a/rust-toolchain.toml")),
        ToolchainFileItem(ToolchainFileKind.TOML),
    )

    assert msrv.to_dict() == {
        "type": "auxiliary_output",
        "destination": {"file": "a/Cargo.toml"},
        "item": {"msrv": {"kind": "rust_version"}},
    }
    assert toolchain.to_dict()["item"] == {"toolchain_file": {"kind": "toml"}}


def test_set_output_serialization_is_json_compatible() -> None:
    event = SetOutputMessage(BareVersion(1, 70, 1), Path("Cargo.toml")).to_event()

    text = json.dumps(event.to_dict())

    assert json.loads(text) == {
        "type": "set_output",
        "version": "1.70.1",
        "manifest_path": "Cargo.toml",
    }


def test_set_output_without_manifest_serializes_null() -> None:
    event = SetOutputMessage(BareVersion(1, 60), None).to_event()

    assert event.to_dict()["manifest_path"] is None


def test_item_kinds_are_distinct() -> None:
    assert MsrvItem(MsrvKind.RUST_VERSION) != ToolchainFileItem(ToolchainFileKind.TOML)
    assert MsrvItem(MsrvKind.RUST_VERSION) == MsrvItem(MsrvKind.RUST_VERSION)


def test_events_are_immutable() -> None:
    event = FetchIndex(ReleaseSource.RUST_CHANGELOG).to_event()
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.message = FetchIndex(ReleaseSource.RUST_DIST)  # type: ignore[misc]
