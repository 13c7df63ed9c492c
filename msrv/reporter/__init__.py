"""Event reporting: messages, the publish/subscribe reporter, and sinks."""

from __future__ import annotations

from msrv.reporter.bus import Reporter, Sink
from msrv.reporter.event import (
    AuxiliaryOutput,
    Destination,
    Event,
    FetchIndex,
    Item,
    Message,
    MsrvItem,
    MsrvKind,
    ReleaseSource,
    SetOutputMessage,
    ToolchainFileItem,
    ToolchainFileKind,
)
from msrv.reporter.sinks import HumanSink, JsonSink, RecordingSink, TestReporter

__all__ = [
    "AuxiliaryOutput",
    "Destination",
    "Event",
    "FetchIndex",
    "HumanSink",
    "Item",
    "JsonSink",
    "Message",
    "MsrvItem",
    "MsrvKind",
    "RecordingSink",
    "ReleaseSource",
    "Reporter",
    "SetOutputMessage",
    "Sink",
    "TestReporter",
    "ToolchainFileItem",
    "ToolchainFileKind",
]
