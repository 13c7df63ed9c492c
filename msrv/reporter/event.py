# SPDX-License-Identifier: MIT
"""Reportable events.

Every observable milestone is one of a closed set of immutable messages.
A message is wrapped in an `Event` before it is handed to the reporter;
`Event.to_dict()` gives its stable, tagged JSON form::

    {"type": "fetch_index", "source": "rust_changelog"}
    {"type": "auxiliary_output", "destination": {"file": "Cargo.toml"},
     "item": {"msrv": {"kind": "rust_version"}}}
    {"type": "set_output", "version": "1.56.0", "manifest_path": "Cargo.toml"}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar, TypeAlias

from msrv.core.versions import BareVersion

__all__ = [
    "AuxiliaryOutput",
    "Destination",
    "Event",
    "FetchIndex",
    "Item",
    "Message",
    "MsrvItem",
    "MsrvKind",
    "ReleaseSource",
    "SetOutputMessage",
    "ToolchainFileItem",
    "ToolchainFileKind",
]

JsonDict: TypeAlias = dict[str, object]


class ReleaseSource(Enum):
    RUST_CHANGELOG = "rust_changelog"
    RUST_DIST = "rust_dist"


class MsrvKind(Enum):
    # package.rust-version, as supported by the Cargo manifest format.
    RUST_VERSION = "rust_version"
    # package.metadata.msrv, for crates that predate package.rust-version.
    METADATA_FALLBACK = "metadata_fallback"


class ToolchainFileKind(Enum):
    TOML = "toml"


@dataclass(frozen=True, slots=True)
class FetchIndex:
    """The release index is about to be fetched."""

    tag: ClassVar[str] = "fetch_index"

    source: ReleaseSource

    def to_dict(self) -> JsonDict:
        return {"type": self.tag, "source": self.source.value}

    def to_event(self) -> Event:
        return Event(self)


@dataclass(frozen=True, slots=True)
class Destination:
    """Where auxiliary output went. Only files are supported."""

    file: Path

    def to_dict(self) -> JsonDict:
        return {"file": self.file.as_posix()}


@dataclass(frozen=True, slots=True)
class MsrvItem:
    """An MSRV of the given kind was found."""

    kind: MsrvKind

    def to_dict(self) -> JsonDict:
        return {"msrv": {"kind": self.kind.value}}


@dataclass(frozen=True, slots=True)
class ToolchainFileItem:
    """A toolchain file of the given kind was found."""

    kind: ToolchainFileKind

    def to_dict(self) -> JsonDict:
        return {"toolchain_file": {"kind": self.kind.value}}


Item: TypeAlias = MsrvItem | ToolchainFileItem


@dataclass(frozen=True, slots=True)
class AuxiliaryOutput:
    tag: ClassVar[str] = "auxiliary_output"

    destination: Destination
    item: Item

    def to_dict(self) -> JsonDict:
        return {
            "type": self.tag,
            "destination": self.destination.to_dict(),
            "item": self.item.to_dict(),
        }

    def to_event(self) -> Event:
        return Event(self)


@dataclass(frozen=True, slots=True)
class SetOutputMessage:
    """Final minimum version computed for a manifest.

    `manifest_path` is None when the graph did not say where the root
    manifest lives; it serializes as ``null``.
    """

    tag: ClassVar[str] = "set_output"

    version: BareVersion
    manifest_path: Path | None

    def to_dict(self) -> JsonDict:
        return {
            "type": self.tag,
            "version": str(self.version),
            "manifest_path": (
                self.manifest_path.as_posix() if self.manifest_path is not None else None
            ),
        }

    def to_event(self) -> Event:
        return Event(self)


Message: TypeAlias = FetchIndex | AuxiliaryOutput | SetOutputMessage


@dataclass(frozen=True, slots=True)
class Event:
    """Envelope for a single message; the only type the reporter accepts."""

    message: Message

    @property
    def kind(self) -> str:
        return self.message.tag

    def to_dict(self) -> JsonDict:
        return self.message.to_dict()
