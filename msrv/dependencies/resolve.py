# SPDX-License-Identifier: MIT
"""Resolve the minimum toolchain version a single package declares.

Sources, in strict precedence order (first present source wins):

1. ``package.rust-version`` as reported by the metadata.
2. ``package.metadata.<key>`` (default key ``msrv``), used by crates that
   predate native ``rust-version`` support.
3. A scan of the package's ``Cargo.toml`` for the same two keys, for
   metadata produced by tools that did not report ``rust-version``. Skipped
   when the manifest path is unknown.

None of the steps raise; an unresolvable package yields ``None``.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import structlog

from msrv.core.versions import BareVersion, parse_bare_version, parse_requirement
from msrv.dependencies.graph import Package

__all__ = [
    "RequirementSource",
    "Resolved",
    "RequirementResolver",
    "get_package_metadata_msrv",
    "parse_manifest_workaround",
]

log = structlog.get_logger("msrv.dependencies")


class RequirementSource(Enum):
    RUST_VERSION = "rust_version"
    METADATA_FALLBACK = "metadata_fallback"


@dataclass(frozen=True, slots=True)
class Resolved:
    """A resolved requirement and the key it came from.

    `from_manifest` is set when the key was read from the manifest file
    rather than from the graph.
    """

    version: BareVersion | None
    source: RequirementSource | None = None
    from_manifest: bool = False


def get_package_metadata_msrv(
    metadata: Mapping[str, object], key: str = "msrv"
) -> BareVersion | None:
    value = metadata.get(key)
    if not isinstance(value, str):
        return None
    return parse_bare_version(value)


def parse_manifest_workaround(manifest_path: Path, key: str = "msrv") -> Resolved | None:
    """Best-effort read of the minimum version straight from a manifest file.

    Returns None when the file cannot be read or declares nothing usable.
    """
    try:
        data = tomllib.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        log.debug("manifest scan failed", manifest=str(manifest_path), error=str(e))
        return None

    package = data.get("package")
    if not isinstance(package, dict):
        return None

    rust_version = package.get("rust-version")
    if isinstance(rust_version, str):
        version = parse_requirement(rust_version)
        source = RequirementSource.RUST_VERSION
    else:
        metadata = package.get("metadata")
        if not isinstance(metadata, dict):
            return None
        version = get_package_metadata_msrv(metadata, key)
        source = RequirementSource.METADATA_FALLBACK

    if version is None:
        return None
    return Resolved(version, source, from_manifest=True)


@dataclass(frozen=True, slots=True)
class RequirementResolver:
    """Resolves packages to their declared minimum version.

    Attributes:
        metadata_key: Key looked up in ``package.metadata``.
        manifest_scan: Whether the manifest file may be read as a last resort.
            Packages without a known manifest path are never scanned.
    """

    metadata_key: str = "msrv"
    manifest_scan: bool = True

    def resolve(self, package: Package) -> Resolved:
        if package.rust_version is not None:
            return Resolved(parse_requirement(package.rust_version), RequirementSource.RUST_VERSION)

        fallback = get_package_metadata_msrv(package.metadata, self.metadata_key)
        if fallback is not None:
            return Resolved(fallback, RequirementSource.METADATA_FALLBACK)

        if self.manifest_scan and package.manifest_path is not None:
            scanned = parse_manifest_workaround(package.manifest_path, self.metadata_key)
            if scanned is not None:
                return scanned

        return Resolved(None)

    def __call__(self, package: Package) -> BareVersion | None:
        return self.resolve(package).version
