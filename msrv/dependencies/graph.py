# SPDX-License-Identifier: MIT
"""Dependency graph model.

The graph is built elsewhere (``cargo metadata``); this module only holds
it and converts the metadata JSON document into nodes and edges.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from msrv.core.errors import GraphError
from msrv.core.result import Err, Ok, Result

__all__ = ["Package", "DependencyGraph", "load_graph"]


@dataclass(frozen=True, slots=True)
class Package:
    """One node of the dependency graph.

    Attributes:
        id: Unique package id (``name version (source)`` in cargo metadata).
        name: Crate name. Not unique: two versions of a crate share it.
        version: Package version string.
        rust_version: Declared ``package.rust-version`` expression, if any.
        metadata: The ``package.metadata`` table.
        manifest_path: Path to the package's manifest, if the graph reports one.
    """

    id: str
    name: str
    version: str = "0.0.0"
    rust_version: str | None = None
    metadata: Mapping[str, object] = field(default_factory=dict)
    manifest_path: Path | None = None


@dataclass(frozen=True, slots=True)
class DependencyGraph:
    """Read-only dependency graph.

    `packages` is indexed by graph position; `edges[i]` lists the positions
    of the direct dependencies of `packages[i]`, in declaration order.
    """

    root: str
    packages: tuple[Package, ...]
    edges: tuple[tuple[int, ...], ...]
    index: Mapping[str, int]

    @classmethod
    def build(
        cls,
        root: str,
        packages: list[Package],
        dependencies: Mapping[str, list[str]] | None = None,
    ) -> DependencyGraph:
        """Build a graph from packages and an id -> dependency ids mapping."""
        index = {p.id: i for i, p in enumerate(packages)}
        if root not in index:
            raise KeyError(root)
        deps = dependencies or {}
        edges = tuple(
            tuple(index[d] for d in deps.get(p.id, []) if d in index) for p in packages
        )
        return cls(root=root, packages=tuple(packages), edges=edges, index=index)

    @property
    def root_package(self) -> Package:
        return self.packages[self.index[self.root]]

    def neighbors(self, position: int) -> tuple[int, ...]:
        return self.edges[position]

    @classmethod
    def from_metadata(cls, doc: Mapping[str, object]) -> Result[DependencyGraph, GraphError]:
        """Build the graph from a ``cargo metadata --format-version 1`` document."""
        raw_packages = doc.get("packages")
        resolve = doc.get("resolve")
        if not isinstance(raw_packages, list):
            return Err(GraphError("metadata has no 'packages' list"))
        if not isinstance(resolve, dict):
            return Err(
                GraphError(
                    "metadata has no 'resolve' section",
                    hint="run cargo metadata without --no-deps",
                )
            )

        root = resolve.get("root")
        if not isinstance(root, str):
            return Err(
                GraphError(
                    "metadata has no resolve root",
                    hint="run cargo metadata from a package, not a virtual workspace",
                )
            )

        packages: list[Package] = []
        for raw in raw_packages:
            if not isinstance(raw, dict):
                return Err(GraphError("malformed package entry"))
            pkg = _package_from_json(raw)
            if pkg is None:
                return Err(GraphError("package entry without id or name"))
            packages.append(pkg)

        dependencies: dict[str, list[str]] = {}
        for node in resolve.get("nodes") or []:
            node_id = node.get("id") if isinstance(node, dict) else None
            if not isinstance(node_id, str):
                continue
            dependencies[node_id] = _node_dependencies(node)

        try:
            return Ok(cls.build(root, packages, dependencies))
        except KeyError:
            return Err(GraphError(f"resolve root not among packages: {root}"))


def _package_from_json(raw: dict[str, object]) -> Package | None:
    pkg_id = raw.get("id")
    name = raw.get("name")
    if not isinstance(pkg_id, str) or not isinstance(name, str):
        return None

    version = raw.get("version")
    rust_version = raw.get("rust_version")
    metadata = raw.get("metadata")
    manifest_path = raw.get("manifest_path")
    return Package(
        id=pkg_id,
        name=name,
        version=version if isinstance(version, str) else "0.0.0",
        rust_version=rust_version if isinstance(rust_version, str) else None,
        metadata=metadata if isinstance(metadata, dict) else {},
        manifest_path=Path(manifest_path) if isinstance(manifest_path, str) else None,
    )


def _node_dependencies(node: dict[str, object]) -> list[str]:
    # Newer cargo emits `deps` with per-dependency details; older only `dependencies`.
    deps = node.get("deps")
    if isinstance(deps, list):
        ids = [d.get("pkg") for d in deps if isinstance(d, dict)]
        return [i for i in ids if isinstance(i, str)]
    plain = node.get("dependencies")
    if isinstance(plain, list):
        return [i for i in plain if isinstance(i, str)]
    return []


def load_graph(source: str) -> Result[DependencyGraph, GraphError]:
    """Load a graph from a metadata JSON file, or from stdin when `source` is ``-``."""
    try:
        if source == "-":
            text = sys.stdin.read()
        else:
            text = Path(source).read_text(encoding="utf-8")
    except OSError as e:
        return Err(GraphError(f"cannot read {source}: {e}"))

    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            GraphError(
                f"invalid JSON in {source}: {e}",
                hint="expected output of: cargo metadata --format-version 1",
            )
        )
    if not isinstance(doc, dict):
        return Err(GraphError(f"{source}: expected a JSON object"))
    return DependencyGraph.from_metadata(doc)
