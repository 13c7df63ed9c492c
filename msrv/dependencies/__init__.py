"""Dependency graph traversal and MSRV aggregation."""

from __future__ import annotations

from msrv.dependencies.formatter import ByMsrvFormatter, Values
from msrv.dependencies.graph import DependencyGraph, Package, load_graph
from msrv.dependencies.resolve import RequirementResolver, RequirementSource, Resolved

__all__ = [
    "ByMsrvFormatter",
    "DependencyGraph",
    "Package",
    "RequirementResolver",
    "RequirementSource",
    "Resolved",
    "Values",
    "load_graph",
]
