# SPDX-License-Identifier: MIT
"""Dependencies of a project grouped by their minimum supported version.

Example (human)::

    ┌─────────────┬──────────────────────────┐
    │ requirement │ dependency               │
    ├─────────────┼──────────────────────────┤
    │ 1.40.0      │ some-dep, some-other-dep │
    │ 1.56.0      │ some                     │
    │ unknown     │ my-crate                 │
    └─────────────┴──────────────────────────┘

Both renderers are folds over the same bucket sequence produced by
`ByMsrvFormatter.dependencies_by_msrv`, so they cannot disagree on which
requirements exist or in which order they appear.
"""

from __future__ import annotations

import io
import json
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

import structlog
from rich import box
from rich.console import Console
from rich.errors import ConsoleError
from rich.table import Table

from msrv.core.config import OutputFormat
from msrv.core.errors import RenderError
from msrv.core.result import Err, Ok, Result
from msrv.core.versions import BareVersion, format_version
from msrv.dependencies.graph import DependencyGraph, Package
from msrv.dependencies.resolve import RequirementResolver

__all__ = [
    "ByMsrvFormatter",
    "Values",
    "ORDERED_BY_MSRV",
    "HEADER",
    "bucket_sort_key",
]

log = structlog.get_logger("msrv.dependencies")

B = TypeVar("B")

ORDERED_BY_MSRV = "ordered-by-msrv"
HEADER = ("requirement", "dependency")
DEFAULT_TABLE_WIDTH = 100


@dataclass(frozen=True, slots=True)
class Values:
    """One bucket, ready to render."""

    requirement: str
    dependencies: list[str]


def bucket_sort_key(version: BareVersion | None) -> tuple[bool, tuple[int, int, int]]:
    """Ascending by version; the unknown bucket sorts after every version."""
    if version is None:
        return (True, (0, 0, 0))
    return (False, version.as_tuple)


class ByMsrvFormatter:
    """Groups the packages reachable from the root by resolved requirement."""

    def __init__(
        self,
        graph: DependencyGraph,
        resolver: Callable[[Package], BareVersion | None] | None = None,
    ) -> None:
        self._graph = graph
        self._resolve = resolver or RequirementResolver()

    def _bfs(self) -> list[Package]:
        graph = self._graph
        start = graph.index[graph.root]
        seen = {start}
        queue = deque([start])
        order: list[Package] = []

        while queue:
            nx = queue.popleft()
            order.append(graph.packages[nx])
            for dep in graph.neighbors(nx):
                if dep not in seen:
                    seen.add(dep)
                    queue.append(dep)
        return order

    def _grouped(self) -> list[tuple[BareVersion | None, list[Package]]]:
        version_map: dict[BareVersion | None, list[Package]] = {}
        for package in self._bfs():
            version_map.setdefault(self._resolve(package), []).append(package)

        log.debug("grouped dependencies", root=self._graph.root, buckets=len(version_map))
        return sorted(version_map.items(), key=lambda item: bucket_sort_key(item[0]))

    def dependencies_by_msrv(self, init: Callable[[], B], fold: Callable[[B, Values], None]) -> B:
        """Traverse the graph once and fold every bucket, in order, into `init()`."""
        out = init()
        for version, packages in self._grouped():
            fold(
                out,
                Values(
                    requirement=format_version(version),
                    dependencies=[p.name for p in packages],
                ),
            )
        return out

    def buckets(self) -> list[Values]:
        return self.dependencies_by_msrv(list, list.append)

    def most_restrictive(self) -> BareVersion | None:
        """Highest resolved requirement in the graph, or None if nothing resolved."""
        known = [v for v, _ in self._grouped() if v is not None]
        return known[-1] if known else None

    def human_table(self) -> Table:
        def init() -> Table:
            table = Table(box=box.SQUARE, show_lines=False, expand=False)
            for title in HEADER:
                table.add_column(title, overflow="fold")
            return table

        def fold(table: Table, values: Values) -> None:
            table.add_row(values.requirement, ", ".join(values.dependencies))

        return self.dependencies_by_msrv(init, fold)

    def render_human(self, *, width: int = DEFAULT_TABLE_WIDTH) -> Result[str, RenderError]:
        buf = io.StringIO()
        console = Console(
            file=buf,
            width=width,
            color_system=None,
            force_terminal=False,
            legacy_windows=False,
        )
        try:
            console.print(self.human_table())
        except ConsoleError as e:
            return Err(RenderError(f"cannot render table: {e}"))
        return Ok(buf.getvalue().rstrip("\n"))

    def json_document(self) -> dict[str, object]:
        def fold(acc: list[dict[str, object]], values: Values) -> None:
            acc.append(
                {
                    "requirement": values.requirement,
                    "dependencies": values.dependencies,
                }
            )

        objects: list[dict[str, object]] = self.dependencies_by_msrv(list, fold)
        return {
            "reason": "list",
            "variant": ORDERED_BY_MSRV,
            "success": True,
            "list": objects,
        }

    def render_json(self) -> Result[str, RenderError]:
        try:
            return Ok(json.dumps(self.json_document(), separators=(",", ":")))
        except (TypeError, ValueError) as e:
            return Err(RenderError(f"cannot serialize report: {e}"))

    def render(self, output_format: OutputFormat) -> Result[str, RenderError]:
        match output_format:
            case "json":
                return self.render_json()
            case _:
                return self.render_human()
