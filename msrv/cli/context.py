# SPDX-License-Identifier: MIT
"""Per-invocation CLI context: config, console, logging."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from msrv.core.config import Config, find_config, load_config
from msrv.core.errors import ErrorCode
from msrv.core.logging import setup_logging
from msrv.core.result import Err, Ok
from msrv.dependencies.graph import DependencyGraph, load_graph
from msrv.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol
    cwd: Path


def build_context(config_path: Path | None = None) -> CLIContext:
    console = RichConsole()
    cwd = Path.cwd()

    match load_config(config_path or find_config(cwd)):
        case Err(e):
            console.error(e.message)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        case Ok(loaded):
            config = loaded.with_env()

    setup_logging(config.log_level, config.log_format)
    return CLIContext(config=config, console=console, cwd=cwd)


def load_graph_or_exit(ctx: CLIContext, source: str) -> DependencyGraph:
    match load_graph(source):
        case Err(e):
            ctx.console.error(e.message)
            if e.hint:
                ctx.console.print(f"hint: {e.hint}", Style.DIM)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        case Ok(graph):
            return graph
