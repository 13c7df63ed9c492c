from __future__ import annotations

from pathlib import Path

from msrv.cli.commands.show_cmd import collect_events
from msrv.dependencies.formatter import ByMsrvFormatter
from msrv.dependencies.graph import DependencyGraph, Package
from msrv.dependencies.resolve import RequirementResolver


def _events_for(root: Package, resolver: RequirementResolver) -> list[dict[str, object]]:
    graph = DependencyGraph.build(root.id, [root])
    return [e.to_dict() for e in collect_events(root, ByMsrvFormatter(graph, resolver), resolver)]


def _write_manifest(directory: Path, body: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    manifest = directory / "Cargo.toml"
    manifest.write_text(body, encoding="utf-8")
    return manifest


def test_unparseable_root_version_reports_nothing(tmp_path: Path) -> None:
    root = Package(
        id="app", name="app", rust_version="stable", manifest_path=tmp_path / "Cargo.toml"
    )

    assert _events_for(root, RequirementResolver(manifest_scan=False)) == []


def test_declared_root_version(tmp_path: Path) -> None:
    manifest = tmp_path / "Cargo.toml"
    root = Package(id="app", name="app", rust_version="1.60", manifest_path=manifest)

    assert _events_for(root, RequirementResolver(manifest_scan=False)) == [
        {
            "type": "auxiliary_output",
            "destination": {"file": manifest.as_posix()},
            "item": {"msrv": {"kind": "rust_version"}},
        },
        {"type": "set_output", "version": "1.60.0", "manifest_path": manifest.as_posix()},
    ]


def test_scanned_root_reports_the_key_it_found(tmp_path: Path) -> None:
    manifest = _write_manifest(
        tmp_path / "app", '[package]\nname = "app"\n\n[package.metadata]\nmsrv = "1.45"\n'
    )
    root = Package(id="app", name="app", manifest_path=manifest)

    events = _events_for(root, RequirementResolver())

    assert events[0]["item"] == {"msrv": {"kind": "metadata_fallback"}}
    assert events[-1]["version"] == "1.45.0"


def test_toolchain_file_beside_root_manifest(tmp_path: Path) -> None:
    manifest = _write_manifest(tmp_path / "app", '[package]\nname = "app"\n')
    (manifest.parent / "rust-toolchain.toml").write_text(
        '[toolchain]\nchannel = "1.70"\n', encoding="utf-8"
    )
    root = Package(id="app", name="app", manifest_path=manifest)

    events = _events_for(root, RequirementResolver())

    assert events == [
        {
            "type": "auxiliary_output",
            "destination": {"file": (manifest.parent / "rust-toolchain.toml").as_posix()},
            "item": {"toolchain_file": {"kind": "toml"}},
        }
    ]


def test_root_without_manifest_path() -> None:
    root = Package(id="app", name="app", metadata={"msrv": "1.50"})

    assert _events_for(root, RequirementResolver()) == [
        {"type": "set_output", "version": "1.50.0", "manifest_path": None}
    ]
