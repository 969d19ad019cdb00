"""Tests for the worldengine command line."""

import json

import pytest

from worldengine import CURRENT_WORLD_SCHEMA_VERSION, default_world, fingerprint
from worldengine.cli import main


@pytest.fixture
def world_file(tmp_path):
    path = tmp_path / "world.json"
    doc = default_world()
    del doc["version"]
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


def test_validate_ok(world_file, capsys):
    assert main(["validate", str(world_file)]) == 0
    assert "ok" in capsys.readouterr().out


def test_validate_reports_every_error(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"nodes": [{"id": "a"}, {"id": "a", "asset": {"assetId": "x"}}]}))

    assert main(["validate", str(path)]) == 1
    assert capsys.readouterr().out.splitlines() == [
        "nodes[1].id 'a' must be unique",
        "nodes[1].asset.assetId references missing asset 'x'",
    ]


def test_validate_future_version(tmp_path, capsys):
    path = tmp_path / "future.json"
    path.write_text('{"version": 999, "nodes": []}')

    assert main(["validate", str(path)]) == 1
    assert "future schema version 999" in capsys.readouterr().out


def test_export_stamps_version(world_file, tmp_path, capsys):
    out = tmp_path / "out.json"

    assert main(["export", str(world_file), "-o", str(out)]) == 0

    text = out.read_text(encoding="utf-8").rstrip("\n")
    assert json.loads(text)["version"] == CURRENT_WORLD_SCHEMA_VERSION
    assert capsys.readouterr().err.strip() == f"hash {fingerprint(text)}"


def test_export_rejects_malformed_file(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{")

    assert main(["export", str(path)]) == 1
    assert "not valid JSON" in capsys.readouterr().err


def test_default_writes_demo_world(capsys):
    assert main(["default"]) == 0
    assert json.loads(capsys.readouterr().out) == default_world()


def test_tree_prints_hierarchy(world_file, capsys):
    assert main(["tree", str(world_file)]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "World root (root) [scene]",
        "  Camp clearing (camp)",
        "    Campfire (fire)",
        "  Tree cluster (trees) [foliage]",
        "    Tree A (tree-1)",
        "    Tree B (tree-2)",
    ]


def test_validate_missing_file(tmp_path, capsys):
    path = tmp_path / "missing.json"

    assert main(["validate", str(path)]) == 1
    assert f"{path}: cannot read" in capsys.readouterr().out


@pytest.mark.parametrize("command", ["export", "tree"])
def test_missing_file_exits_with_error(tmp_path, capsys, command):
    path = tmp_path / "missing.json"

    assert main([command, str(path)]) == 1
    assert f"{path}: cannot read" in capsys.readouterr().err


@pytest.mark.parametrize("command", ["validate", "export", "tree"])
def test_non_utf8_file_exits_with_error(tmp_path, capsys, command):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"metadata": {"title": "caf\xe9"}, "nodes": []}')

    assert main([command, str(path)]) == 1
    captured = capsys.readouterr()
    assert "cannot read" in captured.out + captured.err


def test_directory_argument_exits_with_error(tmp_path, capsys):
    assert main(["tree", str(tmp_path)]) == 1
    assert "cannot read" in capsys.readouterr().err
