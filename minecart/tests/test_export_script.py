from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Ensure script imports resolve
ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from scripts.export_catalog import main as export_main  # noqa: E402

from conftest import SAMPLE_EDGES, SAMPLE_NODES  # noqa: E402


@pytest.fixture()
def graph_dump(tmp_path, monkeypatch) -> Path:
    for name in ("MINECART_INCLUDE", "MINECART_EXCLUDE", "MINECART_MIN_LENGTH", "MINECART_ROOT_KEY"):
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / "graph.json"
    path.write_text(json.dumps({"nodes": SAMPLE_NODES, "edges": [list(e) for e in SAMPLE_EDGES]}), encoding="utf-8")
    return path


def test_linear_export(tmp_path, graph_dump):
    out = tmp_path / "docs.md"
    code = export_main(["linear", "--graph-json", str(graph_dump), "-o", str(out), "-d", "2", "--no-toc-h1"])

    assert code == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("- [Install](#install)")
    assert "# Welcome\nIntro text for everyone." in text
    assert "X body text\nY body text" in text


def test_map_export_with_exclude(tmp_path, graph_dump):
    out = tmp_path / "minemap.json"
    code = export_main(["map", "--graph-json", str(graph_dump), "-o", str(out), "--exclude", "audience:internal"])

    assert code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert "internal" not in json.dumps(data)


def test_site_export(tmp_path, graph_dump):
    code = export_main(["site", str(tmp_path / "heap"), "--graph-json", str(graph_dump), "-m", "5"])
    assert code == 0
    assert (tmp_path / "heap" / "content" / "install.json").exists()


def test_bad_predicate_fails(tmp_path, graph_dump):
    code = export_main(["map", "--graph-json", str(graph_dump), "-o", str(tmp_path / "m.json"), "--include", "oops"])
    assert code == 1


def test_unknown_root_fails(tmp_path, graph_dump):
    code = export_main(["map", "--graph-json", str(graph_dump), "-o", str(tmp_path / "m.json"), "--root", "nowhere"])
    assert code == 1


def test_negative_min_length_rejected(graph_dump):
    with pytest.raises(SystemExit):
        export_main(["map", "--graph-json", str(graph_dump), "-m", "-3"])


def test_env_predicates_apply_to_cli(tmp_path, graph_dump, monkeypatch):
    monkeypatch.setenv("MINECART_EXCLUDE", "audience:internal")
    out = tmp_path / "docs.md"

    assert export_main(["linear", "--graph-json", str(graph_dump), "-o", str(out)]) == 0
    text = out.read_text(encoding="utf-8")
    assert "Secret stuff" not in text
    assert "Run the installer" in text


def test_cli_predicates_add_to_env(tmp_path, graph_dump, monkeypatch):
    monkeypatch.setenv("MINECART_EXCLUDE", "audience:internal")
    out = tmp_path / "docs.md"

    code = export_main(["linear", "--graph-json", str(graph_dump), "-o", str(out), "--exclude", "label:Install"])
    assert code == 0
    text = out.read_text(encoding="utf-8")
    assert "Secret stuff" not in text
    assert "Run the installer" not in text


def test_malformed_env_number_fails(tmp_path, graph_dump, monkeypatch):
    monkeypatch.setenv("MINECART_MIN_LENGTH", "ten")
    assert export_main(["map", "--graph-json", str(graph_dump), "-o", str(tmp_path / "m.json")]) == 1
