import json

from minecart.catalog import ContentCatalog, build_map, map_to_json, write_map


def _tree(source, metrics, **kwargs):
    catalog = ContentCatalog(source, metrics=metrics, **kwargs)
    catalog.init()
    return catalog.get_tree()


def test_map_mirrors_tree(sample_source, metrics):
    entry = build_map(_tree(sample_source, metrics))

    assert entry.key == "adit"
    assert entry.depth == 0
    assert [c.key for c in entry.children] == ["guide", "ref", "empty"]
    guide = entry.children[0]
    assert [c.key for c in guide.children] == ["install", "configure", "seam"]
    assert all(c.depth == 2 for c in guide.children)
    assert guide.children[2].composite is True


def test_map_json_has_no_bodies(sample_source, metrics):
    data = json.loads(map_to_json(build_map(_tree(sample_source, metrics))))

    assert data["kind"] == "passage"
    assert "body" not in json.dumps(data)
    configure = data["children"][0]["children"][1]
    assert configure == {
        "key": "configure",
        "label": "Configure",
        "kind": "nugget",
        "depth": 2,
        "composite": False,
        "children": [],
    }


def test_map_leaves_out_excluded_leaves(sample_source, metrics):
    entry = build_map(_tree(sample_source, metrics, excludes=["audience:internal"]))
    ref = entry.children[1]
    assert [c.key for c in ref.children] == ["x", "y"]


def test_write_map_creates_parent_dirs(tmp_path, sample_source, metrics):
    target = write_map(build_map(_tree(sample_source, metrics)), tmp_path / "content" / "minemap.json")
    assert target.exists()
    assert json.loads(target.read_text(encoding="utf-8"))["key"] == "adit"
