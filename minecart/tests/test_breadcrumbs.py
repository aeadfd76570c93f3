from minecart.catalog import BreadcrumbResolver
from minecart.graph import InMemoryGraphSource


def _trails(resolver, key):
    return [[step.key for step in trail] for trail in resolver.resolve(key)]


def test_one_trail_per_route(sample_source):
    resolver = BreadcrumbResolver(sample_source)
    assert _trails(resolver, "install") == [["guide"], ["ref"]]
    assert resolver.resolve("install")[0][0].label == "Guide"


def test_child_of_root_has_no_trail(sample_source):
    resolver = BreadcrumbResolver(sample_source)
    assert _trails(resolver, "guide") == []
    assert _trails(resolver, "adit") == []


def test_trails_are_root_to_parent_and_collated():
    source = InMemoryGraphSource(
        [
            {"key": "adit", "label": "Root"},
            {"key": "b", "label": "Bravo"},
            {"key": "a", "label": "Alpha"},
            {"key": "a2", "label": "Alpha two"},
            {"key": "leaf", "label": "Leaf"},
        ],
        [("adit", "b"), ("adit", "a"), ("a", "a2"), ("b", "leaf"), ("a2", "leaf"), ("a", "leaf")],
    )
    resolver = BreadcrumbResolver(source)
    assert _trails(resolver, "leaf") == [["a"], ["a", "a2"], ["b"]]


def test_max_depth_bounds_routes():
    source = InMemoryGraphSource(
        [{"key": k, "label": k} for k in ("adit", "a", "b", "c")],
        [("adit", "a"), ("a", "b"), ("b", "c"), ("adit", "c")],
    )
    assert _trails(BreadcrumbResolver(source, max_depth=1), "c") == []
    assert _trails(BreadcrumbResolver(source, max_depth=3), "c") == [["a", "b"]]


def test_unknown_key_yields_nothing(sample_source):
    assert BreadcrumbResolver(sample_source).resolve("nope") == []
