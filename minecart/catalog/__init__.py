"""Content graph flattening: ordering, tree building, heading rewriting and the catalog."""

from .breadcrumbs import BreadcrumbResolver
from .catalog import ContentCatalog
from .headings import normalize_headings
from .minemap import build_map, map_to_json, write_map
from .ordering import compare_nodes, sort_nodes
from .tree import TreeBuilder, TreeNode, prune_empty_leaves

__all__ = [
    "BreadcrumbResolver",
    "ContentCatalog",
    "TreeBuilder",
    "TreeNode",
    "build_map",
    "compare_nodes",
    "map_to_json",
    "normalize_headings",
    "prune_empty_leaves",
    "sort_nodes",
    "write_map",
]
