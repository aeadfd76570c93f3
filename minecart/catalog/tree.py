"""Fold root-to-node key paths into one ordered tree."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from minecart.errors import InconsistentReferenceError
from minecart.schemas.nugget import ContentNode

from .ordering import node_sort_key

logger = logging.getLogger("minecart.tree")


class TreeNode:
    """Working node of one catalog pass; discarded with the catalog."""

    def __init__(self, node: ContentNode, depth: int, parent: Optional["TreeNode"] = None):
        self.node = node
        self.depth = depth
        self.parent = parent
        self.children: List[TreeNode] = []
        self.chunks: List[str] = []

    # comparator reads these straight off the tree node
    @property
    def key(self) -> str:
        return self.node.key

    @property
    def label(self) -> str:
        return self.node.label

    @property
    def order(self):
        return self.node.order

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def add_child(self, node: ContentNode) -> "TreeNode":
        child = TreeNode(node, self.depth + 1, parent=self)
        self.children.append(child)
        return child

    def drop(self) -> None:
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def walk(self) -> Iterator["TreeNode"]:
        """Pre-order traversal, children in their current order."""
        stack = [self]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    def find(self, key: str) -> Optional["TreeNode"]:
        for candidate in self.walk():
            if candidate.key == key:
                return candidate
        return None

    def sort(self) -> None:
        for current in self.walk():
            current.children.sort(key=node_sort_key)

    def __repr__(self) -> str:
        return f"TreeNode({self.key!r}, depth={self.depth}, children={len(self.children)})"


class TreeBuilder:
    """Build a single-rooted tree from path sequences.

    Every path starts at the root key. A key is materialized once, at the depth
    of the first path that reaches it; later paths through the same key reuse
    that node, so alternative routes only survive as breadcrumbs.
    """

    def __init__(self, lookup: Mapping[str, ContentNode], root: ContentNode):
        self.lookup = lookup
        self.root = root

    def build(self, paths: Iterable[Sequence[str]]) -> TreeNode:
        root = TreeNode(self.root, 0)
        index: Dict[str, TreeNode] = {self.root.key: root}

        for path in paths:
            if not path:
                continue
            if path[0] != self.root.key:
                raise InconsistentReferenceError(path[0], path)
            current = root
            for key in path[1:]:
                existing = index.get(key)
                if existing is not None:
                    current = existing
                    continue
                node = self.lookup.get(key)
                if node is None:
                    raise InconsistentReferenceError(key, path)
                current = current.add_child(node)
                index[key] = current

        root.sort()
        logger.debug("built tree of %d nodes from root %s", len(index), self.root.key)
        return root


def prune_empty_leaves(root: TreeNode) -> int:
    """Drop every non-root node that ends up with no chunks and no children.

    Children are handled before their parent, so a parent emptied by the
    removal of its last child goes in the same pass. Returns the number of
    nodes removed; a second call on the result removes nothing.
    """
    removed = 0
    for current in reversed(list(root.walk())):
        if current is root:
            continue
        if current.is_leaf and not current.chunks:
            current.drop()
            removed += 1
    return removed
