"""Content catalog: turns the content graph into ordered, normalized chunks.

One catalog instance serves one stateless pass over a snapshot of the graph:
``init()`` loads every reachable node, ``populate_chunks()`` optionally folds
composite ("seam") nodes together with the nodes they group, and
``get_ordered()`` / ``get_paged()`` walk the tree built from the graph's
root-to-node paths.

Predicates are evaluated here rather than in the graph query, so a key the
predicates removed is known to be filtered and is skipped quietly, while a key
missing from the lookup altogether is an inconsistent input and raises.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set, Union

from minecart.errors import CatalogStateError, InconsistentReferenceError
from minecart.graph.source import GraphSource
from minecart.metrics import MetricsCollector
from minecart.schemas.nugget import ContentNode, Predicate

from .headings import content_length, has_heading, heading_line, normalize_headings
from .ordering import sort_nodes
from .tree import TreeBuilder, TreeNode, prune_empty_leaves

logger = logging.getLogger("minecart.catalog")

PredicateInput = Union[Predicate, str, dict]


def _non_negative(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} value [{value!r}] is not valid")
    return value


class ContentCatalog:
    def __init__(
        self,
        source: GraphSource,
        root_key: str = "adit",
        includes: Iterable[PredicateInput] = (),
        excludes: Iterable[PredicateInput] = (),
        min_length: int = 0,
        max_depth: int = 100,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.source = source
        self.root_key = root_key
        self.includes = tuple(Predicate.coerce(p) for p in includes or ())
        self.excludes = tuple(Predicate.coerce(p) for p in excludes or ())
        self.min_length = _non_negative("min_length", min_length)
        self.max_depth = _non_negative("max_depth", max_depth)
        self.metrics = metrics or MetricsCollector.get_global()

        self.nodes: Dict[str, ContentNode] = {}
        self.filtered: Set[str] = set()
        self.chunk_table: Dict[str, str] = {}
        self.consumed: Set[str] = set()
        self.initialised = False

    @classmethod
    def from_settings(cls, source, settings, metrics: Optional[MetricsCollector] = None) -> "ContentCatalog":
        return cls(
            source,
            root_key=settings.root_key,
            includes=settings.includes,
            excludes=settings.excludes,
            min_length=settings.min_length,
            max_depth=settings.max_depth,
            metrics=metrics,
        )

    def init(self) -> None:
        with self.metrics.timer("catalog_init_ms"):
            records = self.source.load_nodes(self.root_key, self.max_depth)

        nodes: Dict[str, ContentNode] = {}
        for record in records:
            node = ContentNode.from_record(record)
            nodes[node.key] = node
        if self.root_key not in nodes:
            raise InconsistentReferenceError(self.root_key)

        self.nodes = nodes
        self.filtered = {
            key for key, node in nodes.items()
            if key != self.root_key and not self.passes_filters(node)
        }
        self.chunk_table = {}
        self.consumed = set()
        self.initialised = True
        logger.info("catalog initialised: %d nodes, %d filtered out", len(nodes), len(self.filtered))

    def init_check(self) -> None:
        if not self.initialised:
            raise CatalogStateError("must call init() first")

    def passes_filters(self, node: ContentNode) -> bool:
        if not all(p.matches(node) for p in self.includes):
            return False
        return not any(p.matches(node) for p in self.excludes)

    def is_available(self, key: str) -> bool:
        return key in self.nodes and key not in self.filtered

    def available_nodes(self) -> List[ContentNode]:
        return sort_nodes(n for k, n in self.nodes.items() if k not in self.filtered)

    def get_tree(self) -> TreeNode:
        self.init_check()
        paths = self.source.enumerate_paths(self.root_key, self.max_depth)
        kept = [p for p in paths if p and p[-1] not in self.filtered]
        logger.debug("building tree from %d of %d paths", len(kept), len(paths))
        return TreeBuilder(self.nodes, self.nodes[self.root_key]).build(kept)

    def populate_chunks(self) -> None:
        """Aggregate composite nodes, then record every other node's body."""
        self.init_check()
        self.chunk_table = {}
        self.consumed = set()

        for node in self.nodes.values():
            if not node.is_composite:
                continue
            parts = [node.body] if node.body else []
            for key in node.grouped_keys:
                self.consumed.add(key)
                member = self.nodes.get(key)
                if member is None:
                    logger.warning("composite %s groups unknown node %s", node.key, key)
                    continue
                if key in self.filtered:
                    continue
                if member.is_composite:
                    logger.warning("composite %s groups composite %s; nested aggregation ignored", node.key, key)
                    continue
                if member.body:
                    parts.append(member.body)
            if parts:
                self.chunk_table[node.key] = "\n".join(parts)

        for node in self.nodes.values():
            if node.is_composite or node.key in self.consumed or not node.body:
                continue
            self.chunk_table[node.key] = node.body

        logger.info("populated %d chunks, %d nodes folded into composites", len(self.chunk_table), len(self.consumed))

    def _markdown_for(self, key: str, depth: int) -> Optional[str]:
        node = self.nodes.get(key)
        if node is None or key in self.filtered:
            return None

        if key in self.consumed:
            return None
        if key in self.chunk_table:
            markdown = self.chunk_table[key]
        elif node.body:
            markdown = node.body
        elif node.is_passage:
            return heading_line(node.title, depth)
        else:
            return None

        if not has_heading(markdown):
            markdown = f"{heading_line(node.title, depth)}\n{markdown}"
        return markdown

    def _allow(self, markdown: str) -> bool:
        return content_length(markdown) >= self.min_length

    def _is_empty_passage(self, tree_node: TreeNode) -> bool:
        node = tree_node.node
        return (
            node.is_passage
            and not node.body
            and tree_node.is_leaf
            and node.key not in self.chunk_table
        )

    def _exportable(self, tree_node: TreeNode) -> Optional[str]:
        if self._is_empty_passage(tree_node):
            return None
        markdown = self._markdown_for(tree_node.key, tree_node.depth)
        if markdown is None or not self._allow(markdown):
            return None
        return normalize_headings(markdown, tree_node.depth)

    def get_ordered(self) -> List[str]:
        """Normalized chunks in tree order."""
        root = self.get_tree()
        chunks: List[str] = []
        skipped = 0
        for tree_node in root.walk():
            chunk = self._exportable(tree_node)
            if chunk is None:
                skipped += 1
                continue
            chunks.append(chunk)
        self.metrics.increment("catalog_chunks_emitted", len(chunks))
        self.metrics.increment("catalog_chunks_skipped", skipped)
        return chunks

    def get_paged(self) -> TreeNode:
        """Tree of pages: nugget chunks folded into their passage, empty leaves pruned."""
        root = self.get_tree()
        for tree_node in root.walk():
            chunk = self._exportable(tree_node)
            if chunk is not None:
                tree_node.chunks.append(chunk)

        for tree_node in root.walk():
            parent = tree_node.parent
            if parent is None or not tree_node.chunks:
                continue
            if parent.node.is_passage and not parent.node.is_composite and not tree_node.node.is_passage:
                parent.chunks.extend(tree_node.chunks)
                tree_node.chunks = []

        pruned = prune_empty_leaves(root)
        self.metrics.increment("catalog_nodes_pruned", pruned)
        logger.debug("paged tree pruned %d empty nodes", pruned)
        return root

    def get_chunk(self, key: str, depth: int) -> Optional[str]:
        self.init_check()
        markdown = self._markdown_for(key, depth)
        if markdown is None:
            return None
        return normalize_headings(markdown, depth)

    def get_composite_markdown(self) -> List[str]:
        self.populate_chunks()
        return self.get_ordered()

    def get_composite_tree(self) -> TreeNode:
        self.populate_chunks()
        return self.get_paged()
