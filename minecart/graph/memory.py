"""Graph source over plain Python data.

Backs the offline mode of ``scripts/export_catalog.py`` (a JSON dump of the
graph) and the tests. Paths are simple (no node repeats), bounded by
``max_depth`` edges and sorted by length then key sequence, matching the
ordering the Neo4j source asks the database for.
"""
from __future__ import annotations

import json
import logging
from collections import defaultdict, deque
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from .source import INBOUND, OUTBOUND, NodeRecord

logger = logging.getLogger("minecart.graph.memory")


def _record_key(record: Mapping[str, Any]) -> str:
    key = record.get("key", record.get("_key"))
    if not key:
        raise ValueError(f"graph node without key: {dict(record)!r}")
    return str(key)


class InMemoryGraphSource:
    def __init__(self, nodes: Iterable[Mapping[str, Any]], edges: Iterable[Sequence[str]]):
        self.nodes: Dict[str, NodeRecord] = {}
        for record in nodes:
            self.nodes[_record_key(record)] = dict(record)
        self.outbound: Dict[str, List[str]] = defaultdict(list)
        self.inbound: Dict[str, List[str]] = defaultdict(list)
        for edge in edges:
            src, dst = str(edge[0]), str(edge[1])
            self.outbound[src].append(dst)
            self.inbound[dst].append(src)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "InMemoryGraphSource":
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        graph = cls(data.get("nodes", []), data.get("edges", []))
        logger.info("loaded graph dump %s: %d nodes", path, len(graph.nodes))
        return graph

    def _record(self, key: str) -> NodeRecord:
        return dict(self.nodes[key])

    def _simple_paths(self, root_key: str, max_depth: int) -> List[List[str]]:
        if root_key not in self.nodes:
            return []
        paths: List[List[str]] = []
        stack: List[List[str]] = [[root_key]]
        while stack:
            path = stack.pop()
            paths.append(path)
            if len(path) - 1 >= max_depth:
                continue
            for nxt in self.outbound.get(path[-1], []):
                if nxt in self.nodes and nxt not in path:
                    stack.append(path + [nxt])
        paths.sort(key=lambda p: (len(p), p))
        return paths

    def load_nodes(self, root_key: str, max_depth: int) -> List[NodeRecord]:
        if root_key not in self.nodes:
            return []
        seen = {root_key: 0}
        queue = deque([root_key])
        while queue:
            key = queue.popleft()
            if seen[key] >= max_depth:
                continue
            for nxt in self.outbound.get(key, []):
                if nxt in self.nodes and nxt not in seen:
                    seen[nxt] = seen[key] + 1
                    queue.append(nxt)
        return [self._record(key) for key in seen]

    def enumerate_paths(self, root_key: str, max_depth: int) -> List[List[str]]:
        return self._simple_paths(root_key, max_depth)

    def neighbours(self, key: str) -> List[Tuple[NodeRecord, str]]:
        result: List[Tuple[NodeRecord, str]] = []
        for nxt in self.outbound.get(key, []):
            if nxt in self.nodes:
                result.append((self._record(nxt), OUTBOUND))
        for prev in self.inbound.get(key, []):
            if prev in self.nodes:
                result.append((self._record(prev), INBOUND))
        return result

    def inbound_paths(self, key: str, root_key: str, max_depth: int) -> List[List[NodeRecord]]:
        routes = [p for p in self._simple_paths(root_key, max_depth) if len(p) > 1 and p[-1] == key]
        return [[self._record(k) for k in reversed(route)] for route in routes]
