"""Contract between the catalog and whatever stores the content graph."""
from __future__ import annotations

from typing import Any, Dict, List, Protocol, Tuple

INBOUND = "inbound"
OUTBOUND = "outbound"

NodeRecord = Dict[str, Any]


class GraphSource(Protocol):
    def load_nodes(self, root_key: str, max_depth: int) -> List[NodeRecord]:
        """Every distinct node reachable from ``root_key`` (root included)."""
        ...

    def enumerate_paths(self, root_key: str, max_depth: int) -> List[List[str]]:
        """Key paths from the root to every reachable node, one per route.

        Must come back in a deterministic order; the first path reaching a node
        fixes its depth in the built tree.
        """
        ...

    def neighbours(self, key: str) -> List[Tuple[NodeRecord, str]]:
        """Adjacent nodes with the edge direction (``inbound``/``outbound``)."""
        ...

    def inbound_paths(self, key: str, root_key: str, max_depth: int) -> List[List[NodeRecord]]:
        """Every simple path from the root to ``key``, listed target first."""
        ...
