from __future__ import annotations

import logging
from typing import List, Tuple

from minecart.graph.source import GraphSource
from minecart.schemas.nugget import BreadcrumbStep, ContentNode

from .ordering import trail_sort_key

logger = logging.getLogger("minecart.breadcrumbs")


class BreadcrumbResolver:
    """Every distinct route from the root to a node, as breadcrumb trails.

    Trails exclude the root and the node itself. A node reached through several
    parents yields several trails; picking one to display is up to the renderer.
    """

    def __init__(self, source: GraphSource, root_key: str = "adit", max_depth: int = 100):
        self.source = source
        self.root_key = root_key
        self.max_depth = max_depth

    def resolve(self, key: str) -> List[List[BreadcrumbStep]]:
        routes = self.source.inbound_paths(key, self.root_key, self.max_depth)

        trails: List[List[ContentNode]] = []
        seen = set()
        for route in routes:
            # routes arrive target first
            nodes = [ContentNode.from_record(record) for record in route]
            middle = [n for n in nodes if n.key not in (self.root_key, key)]
            middle.reverse()
            if not middle:
                continue
            signature: Tuple[str, ...] = tuple(n.key for n in middle)
            if signature in seen:
                continue
            seen.add(signature)
            trails.append(middle)

        trails.sort(key=trail_sort_key)
        logger.debug("resolved %d breadcrumb trails for %s", len(trails), key)
        return [[BreadcrumbStep(key=n.key, label=n.label) for n in trail] for trail in trails]
