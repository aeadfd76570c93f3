"""Navigation map of the built tree for site generators."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from minecart.schemas.nugget import MapEntry

from .ordering import sort_nodes
from .tree import TreeNode

logger = logging.getLogger("minecart.minemap")


def build_map(root: TreeNode) -> MapEntry:
    """Mirror ``root`` as navigation entries; bodies and chunks are left out."""
    node = root.node
    return MapEntry(
        key=node.key,
        label=node.label,
        shortlabel=node.shortlabel,
        kind=node.kind,
        order=node.order,
        depth=root.depth,
        composite=node.is_composite,
        children=[build_map(child) for child in sort_nodes(root.children)],
    )


def map_to_json(entry: MapEntry, indent: int = 2) -> str:
    return entry.model_dump_json(indent=indent, exclude_none=True)


def write_map(entry: MapEntry, path: Union[str, Path]) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(map_to_json(entry), encoding="utf-8")
    logger.info("navigation map written to %s", target)
    return target
