"""Sibling ordering shared by the tree builder, site pages and breadcrumbs.

Nodes carrying a numeric ``order`` come first, ascending; the rest follow by
``label`` in code-point order. ``key`` breaks any remaining tie so the order is
strict and total.
"""
from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Iterable, List, Sequence


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_nodes(a: Any, b: Any) -> int:
    a_ordered = a.order is not None
    b_ordered = b.order is not None
    if a_ordered != b_ordered:
        return -1 if a_ordered else 1
    if a_ordered:
        result = _cmp(a.order, b.order)
    else:
        result = _cmp(a.label or "", b.label or "")
    if result:
        return result
    return _cmp(a.key, b.key)


node_sort_key = cmp_to_key(compare_nodes)


def sort_nodes(nodes: Iterable[Any]) -> List[Any]:
    return sorted(nodes, key=node_sort_key)


def compare_trails(a: Sequence[Any], b: Sequence[Any]) -> int:
    """Element-wise collation of two node sequences; a prefix sorts first."""
    for left, right in zip(a, b):
        result = compare_nodes(left, right)
        if result:
            return result
    return _cmp(len(a), len(b))


trail_sort_key = cmp_to_key(compare_trails)
