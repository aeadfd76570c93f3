"""Heading rewriting for markdown chunks.

Chunks are authored independently, so their heading levels are recomputed from
the depth at which they are embedded. The resulting outline never starts
shallower than the embedding depth, never goes past ``MAX_HEADING_LEVEL`` and
only ever steps one level deeper at a time, which keeps generated tables of
contents well formed.
"""
from __future__ import annotations

import logging
import re
from typing import List

logger = logging.getLogger("minecart.headings")

MAX_HEADING_LEVEL = 6

HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(\S.*)$", re.MULTILINE)


def target_level(depth: int) -> int:
    """Heading level for a node at tree depth ``depth`` (root is depth 0)."""
    return min(max(int(depth), 1), MAX_HEADING_LEVEL)


def heading_levels(markdown: str) -> List[int]:
    return [len(m.group(1)) for m in HEADING_RE.finditer(markdown or "")]


def has_heading(markdown: str) -> bool:
    return HEADING_RE.search(markdown or "") is not None


def strip_headings(markdown: str) -> str:
    return HEADING_RE.sub("", markdown or "")


def content_length(markdown: str) -> int:
    """Length of the text left once heading lines and outer whitespace go."""
    return len(strip_headings(markdown).strip())


def heading_line(label: str, depth: int) -> str:
    return f"{'#' * target_level(depth)} {label}\n"


def rewrite_levels(levels: List[int], depth: int) -> List[int]:
    depth = target_level(depth)
    if not levels:
        return []
    first = levels[0]
    result = []
    last = depth
    for level in levels:
        level = level - first + depth
        level = min(level, MAX_HEADING_LEVEL)
        level = max(level, depth)
        if level > last + 1:
            level = last + 1
        result.append(level)
        last = level
    return result


def normalize_headings(markdown: str, depth: int) -> str:
    """Rewrite every heading in ``markdown`` to fit under ``depth``."""
    levels = heading_levels(markdown)
    if not levels:
        logger.debug("no headings to rewrite in %d chars of markdown", len(markdown or ""))
        return markdown

    new_levels = iter(rewrite_levels(levels, depth))
    return HEADING_RE.sub(lambda m: f"{'#' * next(new_levels)} {m.group(2)}", markdown)
