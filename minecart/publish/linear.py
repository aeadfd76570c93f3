"""Single linear markdown document with a generated table of contents.

The ordered chunks already carry well-nested headings, so the TOC is read
straight off them. Converting the result to PDF is left to an external
renderer.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Sequence

from minecart.catalog.headings import HEADING_RE

logger = logging.getLogger("minecart.publish.linear")

_ANCHOR_DROP_RE = re.compile(r"[^\w\- ]")


def heading_anchor(text: str) -> str:
    """GitHub-style anchor for a heading text."""
    slug = _ANCHOR_DROP_RE.sub("", text.strip().lower())
    return slug.replace(" ", "-")


def build_toc(chunks: Sequence[str], toc_depth: int = 3, include_h1: bool = True) -> str:
    if toc_depth <= 0:
        return ""

    base_level = 1 if include_h1 else 2
    seen: Dict[str, int] = {}
    lines: List[str] = []
    for chunk in chunks:
        for match in HEADING_RE.finditer(chunk):
            level = len(match.group(1))
            text = match.group(2).strip()
            anchor = heading_anchor(text)
            # every heading claims an anchor, listed or not
            count = seen.get(anchor, 0)
            seen[anchor] = count + 1
            if count:
                anchor = f"{anchor}-{count}"
            if level > toc_depth or level < base_level:
                continue
            lines.append(f"{'  ' * (level - base_level)}- [{text}](#{anchor})")
    return "\n".join(lines)


def render_linear_document(chunks: Sequence[str], toc_depth: int = 3, include_h1: bool = True) -> str:
    toc = build_toc(chunks, toc_depth=toc_depth, include_h1=include_h1)
    parts = [toc] if toc else []
    parts.extend(chunk.strip("\n") for chunk in chunks)
    logger.info("linear document: %d chunks, toc depth %d", len(chunks), toc_depth)
    return "\n\n".join(parts) + "\n"
