"""Per-node pages and the navigation map for a static site generator."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from minecart.catalog.breadcrumbs import BreadcrumbResolver
from minecart.catalog.catalog import ContentCatalog
from minecart.catalog.headings import heading_line, normalize_headings
from minecart.catalog.minemap import build_map, write_map
from minecart.catalog.ordering import sort_nodes
from minecart.graph.source import OUTBOUND
from minecart.schemas.nugget import ContentNode
from minecart.schemas.pages import AdjacentNode, SitePage

logger = logging.getLogger("minecart.publish.site")

# pages are standalone documents: their first heading is a title
PAGE_DEPTH = 1


class SiteExporter:
    def __init__(self, catalog: ContentCatalog, source, resolver: Optional[BreadcrumbResolver] = None):
        self.catalog = catalog
        self.source = source
        self.resolver = resolver or BreadcrumbResolver(source, catalog.root_key, catalog.max_depth)

    def _page_body(self, node: ContentNode) -> str:
        chunk = self.catalog.get_chunk(node.key, PAGE_DEPTH)
        if chunk is not None:
            return chunk
        if node.body:
            # grouped into a composite; its own page still shows its body
            return normalize_headings(node.body, PAGE_DEPTH)
        return heading_line(node.title, PAGE_DEPTH)

    def _adjacent(self, key: str) -> Dict[str, List[AdjacentNode]]:
        groups: Dict[str, List[ContentNode]] = {
            "passages_inbound": [],
            "passages_outbound": [],
            "nuggets_inbound": [],
            "nuggets_outbound": [],
        }
        for record, direction in self.source.neighbours(key):
            node = ContentNode.from_record(record)
            if not self.catalog.is_available(node.key):
                continue
            prefix = "passages" if node.is_passage else "nuggets"
            suffix = "outbound" if direction == OUTBOUND else "inbound"
            groups[f"{prefix}_{suffix}"].append(node)

        return {
            name: [
                AdjacentNode(key=n.key, label=n.label, kind=n.kind, direction=name.split("_")[1])
                for n in sort_nodes(nodes)
            ]
            for name, nodes in groups.items()
        }

    def build_page(self, node: ContentNode) -> SitePage:
        slug = "/" if node.key == self.catalog.root_key else node.key
        return SitePage(
            key=node.key,
            slug=slug,
            title=node.title,
            kind=node.kind,
            composite=node.is_composite,
            body=self._page_body(node),
            breadcrumbs=self.resolver.resolve(node.key),
            **self._adjacent(node.key),
        )

    def build_pages(self) -> List[SitePage]:
        self.catalog.init_check()
        if not self.catalog.chunk_table:
            self.catalog.populate_chunks()
        return [self.build_page(node) for node in self.catalog.available_nodes()]

    def export(self, directory: Union[str, Path]) -> List[SitePage]:
        content_dir = Path(directory) / "content"
        content_dir.mkdir(parents=True, exist_ok=True)

        pages = self.build_pages()
        for page in pages:
            (content_dir / f"{page.key}.json").write_text(page.model_dump_json(indent=2), encoding="utf-8")
        write_map(build_map(self.catalog.get_tree()), content_dir / "minemap.json")
        logger.info("exported %d pages to %s", len(pages), content_dir)
        return pages
