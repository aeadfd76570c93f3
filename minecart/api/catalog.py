"""Read-only catalog API endpoints.

Every request runs its own stateless catalog pass against the graph.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from minecart.catalog import BreadcrumbResolver, ContentCatalog, build_map
from minecart.config import ExportSettings
from minecart.core.auth import require_auth
from minecart.errors import GraphUnavailableError
from minecart.graph import Neo4jGraphSource
from minecart.metrics import MetricsCollector
from minecart.schemas.nugget import BreadcrumbStep, MapEntry

router = APIRouter()
logger = logging.getLogger(__name__)


class OrderedResult(BaseModel):
    """Ordered markdown chunks."""
    count: int
    chunks: List[str] = []


class ChunkResult(BaseModel):
    """A single normalized chunk."""
    key: str
    depth: int
    markdown: str


def get_graph_source():
    return Neo4jGraphSource()


def get_settings() -> ExportSettings:
    return ExportSettings.from_env()


@contextmanager
def _graph_errors(action: str) -> Iterator[None]:
    try:
        yield
    except HTTPException:
        raise
    except GraphUnavailableError as e:
        logger.error(f"{action}: {e}")
        raise HTTPException(status_code=503, detail="Graph connection unavailable")
    except Exception as e:
        logger.exception(f"{action} failed: {e}")
        raise HTTPException(status_code=500, detail=f"{action} failed: {str(e)}")


def _open_catalog(source, settings: ExportSettings) -> ContentCatalog:
    catalog = ContentCatalog.from_settings(source, settings)
    catalog.init()
    return catalog


@router.get("/api/catalog/map", response_model=MapEntry, response_model_exclude_none=True)
async def get_navigation_map(
    source=Depends(get_graph_source),
    settings: ExportSettings = Depends(get_settings),
    token: str = Depends(require_auth),
):
    """Navigation map of the content tree (structure only)."""
    with _graph_errors("Navigation map"):
        catalog = _open_catalog(source, settings)
        return build_map(catalog.get_tree())


@router.get("/api/catalog/ordered", response_model=OrderedResult)
async def get_ordered_chunks(
    source=Depends(get_graph_source),
    settings: ExportSettings = Depends(get_settings),
    token: str = Depends(require_auth),
):
    """All exportable chunks, composites aggregated, in document order."""
    with _graph_errors("Ordered export"):
        catalog = _open_catalog(source, settings)
        chunks = catalog.get_composite_markdown()
    logger.info(f"Ordered export returned {len(chunks)} chunks")
    return OrderedResult(count=len(chunks), chunks=chunks)


@router.get("/api/catalog/chunks/{key}", response_model=ChunkResult)
async def get_chunk(
    key: str,
    depth: int = Query(1, ge=0, le=6, description="Depth at which the chunk is embedded"),
    source=Depends(get_graph_source),
    settings: ExportSettings = Depends(get_settings),
    token: str = Depends(require_auth),
):
    with _graph_errors("Chunk lookup"):
        catalog = _open_catalog(source, settings)
        catalog.populate_chunks()
        markdown = catalog.get_chunk(key, depth)
    if markdown is None:
        raise HTTPException(status_code=404, detail=f"No exportable content for {key}")
    return ChunkResult(key=key, depth=depth, markdown=markdown)


@router.get("/api/catalog/breadcrumbs/{key}", response_model=List[List[BreadcrumbStep]])
async def get_breadcrumbs(
    key: str,
    source=Depends(get_graph_source),
    settings: ExportSettings = Depends(get_settings),
    token: str = Depends(require_auth),
):
    """Every route from the root to ``key``, root and target excluded."""
    with _graph_errors("Breadcrumb lookup"):
        catalog = _open_catalog(source, settings)
        if not catalog.is_available(key):
            raise HTTPException(status_code=404, detail=f"Unknown node {key}")
        resolver = BreadcrumbResolver(source, settings.root_key, settings.max_depth)
        return resolver.resolve(key)


@router.get("/api/catalog/metrics")
async def get_metrics(token: str = Depends(require_auth)) -> Dict[str, Any]:
    return MetricsCollector.get_global().snapshot()
