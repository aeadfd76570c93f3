"""Output consumers: linear document, static-site pages and wiki pages."""

from .linear import build_toc, render_linear_document
from .site import SiteExporter
from .wiki import WikiClient, WikiPublishError

__all__ = [
    "SiteExporter",
    "WikiClient",
    "WikiPublishError",
    "build_toc",
    "render_linear_document",
]
