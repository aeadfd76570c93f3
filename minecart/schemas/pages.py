from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from .nugget import BreadcrumbStep, NodeKind


class AdjacentNode(BaseModel):
    key: str
    label: str
    kind: NodeKind
    direction: str


class SitePage(BaseModel):
    """One page handed to the site generator."""

    key: str
    slug: str
    title: str
    kind: NodeKind
    composite: bool = False
    body: str = ""
    breadcrumbs: List[List[BreadcrumbStep]] = Field(default_factory=list)
    passages_inbound: List[AdjacentNode] = Field(default_factory=list)
    passages_outbound: List[AdjacentNode] = Field(default_factory=list)
    nuggets_inbound: List[AdjacentNode] = Field(default_factory=list)
    nuggets_outbound: List[AdjacentNode] = Field(default_factory=list)
