"""Publish a paged catalog tree to a Confluence space."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import requests

from minecart.catalog.tree import TreeNode

logger = logging.getLogger("minecart.publish.wiki")


class WikiPublishError(RuntimeError):
    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(f"{message} (status={status}) {body}".strip())


def _timeout_seconds() -> int:
    try:
        return int(os.getenv("WIKI_TIMEOUT_SECS", "30"))
    except ValueError:
        return 30


def storage_body(markdown: str) -> str:
    """Wrap markdown in a Confluence markdown macro (storage representation)."""
    if not markdown:
        return ""
    cdata = markdown.replace("]]>", "]]]]><![CDATA[>")
    return (
        '<ac:structured-macro ac:name="markdown">'
        f"<ac:plain-text-body><![CDATA[{cdata}]]></ac:plain-text-body>"
        "</ac:structured-macro>"
    )


class WikiClient:
    def __init__(self, base_url: str, user: str, token: str, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.auth = (user, token)
        self.session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})

    @classmethod
    def from_env(cls) -> "WikiClient":
        base_url = os.getenv("CONFLUENCE_URL")
        user = os.getenv("CONFLUENCE_USER")
        token = os.getenv("CONFLUENCE_TOKEN")
        if not (base_url and user and token):
            raise WikiPublishError("CONFLUENCE_URL, CONFLUENCE_USER and CONFLUENCE_TOKEN must be set")
        return cls(base_url, user, token)

    def create_page(self, space_key: str, parent_id: Optional[str], title: str, markdown: str) -> str:
        payload: Dict[str, Any] = {
            "type": "page",
            "title": title,
            "space": {"key": space_key},
            "body": {"storage": {"value": storage_body(markdown), "representation": "storage"}},
        }
        if parent_id:
            payload["ancestors"] = [{"id": str(parent_id)}]

        url = f"{self.base_url}/rest/api/content"
        try:
            resp = self.session.post(url, json=payload, timeout=_timeout_seconds())
        except requests.exceptions.RequestException as exc:
            logger.exception("wiki_create_page_http_error title=%s", title)
            raise WikiPublishError(f"could not create page {title!r}: {exc}") from exc

        if not (200 <= resp.status_code < 300):
            raise WikiPublishError(f"could not create page {title!r}", resp.status_code, resp.text[:256])
        page_id = str(resp.json().get("id", ""))
        logger.info("wiki page created id=%s title=%s", page_id, title)
        return page_id

    def publish_tree(self, root: TreeNode, space_key: str, parent_id: Optional[str]) -> List[str]:
        """Create one page per tree node, parents first; returns the page ids."""
        page_ids: Dict[int, str] = {}
        created: List[str] = []
        for tree_node in root.walk():
            if tree_node.parent is None:
                parent = parent_id
            else:
                parent = page_ids[id(tree_node.parent)]
            markdown = "\n\n".join(chunk.strip("\n") for chunk in tree_node.chunks)
            page_id = self.create_page(space_key, parent, tree_node.node.title, markdown)
            page_ids[id(tree_node)] = page_id
            created.append(page_id)
        return created
