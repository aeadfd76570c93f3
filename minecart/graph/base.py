"""Neo4j connection handling for the content graph."""
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Tuple

from neo4j import GraphDatabase

NODE_LABEL = "Nugget"
EDGE_TYPE = "LEADS_TO"

_KEY_CONSTRAINT = f"""
CREATE CONSTRAINT nugget_key_unique IF NOT EXISTS
FOR (n:{NODE_LABEL}) REQUIRE n.key IS UNIQUE
"""

_CONSTRAINTS_ENSURED = False


def connection_settings() -> Tuple[str, Tuple[str, str]]:
    uri = os.getenv("NEO4J_URI", "bolt://localhost:7687")
    auth = (os.getenv("NEO4J_USER", "neo4j"), os.getenv("NEO4J_PASSWORD", "neo4jpassword"))
    return uri, auth


def default_database() -> Optional[str]:
    return os.getenv("NEO4J_DATABASE") or None


def _ensure_constraints(driver: Any) -> None:
    global _CONSTRAINTS_ENSURED
    if _CONSTRAINTS_ENSURED:
        return
    try:
        with driver.session() as session:
            session.execute_write(lambda tx: tx.run(_KEY_CONSTRAINT))
        _CONSTRAINTS_ENSURED = True
    except Exception:
        # read paths still work without the constraint
        logging.exception("neo4j_constraint_creation_failed")


def _close(driver: Any) -> None:
    try:
        driver.close()
    except Exception:
        logging.exception("neo4j_driver_close_failed")


@contextmanager
def managed_driver(ensure_constraints: bool = False) -> Iterator[Any]:
    """Yield a connected Neo4j driver, or None when the server cannot be reached."""
    uri, auth = connection_settings()
    driver = None
    try:
        driver = GraphDatabase.driver(uri, auth=auth)
        driver.verify_connectivity()
    except Exception:
        logging.exception("neo4j_driver_init_failed uri=%s", uri)
        if driver is not None:
            _close(driver)
        yield None
        return

    if ensure_constraints:
        _ensure_constraints(driver)
    try:
        yield driver
    finally:
        _close(driver)
