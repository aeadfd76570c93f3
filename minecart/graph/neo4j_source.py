"""Graph source backed by Neo4j.

Content lives in ``(:Nugget)`` nodes keyed by ``key`` and joined by
``[:LEADS_TO]`` edges pointing away from the root. Variable-length bounds
cannot be query parameters, so ``max_depth`` is validated and formatted in.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from neo4j.exceptions import ServiceUnavailable, SessionExpired

from minecart.errors import GraphUnavailableError

from .base import EDGE_TYPE, NODE_LABEL, default_database, managed_driver
from .source import INBOUND, OUTBOUND, NodeRecord

logger = logging.getLogger("minecart.graph.neo4j")

# keep only simple paths: no node may appear twice
_SIMPLE_PATH = "all(n IN nodes(p) WHERE single(m IN nodes(p) WHERE m = n))"


def _depth(max_depth: int) -> int:
    value = int(max_depth)
    if value < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth!r}")
    return value


class Neo4jGraphSource:
    def __init__(self, driver: Any = None, database: Optional[str] = None):
        self.driver = driver
        self.database = database or default_database()

    def _session(self, driver: Any):
        if self.database:
            return driver.session(database=self.database)
        return driver.session()

    def _query(self, driver: Any, query: str, params: dict) -> List[Any]:
        try:
            with self._session(driver) as session:
                return list(session.run(query, **params))
        except (ServiceUnavailable, SessionExpired) as exc:
            logging.exception("neo4j_query_unavailable")
            raise GraphUnavailableError(f"Neo4j connection lost: {exc}") from exc

    def _run(self, query: str, **params: Any) -> List[Any]:
        if self.driver is not None:
            return self._query(self.driver, query, params)

        with managed_driver(ensure_constraints=True) as driver:
            if driver is None:
                raise GraphUnavailableError("Neo4j connection unavailable")
            return self._query(driver, query, params)

    def load_nodes(self, root_key: str, max_depth: int) -> List[NodeRecord]:
        query = f"""
        MATCH (root:{NODE_LABEL} {{key: $root_key}})
        MATCH (root)-[:{EDGE_TYPE}*0..{_depth(max_depth)}]->(v:{NODE_LABEL})
        WITH DISTINCT v
        RETURN properties(v) AS props
        """
        rows = self._run(query, root_key=root_key)
        logger.info("loaded %d nodes below %s", len(rows), root_key)
        return [dict(row["props"]) for row in rows]

    def enumerate_paths(self, root_key: str, max_depth: int) -> List[List[str]]:
        query = f"""
        MATCH p = (root:{NODE_LABEL} {{key: $root_key}})-[:{EDGE_TYPE}*0..{_depth(max_depth)}]->(v:{NODE_LABEL})
        WHERE {_SIMPLE_PATH}
        WITH p, [n IN nodes(p) | n.key] AS keys
        RETURN keys
        ORDER BY length(p) ASC, keys ASC
        """
        rows = self._run(query, root_key=root_key)
        logger.info("enumerated %d paths below %s", len(rows), root_key)
        return [list(row["keys"]) for row in rows]

    def neighbours(self, key: str) -> List[Tuple[NodeRecord, str]]:
        query = f"""
        MATCH (n:{NODE_LABEL} {{key: $key}})-[e:{EDGE_TYPE}]-(m:{NODE_LABEL})
        RETURN properties(m) AS props, startNode(e) = n AS outbound
        """
        rows = self._run(query, key=key)
        return [(dict(row["props"]), OUTBOUND if row["outbound"] else INBOUND) for row in rows]

    def inbound_paths(self, key: str, root_key: str, max_depth: int) -> List[List[NodeRecord]]:
        depth = _depth(max_depth)
        if depth == 0:
            return []
        query = f"""
        MATCH p = (root:{NODE_LABEL} {{key: $root_key}})-[:{EDGE_TYPE}*1..{depth}]->(t:{NODE_LABEL} {{key: $key}})
        WHERE {_SIMPLE_PATH}
        RETURN [n IN reverse(nodes(p)) | properties(n)] AS nodes
        ORDER BY length(p) ASC
        """
        rows = self._run(query, key=key, root_key=root_key)
        return [[dict(n) for n in row["nodes"]] for row in rows]
