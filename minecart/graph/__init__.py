"""Graph collaborators: the source contract and its Neo4j / in-memory implementations."""

from .memory import InMemoryGraphSource
from .neo4j_source import Neo4jGraphSource
from .source import INBOUND, OUTBOUND, GraphSource

__all__ = [
    "GraphSource",
    "INBOUND",
    "OUTBOUND",
    "InMemoryGraphSource",
    "Neo4jGraphSource",
]
