import os
import sys

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from minecart.graph import InMemoryGraphSource  # noqa: E402
from minecart.metrics import MetricsCollector  # noqa: E402


SAMPLE_NODES = [
    {"key": "adit", "kind": "passage", "label": "Knowledge Base", "body": "# Welcome\nIntro text for everyone."},
    {"key": "guide", "kind": "passage", "label": "Guide", "order": 1},
    {"key": "ref", "kind": "passage", "label": "Reference", "order": 2,
     "body": "## Reference\nAll the reference material lives here."},
    {"key": "install", "kind": "nugget", "label": "Install", "order": 1,
     "body": "### Install\nRun the installer and wait."},
    {"key": "configure", "kind": "nugget", "label": "Configure", "body": "Set the options you need."},
    {"key": "seam", "kind": "nugget", "label": "Setup seam", "body": "## Setup\nSetup overview.",
     "nuggets": ["x", "y"]},
    {"key": "x", "kind": "nugget", "label": "X", "body": "X body text"},
    {"key": "y", "kind": "nugget", "label": "Y", "body": "Y body text"},
    {"key": "internal", "kind": "nugget", "label": "Internal", "body": "# Internal\nSecret stuff here.",
     "audience": "internal"},
    {"key": "empty", "kind": "passage", "label": "Empty"},
]

SAMPLE_EDGES = [
    ("adit", "guide"),
    ("adit", "ref"),
    ("adit", "empty"),
    ("guide", "install"),
    ("guide", "configure"),
    ("guide", "seam"),
    ("ref", "install"),
    ("ref", "x"),
    ("ref", "y"),
    ("ref", "internal"),
]


@pytest.fixture()
def sample_source() -> InMemoryGraphSource:
    return InMemoryGraphSource(SAMPLE_NODES, SAMPLE_EDGES)


@pytest.fixture()
def metrics() -> MetricsCollector:
    return MetricsCollector()
