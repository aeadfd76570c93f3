import json

import pytest

from minecart.catalog import ContentCatalog
from minecart.errors import CatalogStateError
from minecart.publish import SiteExporter


def _exporter(source, metrics, **kwargs):
    catalog = ContentCatalog(source, metrics=metrics, **kwargs)
    catalog.init()
    return SiteExporter(catalog, source)


def _pages(exporter):
    return {page.key: page for page in exporter.build_pages()}


def test_page_per_available_node(sample_source, metrics):
    pages = _pages(_exporter(sample_source, metrics, excludes=["audience:internal"]))
    assert "internal" not in pages
    assert set(pages) == {"adit", "guide", "ref", "install", "configure", "seam", "x", "y", "empty"}
    assert pages["adit"].slug == "/"
    assert pages["install"].slug == "install"


def test_page_body_is_title_level(sample_source, metrics):
    pages = _pages(_exporter(sample_source, metrics))
    assert pages["install"].body == "# Install\nRun the installer and wait."
    assert pages["seam"].body == "# Setup\nSetup overview.\nX body text\nY body text"
    assert pages["seam"].composite is True
    assert pages["empty"].body == "# Empty\n"
    # grouped nodes keep their own page
    assert pages["x"].body == "X body text"


def test_breadcrumbs_and_adjacency(sample_source, metrics):
    pages = _pages(_exporter(sample_source, metrics, excludes=["audience:internal"]))

    install = pages["install"]
    assert [[s.key for s in trail] for trail in install.breadcrumbs] == [["guide"], ["ref"]]
    assert [n.key for n in install.passages_inbound] == ["guide", "ref"]
    assert install.nuggets_outbound == []

    ref = pages["ref"]
    assert [n.key for n in ref.nuggets_outbound] == ["install", "x", "y"]
    assert [n.key for n in ref.passages_inbound] == ["adit"]
    assert all(n.direction == "outbound" for n in ref.nuggets_outbound)

    adit = pages["adit"]
    assert [n.key for n in adit.passages_outbound] == ["guide", "ref", "empty"]


def test_export_writes_pages_and_map(tmp_path, sample_source, metrics):
    pages = _exporter(sample_source, metrics).export(tmp_path / "heap")

    content = tmp_path / "heap" / "content"
    assert len(pages) == 10
    assert (content / "minemap.json").exists()
    guide = json.loads((content / "guide.json").read_text(encoding="utf-8"))
    assert guide["title"] == "Guide"
    assert [n["key"] for n in guide["nuggets_outbound"]] == ["install", "configure", "seam"]


def test_export_requires_init(sample_source, metrics):
    exporter = SiteExporter(ContentCatalog(sample_source, metrics=metrics), sample_source)
    with pytest.raises(CatalogStateError):
        exporter.build_pages()
