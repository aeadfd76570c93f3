import pytest

from minecart.config import ExportSettings
from minecart.errors import InvalidPredicateError
from minecart.schemas.nugget import Predicate

_ENV = (
    "MINECART_ROOT_KEY",
    "MINECART_MAX_DEPTH",
    "MINECART_MIN_LENGTH",
    "MINECART_TOC_DEPTH",
    "MINECART_TOC_H1",
    "MINECART_INCLUDE",
    "MINECART_EXCLUDE",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = ExportSettings.from_env()
    assert settings.root_key == "adit"
    assert settings.max_depth == 100
    assert settings.min_length == 0
    assert settings.toc_depth == 3
    assert settings.toc_h1 is True
    assert settings.includes == ()


def test_from_env(clean_env):
    clean_env.setenv("MINECART_ROOT_KEY", "start")
    clean_env.setenv("MINECART_MIN_LENGTH", "12")
    clean_env.setenv("MINECART_TOC_H1", "false")
    clean_env.setenv("MINECART_EXCLUDE", "audience:internal, draft:true")

    settings = ExportSettings.from_env()
    assert settings.root_key == "start"
    assert settings.min_length == 12
    assert settings.toc_h1 is False
    assert settings.excludes == (
        Predicate(attribute="audience", value="internal"),
        Predicate(attribute="draft", value="true"),
    )
    assert settings.as_dict()["excludes"] == ["audience:internal", "draft:true"]


def test_bad_predicate_in_env(clean_env):
    clean_env.setenv("MINECART_INCLUDE", "nocolon")
    with pytest.raises(InvalidPredicateError):
        ExportSettings.from_env()


def test_negative_values_rejected():
    with pytest.raises(ValueError):
        ExportSettings(min_length=-1)
    with pytest.raises(ValueError):
        ExportSettings(toc_depth=-2)
    with pytest.raises(ValueError):
        ExportSettings(root_key="")


def test_predicates_coerced_from_dicts():
    settings = ExportSettings(includes=[{"attribute": "kind", "value": "passage"}])
    assert settings.includes == (Predicate(attribute="kind", value="passage"),)


def test_malformed_number_in_env_rejected(clean_env):
    clean_env.setenv("MINECART_MIN_LENGTH", "ten")
    with pytest.raises(ValueError):
        ExportSettings.from_env()

    clean_env.setenv("MINECART_MIN_LENGTH", "3")
    clean_env.setenv("MINECART_MAX_DEPTH", "not-a-number")
    with pytest.raises(ValueError):
        ExportSettings.from_env()
