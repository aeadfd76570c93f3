from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from minecart.errors import InvalidPredicateError


class NodeKind(str, Enum):
    PASSAGE = "passage"
    # leaf content: a node whose purpose is its body text
    NUGGET = "nugget"


_KIND_ALIASES = {"leaf-content": NodeKind.NUGGET.value, "leaf": NodeKind.NUGGET.value}

# graph property name -> model field
_RECORD_ALIASES = {"_key": "key", "type": "kind", "nuggets": "grouped_keys"}
_NODE_FIELDS = ("key", "kind", "label", "shortlabel", "order", "body", "grouped_keys")


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ContentNode(BaseModel):
    """One content node as stored in the graph.

    ``grouped_keys`` is stored as ``nuggets`` in the graph; a node carrying it
    is a composite ("seam") whose chunk aggregates the listed nodes' bodies.
    Every stored property that is not a model field lands in ``attributes``.
    """

    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(min_length=1)
    kind: NodeKind = NodeKind.NUGGET
    label: str = ""
    shortlabel: Optional[str] = None
    order: Optional[Union[int, float]] = None
    body: Optional[str] = None
    grouped_keys: Optional[List[str]] = Field(default=None, alias="nuggets")
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("kind", mode="before")
    @classmethod
    def _kind_alias(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _KIND_ALIASES.get(value, value)
        return value

    @field_validator("grouped_keys", mode="before")
    @classmethod
    def _grouped_keys(cls, value: Any) -> Any:
        if value is None:
            return None
        keys = [str(k) for k in value if k is not None and str(k)]
        return keys or None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ContentNode":
        data: Dict[str, Any] = {}
        attributes: Dict[str, Any] = {}
        for name, value in (record or {}).items():
            if name in _NODE_FIELDS:
                data[name] = value
            elif name in _RECORD_ALIASES:
                data.setdefault(_RECORD_ALIASES[name], value)
            elif name.startswith("_"):
                # store bookkeeping such as _id / _rev
                continue
            else:
                attributes[name] = value
        if "kind" not in data and attributes.get("passage"):
            data["kind"] = NodeKind.PASSAGE
        return cls(**data, attributes=attributes)

    @property
    def is_composite(self) -> bool:
        return bool(self.grouped_keys)

    @property
    def is_passage(self) -> bool:
        return self.kind is NodeKind.PASSAGE

    @property
    def title(self) -> str:
        return self.label or self.key

    def get_property(self, name: str) -> Any:
        if name == "kind":
            return self.kind.value
        if name in _NODE_FIELDS:
            return getattr(self, name)
        if name == "nuggets":
            return self.grouped_keys
        return self.attributes.get(name)


_ATTRIBUTE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")


class Predicate(BaseModel):
    """An ``{attribute, value}`` include/exclude filter."""

    model_config = ConfigDict(frozen=True)

    attribute: str
    value: str

    @field_validator("attribute")
    @classmethod
    def _valid_attribute(cls, value: str) -> str:
        if not _ATTRIBUTE_RE.match(value or ""):
            raise ValueError(f"invalid attribute name {value!r}")
        return value

    @field_validator("value", mode="before")
    @classmethod
    def _value_text(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("predicate value is required")
        return _as_text(value)

    @classmethod
    def parse(cls, text: str) -> "Predicate":
        """Parse ``name:value`` (the value may itself contain colons)."""
        if not isinstance(text, str) or ":" not in text:
            raise InvalidPredicateError(f"predicate {text!r} is not of the form name:value")
        attribute, value = text.split(":", 1)
        try:
            return cls(attribute=attribute.strip(), value=value.strip())
        except ValidationError as exc:
            raise InvalidPredicateError(f"predicate {text!r} is invalid: {exc}") from exc

    @classmethod
    def coerce(cls, item: Union["Predicate", str, Mapping[str, Any]]) -> "Predicate":
        if isinstance(item, Predicate):
            return item
        if isinstance(item, str):
            return cls.parse(item)
        if isinstance(item, Mapping):
            try:
                return cls(**item)
            except ValidationError as exc:
                raise InvalidPredicateError(f"predicate {dict(item)!r} is invalid: {exc}") from exc
        raise InvalidPredicateError(f"unsupported predicate {item!r}")

    def matches(self, node: ContentNode) -> bool:
        found = node.get_property(self.attribute)
        if found is None:
            return False
        return _as_text(found) == self.value

    def __str__(self) -> str:
        return f"{self.attribute}:{self.value}"


class MapEntry(BaseModel):
    """Navigation map node; structure only, never body text."""

    key: str
    label: str
    shortlabel: Optional[str] = None
    kind: NodeKind
    order: Optional[Union[int, float]] = None
    depth: int = Field(ge=0)
    composite: bool = False
    children: List["MapEntry"] = Field(default_factory=list)


class BreadcrumbStep(BaseModel):
    key: str
    label: str


MapEntry.model_rebuild()
