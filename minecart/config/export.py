from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from minecart.schemas.nugget import Predicate


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} value [{value!r}] is not valid")


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(key: str, default: List[str], *, separator: str = ",") -> List[str]:
    raw = os.getenv(key)
    if not raw:
        return default
    parts = [item.strip() for item in raw.split(separator)]
    return [item for item in parts if item]


def _predicates(items: Iterable[Any]) -> Tuple[Predicate, ...]:
    return tuple(Predicate.coerce(item) for item in items or ())


@dataclass(frozen=True)
class ExportSettings:
    root_key: str = "adit"
    max_depth: int = 100
    min_length: int = 0
    toc_depth: int = 3
    toc_h1: bool = True
    includes: Tuple[Predicate, ...] = field(default_factory=tuple)
    excludes: Tuple[Predicate, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.root_key:
            raise ValueError("root_key must not be empty")
        for name in ("max_depth", "min_length", "toc_depth"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} value [{value!r}] is not valid")
        # frozen: normalize predicate input in place of a setter
        object.__setattr__(self, "includes", _predicates(self.includes))
        object.__setattr__(self, "excludes", _predicates(self.excludes))

    @classmethod
    def from_env(cls) -> "ExportSettings":
        return cls(
            root_key=os.getenv("MINECART_ROOT_KEY", cls.root_key),
            max_depth=_env_int("MINECART_MAX_DEPTH", cls.max_depth),
            min_length=_env_int("MINECART_MIN_LENGTH", cls.min_length),
            toc_depth=_env_int("MINECART_TOC_DEPTH", cls.toc_depth),
            toc_h1=_env_bool("MINECART_TOC_H1", cls.toc_h1),
            includes=_predicates(_env_list("MINECART_INCLUDE", [])),
            excludes=_predicates(_env_list("MINECART_EXCLUDE", [])),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "root_key": self.root_key,
            "max_depth": self.max_depth,
            "min_length": self.min_length,
            "toc_depth": self.toc_depth,
            "toc_h1": self.toc_h1,
            "includes": [str(p) for p in self.includes],
            "excludes": [str(p) for p in self.excludes],
        }
