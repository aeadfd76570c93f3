"""In-memory counters and timings for catalog passes.

One process-wide collector is shared by the catalog, the exporters and the
HTTP surface; ``snapshot()`` is what ``/api/catalog/metrics`` returns.
"""
from contextlib import contextmanager
from typing import Any, Dict, Iterator
import threading
import time


class MetricsCollector:
    _global = None

    def __init__(self):
        self._lock = threading.Lock()
        self.counters: Dict[str, int] = {}
        self.timers: Dict[str, list] = {}

    @classmethod
    def get_global(cls) -> "MetricsCollector":
        if cls._global is None:
            cls._global = MetricsCollector()
        return cls._global

    def increment(self, name: str, amount: int = 1) -> None:
        with self._lock:
            self.counters[name] = self.counters.get(name, 0) + amount

    def timing(self, name: str, ms: int) -> None:
        with self._lock:
            self.timers.setdefault(name, []).append(ms)

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        t0 = time.time()
        try:
            yield
        finally:
            self.timing(name, int((time.time() - t0) * 1000))

    def reset(self) -> None:
        with self._lock:
            self.counters.clear()
            self.timers.clear()

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {"counters": dict(self.counters), "timers": {k: list(v) for k, v in self.timers.items()}}


__all__ = ["MetricsCollector"]
