"""Result cache boundary.

The pipelines never cache themselves; callers consult a ``ResultCache``
keyed by ``"{symbol}_{input_length}"`` and store results unless they are
flagged as too weak to keep.

InMemoryResultCache stores orjson-encoded payloads with a TTL, so cached
results are immutable snapshots independent of the returned objects.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Generic, Protocol, TypeVar, runtime_checkable

import orjson
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

# Namespaces for the two result kinds
NAMESPACE_TECHNICAL = "technical"
NAMESPACE_PREDICTION = "prediction"

DEFAULT_TECHNICAL_TTL = 300.0
DEFAULT_PREDICTION_TTL = 600.0

ResultT = TypeVar("ResultT", bound=BaseModel)


@runtime_checkable
class ResultCache(Protocol[ResultT]):
    """Key/value port for analysis and prediction results."""

    def get(self, key: str) -> ResultT | None:
        """Return the cached result for ``key`` or None."""
        ...

    def put(self, key: str, result: ResultT, skip_if: bool = False) -> bool:
        """Store ``result`` unless ``skip_if``; return whether it was stored."""
        ...


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    stores: int = 0
    skips: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class InMemoryResultCache(Generic[ResultT]):
    """Thread-safe in-process cache with per-entry expiry."""

    def __init__(
        self,
        model_cls: type[ResultT],
        namespace: str,
        ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.model_cls = model_cls
        self.namespace = namespace
        self.ttl = ttl
        self.stats = CacheStats()
        self._clock = clock
        self._entries: dict[str, tuple[bytes, float | None]] = {}
        self._lock = threading.Lock()

    def _full_key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> ResultT | None:
        full_key = self._full_key(key)
        with self._lock:
            entry = self._entries.get(full_key)
            if entry is not None and entry[1] is not None and entry[1] <= self._clock():
                del self._entries[full_key]
                entry = None
            if entry is None:
                self.stats.misses += 1
                return None
            payload = entry[0]

        try:
            result = self.model_cls.model_validate(orjson.loads(payload))
        except (orjson.JSONDecodeError, ValidationError) as e:
            logger.warning("Cache decode error for key %s: %s", full_key, e)
            with self._lock:
                # An unreadable entry is dropped and counts as a miss
                if self._entries.get(full_key, (None,))[0] == payload:
                    del self._entries[full_key]
                self.stats.misses += 1
            return None

        with self._lock:
            self.stats.hits += 1
        return result

    def put(self, key: str, result: ResultT, skip_if: bool = False) -> bool:
        full_key = self._full_key(key)
        if skip_if:
            with self._lock:
                self.stats.skips += 1
            logger.debug("Skipping cache for %s", full_key)
            return False

        try:
            payload = orjson.dumps(result.model_dump(mode="json"))
        except (TypeError, orjson.JSONEncodeError) as e:
            logger.warning("Cache encode error for key %s: %s", full_key, e)
            return False

        expires_at = self._clock() + self.ttl if self.ttl else None
        with self._lock:
            self._entries[full_key] = (payload, expires_at)
            self.stats.stores += 1
        return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(self._full_key(key), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
