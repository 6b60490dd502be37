"""In-process response cache with per-entry TTL.

Expiry is checked lazily on read; there is no background sweeper and no
in-flight deduplication, so two concurrent misses for the same key both
hit the network and the last write wins.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

T = TypeVar("T")

DEFAULT_CACHE_MAX_ENTRIES = 100


def normalize_cache_key(value: str) -> str:
  """Normalize a cache key so trivially different spellings collide."""
  return value.strip().lower()


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
  value: T
  expires_at: float


class TTLCache(Generic[T]):
  """Key -> value store where every entry carries its own expiry.

  Args:
    max_entries: Upper bound on stored entries. When a new key would exceed
        it, the oldest inserted entry is dropped.
    clock: Monotonic time source in seconds.
  """

  def __init__(
    self,
    max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
    clock: Callable[[], float] = time.monotonic,
  ) -> None:
    self._entries: Dict[str, CacheEntry[T]] = {}
    self._max_entries = max_entries
    self._clock = clock

  def read(self, key: str) -> Optional[T]:
    """Return the cached value, or None if absent or expired."""
    entry = self._entries.get(key)
    if entry is None:
      return None
    if self._clock() >= entry.expires_at:
      del self._entries[key]
      return None
    return entry.value

  def write(self, key: str, value: T, ttl_ms: float) -> None:
    """Store ``value`` under ``key`` for ``ttl_ms`` milliseconds.

    A non-positive TTL disables caching for the call.
    """
    if ttl_ms <= 0:
      return
    if key not in self._entries and len(self._entries) >= self._max_entries:
      oldest = next(iter(self._entries))
      del self._entries[oldest]
    # Re-insert so overwrites move to the back of the eviction order.
    self._entries.pop(key, None)
    self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl_ms / 1000.0)

  def clear(self) -> None:
    self._entries.clear()

  def __len__(self) -> int:
    return len(self._entries)

  def __contains__(self, key: object) -> bool:
    return isinstance(key, str) and self.read(key) is not None
