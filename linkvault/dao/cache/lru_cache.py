import threading
from collections import OrderedDict

from linkvault.models import UrlMappingModel


class ByteLRUCache:
    """Thread-safe LRU cache of mappings, bounded by total size in bytes.

    - get: return the mapping if present and mark it most recently used
    - put: store the mapping, evicting least recently used entries until it fits

    Entries larger than the whole capacity are never stored.

    Example:
        >>> cache = ByteLRUCache.from_megabytes(64)
        >>> cache.put(mapping)
        >>> cache.get(mapping.code) is mapping
        True
    """

    def __init__(self, capacity_bytes: int):
        if capacity_bytes <= 0:
            raise ValueError(f'Cache capacity must be a positive number of bytes (given value: {capacity_bytes}).')
        self.capacity_bytes = int(capacity_bytes)
        self.hits = 0
        self.misses = 0
        self._size_bytes = 0
        self._entries: OrderedDict[str, UrlMappingModel] = OrderedDict()
        self._lock = threading.Lock()

    @classmethod
    def from_megabytes(cls, capacity_mb: int) -> 'ByteLRUCache':
        return cls(capacity_mb * 1024 * 1024)

    def get(self, code: str) -> UrlMappingModel | None:
        with self._lock:
            mapping = self._entries.get(code)
            if mapping is None:
                self.misses += 1
                return None
            self._entries.move_to_end(code)
            self.hits += 1
            return mapping

    def put(self, mapping: UrlMappingModel) -> bool:
        """Cache a mapping. Returns False if it is too large to ever fit."""
        if mapping.size > self.capacity_bytes:
            return False

        with self._lock:
            previous = self._entries.pop(mapping.code, None)
            if previous is not None:
                self._size_bytes -= previous.size
            self._entries[mapping.code] = mapping
            self._size_bytes += mapping.size
            while self._size_bytes > self.capacity_bytes:
                _, evicted = self._entries.popitem(last=False)
                self._size_bytes -= evicted.size
        return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._size_bytes = 0

    @property
    def size_bytes(self) -> int:
        return self._size_bytes

    def __contains__(self, code: str) -> bool:
        with self._lock:
            return code in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
