"""Unit tests for the ByteLRUCache

Test coverage includes:

1. Basic get/put
   - Cached mappings are returned; misses return None.
   - Hit and miss counters are maintained.

2. Byte-bounded eviction
   - Total size never exceeds capacity.
   - Least recently used entries are evicted first; get() refreshes recency.
   - Re-putting a code replaces its entry without double-counting its size.
   - Mappings larger than the whole capacity are never cached.

3. Maintenance
   - clear() releases all bytes.
   - from_megabytes() converts MB to bytes.
   - Non-positive capacities are rejected.

4. Thread safety
   - Concurrent puts and gets keep the size accounting consistent.
"""

import threading

import pytest

from linkvault.dao.cache import ByteLRUCache
from linkvault.models import UrlMappingModel


def mapping(code: str, payload_size: int = 36) -> UrlMappingModel:
    """Build a mapping of exactly len(code) + payload_size + 64 bytes."""
    return UrlMappingModel(code=code, payload=b'\x00' + b'u' * (payload_size - 1))


# -------------------------------
# 1. Basic get/put
# -------------------------------


def test_put_then_get_returns_mapping():
    cache = ByteLRUCache(1024)
    entry = mapping('abc')

    assert cache.put(entry) is True
    assert cache.get('abc') is entry
    assert 'abc' in cache
    assert len(cache) == 1
    assert cache.size_bytes == entry.size


def test_get_missing_returns_none_and_counts_miss():
    cache = ByteLRUCache(1024)
    cache.put(mapping('abc'))

    assert cache.get('nope') is None
    cache.get('abc')

    assert cache.misses == 1
    assert cache.hits == 1


# -------------------------------
# 2. Byte-bounded eviction
# -------------------------------


def test_eviction_keeps_size_within_capacity():
    # each entry: 1 + 35 + 64 = 100 bytes
    cache = ByteLRUCache(350)
    for code in 'abcde':
        cache.put(mapping(code, payload_size=35))

    assert cache.size_bytes <= 350
    assert len(cache) == 3
    assert 'a' not in cache and 'b' not in cache
    assert all(code in cache for code in 'cde')


def test_get_refreshes_recency():
    cache = ByteLRUCache(300)
    for code in 'abc':
        cache.put(mapping(code, payload_size=35))

    cache.get('a')
    cache.put(mapping('d', payload_size=35))

    assert 'a' in cache
    assert 'b' not in cache


def test_reput_replaces_entry_without_double_counting():
    cache = ByteLRUCache(1024)
    cache.put(mapping('abc', payload_size=36))
    cache.put(mapping('abc', payload_size=36))

    assert len(cache) == 1
    assert cache.size_bytes == 3 + 36 + 64


def test_oversized_mapping_is_not_cached():
    cache = ByteLRUCache(100)
    cache.put(mapping('a', payload_size=10))

    assert cache.put(mapping('big', payload_size=500)) is False
    assert 'big' not in cache
    assert 'a' in cache


# -------------------------------
# 3. Maintenance
# -------------------------------


def test_clear_releases_bytes():
    cache = ByteLRUCache(1024)
    cache.put(mapping('a'))
    cache.put(mapping('b'))
    assert cache.size_bytes == mapping('a').size + mapping('b').size

    cache.clear()
    assert len(cache) == 0
    assert cache.size_bytes == 0


def test_from_megabytes():
    assert ByteLRUCache.from_megabytes(64).capacity_bytes == 64 * 1024 * 1024


@pytest.mark.parametrize('capacity', [0, -1])
def test_non_positive_capacity_rejected(capacity):
    with pytest.raises(ValueError):
        ByteLRUCache(capacity)


# -------------------------------
# 4. Thread safety
# -------------------------------


def test_concurrent_access_keeps_accounting_consistent():
    cache = ByteLRUCache(5_000)

    def worker(n):
        for i in range(200):
            code = f'{n}-{i % 40}'
            cache.put(mapping(code))
            cache.get(code)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert cache.size_bytes <= 5_000
    assert cache.size_bytes == sum(cache.get(code).size for code in list(cache._entries))
