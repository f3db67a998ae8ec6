"""Write-through, read-through cache in front of a durable mapping DAO

This module provides the Mapping Store as consumed by the Resolver Service:
a bounded in-memory ByteLRUCache layered over a durable MappingBaseDAO
(normally MappingSQLiteDAO).

Responsibilities:
    - Serve lookups from memory when possible, fall through to the durable layer on miss
    - Populate the cache on the way back from a durable read
    - Write through: a mapping is cached only after the durable layer accepted it

Because mappings are immutable and negative lookups are never cached, an
eviction can only cost a durable read. It can never change an answer.
If the durable layer loses unflushed writes, the whole cache is dropped so it
never serves a mapping the durable layer no longer has.

Classes:
    CachedMappingDAO:
        Mapping DAO combining a cache and a durable DAO.

Example:
    >>> store = CachedMappingDAO(
    ...     durable=MappingSQLiteDAO(path='url_db.sqlite3'),
    ...     cache=ByteLRUCache.from_megabytes(64),
    ... )
    >>> store.put_if_absent('abc123', b'\\x00https://example.com')
    UrlMappingModel(code='abc123', ...)
    >>> store.get('abc123').payload  # cache HIT
    b'\\x00https://example.com'
"""

import logging

from beartype import beartype

from linkvault.constants import CACHE_CLEARED
from linkvault.models import UrlMappingModel
from linkvault.dao.base import MappingBaseDAO
from linkvault.dao.cache.lru_cache import ByteLRUCache
from linkvault.dao.exceptions import DataStoreError


logger = logging.getLogger(__name__)


class CachedMappingDAO(MappingBaseDAO):
    """Mapping DAO with a write-through, read-through in-memory cache

    The cache is emptied whenever the durable layer's `generation` moves,
    i.e. after it discarded acknowledged writes the cache may still hold.

    Attributes:
        durable (MappingBaseDAO):
            Durable layer. Owns the authoritative copy of every mapping.
        cache (ByteLRUCache):
            Bounded in-memory layer.
    """

    def __init__(self, durable: MappingBaseDAO, cache: ByteLRUCache):
        self.durable = durable
        self.cache = cache
        self._seen_generation = durable.generation

    @property
    def generation(self) -> int:
        return self.durable.generation

    def _drop_lost_mappings(self) -> None:
        generation = self.durable.generation
        if generation == self._seen_generation:
            return
        self.cache.clear()
        self._seen_generation = generation
        logger.warning(
            'Durable store discarded unflushed writes, cache cleared.',
            extra={'event': CACHE_CLEARED, 'generation': generation},
        )

    @beartype
    def put_if_absent(self, code: str, payload: bytes) -> UrlMappingModel:
        """Claim a shortcode durably, then cache the new mapping

        Raises:
            CodeCollisionError:
                If the code is taken (nothing is cached in that case).
            DataStoreError:
                If the durable layer fails (nothing is cached in that case).
        """
        self._drop_lost_mappings()
        generation = self.durable.generation
        try:
            mapping = self.durable.put_if_absent(code, payload)
        except DataStoreError:
            self._drop_lost_mappings()
            raise

        self.cache.put(mapping)
        # A concurrent failure may have discarded this write before it was cached
        if self.durable.generation != generation:
            self.cache.clear()
        return mapping

    @beartype
    def get(self, code: str) -> UrlMappingModel | None:
        """Look up a mapping in the cache, then in the durable layer

        Raises:
            DataStoreError:
                If the durable layer fails on a cache MISS.
        """
        self._drop_lost_mappings()

        # CACHE HIT
        mapping = self.cache.get(code)
        if mapping is not None:
            return mapping

        # CACHE MISS: read through and populate
        mapping = self.durable.get(code)
        if mapping is not None:
            self.cache.put(mapping)
        return mapping

    def probe(self) -> bool:
        return self.durable.probe()

    def flush(self) -> None:
        try:
            self.durable.flush()
        finally:
            self._drop_lost_mappings()

    def close(self) -> None:
        self.durable.close()
        self.cache.clear()
