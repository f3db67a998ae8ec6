from linkvault.dao.cache.lru_cache import ByteLRUCache
from linkvault.dao.cache.cached_mapping_dao import CachedMappingDAO


__all__ = [
    'ByteLRUCache',
    'CachedMappingDAO',
]
