from linkvault.dao.base import MappingBaseDAO
from linkvault.dao.sqlite import MappingSQLiteDAO
from linkvault.dao.cache import ByteLRUCache, CachedMappingDAO


__all__ = [
    'MappingBaseDAO',
    'MappingSQLiteDAO',
    'ByteLRUCache',
    'CachedMappingDAO',
]
