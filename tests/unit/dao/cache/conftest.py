from unittest.mock import MagicMock

import pytest

from linkvault.dao.base import MappingBaseDAO
from linkvault.dao.cache import ByteLRUCache
from linkvault.models import UrlMappingModel


@pytest.fixture
def mapping() -> UrlMappingModel:
    return UrlMappingModel(code='abc123', payload=b'\x00https://example.com/page')


@pytest.fixture
def durable(mapping) -> MappingBaseDAO:
    """Mock the durable layer of the Mapping Store."""
    dao = MagicMock(spec=MappingBaseDAO)
    dao.put_if_absent.return_value = mapping
    dao.get.return_value = mapping
    dao.probe.return_value = True
    return dao


@pytest.fixture
def cache() -> ByteLRUCache:
    return ByteLRUCache(4096)
