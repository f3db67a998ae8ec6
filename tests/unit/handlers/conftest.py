from unittest.mock import MagicMock

import pytest

from linkvault.application import Application, bootstrap
from linkvault.constants import FlushMode
from linkvault.services import ResolverService
from linkvault.utils.config import ShortenerConfig


BASE_URL = 'https://sho.rt'


@pytest.fixture
def config(store_path, key_file) -> ShortenerConfig:
    return ShortenerConfig(
        storage_path=str(store_path),
        flush_mode=FlushMode.SYNC,
        base_url=BASE_URL,
        key_file=str(key_file),
        cache_size_mb=1,
    )


@pytest.fixture
def app(config) -> Application:
    """Fully wired application over a temporary SQLite store."""
    with bootstrap(config) as application:
        yield application


@pytest.fixture
def failing_app(app, monkeypatch) -> Application:
    """Application whose ResolverService is replaced by a mock (set side effects per test)."""
    monkeypatch.setattr(app, 'service', MagicMock(spec=ResolverService))
    return app


@pytest.fixture
def _not_local(monkeypatch) -> None:
    monkeypatch.setattr('linkvault.utils.helpers.running_locally', lambda: False)
