"""Unit tests for application wiring in application.py.

Test coverage includes:

1. bootstrap()
   - Wires codec, guard, store, service and health reporter from the configuration.
   - Loads the configuration from the environment when none is given.
   - Encryption can be disabled; mappings are then stored plain.

2. Fatal startup errors
   - Missing or malformed key files raise KeyLoadError before the store is created.
   - A corrupt store file raises StoreCorruptedError.

3. Shutdown
   - close() flushes pending periodic writes so they survive a restart.
"""

import pytest

from linkvault.application import Application, bootstrap
from linkvault.constants import FlushMode
from linkvault.dao import CachedMappingDAO
from linkvault.dao.exceptions import StoreCorruptedError
from linkvault.exceptions import KeyLoadError
from linkvault.utils.config import ShortenerConfig


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def config(store_path, key_file) -> ShortenerConfig:
    return ShortenerConfig(
        storage_path=str(store_path),
        flush_mode=FlushMode.SYNC,
        key_file=str(key_file),
        base_url='https://sho.rt',
    )


# -------------------------------
# 1. bootstrap()
# -------------------------------


def test_bootstrap_wires_application(config):
    with bootstrap(config) as app:
        assert isinstance(app, Application)
        assert isinstance(app.store, CachedMappingDAO)
        assert app.guard.enabled is True
        assert app.codec.length == 8
        assert app.service.base_url == 'https://sho.rt'
        assert app.health.check().healthy is True

        result = app.service.shorten('https://example.com')
        assert app.service.resolve(result.short_code) == 'https://example.com'


def test_bootstrap_reads_environment(monkeypatch, store_path, key_file):
    monkeypatch.setenv('STORAGE_PATH', str(store_path))
    monkeypatch.setenv('STORAGE_FLUSH_MODE', 'sync')
    monkeypatch.setenv('ENCRYPTION_KEY_FILE', str(key_file))
    monkeypatch.setenv('SHORTCODE_LENGTH', '10')

    with bootstrap() as app:
        assert app.config.storage_path == str(store_path)
        assert len(app.service.shorten('https://example.com').short_code) == 10


def test_bootstrap_without_encryption(store_path, tmp_path):
    config = ShortenerConfig(
        storage_path=str(store_path),
        flush_mode=FlushMode.SYNC,
        encryption_enabled=False,
        key_file=str(tmp_path / 'missing.key'),
    )

    with bootstrap(config) as app:
        assert app.guard.enabled is False
        result = app.service.shorten('https://example.com')
        assert app.store.get(result.short_code).payload == b'\x00https://example.com'


# -------------------------------
# 2. Fatal startup errors
# -------------------------------


def test_missing_key_file_is_fatal(store_path, tmp_path):
    config = ShortenerConfig(storage_path=str(store_path), key_file=str(tmp_path / 'missing.key'))

    with pytest.raises(KeyLoadError):
        bootstrap(config)
    assert not store_path.exists()


def test_malformed_key_file_is_fatal(store_path, tmp_path):
    key_file = tmp_path / 'bad.key'
    key_file.write_text('not-a-key')
    config = ShortenerConfig(storage_path=str(store_path), key_file=str(key_file))

    with pytest.raises(KeyLoadError):
        bootstrap(config)


def test_corrupt_store_is_fatal(config, store_path):
    store_path.parent.mkdir(parents=True)
    store_path.write_bytes(b'\x13\x37' * 4096)

    with pytest.raises(StoreCorruptedError):
        bootstrap(config)


# -------------------------------
# 3. Shutdown
# -------------------------------


def test_close_flushes_periodic_writes(store_path, key_file):
    config = ShortenerConfig(
        storage_path=str(store_path),
        flush_mode=FlushMode.PERIODIC,
        flush_interval_ms=3_600_000,
        key_file=str(key_file),
    )

    with bootstrap(config) as app:
        code = app.service.shorten('https://example.com').short_code

    with bootstrap(config) as restarted:
        assert restarted.service.resolve(code) == 'https://example.com'
