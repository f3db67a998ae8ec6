"""Process-level wiring of the shortener core

`bootstrap()` builds every long-lived collaborator exactly once, in dependency
order, and hands them to the handlers inside an `Application`:

    - Step 1: Build the ShortcodeCodec
    - Step 2: Load the encryption key into a CryptoGuard (if enabled)
    - Step 3: Open the Mapping Store (SQLite file + in-memory cache)
    - Step 4: Build the ResolverService and the HealthReporter

Startup failures are fatal: a corrupt store (StoreCorruptedError) or an
unloadable key (KeyLoadError) propagate to the caller, which must exit rather
than serve in a degraded mode.

Example:
    >>> from linkvault.application import bootstrap
    >>> from linkvault.handlers import shorten_url
    >>> with bootstrap() as app:
    ...     response = shorten_url.handler({'body': '{"url": "https://example.com"}'}, app)
    >>> response['statusCode']
    200
"""

import logging
from dataclasses import dataclass

from linkvault.dao import ByteLRUCache, CachedMappingDAO, MappingBaseDAO, MappingSQLiteDAO
from linkvault.services import HealthReporter, ResolverService
from linkvault.utils.config import ShortenerConfig, load_config
from linkvault.utils.crypto import CryptoGuard
from linkvault.utils.shortener import ShortcodeCodec


logger = logging.getLogger(__name__)


@dataclass
class Application:
    """Long-lived collaborators shared by every request."""

    config: ShortenerConfig
    store: MappingBaseDAO
    guard: CryptoGuard
    codec: ShortcodeCodec
    service: ResolverService
    health: HealthReporter

    def close(self) -> None:
        """Flush and close the store. Pending periodic writes are committed first."""
        self.health.close()
        self.store.close()

    def __enter__(self) -> 'Application':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def open_store(config: ShortenerConfig) -> CachedMappingDAO:
    """Open the durable store and put a cache of `cache_size_mb` in front of it

    Raises:
        StoreCorruptedError:
            If the store file is corrupt.
        DataStoreError:
            If the store file cannot be opened.
    """
    durable = MappingSQLiteDAO(
        path=config.storage_path,
        flush_mode=config.flush_mode,
        flush_interval_ms=config.flush_interval_ms,
    )
    return CachedMappingDAO(durable=durable, cache=ByteLRUCache.from_megabytes(config.cache_size_mb))


def build_guard(config: ShortenerConfig) -> CryptoGuard:
    """Load the encryption key if encryption is enabled

    Raises:
        KeyLoadError:
            If encryption is enabled and the key file cannot be loaded.
    """
    if not config.encryption_enabled:
        logger.warning('Encryption is disabled. Target URLs are stored in plain text.')
        return CryptoGuard.disabled()
    return CryptoGuard.from_key_file(config.key_file)


def bootstrap(config: ShortenerConfig | None = None) -> Application:
    """Build the application from a configuration (loaded from the environment by default)

    Raises:
        BadConfigurationError:
            If the configuration is invalid.
        StoreCorruptedError / DataStoreError:
            If the store cannot be opened.
        KeyLoadError:
            If the encryption key cannot be loaded.
    """
    config = config or load_config()

    # Fail on configuration and key problems before touching the store file
    codec = ShortcodeCodec(
        length=config.shortcode_length,
        max_length=config.shortcode_max_length,
        alphabet=config.alphabet,
    )
    guard = build_guard(config)
    store = open_store(config)

    service = ResolverService(
        store=store,
        guard=guard,
        codec=codec,
        base_url=config.base_url,
        max_collision_retries=config.max_collision_retries,
    )
    health = HealthReporter(store, timeout_ms=config.health_timeout_ms)

    logger.info(
        'Shortener core initialized.',
        extra={'encryption': guard.enabled, 'storagePath': config.storage_path, 'baseUrl': config.base_url},
    )
    return Application(config=config, store=store, guard=guard, codec=codec, service=service, health=health)
