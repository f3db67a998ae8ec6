"""Utility functions for application configuration management.

Configuration is resolved from three layers, lowest precedence first:

    1. Built-in defaults (see linkvault.constants)
    2. An optional JSON document, located by `LINKVAULT_CONFIG_FILE`
    3. Environment variables

The JSON document follows this structure (every key is optional):

    {
        "storage": {
            "path": "url_db.sqlite3",
            "cache_size_mb": 64,
            "flush_mode": "periodic",
            "flush_interval_ms": 1000
        },
        "shortcode": {
            "length": 8,
            "max_length": 32,
            "alphabet": "abc...XYZ0123456789",
            "max_collision_retries": 5
        },
        "encryption": {
            "enabled": true,
            "key_file": "encryption.key"
        },
        "service": {
            "base_url": "http://127.0.0.1:8080",
            "health_timeout_ms": 1000
        }
    }

Functions:
    load_document(path) -> dict
        Read a JSON configuration document.

    load_config(environ=None) -> ShortenerConfig
        Resolve the full configuration.

Example:
    >>> from linkvault.utils.config import load_config
    >>> os.environ['STORAGE_FLUSH_MODE'] = 'sync'
    >>> config = load_config()
    >>> config.flush_mode
    <FlushMode.SYNC: 'sync'>
"""

import os
import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from linkvault.constants import ENV, Crypto, Defaults, FlushMode, Shortcode, Storage
from linkvault.exceptions import BadConfigurationError
from linkvault.types import ConfigDocument
from linkvault.utils.validators import is_absolute_url


logger = logging.getLogger(__name__)

TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
FALSY = frozenset({'0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class ShortenerConfig:
    """Resolved, validated application configuration."""

    # fmt: off
    storage_path: str = Storage.DEFAULT_PATH
    cache_size_mb: int = Storage.DEFAULT_CACHE_SIZE_MB
    flush_mode: FlushMode = FlushMode.PERIODIC
    flush_interval_ms: int = Storage.DEFAULT_FLUSH_INTERVAL_MS
    base_url: str = Defaults.BASE_URL
    encryption_enabled: bool = Defaults.ENCRYPTION_ENABLED
    key_file: str = Crypto.DEFAULT_KEY_FILE
    shortcode_length: int = Shortcode.DEFAULT_LENGTH
    shortcode_max_length: int = Shortcode.MAX_LENGTH
    alphabet: str = Shortcode.DEFAULT_ALPHABET
    max_collision_retries: int = Shortcode.MAX_COLLISION_RETRIES
    health_timeout_ms: int = Defaults.HEALTH_TIMEOUT_MS
    # fmt: on

    def __post_init__(self):
        for name in ('cache_size_mb', 'flush_interval_ms', 'max_collision_retries', 'health_timeout_ms'):
            if getattr(self, name) <= 0:
                raise BadConfigurationError(f'{name} must be a positive integer (given value: {getattr(self, name)}).')
        if not is_absolute_url(self.base_url):
            raise BadConfigurationError(f'base_url must be an absolute URL (given value: {self.base_url!r}).')
        if not self.storage_path:
            raise BadConfigurationError('storage_path must not be empty.')


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise BadConfigurationError(f'{name} must be an integer (given value: {value!r}).')
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'{name} must be an integer (given value: {value!r}).') from e


def _as_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in TRUTHY:
        return True
    if normalized in FALSY:
        return False
    raise BadConfigurationError(f'{name} must be a boolean (given value: {value!r}).')


def _as_flush_mode(value: Any, name: str) -> FlushMode:
    try:
        return FlushMode(str(value).strip().lower())
    except ValueError as e:
        choices = ', '.join(mode.value for mode in FlushMode)
        raise BadConfigurationError(f'{name} must be one of: {choices} (given value: {value!r}).') from e


def _as_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise BadConfigurationError(f'{name} must be a string (given value: {value!r}).')
    return value


# config field -> (document section, document key, environment variable, parser)
# fmt: off
SOURCES: dict[str, tuple[str, str, str, Callable[[Any, str], Any]]] = {
    'storage_path':          ('storage', 'path', ENV.Storage.PATH, _as_str),
    'cache_size_mb':         ('storage', 'cache_size_mb', ENV.Storage.CACHE_SIZE_MB, _as_int),
    'flush_mode':            ('storage', 'flush_mode', ENV.Storage.FLUSH_MODE, _as_flush_mode),
    'flush_interval_ms':     ('storage', 'flush_interval_ms', ENV.Storage.FLUSH_INTERVAL_MS, _as_int),
    'base_url':              ('service', 'base_url', ENV.App.BASE_URL, _as_str),
    'health_timeout_ms':     ('service', 'health_timeout_ms', ENV.App.HEALTH_TIMEOUT_MS, _as_int),
    'encryption_enabled':    ('encryption', 'enabled', ENV.Encryption.ENABLED, _as_bool),
    'key_file':              ('encryption', 'key_file', ENV.Encryption.KEY_FILE, _as_str),
    'shortcode_length':      ('shortcode', 'length', ENV.Shortcode.LENGTH, _as_int),
    'shortcode_max_length':  ('shortcode', 'max_length', ENV.Shortcode.MAX_LENGTH, _as_int),
    'alphabet':              ('shortcode', 'alphabet', ENV.Shortcode.ALPHABET, _as_str),
    'max_collision_retries': ('shortcode', 'max_collision_retries', ENV.Shortcode.MAX_COLLISION_RETRIES, _as_int),
}
# fmt: on


def load_document(path: str | Path) -> ConfigDocument:
    """Read a JSON configuration document

    Raises:
        FileNotFoundError:
            If the document does not exist.
        BadConfigurationError:
            If the document is not a JSON object.
    """
    with open(path, encoding='utf-8') as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise BadConfigurationError(f'Configuration document {path} is not valid JSON.') from e

    if not isinstance(document, dict):
        raise BadConfigurationError(f'Configuration document {path} must be a JSON object.')
    return document


def load_config(environ: Mapping[str, str] | None = None) -> ShortenerConfig:
    """Resolve the application configuration from defaults, JSON document and environment

    Args:
        environ (Mapping[str, str], optional):
            Environment to read. Defaults to os.environ.

    Returns:
        ShortenerConfig: the validated configuration.

    Raises:
        FileNotFoundError:
            If `LINKVAULT_CONFIG_FILE` points to a missing file.
        BadConfigurationError:
            If any value is malformed.
    """
    environ = os.environ if environ is None else environ

    document: ConfigDocument = {}
    document_path = environ.get(ENV.App.CONFIG_FILE)
    if document_path:
        document = load_document(document_path)
        logger.debug('Loaded configuration document.', extra={'configFile': document_path})

    values: dict[str, Any] = {}
    for field in fields(ShortenerConfig):
        section, key, env_name, parse = SOURCES[field.name]

        section_values = document.get(section, {})
        if not isinstance(section_values, dict):
            raise BadConfigurationError(f"Configuration section '{section}' must be a JSON object.")
        if key in section_values:
            values[field.name] = parse(section_values[key], f'{section}.{key}')

        raw = environ.get(env_name)
        if raw is not None and raw != '':
            values[field.name] = parse(raw, env_name)

    return ShortenerConfig(**values)
