import string
from enum import StrEnum


class Shortcode:
    """Shortcode generation and validation parameters."""

    # Characters accepted in any short code (generated or custom alias)
    ALLOWED_CHARACTERS = frozenset(string.ascii_letters + string.digits + '-_')
    # Alphabet used for generated codes: 26 lowercase + 26 uppercase + 10 digits
    DEFAULT_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
    DEFAULT_LENGTH = 8
    MAX_LENGTH = 32
    MAX_COLLISION_RETRIES = 5


class Storage:
    """Embedded store defaults."""

    DEFAULT_PATH = 'url_db.sqlite3'
    DEFAULT_CACHE_SIZE_MB = 64
    DEFAULT_FLUSH_INTERVAL_MS = 1000
    # Bookkeeping bytes charged to every cache entry on top of code + payload
    CACHE_ENTRY_OVERHEAD = 64
    # Seconds a connection waits on a locked database file before failing
    BUSY_TIMEOUT_SECONDS = 5.0


class FlushMode(StrEnum):
    SYNC = 'sync'
    PERIODIC = 'periodic'


class PayloadFormat:
    """One-byte markers prefixed to every stored target payload."""

    PLAIN = 0x00
    SEALED = 0x01


class Crypto:
    KEY_SIZE = 32  # AES-256
    NONCE_SIZE = 12  # 96-bit GCM nonce
    DEFAULT_KEY_FILE = 'encryption.key'


class Defaults:
    BASE_URL = 'http://127.0.0.1:8080'
    ENCRYPTION_ENABLED = True
    HEALTH_TIMEOUT_MS = 1000
    LOG_LEVEL = 'INFO'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        LOG_LEVEL = 'LOG_LEVEL'
        CONFIG_FILE = 'LINKVAULT_CONFIG_FILE'
        BASE_URL = 'BASE_URL'
        HEALTH_TIMEOUT_MS = 'HEALTH_TIMEOUT_MS'

    class Storage(StrEnum):
        PATH = 'STORAGE_PATH'
        CACHE_SIZE_MB = 'STORAGE_CACHE_SIZE_MB'
        FLUSH_MODE = 'STORAGE_FLUSH_MODE'
        FLUSH_INTERVAL_MS = 'STORAGE_FLUSH_INTERVAL_MS'

    class Encryption(StrEnum):
        ENABLED = 'ENCRYPTION_ENABLED'
        KEY_FILE = 'ENCRYPTION_KEY_FILE'

    class Shortcode(StrEnum):
        LENGTH = 'SHORTCODE_LENGTH'
        MAX_LENGTH = 'SHORTCODE_MAX_LENGTH'
        ALPHABET = 'SHORTCODE_ALPHABET'
        MAX_COLLISION_RETRIES = 'MAX_COLLISION_RETRIES'


# Log event codes
SHORTCODE_MINTED = 'SHORTCODE_MINTED'
SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'
ALIAS_TAKEN = 'ALIAS_TAKEN'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
STORE_FLUSHED = 'STORE_FLUSHED'
STORE_WRITES_LOST = 'STORE_WRITES_LOST'
CACHE_CLEARED = 'CACHE_CLEARED'
HEALTH_CHECK_FAILED = 'HEALTH_CHECK_FAILED'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
INVALID_REQUEST_BODY = 'client:invalid_request_body'
STORE_UNAVAILABLE = 'service:store_unavailable'
