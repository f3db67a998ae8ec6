from linkvault.utils.config import ShortenerConfig, load_config, load_document
from linkvault.utils.crypto import CryptoGuard, load_key, generate_key_file
from linkvault.utils.helpers import get_short_url, guarantee_500_response
from linkvault.utils.logging import initialize_logging
from linkvault.utils.runtime import running_locally
from linkvault.utils.shortener import ShortcodeCodec
from linkvault.utils.validators import is_absolute_url


__all__ = [
    'ShortenerConfig',
    'load_config',
    'load_document',
    'CryptoGuard',
    'load_key',
    'generate_key_file',
    'get_short_url',
    'guarantee_500_response',
    'initialize_logging',
    'running_locally',
    'ShortcodeCodec',
    'is_absolute_url',
]
