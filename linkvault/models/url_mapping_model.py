from dataclasses import dataclass, field
from datetime import datetime, UTC

from linkvault.constants import Storage


@dataclass(frozen=True)
class UrlMappingModel:
    """Represent a persisted shortcode mapping.

    Attributes:
        code (str):
            The unique short identifier, 1-32 characters of [A-Za-z0-9_-].
        payload (bytes):
            The stored target URL, prefixed with a one-byte format marker
            (plain or sealed). See linkvault.utils.crypto.CryptoGuard.
        created_at (datetime):
            Creation time in UTC. Never changes once the mapping is written.

    Example:
        >>> mapping = UrlMappingModel(code='promo', payload=b'\\x00https://example.com')
        >>> mapping.code
        'promo'
        >>> mapping.size
        89
    """

    code: str
    payload: bytes
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def size(self) -> int:
        """Approximate number of bytes this mapping occupies in memory."""
        return len(self.code.encode()) + len(self.payload) + Storage.CACHE_ENTRY_OVERHEAD
