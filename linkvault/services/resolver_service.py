"""Shorten and resolve operations

The Resolver Service is the only contract handlers call. It orchestrates the
ShortcodeCodec, the CryptoGuard and the Mapping Store:

    shorten:  validate URL -> pick code -> seal -> put_if_absent -> ShortenResult
    resolve:  get -> open -> target URL (or None)

Classes:
    ResolverService:
        Stateless orchestrator, safe to share between worker threads.

Example:
    >>> service = ResolverService(store, guard, codec, base_url='https://sho.rt')
    >>> result = service.shorten('https://example.com')
    >>> result.short_url
    'https://sho.rt/Gh71WPTa'
    >>> service.resolve(result.short_code)
    'https://example.com'
    >>> service.resolve('never-issued') is None
    True
"""

import logging

from beartype import beartype

from linkvault.constants import Shortcode, SHORTCODE_MINTED, SHORTCODE_COLLISION, ALIAS_TAKEN, SHORT_URL_NOT_FOUND
from linkvault.dao.base import MappingBaseDAO
from linkvault.dao.exceptions import CodeCollisionError
from linkvault.exceptions import AliasTakenError, CodeSpaceExhaustedError, InvalidAliasError, InvalidUrlError
from linkvault.models import ShortenResult
from linkvault.utils.crypto import CryptoGuard
from linkvault.utils.helpers import get_short_url
from linkvault.utils.shortener import ShortcodeCodec
from linkvault.utils.validators import is_absolute_url


logger = logging.getLogger(__name__)


class ResolverService:
    """Implement shorten and resolve on top of the Mapping Store

    Attributes:
        store (MappingBaseDAO):
            Mapping Store (normally a CachedMappingDAO over MappingSQLiteDAO).
        guard (CryptoGuard):
            Seals payloads before writing and opens them after reading.
        codec (ShortcodeCodec):
            Generates codes and validates custom aliases.
        base_url (str):
            Public base URL used to build short URLs.
        max_collision_retries (int):
            Number of generated codes tried before giving up.

    Methods:
        shorten(url: str, custom_alias: str | None = None) -> ShortenResult:
            Map a URL to a new shortcode or to the requested alias.
            Raises InvalidUrlError, InvalidAliasError, AliasTakenError,
            CodeSpaceExhaustedError, DataStoreError.

        resolve(code: str) -> str | None:
            Return the target URL for a code, None if unknown.
            Raises DecryptionError, DataStoreError.
    """

    def __init__(
        self,
        store: MappingBaseDAO,
        guard: CryptoGuard,
        codec: ShortcodeCodec,
        base_url: str,
        max_collision_retries: int = Shortcode.MAX_COLLISION_RETRIES,
    ):
        if max_collision_retries < 1:
            raise ValueError(f'max_collision_retries must be at least 1 (given value: {max_collision_retries}).')

        self.store = store
        self.guard = guard
        self.codec = codec
        self.base_url = base_url
        self.max_collision_retries = max_collision_retries

    @beartype
    def shorten(self, url: str, custom_alias: str | None = None) -> ShortenResult:
        """Map a URL to a shortcode

        Steps:
            - Step 1: Validate the URL (absolute, scheme + host)
            - Step 2: With a custom alias, validate it and claim it once (no retry)
            - Step 3: Without alias, claim generated codes, retrying on collision
            - Step 4: Build the fully-qualified short URL

        The same URL shortened twice without alias gets two distinct codes:
        URLs are never deduplicated.

        Args:
            url (str):
                The original URL. Stored and returned unchanged.
            custom_alias (str | None):
                Caller-chosen shortcode.

        Returns:
            ShortenResult: original URL, short URL and shortcode.

        Raises:
            InvalidUrlError:
                If the URL is not a well-formed absolute URL.
            InvalidAliasError:
                If the custom alias is malformed.
            AliasTakenError:
                If the custom alias is already mapped.
            CodeSpaceExhaustedError:
                If every generated code collided.
            DataStoreError:
                If the Mapping Store fails.
        """
        # 1- Validate URL (and custom alias, if any)
        if not is_absolute_url(url):
            raise InvalidUrlError(f'Invalid URL format: {url!r} is not an absolute URL.')
        if custom_alias is not None:
            violation = self.codec.describe_violation(custom_alias)
            if violation is not None:
                raise InvalidAliasError(f'Invalid alias: {violation}.')

        payload = self.guard.seal(url)

        # 2- Claim the custom alias, exactly once
        if custom_alias is not None:
            try:
                mapping = self.store.put_if_absent(custom_alias, payload)
            except CodeCollisionError as e:
                logger.info('Custom alias already taken.', extra={'shortcode': custom_alias, 'event': ALIAS_TAKEN})
                raise AliasTakenError(f"Alias '{custom_alias}' is already taken.") from e

        # 3- Claim a generated code, retrying with fresh codes on collision
        else:
            mapping = None
            for attempt in range(1, self.max_collision_retries + 1):
                code = self.codec.generate()
                try:
                    mapping = self.store.put_if_absent(code, payload)
                    break
                except CodeCollisionError:
                    logger.warning(
                        'Generated shortcode collided with an existing one.',
                        extra={'shortcode': code, 'attempt': attempt, 'event': SHORTCODE_COLLISION},
                    )
            if mapping is None:
                raise CodeSpaceExhaustedError(f'Could not allocate a free shortcode after {self.max_collision_retries} attempts.')

        # 4- Build response
        logger.info('Shortened URL.', extra={'shortcode': mapping.code, 'event': SHORTCODE_MINTED})
        logger.debug('Shortcode %s targets %s.', mapping.code, url)
        return ShortenResult(
            original_url=url,
            short_url=get_short_url(self.base_url, mapping.code),
            short_code=mapping.code,
        )

    @beartype
    def resolve(self, code: str) -> str | None:
        """Return the target URL of a shortcode

        Codes that fail validation cannot have been issued, so they resolve to
        None without touching the store.

        Args:
            code (str):
                The shortcode to resolve.

        Returns:
            str | None: the original URL, or None if the code is unknown.

        Raises:
            DecryptionError:
                If the stored payload is corrupt or fails authentication.
            DataStoreError:
                If the Mapping Store fails.
        """
        if not self.codec.validate(code):
            logger.info('Rejected malformed shortcode.', extra={'shortcode': code, 'event': SHORT_URL_NOT_FOUND})
            return None

        mapping = self.store.get(code)
        if mapping is None:
            logger.info('Shortcode not found.', extra={'shortcode': code, 'event': SHORT_URL_NOT_FOUND})
            return None

        return self.guard.open(mapping.payload)
