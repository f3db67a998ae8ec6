"""Shortcode generation and validation

This module provides the codec used by the Resolver Service to mint random
shortcodes and to validate client-supplied custom aliases.

Classes:
    ShortcodeCodec(length=8, max_length=32, alphabet=BASE62, rng=None):
        generate() draws a random code, validate() checks a candidate.

Example:
    >>> from linkvault.utils import ShortcodeCodec
    >>> codec = ShortcodeCodec()
    >>> code = codec.generate()
    >>> len(code)
    8
    >>> codec.validate(code)
    True
    >>> codec.validate('bad alias!')
    False
"""

import random
import secrets

from linkvault.constants import Shortcode
from linkvault.exceptions import BadConfigurationError


class ShortcodeCodec:
    """Generate and validate shortcodes.

    Generated codes are NOT unique in isolation: uniqueness is enforced by the
    Mapping Store at write time, and the Resolver Service retries on collision.
    With the default 8 characters of base62 there are 62**8 (about 2.2e14)
    possible codes.

    Args:
        length (int, optional):
            Length of generated codes. Defaults to 8.

        max_length (int, optional):
            Longest accepted code (generated or custom). Defaults to 32.

        alphabet (str, optional):
            Symbols used for generated codes. Must be a subset of [A-Za-z0-9_-].
            Defaults to base62.

        rng (random.Random, optional):
            Random source. Defaults to a secrets.SystemRandom, which is safe
            to share across threads. Inject a seeded or stubbed source in tests.

    Raises:
        BadConfigurationError:
            If the alphabet or lengths are invalid.
    """

    def __init__(
        self,
        length: int = Shortcode.DEFAULT_LENGTH,
        max_length: int = Shortcode.MAX_LENGTH,
        alphabet: str = Shortcode.DEFAULT_ALPHABET,
        rng: random.Random | None = None,
    ):
        if not 1 <= max_length <= Shortcode.MAX_LENGTH:
            raise BadConfigurationError(f'Maximum shortcode length must be within 1..{Shortcode.MAX_LENGTH} (given value: {max_length}).')
        if not 1 <= length <= max_length:
            raise BadConfigurationError(f'Shortcode length must be within 1..{max_length} (given value: {length}).')
        if len(set(alphabet)) < 2:
            raise BadConfigurationError(f'Shortcode alphabet needs at least 2 distinct symbols (given value: {alphabet!r}).')
        if not set(alphabet) <= Shortcode.ALLOWED_CHARACTERS:
            raise BadConfigurationError(f'Shortcode alphabet may only contain [A-Za-z0-9_-] (given value: {alphabet!r}).')

        self.length = length
        self.max_length = max_length
        # dict.fromkeys() drops duplicate symbols while keeping their order
        self.alphabet = ''.join(dict.fromkeys(alphabet))
        self.rng = rng if rng is not None else secrets.SystemRandom()

    def generate(self) -> str:
        """Draw a random shortcode of `self.length` symbols from `self.alphabet`."""
        return ''.join(self.rng.choice(self.alphabet) for _ in range(self.length))

    def validate(self, candidate: object) -> bool:
        """Check whether a candidate is an acceptable shortcode.

        Returns False for non-strings, empty strings, strings longer than
        `self.max_length`, and strings with characters outside [A-Za-z0-9_-].
        """
        if not isinstance(candidate, str) or not candidate:
            return False
        if len(candidate) > self.max_length:
            return False
        return set(candidate) <= Shortcode.ALLOWED_CHARACTERS

    def describe_violation(self, candidate: object) -> str | None:
        """Explain why a candidate fails validate(), None if it passes."""
        if not isinstance(candidate, str):
            return f'alias must be a string (given type: {type(candidate).__name__})'
        if not candidate:
            return 'alias must not be empty'
        if len(candidate) > self.max_length:
            return f'alias must not exceed {self.max_length} characters'
        if not set(candidate) <= Shortcode.ALLOWED_CHARACTERS:
            return 'alias can only contain letters, digits, hyphens and underscores'
        return None
