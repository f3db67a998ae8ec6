"""Unit tests for the ShortcodeCodec in shortener.py.

Test coverage includes:

1. Generation
   - Generated codes have the configured length and use only the configured alphabet.
   - Many draws from the default codec are all distinct (62**8 code space).
   - An injected random source makes generation reproducible.

2. Validation
   - Accepts 1..max_length characters of [A-Za-z0-9_-].
   - Rejects empty strings, too-long strings, forbidden characters and non-strings.
   - describe_violation() explains every rejection and returns None on success.

3. Configuration errors
   - Invalid lengths and alphabets raise BadConfigurationError.
   - Duplicate alphabet symbols are dropped.

4. Performance sanity
   - Generating thousands of codes stays well under a second.
"""

import random
import string
import time

import pytest

from linkvault.exceptions import BadConfigurationError
from linkvault.utils import ShortcodeCodec


BASE62 = set(string.ascii_letters + string.digits)


# -------------------------------
# 1. Generation
# -------------------------------


def test_generate_returns_8_base62_characters_by_default(codec):
    """Ensure the default codec mints 8-character base62 codes."""
    code = codec.generate()
    assert isinstance(code, str)
    assert len(code) == 8
    assert set(code) <= BASE62


@pytest.mark.parametrize('length', [1, 7, 12, 32])
def test_generate_respects_configured_length(length):
    codec = ShortcodeCodec(length=length)
    assert len(codec.generate()) == length


def test_generate_uses_only_configured_alphabet():
    codec = ShortcodeCodec(length=16, alphabet='ab')
    for _ in range(100):
        assert set(codec.generate()) <= {'a', 'b'}


def test_generate_draws_distinct_codes(codec):
    """Two draws from a 62**8 space should practically never collide."""
    codes = {codec.generate() for _ in range(10_000)}
    assert len(codes) == 10_000


def test_generate_is_reproducible_with_seeded_rng():
    codec_a = ShortcodeCodec(rng=random.Random(42))
    codec_b = ShortcodeCodec(rng=random.Random(42))
    assert [codec_a.generate() for _ in range(5)] == [codec_b.generate() for _ in range(5)]


# -------------------------------
# 2. Validation
# -------------------------------


@pytest.mark.parametrize('candidate', ['a', 'promo', 'summer-sale_2026', 'A' * 32, 'Gh71WPTa'])
def test_validate_accepts_well_formed_codes(codec, candidate):
    assert codec.validate(candidate) is True
    assert codec.describe_violation(candidate) is None


@pytest.mark.parametrize(
    'candidate, reason',
    [
        ('', 'must not be empty'),
        ('A' * 33, 'must not exceed 32 characters'),
        ('bad alias!', 'can only contain letters, digits, hyphens and underscores'),
        ('has/slash', 'can only contain'),
        ('ünïcode', 'can only contain'),
        (None, 'must be a string'),
        (12345, 'must be a string'),
    ],
)
def test_validate_rejects_malformed_codes(codec, candidate, reason):
    assert codec.validate(candidate) is False
    assert reason in codec.describe_violation(candidate)


def test_validate_honors_configured_max_length():
    codec = ShortcodeCodec(length=4, max_length=10)
    assert codec.validate('a' * 10) is True
    assert codec.validate('a' * 11) is False


def test_generated_codes_always_validate(codec):
    for _ in range(1000):
        assert codec.validate(codec.generate())


# -------------------------------
# 3. Configuration errors
# -------------------------------


@pytest.mark.parametrize(
    'kwargs',
    [
        {'length': 0},
        {'length': 33},
        {'length': 10, 'max_length': 9},
        {'max_length': 0},
        {'max_length': 64},
        {'alphabet': 'a'},
        {'alphabet': 'aaaa'},
        {'alphabet': 'abc!'},
        {'alphabet': ''},
    ],
)
def test_invalid_configuration_raises_error(kwargs):
    with pytest.raises(BadConfigurationError):
        ShortcodeCodec(**kwargs)


def test_duplicate_alphabet_symbols_are_dropped():
    codec = ShortcodeCodec(alphabet='aabbcc')
    assert codec.alphabet == 'abc'


# -------------------------------
# 4. Performance sanity check
# -------------------------------


def test_generate_performance(codec):
    """Minting must never be the bottleneck of a shorten request."""
    start = time.perf_counter()
    for _ in range(10_000):
        codec.generate()
    assert time.perf_counter() - start < 1.0
