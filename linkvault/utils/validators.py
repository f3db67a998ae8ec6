"""URL validation helpers.

Functions:
    is_absolute_url(url) -> bool
        True if the string is a well-formed absolute URL (scheme + host).

Example:
    >>> is_absolute_url('https://example.com')
    True
    >>> is_absolute_url('not-a-url')
    False
    >>> is_absolute_url('/relative/path')
    False
"""

import re
import urllib.parse


# RFC 3986: scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*$')


def is_absolute_url(url: object) -> bool:
    """Check that a value is an absolute URL with a scheme and a host

    Whitespace and control characters anywhere in the string are rejected,
    and so are strings that cannot be stored as UTF-8 (lone surrogates).
    URLs are stored and returned byte-for-byte, never normalized.
    """
    if not isinstance(url, str) or not url:
        return False
    try:
        url.encode('utf-8')
    except UnicodeEncodeError:
        return False
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        return False

    try:
        components = urllib.parse.urlsplit(url)
        # Accessing .port validates it (raises ValueError when out of range)
        components.port
    except ValueError:
        return False

    if not SCHEME_PATTERN.match(components.scheme):
        return False
    return bool(components.netloc) and bool(components.hostname)
