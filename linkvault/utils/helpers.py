"""Helper utilities for handlers and entry points.

Functions:
    get_short_url(base_url, shortcode) -> str
        Get string representation of short URL for a given shortcode
    guarantee_500_response(func) -> Callable
        Decorator: Turn unexpected handler exceptions into a generic 500 response

Example:
    >>> from linkvault.utils.helpers import get_short_url
    >>> get_short_url('https://sho.rt/', 'abc123')
    'https://sho.rt/abc123'
"""

import json
import logging
import functools
from collections.abc import Callable

from linkvault.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from linkvault.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def get_short_url(base_url: str, shortcode: str) -> str:
    """Get string representation of shortened URL

    Args:
        base_url (str): public base URL of the service, with or without trailing slash
        shortcode (str): shortcode

    Returns:
        str: short url string representation
    """
    return f'{base_url.rstrip("/")}/{shortcode}'


def guarantee_500_response(func: Callable) -> Callable:
    """Decorator: respond with a generic 500 when a handler raises unexpectedly

    When running locally the exception is re-raised instead, so the traceback
    reaches the developer.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR, 'handler': func.__qualname__},
            )
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': UNKNOWN_INTERNAL_SERVER_ERROR,
                        'retryable': True,
                    }
                ),
            }

    return wrapper
