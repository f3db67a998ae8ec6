"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if the service runs on a developer machine, False otherwise.

Example:
    >>> from linkvault.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'prod'
    >>> running_locally()
    False
"""

import os

from linkvault.constants import ENV


def running_locally() -> bool:
    """Return True if APP_ENV is 'local', False otherwise (including when unset)."""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local'
