import functools
import sqlite3
from typing import TypeVar, Any
from collections.abc import Callable

from linkvault.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_sqlite_error(method: F) -> F:
    """Wrap SQLite-interacting DAO methods to handle data store errors

    Args:
        method (Callable[..., Any]):
            DAO method performing SQLite operations which may raise sqlite3.Error.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any SQLite failure
            (I/O errors, locked database file, closed connection, etc.).

    Example:
        >>> @handle_sqlite_error
        ... def count(self):
        ...     return self.connection.execute('SELECT COUNT(*) FROM mappings').fetchone()[0]
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except sqlite3.Error as e:
            raise DataStoreError(f'SQLite store at {self.path} failed during {method.__name__}(): {e}') from e

    return wrapper
