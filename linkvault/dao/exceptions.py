"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    CodeCollisionError:
        Raised when inserting a mapping whose shortcode is already taken.

    DataStoreError:
        Raised when the data store fails an operation (e.g., I/O errors, locked file, closed store).

    StoreCorruptedError:
        Raised at startup when the durable store cannot be opened or fails its integrity check.

Example:
    >>> from linkvault.dao.exceptions import CodeCollisionError
    >>> raise CodeCollisionError('promo')
    Traceback (most recent call last):
        ...
    linkvault.dao.exceptions.CodeCollisionError: Shortcode 'promo' already exists.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class CodeCollisionError(DAOError):
    """Exception raised when attempting to insert a shortcode that already exists in the data store."""

    def __init__(self, code: str):
        super().__init__(f"Shortcode '{code}' already exists.")
        self.code = code


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. I/O errors, a locked database file, a closed store, etc.
    """

    pass


class StoreCorruptedError(DataStoreError):
    """Exception raised when the durable structure is unreadable or corrupt.

    Raised only while opening the store. The process must refuse to start.
    """

    pass
