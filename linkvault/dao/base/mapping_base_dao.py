"""Abstract base class for shortcode mapping data access objects (DAOs).

This class establishes a consistent contract for all mapping DAO implementations,
regardless of the underlying storage mechanism (e.g., the embedded SQLite store,
or the in-memory cache layered in front of it).

Responsibilities:
    - Provide an atomic insert-if-absent operation, the only mutation path.
    - Provide lookups that observe every previously completed write.
    - Standardize error handling across implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkvault.dao import MappingSQLiteDAO

        >>> dao = MappingSQLiteDAO(path='url_db.sqlite3')

        >>> dao.put_if_absent('a1b2c3', b'\\x00https://example.com/blog/article-123')
        UrlMappingModel(code='a1b2c3', payload=b'...', created_at=...)

        >>> dao.get('a1b2c3').payload
        b'\\x00https://example.com/blog/article-123'

        >>> dao.get('missing') is None
        True
"""

from abc import ABC, abstractmethod

from linkvault.models import UrlMappingModel


class MappingBaseDAO(ABC):
    """Interface for shortcode mapping data access objects (DAOs).

    Methods:
        put_if_absent(code: str, payload: bytes) -> UrlMappingModel:
            Atomically insert a mapping if the code is free.
            Raises CodeCollisionError if the code already exists.
            Raises DataStoreError on write failure.

        get(code: str) -> UrlMappingModel | None:
            Retrieve a mapping by code, None if absent.
            Raises DataStoreError on read failure.

        probe() -> bool:
            Read/write round trip used for liveness checks.

        flush() -> None:
            Persist pending writes to stable storage.

        close() -> None:
            Flush and release the underlying resources.

    Attributes:
        generation (int):
            Changes whenever the store discards acknowledged writes that never
            reached stable storage. Layers holding copies of mappings must drop
            them when it changes.

    NOTE:
        - Mappings are immutable. The DAO does not provide an interface to
          update or delete entries.
    """

    generation = 0

    @abstractmethod
    def put_if_absent(self, code: str, payload: bytes) -> UrlMappingModel:
        """Insert a new mapping unless the code is already taken.

        The existence check and the insert happen as one atomic step: when
        several callers race on the same code, exactly one succeeds.

        Args:
            code (str):
                The shortcode to claim.

            payload (bytes):
                Format-tagged target URL payload.

        Returns:
            UrlMappingModel: the mapping as written.

        Raises:
            CodeCollisionError:
                If a mapping with the same code already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, code: str) -> UrlMappingModel | None:
        """Retrieve a mapping by its shortcode.

        Args:
            code (str):
                The shortcode to look up.

        Returns:
            UrlMappingModel | None: The mapping if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def probe(self) -> bool:
        """Perform a trivial read/write round trip against the data store.

        Returns:
            bool: True if the round trip succeeded.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def flush(self) -> None:  # noqa: B027
        """Persist pending writes. No-op for stores without write buffering."""
        pass

    def close(self) -> None:  # noqa: B027
        """Release resources held by the DAO."""
        pass

    def __enter__(self) -> 'MappingBaseDAO':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
