"""Data Access Object (DAO) implementation for shortcode mappings in an embedded SQLite store

This module provides the durable layer of the Mapping Store: a SQLite-based
implementation of MappingBaseDAO.

Responsibilities:
    - Atomically claim shortcodes (insert-if-absent);
    - Retrieve mappings by shortcode;
    - Answer liveness probes without touching mapping rows;
    - Translate SQLite failures into DAO exceptions.

Classes:
    MappingSQLiteDAO:
        DAO for storing and retrieving UrlMappingModel in a SQLite file.

Example:
    >>> from linkvault.dao.sqlite import MappingSQLiteDAO

    >>> dao = MappingSQLiteDAO(path='url_db.sqlite3', flush_mode='sync')

    >>> dao.put_if_absent('abc123', b'\\x00https://example.com/page')
    UrlMappingModel(code='abc123', ...)

    >>> dao.put_if_absent('abc123', b'\\x00https://example.com/other')
    Traceback (most recent call last):
        ...
    linkvault.dao.exceptions.CodeCollisionError: Shortcode 'abc123' already exists.

    >>> dao.get('abc123').payload
    b'\\x00https://example.com/page'
"""

from datetime import datetime, UTC

from beartype import beartype

from linkvault.models import UrlMappingModel
from linkvault.dao.base import MappingBaseDAO
from linkvault.dao.sqlite.mixins import SQLiteClientMixin
from linkvault.dao.sqlite.helpers import handle_sqlite_error
from linkvault.dao.exceptions import CodeCollisionError


class MappingSQLiteDAO(SQLiteClientMixin, MappingBaseDAO):
    """SQLite-based Data Access Object (DAO) for shortcode mappings

    Attributes (see SQLiteClientMixin):
        path (str):
            Location of the SQLite database file.
        connection (sqlite3.Connection):
            Shared connection, guarded by `lock`.
        flush_mode (FlushMode):
            'sync' or 'periodic' durability.

    Methods:
        put_if_absent(code: str, payload: bytes) -> UrlMappingModel:
            Insert a mapping unless the code exists.
            Raises CodeCollisionError when the code is taken.
            Raises DataStoreError on SQLite failures.

        get(code: str) -> UrlMappingModel | None:
            Retrieve a mapping, None if absent.
            Raises DataStoreError on SQLite failures.

        probe() -> bool:
            Upsert and read back the heartbeat row.
            Raises DataStoreError on SQLite failures.
    """

    @handle_sqlite_error
    @beartype
    def put_if_absent(self, code: str, payload: bytes) -> UrlMappingModel:
        """Claim a shortcode in SQLite

        The existence check is the PRIMARY KEY constraint of a single
        `INSERT ... ON CONFLICT DO NOTHING` statement, executed under the
        connection lock. Two racing callers cannot both see the code as free.

        Args:
            code (str):
                The shortcode to claim.
            payload (bytes):
                Format-tagged target URL payload.

        Returns:
            UrlMappingModel:
                The mapping as written.

        Raises:
            CodeCollisionError:
                If a mapping with the same code already exists.
            DataStoreError:
                If SQLite fails the write.

        Example:
            >>> dao.put_if_absent('promo', b'\\x00https://a.com')
            UrlMappingModel(code='promo', payload=b'\\x00https://a.com', created_at=...)
        """
        mapping = UrlMappingModel(code=code, payload=payload, created_at=datetime.now(UTC))

        with self.lock:
            with self._write_scope():
                cursor = self.connection.execute(
                    'INSERT INTO mappings (code, payload, created_at) VALUES (?, ?, ?) ON CONFLICT(code) DO NOTHING',
                    (mapping.code, mapping.payload, mapping.created_at.isoformat()),
                )
            if cursor.rowcount == 0:
                raise CodeCollisionError(code)
            self._record_write()

        return mapping

    @handle_sqlite_error
    @beartype
    def get(self, code: str) -> UrlMappingModel | None:
        """Retrieve a stored mapping by shortcode

        Runs on the same connection as the writers, so writes buffered in the
        open periodic-flush transaction are visible too.

        Args:
            code (str):
                The shortcode to look up.

        Returns:
            UrlMappingModel | None:
                The mapping if found, otherwise None.

        Raises:
            DataStoreError:
                If SQLite fails the read.
        """
        with self.lock, self._loss_guard():
            row = self.connection.execute(
                'SELECT code, payload, created_at FROM mappings WHERE code = ?',
                (code,),
            ).fetchone()

        if row is None:
            return None

        stored_code, payload, created_at = row
        return UrlMappingModel(
            code=stored_code,
            payload=bytes(payload),
            created_at=datetime.fromisoformat(created_at),
        )

    @handle_sqlite_error
    def probe(self) -> bool:
        """Write the heartbeat row and read it back

        The heartbeat lives in its own table so probes never create, alter or
        shadow a shortcode mapping.

        Returns:
            bool:
                True if the row read back matches the one just written.

        Raises:
            DataStoreError:
                If SQLite fails the round trip.
        """
        beat_at = datetime.now(UTC).isoformat()
        with self.lock:
            with self._write_scope():
                self.connection.execute(
                    'INSERT INTO heartbeat (id, beat_at) VALUES (1, ?) ON CONFLICT(id) DO UPDATE SET beat_at = excluded.beat_at',
                    (beat_at,),
                )
                row = self.connection.execute('SELECT beat_at FROM heartbeat WHERE id = 1').fetchone()

        return row is not None and row[0] == beat_at
