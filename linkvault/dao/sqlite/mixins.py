"""SQLite mixin providing shared connection setup, durability mode and integrity checks.

Responsibilities:
    - Open (or create) the embedded SQLite store and its schema
    - Configure durability according to the flush mode
    - Refuse to start on a corrupt store file
    - Own the lock serializing every statement on the shared connection
    - Detect buffered writes SQLite discarded after a failed statement
    - Run the periodic flusher

Classes:
    - SQLiteClientMixin: Base mixin to inject connection setup, flushing & integrity checks.

Example:
    Typical usage with a DAO implementation:

        >>> class MappingSQLiteDAO(SQLiteClientMixin, MappingBaseDAO):
        ...     pass
        ...
        >>> dao = MappingSQLiteDAO(path='url_db.sqlite3', flush_mode='sync')
        >>> dao._integrity_check()
        True
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path

from linkvault.constants import FlushMode, Storage, STORE_FLUSHED, STORE_WRITES_LOST
from linkvault.dao.exceptions import DataStoreError, StoreCorruptedError
from linkvault.dao.sqlite.flusher import PeriodicFlusher
from linkvault.dao.sqlite.helpers import handle_sqlite_error


logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS mappings (
    code TEXT PRIMARY KEY NOT NULL,
    payload BLOB NOT NULL,
    created_at TEXT NOT NULL
) WITHOUT ROWID;

CREATE TABLE IF NOT EXISTS heartbeat (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    beat_at TEXT NOT NULL
);
"""


class SQLiteClientMixin:
    """Mixin SQLite connection setup and durability handling for SQLite-backed DAOs.

    A single connection is shared by all threads and every statement runs under
    `self.lock`, so a read always observes writes that completed before it.

    Durability modes:
        sync:
            Each write autocommits with `synchronous=FULL` before the call returns.
        periodic:
            Writes join one open transaction, committed by a background
            PeriodicFlusher every `flush_interval_ms`. Up to one interval of
            acknowledged writes can be lost on a hard crash.

    Attributes:
        path (str):
            Location of the SQLite database file.

        flush_mode (FlushMode):
            Durability mode, see above.

        connection (sqlite3.Connection):
            Shared connection in autocommit mode (transactions are explicit).

        lock (threading.RLock):
            Serializes access to `connection`.

        generation (int):
            Incremented each time SQLite discards acknowledged, unflushed writes.
    """

    def __init__(
        self,
        path: str | Path = Storage.DEFAULT_PATH,
        flush_mode: FlushMode | str = FlushMode.PERIODIC,
        flush_interval_ms: int = Storage.DEFAULT_FLUSH_INTERVAL_MS,
    ):
        """Open the embedded store

        Args:
            path (str | Path):
                SQLite database file, created with its parent directory if missing.

            flush_mode (FlushMode | str):
                'sync' or 'periodic'. Defaults to 'periodic'.

            flush_interval_ms (int):
                Periodic flush interval in milliseconds. Defaults to 1000.

        Raises:
            StoreCorruptedError:
                If the file is not a valid database or fails the integrity check.
            DataStoreError:
                If the file cannot be opened at all (permissions, missing volume, etc.).
            ValueError:
                If flush_mode or flush_interval_ms is invalid.
        """
        self.path = str(path)
        self.flush_mode = FlushMode(flush_mode)
        self.lock = threading.RLock()
        self.connection = self._connect()
        self._pending_writes = 0
        self.generation = 0
        self._closed = False

        self._flusher = None
        if self.flush_mode is FlushMode.PERIODIC:
            self._flusher = PeriodicFlusher(self.flush, interval_ms=flush_interval_ms)
            self._flusher.start()

        logger.info(
            'Opened mapping store at %s (flush mode: %s).',
            self.path,
            self.flush_mode,
            extra={'flushMode': str(self.flush_mode), 'flushIntervalMs': flush_interval_ms},
        )

    def _connect(self) -> sqlite3.Connection:
        synchronous = 'FULL' if self.flush_mode is FlushMode.SYNC else 'NORMAL'
        try:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            connection = sqlite3.connect(
                self.path,
                timeout=Storage.BUSY_TIMEOUT_SECONDS,
                isolation_level=None,
                check_same_thread=False,
            )
        except (OSError, sqlite3.Error) as e:
            raise DataStoreError(f"Can't open SQLite store at {self.path}.") from e

        try:
            connection.execute('PRAGMA journal_mode=WAL')
            connection.execute(f'PRAGMA synchronous={synchronous}')
            connection.executescript(SCHEMA_SQL)
            healthy = self._integrity_check(connection)
        except sqlite3.OperationalError as e:
            connection.close()
            raise DataStoreError(f"Can't initialize SQLite store at {self.path}: {e}") from e
        except sqlite3.DatabaseError as e:
            connection.close()
            raise StoreCorruptedError(f'SQLite store at {self.path} is corrupt: {e}') from e

        if not healthy:
            connection.close()
            raise StoreCorruptedError(f'SQLite store at {self.path} failed its integrity check.')
        return connection

    def _integrity_check(self, connection: sqlite3.Connection | None = None) -> bool:
        """Run PRAGMA quick_check on the store

        Returns:
            bool:
                True if SQLite reports the database as 'ok'.
        """
        connection = connection or self.connection
        (verdict,) = connection.execute('PRAGMA quick_check').fetchone()
        return verdict == 'ok'

    @contextmanager
    def _write_scope(self):
        """Run one write statement. Caller holds `self.lock`.

        In periodic mode the write joins the shared transaction inside its own
        SAVEPOINT, so a statement that fails without aborting the transaction
        only undoes itself.
        """
        with self._loss_guard():
            if self.flush_mode is FlushMode.SYNC:
                yield
                return

            if not self.connection.in_transaction:
                self.connection.execute('BEGIN IMMEDIATE')
            self.connection.execute('SAVEPOINT write')
            try:
                yield
            except sqlite3.Error:
                if self.connection.in_transaction:
                    self.connection.execute('ROLLBACK TO write')
                    self.connection.execute('RELEASE write')
                raise
            self.connection.execute('RELEASE write')

    @contextmanager
    def _loss_guard(self):
        """Detect pending writes SQLite discarded on its own. Caller holds `self.lock`.

        SQLITE_FULL, IOERR, NOMEM and INTERRUPT may roll back the whole open
        transaction while the process keeps running. The buffered writes are
        then gone even though they were acknowledged.
        """
        try:
            yield
        except sqlite3.Error:
            self._discard_lost_writes()
            raise

    def _discard_lost_writes(self) -> None:
        if self._closed or self._pending_writes == 0 or self.connection.in_transaction:
            return

        lost, self._pending_writes = self._pending_writes, 0
        self.generation += 1
        logger.error(
            'SQLite rolled back the pending write transaction, %s acknowledged writes were lost.',
            lost,
            extra={'event': STORE_WRITES_LOST, 'lost': lost, 'generation': self.generation},
        )

    def _record_write(self) -> None:
        """Account for a committed or buffered write. Caller holds `self.lock`."""
        if self.flush_mode is FlushMode.PERIODIC:
            self._pending_writes += 1

    @property
    def pending_writes(self) -> int:
        """Number of acknowledged writes not yet flushed to disk."""
        return self._pending_writes

    @handle_sqlite_error
    def flush(self) -> None:
        """Commit the pending write transaction, if any

        A failed COMMIT that leaves the transaction open keeps the writes
        pending for the next flush. One that ends the transaction loses them
        and bumps `generation`.

        Raises:
            DataStoreError:
                If the commit fails.
        """
        with self.lock:
            if self._closed or not self.connection.in_transaction:
                return
            with self._loss_guard():
                self.connection.execute('COMMIT')
            flushed, self._pending_writes = self._pending_writes, 0

        logger.debug('Flushed %s pending writes.', flushed, extra={'event': STORE_FLUSHED, 'flushed': flushed})

    def close(self) -> None:
        """Stop the flusher, flush pending writes and close the connection. Idempotent."""
        if self._flusher is not None:
            self._flusher.stop()
        with self.lock:
            if self._closed:
                return
            try:
                self.flush()
            finally:
                self._closed = True
                self.connection.close()
        logger.info('Closed mapping store at %s.', self.path)
