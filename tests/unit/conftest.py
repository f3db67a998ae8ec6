import base64
import secrets
import sqlite3

import pytest
from pytest import MonkeyPatch

from linkvault.constants import ENV
from linkvault.dao import ByteLRUCache, CachedMappingDAO, MappingSQLiteDAO
from linkvault.utils import CryptoGuard, ShortcodeCodec


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch) -> None:
    """Start every test from a clean environment (no developer overrides leak in)."""
    for group in (ENV.App, ENV.Storage, ENV.Encryption, ENV.Shortcode):
        for name in group:
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def key() -> bytes:
    return secrets.token_bytes(32)


@pytest.fixture
def key_file(tmp_path, key):
    path = tmp_path / 'encryption.key'
    path.write_text(base64.b64encode(key).decode('ascii'), encoding='ascii')
    return path


@pytest.fixture
def guard(key) -> CryptoGuard:
    return CryptoGuard(key)


@pytest.fixture
def plain_guard() -> CryptoGuard:
    return CryptoGuard.disabled()


@pytest.fixture
def codec() -> ShortcodeCodec:
    return ShortcodeCodec()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / 'data' / 'url_db.sqlite3'


@pytest.fixture
def sqlite_dao(store_path):
    """Durable store in sync mode: every acknowledged write is already on disk."""
    dao = MappingSQLiteDAO(path=store_path, flush_mode='sync')
    yield dao
    dao.close()


@pytest.fixture
def store(sqlite_dao):
    """Full Mapping Store: 1 MB cache in front of the sync-mode SQLite DAO."""
    return CachedMappingDAO(durable=sqlite_dao, cache=ByteLRUCache.from_megabytes(1))


class FaultyConnection:
    """sqlite3.Connection wrapper failing statements that start with `prefix`.

    Faults:
        interrupt: aborts the statement mid-flight, SQLite rolls back the whole transaction.
        fail:      runs the statement, then fails without ending the transaction.
        abort:     rolls back the open transaction, then fails (lost COMMIT).
    """

    def __init__(self, connection: sqlite3.Connection, prefix: str, fault: str):
        self._connection = connection
        self.prefix = prefix
        self.fault = fault

    def __getattr__(self, name):
        return getattr(self._connection, name)

    def execute(self, sql, *args):
        if self.fault is None or not sql.startswith(self.prefix):
            return self._connection.execute(sql, *args)

        if self.fault == 'interrupt':
            self._connection.set_progress_handler(lambda: 1, 1)
            try:
                return self._connection.execute(sql, *args)
            finally:
                self._connection.set_progress_handler(None, 1)

        if self.fault == 'fail':
            self._connection.execute(sql, *args)
            raise sqlite3.OperationalError('database or disk is full')

        self._connection.execute('ROLLBACK')
        raise sqlite3.OperationalError('disk I/O error')


@pytest.fixture
def inject_fault():
    """Install a FaultyConnection on a SQLite DAO; disarmed again before the DAO is closed."""
    installed = []

    def _inject(dao, prefix: str, fault: str) -> FaultyConnection:
        connection = FaultyConnection(dao.connection, prefix, fault)
        dao.connection = connection
        installed.append(connection)
        return connection

    yield _inject
    for connection in installed:
        connection.fault = None
