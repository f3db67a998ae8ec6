from linkvault.dao.sqlite.mixins import SQLiteClientMixin
from linkvault.dao.sqlite.flusher import PeriodicFlusher
from linkvault.dao.sqlite.mapping_sqlite_dao import MappingSQLiteDAO


__all__ = [
    'SQLiteClientMixin',
    'PeriodicFlusher',
    'MappingSQLiteDAO',
]
