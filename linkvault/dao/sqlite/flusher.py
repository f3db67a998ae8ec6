"""Background flusher for stores running in periodic flush mode.

Writes acknowledged between two ticks live only in the store's open
transaction. A hard crash loses at most one interval of them.
"""

import logging
import threading
from collections.abc import Callable

from linkvault.dao.exceptions import DataStoreError


logger = logging.getLogger(__name__)


class PeriodicFlusher(threading.Thread):
    """Daemon thread calling `flush` every `interval_ms` milliseconds until stopped.

    Example:
        >>> flusher = PeriodicFlusher(dao.flush, interval_ms=1000)
        >>> flusher.start()
        >>> ...
        >>> flusher.stop()
    """

    def __init__(self, flush: Callable[[], None], interval_ms: int):
        if interval_ms <= 0:
            raise ValueError(f'Flush interval must be a positive number of milliseconds (given value: {interval_ms}).')

        super().__init__(name='linkvault-flusher', daemon=True)
        self._flush = flush
        self.interval = interval_ms / 1000
        self._stopped = threading.Event()

    def run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self._flush()
            except DataStoreError:
                # Keep ticking: the next interval retries the same pending transaction
                logger.exception('Periodic flush failed.')

    def stop(self, timeout: float | None = None) -> None:
        self._stopped.set()
        if self.is_alive() and threading.current_thread() is not self:
            self.join(timeout)
