"""Liveness reporting for the Mapping Store

Classes:
    HealthReporter:
        Runs a bounded-time read/write probe against the store.

Example:
    >>> reporter = HealthReporter(store, timeout_ms=1000)
    >>> reporter.check()
    HealthStatus(healthy=True, reason=None)
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FutureTimeoutError

from linkvault.constants import Defaults, HEALTH_CHECK_FAILED
from linkvault.dao.base import MappingBaseDAO
from linkvault.dao.exceptions import DAOError
from linkvault.models import HealthStatus


logger = logging.getLogger(__name__)


class HealthReporter:
    """Report whether the Mapping Store answers a probe in time

    The probe runs on a dedicated single-thread executor so a store stuck
    behind its lock cannot stall the caller beyond `timeout_ms`. At most one
    probe is in flight: while a timed-out probe is still blocked, further
    checks report unhealthy without queueing another one.
    """

    def __init__(self, store: MappingBaseDAO, timeout_ms: int = Defaults.HEALTH_TIMEOUT_MS):
        if timeout_ms <= 0:
            raise ValueError(f'Health check timeout must be positive (given value: {timeout_ms}).')
        self.store = store
        self.timeout_ms = timeout_ms
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='linkvault-health')
        self._lock = threading.Lock()
        self._inflight: Future | None = None

    def check(self) -> HealthStatus:
        with self._lock:
            if self._inflight is not None and not self._inflight.done():
                return self._unhealthy('previous store probe is still pending')
            future = self._inflight = self._executor.submit(self.store.probe)

        try:
            succeeded = future.result(timeout=self.timeout_ms / 1000)
        except FutureTimeoutError:
            return self._unhealthy(f'store probe timed out after {self.timeout_ms} ms')
        except DAOError as e:
            return self._unhealthy(f'store probe failed: {e}')

        if not succeeded:
            return self._unhealthy('store probe read back a different heartbeat')
        return HealthStatus.ok()

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _unhealthy(self, reason: str) -> HealthStatus:
        logger.warning('Health check failed: %s.', reason, extra={'event': HEALTH_CHECK_FAILED})
        return HealthStatus.unhealthy(reason)
