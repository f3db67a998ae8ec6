from dataclasses import dataclass


@dataclass(frozen=True)
class HealthStatus:
    """Outcome of a Mapping Store liveness probe.

    Example:
        >>> HealthStatus.ok()
        HealthStatus(healthy=True, reason=None)
        >>> HealthStatus.unhealthy('probe timed out after 1000 ms')
        HealthStatus(healthy=False, reason='probe timed out after 1000 ms')
    """

    healthy: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> 'HealthStatus':
        return cls(healthy=True)

    @classmethod
    def unhealthy(cls, reason: str) -> 'HealthStatus':
        return cls(healthy=False, reason=reason)
