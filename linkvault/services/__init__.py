from linkvault.services.resolver_service import ResolverService
from linkvault.services.health_reporter import HealthReporter


__all__ = [
    'ResolverService',
    'HealthReporter',
]
