from linkvault.models.url_mapping_model import UrlMappingModel
from linkvault.models.shorten_result_model import ShortenResult
from linkvault.models.health_status_model import HealthStatus


__all__ = [
    'UrlMappingModel',
    'ShortenResult',
    'HealthStatus',
]
