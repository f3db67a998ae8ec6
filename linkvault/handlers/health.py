from linkvault.application import Application
from linkvault.handlers.responses import response_200, response_503
from linkvault.types import HandlerEvent, HandlerResponse
from linkvault.utils.helpers import guarantee_500_response


@guarantee_500_response
def handler(event: HandlerEvent, app: Application) -> HandlerResponse:
    """Answer liveness probes: 200 when the Mapping Store responds in time, 503 otherwise."""
    status = app.health.check()
    if status.healthy:
        return response_200({'status': 'ok'})
    return response_503({'status': 'unavailable', 'reason': status.reason})
