import base64
import json
import logging

from linkvault.application import Application
from linkvault.constants import INVALID_REQUEST_BODY
from linkvault.dao.exceptions import DAOError
from linkvault.exceptions import ClientInputError, InvalidAliasError, LinkVaultError
from linkvault.handlers.responses import response_200, response_400, response_500, response_for_error
from linkvault.types import HandlerEvent, HandlerResponse
from linkvault.utils.helpers import guarantee_500_response


logger = logging.getLogger(__name__)


def _request_body(event: HandlerEvent) -> str:
    body = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body, validate=True).decode('utf-8')
    return body


@guarantee_500_response
def handler(event: HandlerEvent, app: Application) -> HandlerResponse:
    """Handle incoming requests to shorten URLs

    This handler follows this procedure to shorten URLs:
    - Step 1: Extract `url` and optional `custom_alias` from the JSON body
    - Step 2: Shorten via the ResolverService
    - Step 3: Respond to the client with 200 success

    HTTP responses:
        200: Successful URL shortening
            original_url: original url (provided in request)
            short_url: newly generated short url
            short_code: newly generated shortcode or the custom alias
        400: Bad client request
            invalid JSON, missing url, invalid URL or invalid alias
        409: Conflict
            custom alias already taken
        500: Internal server error
            shortcode space exhausted, store or encryption failure

    Args:
        event (HandlerEvent):
            Request event in API Gateway proxy format.
        app (Application):
            Application wired by linkvault.application.bootstrap().

    Returns:
        HandlerResponse:
            Response with status code, headers and JSON body.

    Example:
        >>> event = {'body': '{"url": "https://example.com"}'}
        >>> response = handler(event, app)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['short_url']
        'http://127.0.0.1:8080/Gh71WPTa'
    """
    # 1- Extract URL and alias from request body
    try:
        request_body = json.loads(_request_body(event))
    except ValueError:
        return response_400('invalid JSON body', INVALID_REQUEST_BODY)

    if not isinstance(request_body, dict):
        return response_400('JSON body must be an object', INVALID_REQUEST_BODY)

    url = request_body.get('url')
    if not url or not isinstance(url, str):
        return response_400("missing 'url' in JSON body", INVALID_REQUEST_BODY)

    custom_alias = request_body.get('custom_alias')
    if custom_alias is not None and not isinstance(custom_alias, str):
        return response_400("'custom_alias' must be a string", InvalidAliasError.error_code)

    # 2- Shorten URL
    try:
        result = app.service.shorten(url, custom_alias)
    except ClientInputError as e:
        logger.info('Rejected shorten request: %s', e, extra={'errorCode': e.error_code})
        return response_for_error(e)
    except LinkVaultError as e:
        logger.exception('Failed to shorten URL. Responding with 500.', extra={'errorCode': e.error_code})
        return response_for_error(e)
    except DAOError:
        logger.exception('Mapping store failed while shortening URL. Responding with 500.')
        return response_500()

    # 3- Return successful response to client
    return response_200(result.to_dict())
