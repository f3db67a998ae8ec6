import logging

from linkvault.application import Application
from linkvault.constants import MISSING_SHORTCODE, REDIRECT_SUCCESS, SHORT_URL_NOT_FOUND
from linkvault.dao.exceptions import DAOError
from linkvault.exceptions import LinkVaultError
from linkvault.handlers.responses import response_302, response_400, response_404, response_500, response_for_error
from linkvault.types import HandlerEvent, HandlerResponse
from linkvault.utils.helpers import guarantee_500_response


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HandlerEvent, app: Application) -> HandlerResponse:
    """Handle incoming requests to redirect short URLs

    This handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode via the ResolverService
    - Step 3: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            missing shortcode in path parameters
        404: Not found
            shortcode was never issued
        500: Internal server error
            stored payload failed decryption, or the store failed

    Example:
        >>> event = {'pathParameters': {'shortcode': 'Gh71WPTa'}}
        >>> response = handler(event, app)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400("missing 'shortcode' in path", MISSING_SHORTCODE)

    # 2- Resolve shortcode
    try:
        target_url = app.service.resolve(shortcode)
    except LinkVaultError as e:
        logger.exception(
            'Failed to resolve short URL. Responding with 500.',
            extra={'shortcode': shortcode, 'errorCode': e.error_code},
        )
        return response_for_error(e)
    except DAOError:
        logger.exception('Mapping store failed while resolving short URL. Responding with 500.', extra={'shortcode': shortcode})
        return response_500()

    if target_url is None:
        return response_404(f"Short URL '{shortcode}' not found", SHORT_URL_NOT_FOUND)

    # 3- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=target_url)
