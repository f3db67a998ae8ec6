"""Response builders shared by the handlers (API Gateway proxy format).

Every error body has the same shape so callers can tell their own mistakes
from service failures:

    {"message": "...", "error_code": "...", "retryable": false}

4xx responses are never retryable as-is; 5xx responses are.
"""

import json

from linkvault.constants import STORE_UNAVAILABLE
from linkvault.exceptions import AliasTakenError, ClientInputError, LinkVaultError
from linkvault.types import HandlerResponse, ResponseBody


JSON_HEADERS = {'Content-Type': 'application/json'}


def json_response(status_code: int, body: ResponseBody, headers: dict[str, str] | None = None) -> HandlerResponse:
    return {
        'statusCode': status_code,
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def error_body(message: str, error_code: str, retryable: bool) -> ResponseBody:
    return {'message': message, 'error_code': error_code, 'retryable': retryable}


def response_200(body: ResponseBody) -> HandlerResponse:
    return json_response(200, body)


def response_302(*, location: str) -> HandlerResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': '',  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    base = 'Bad Request'
    return json_response(400, error_body(base if not message else f'{base} ({message})', error_code or 'client:bad_request', False))


def response_404(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    return json_response(404, error_body(message or 'Not Found', error_code or 'client:not_found', False))


def response_409(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    return json_response(409, error_body(message or 'Conflict', error_code or 'client:conflict', False))


def response_500(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    base = 'Internal Server Error'
    return json_response(500, error_body(base if not message else f'{base} ({message})', error_code or STORE_UNAVAILABLE, True))


def response_503(body: ResponseBody) -> HandlerResponse:
    return json_response(503, body)


def response_for_error(error: LinkVaultError) -> HandlerResponse:
    """Map an application error to its HTTP response.

    AliasTakenError -> 409, other client input errors -> 400, everything else -> 500.
    """
    if isinstance(error, AliasTakenError):
        return response_409(str(error), error.error_code)
    if isinstance(error, ClientInputError):
        return response_400(str(error), error.error_code)
    return response_500(error_code=error.error_code)
