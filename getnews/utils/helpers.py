"""Helper utilities for AWS lambda functions.

Functions:
    request_host() -> str
        Extract the host name (without port) the client requested
    subdomains() -> list[str]
        List the subdomains of the requested host below the root domain
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler exceptions into a 500 response

Example:
    Typical usage inside a Lambda handler:

        >>> from getnews.utils.helpers import subdomains
        >>> event = {'headers': {'Host': 'us.dev.getnews.tech'}}
        >>> subdomains(event, 'getnews.tech')
        ['dev', 'us']
"""

import os
import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from getnews.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from getnews.exceptions import MissingEnvironmentVariableError
from getnews.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def request_host(event: dict[str, Any]) -> str:
    """Return the lowercase host name of the request, without port

    Prefers the Host header (it keeps the subdomain the client typed) and
    falls back to the API Gateway domain name.
    """
    headers = {k.lower(): v for k, v in (event.get('headers') or {}).items()}
    host = headers.get('host') or event.get('requestContext', {}).get('domainName', '')
    return host.split(':', 1)[0].lower()


def subdomains(event: dict[str, Any], root_domain: str) -> list[str]:
    """List the subdomains of the requested host below the root domain

    Labels are ordered from the one closest to the root domain to the
    leftmost one, e.g. 'us.dev.getnews.tech' -> ['dev', 'us'].
    Hosts outside the root domain have no subdomains.

    Args:
        event (dict): API Gateway event object passed to Lambda handler
        root_domain (str): the service's registered domain, e.g. 'getnews.tech'

    Returns:
        list[str]: subdomain labels, possibly empty
    """
    host = request_host(event)
    root = root_domain.lower().strip('.')
    if not host.endswith(f'.{root}'):
        return []
    labels = host[: -len(root) - 1].split('.')
    return list(reversed(labels))


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('NEWS_API_KEY')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'NEWS_API_KEY'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with HTTP 500 when a Lambda handler raises

    When running locally the exception is re-raised instead, so it shows up
    in the developer's console.

    Example:
        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
    """

    @functools.wraps(handler)
    def wrapper(event: dict[str, Any], context: Any) -> dict[str, Any]:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in Lambda handler. Responding with 500.')
            return {
                'statusCode': 500,
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
