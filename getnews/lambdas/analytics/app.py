import os
import json
import logging

from getnews import services
from getnews.types import LambdaEvent, LambdaContext, LambdaResponse
from getnews.analytics import load_analytics
from getnews.constants import ENV
from getnews.exceptions import StorageError
from getnews.utils import guarantee_500_response


logger = logging.getLogger(__name__)


def response_json(status: int, body: dict) -> dict:
    return {
        'statusCode': status,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Serve a summary of recent requests

    HTTP responses:
        200: {"total": ..., "by_country": {...}, "by_visitor_country": {...}, "by_status": {...}, "requests": [...]}
        500: analytics file not configured or unreadable
    """
    path = os.environ.get(ENV.App.ANALYTICS_FILE)
    if not path:
        logger.error('ANALYTICS_FILE is not set. Responding with 500.')
        return response_json(500, {'message': 'Internal Server Error'})

    try:
        summary = load_analytics(path, services.get_analytics_cache(), services.get_geoip_lookup())
    except StorageError:
        logger.exception('Failed to load analytics. Responding with 500.', extra={'path': path})
        return response_json(500, {'message': 'Internal Server Error'})

    return response_json(200, summary)
