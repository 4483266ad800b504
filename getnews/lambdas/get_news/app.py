import logging

from getnews import services
from getnews.types import Article, ParsedQuery, LambdaEvent, LambdaContext, LambdaResponse
from getnews.exceptions import ErrorKind, GetNewsError
from getnews.formatter import format_articles
from getnews.parser import parse_subdomain, parse_args, usage
from getnews.shortener import URLShortener
from getnews.utils import load_config, root_domain, subdomains, guarantee_500_response
from getnews.lambdas.get_news.constants import (
    REQUEST,
    INVALID_REQUEST,
    NEWS_API_FAILURE,
    SHORTENER_FAILURE,
    HELP_PATH,
    GENERIC_ERROR_MESSAGE,
)


logger = logging.getLogger(__name__)


def response_text(status: int, body: str) -> dict:
    return {
        'statusCode': status,
        'headers': {'Content-Type': 'text/plain; charset=utf-8'},
        'body': body,
    }


def request_path(event: dict) -> str:
    path_parameters = event.get('pathParameters') or {}
    path = path_parameters.get('args')
    if path is None:
        path = event.get('path') or ''
    return path.strip('/')


def log_request(event: dict, status: int, country: str | None) -> None:
    identity = event.get('requestContext', {}).get('identity', {})
    headers = {k.lower(): v for k, v in (event.get('headers') or {}).items()}
    logger.info(
        'Served news request.',
        extra={
            'event': REQUEST,
            'status': status,
            'country': country,
            'path': event.get('path'),
            'ip': headers.get('x-forwarded-for') or identity.get('sourceIp'),
            'userAgent': headers.get('user-agent'),
        },
    )


def shorten_articles(articles: list[Article], shortener: URLShortener) -> list[Article]:
    # Copies, so cached API results keep their original URLs
    shortened = []
    for article in articles:
        article = dict(article)
        if article.get('url'):
            article['url'] = shortener.get_shortened_url(article['url'])
        shortened.append(article)
    return shortened


def fetch_news(country: str | None, args: ParsedQuery) -> list[Article]:
    return services.get_news_client().top_headlines(
        country=country,
        category=args.get('category'),
        query=args.get('query'),
        page=args.get('page'),
        page_size=args.get('n'),
    )


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests for news

    This Lambda handler follows this procedure:
    - Step 1: Resolve the country from the request subdomain
    - Step 2: Parse the comma separated arguments in the request path
    - Step 3: Fetch matching headlines from the news API
    - Step 4: Replace every article URL with a shortlink
    - Step 5: Render the articles as a terminal table

    HTTP responses:
        200: Rendered articles (or help text for /help)
        400: Bad client request
            body: the validation message followed by the help text
        500: Internal server error
            body: generic "try again later" message

    Example:
        >>> event = {'headers': {'Host': 'us.getnews.tech'}, 'path': '/trump,n=5'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
    """
    country = None
    try:
        # 1- Resolve country from subdomain
        country = parse_subdomain(subdomains(event, root_domain()))

        # 2- Parse arguments from path
        path = request_path(event)
        if path == HELP_PATH:
            log_request(event, 200, country)
            return response_text(200, usage())
        args = parse_args(path) if path else {}
        logger.debug('Parsed request arguments.', extra={'country': country, 'arguments': args})

        # 3- Fetch headlines
        articles = fetch_news(country, args)

        # 4- Shorten article URLs
        shortener = services.get_shortener(load_config('get_news'))
        articles = shorten_articles(articles, shortener)

    except GetNewsError as e:
        if e.kind is ErrorKind.VALIDATION:
            logger.info('Invalid request. Responding with 400.', extra={'event': INVALID_REQUEST, 'reason': e.message})
            log_request(event, 400, country)
            return response_text(400, f'{e.message}\n\n{usage()}')

        event_name = NEWS_API_FAILURE if e.kind is ErrorKind.UPSTREAM else SHORTENER_FAILURE
        logger.exception('Failed to serve news. Responding with 500.', extra={'event': event_name, 'kind': str(e.kind)})
        log_request(event, 500, country)
        return response_text(500, GENERIC_ERROR_MESSAGE)

    # 5- Render articles
    log_request(event, 200, country)
    return response_text(200, format_articles(articles, color=not args.get('nocolor', False), reverse=args.get('reverse', False)))
