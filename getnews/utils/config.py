"""Utility functions for application configuration management.

Handlers read their backend settings (e.g. Redis connection details) from
**AWS AppConfig**. Each environment (`APP_ENV`) has a dedicated AppConfig
*Environment* within the AppConfig *Application* identified by `APP_NAME`.
The configuration JSON follows this structure:

    {
        "build": 7,
        "active_backend": "redis",
        "configs": {
            "get_news": {
                "redis": {"host": "...", "port": 6379, "db": 0}
            },
            "redirect_url": {
                "redis": { ... }
            }
        }
    }

`"active_backend": "memory"` with an empty section selects the in-process
store, which is handy when running locally without Redis.

Secrets and per-deployment values come from plain environment variables.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), default `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the key prefix for DAOs, or None if `APP_NAME` is not set.

    root_domain() -> str
        Return the registered domain subdomains are resolved against.

    news_api_key() -> str
        Return the news API key (`NEWS_API_KEY`), which must be set.

    news_api_base_url() -> str
        Return the news API base URL.

    geoip_database() -> str | None
        Return the GeoIP database path (`GEOIP_DATABASE`), or None if not set.

    load_config(lambda_name: str) -> dict
        Load the configuration section for a handler from AWS AppConfig
        (or from a local AppConfig agent when running under SAM).

Example:
    >>> from getnews.utils.config import load_config
    >>> config = load_config('get_news')
    >>> config['redis']['host']
    'redis.internal'
"""

import os
import json
import functools
import logging
import urllib.parse
import urllib.request
from collections.abc import Callable

import boto3

from getnews.constants import ENV, DEFAULT_ROOT_DOMAIN, DEFAULT_NEWS_API_BASE_URL
from getnews.utils.helpers import require_environment
from getnews.utils.runtime import LOCAL_APP_ENV, running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, LOCAL_APP_ENV).lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'getnews'
        >>> os.environ['APP_ENV'] = 'prod'
        >>> app_prefix()
        'getnews:prod'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def root_domain() -> str:
    return os.environ.get(ENV.App.ROOT_DOMAIN, DEFAULT_ROOT_DOMAIN).lower()


@require_environment(ENV.NewsAPI.API_KEY)
def news_api_key() -> str:
    return os.environ[ENV.NewsAPI.API_KEY]


def news_api_base_url() -> str:
    return os.environ.get(ENV.NewsAPI.BASE_URL, DEFAULT_NEWS_API_BASE_URL).rstrip('/')


def geoip_database() -> str | None:
    return os.environ.get(ENV.App.GEOIP_DATABASE) or None


def _select_section(config: dict, lambda_name: str) -> dict:
    backend = config['active_backend']
    return {backend: config['configs'][lambda_name].get(backend, {})}


def _validate_agent_url(url: str | None) -> str:
    if not url:
        return ''
    components = urllib.parse.urlparse(url)
    if components.scheme not in {'http', 'https'}:
        raise ValueError(f'Bad scheme {url}')
    if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal'}:
        raise ValueError(f'Bad host {url}')
    if components.port not in {2772, None}:
        raise ValueError(f'Bad port {url}')
    return url


def _sam_load_local_appconfig(func: Callable[[str], dict]) -> Callable[[str], dict]:
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the configuration JSON from the local agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str, *args, **kwargs) -> dict:
        agent_url = _validate_agent_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name, *args, **kwargs)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            config = json.load(r)

        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
        return _select_section(config, lambda_name)

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> dict:
    """Load configuration for a given Lambda from AWS AppConfig

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the handler (e.g. "get_news" or "redirect_url").

    Returns:
        dict: {<active backend>: <backend settings>} for this handler.

    Raises:
        MissingEnvironmentVariableError:
            If any AppConfig identifier is missing.
        KeyError:
            If the document has no section for this handler.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    config = json.loads(content.decode('utf-8'))

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
    return _select_section(config, lambda_name)
