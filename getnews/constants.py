from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Short URL TTL duration (data retention period) (1 year in seconds)
    ONE_YEAR = 31_536_000  # 60 * 60 * 24 * 365
    # News API results are reused for 10 minutes
    NEWS_CACHE = 600
    # Analytics summaries are recomputed at most once per hour
    ANALYTICS_CACHE = 3600


class Shortcode:
    """Shortcode generation parameters."""

    LENGTH = 16
    # Base62: 26 lowercase + 26 uppercase + 10 digits
    ALPHABET = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789'


class CacheSize:
    """Upper bounds for in-process caches."""

    NEWS = 256
    ANALYTICS = 8


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        ROOT_DOMAIN = 'ROOT_DOMAIN'
        ANALYTICS_FILE = 'ANALYTICS_FILE'
        GEOIP_DATABASE = 'GEOIP_DATABASE'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'

    class NewsAPI(StrEnum):
        API_KEY = 'NEWS_API_KEY'  # noqa: S105
        BASE_URL = 'NEWS_API_BASE_URL'


# Defaults
DEFAULT_ROOT_DOMAIN = 'getnews.tech'
DEFAULT_NEWS_API_BASE_URL = 'https://newsapi.org/v2'
DEFAULT_COUNTRY = 'us'
DEV_SUBDOMAIN = 'dev'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
