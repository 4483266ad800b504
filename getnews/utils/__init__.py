from getnews.utils.config import app_env, app_name, app_prefix, root_domain, news_api_key, news_api_base_url, load_config
from getnews.utils.helpers import request_host, subdomains, require_environment, guarantee_500_response
from getnews.utils.shortener import generate_shortcode
from getnews.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'root_domain',
    'news_api_key',
    'news_api_base_url',
    'load_config',
    'request_host',
    'subdomains',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
