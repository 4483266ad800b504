# Log event names
REQUEST = 'request'
INVALID_REQUEST = 'INVALID_REQUEST'
NEWS_API_FAILURE = 'NEWS_API_FAILURE'
SHORTENER_FAILURE = 'SHORTENER_FAILURE'

HELP_PATH = 'help'
GENERIC_ERROR_MESSAGE = 'An error occurred. Please try again later.\n'
