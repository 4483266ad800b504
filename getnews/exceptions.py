"""Application-wide exception types.

Every exception raised on purpose by getnews derives from GetNewsError and
carries a `kind` so callers can dispatch on the category of failure without
walking the class hierarchy.

Classes:
    ErrorKind:
        Category of a failure (validation, storage, not_found, ...).

    GetNewsError:
        Base class for all application-specific errors.

    ValidationError:
        Raised when user input (query arguments, subdomain) is malformed.

    StorageError:
        Raised when the shortlink store is unreachable or an operation fails.

    NewsAPIError:
        Raised when the upstream news API fails or answers with garbage.

    ConfigurationError / MissingEnvironmentVariableError / BadConfigurationError:
        Raised when the application is misconfigured.

Example:
    >>> from getnews.exceptions import ErrorKind, ValidationError
    >>> try:
    ...     raise ValidationError('"xx" is not a valid category.')
    ... except GetNewsError as e:
    ...     e.kind is ErrorKind.VALIDATION
    True
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    VALIDATION = 'validation'
    STORAGE = 'storage'
    NOT_FOUND = 'not_found'
    UPSTREAM = 'upstream'
    CONFIGURATION = 'configuration'
    INTERNAL = 'internal'


class GetNewsError(Exception):
    """Base exception for all application-specific errors."""

    kind = ErrorKind.INTERNAL
    error_code = 'app:getnews_error'

    def __init__(self, message: str = ''):
        super().__init__(message)
        self.message = message


class ValidationError(GetNewsError):
    """Raised when a request carries invalid arguments.

    The message is meant for the end user and is relayed verbatim.
    """

    kind = ErrorKind.VALIDATION
    error_code = 'request:validation_error'


class StorageError(GetNewsError):
    """Raised when the data store is unavailable or an operation on it fails."""

    kind = ErrorKind.STORAGE
    error_code = 'store:storage_error'


class NewsAPIError(GetNewsError):
    """Raised when the news API can't be reached or responds with an error."""

    kind = ErrorKind.UPSTREAM
    error_code = 'upstream:news_api_error'


class ConfigurationError(GetNewsError):
    """Base exception for all configuration errors."""

    kind = ErrorKind.CONFIGURATION
    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
