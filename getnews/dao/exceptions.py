"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a ShortURLModel is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a ShortURLModel whose shortcode is taken.

    TargetAlreadyShortenedError:
        Raised when attempting to insert a ShortURLModel whose target is already mapped.

Connectivity problems are reported with getnews.exceptions.StorageError.

Example:
    >>> from getnews.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    getnews.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' not found.
"""

from getnews.exceptions import ErrorKind, GetNewsError


class DAOError(GetNewsError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ShortURLNotFoundError(DAOError):
    """Exception raised when a ShortURLModel is not found in the data store."""

    kind = ErrorKind.NOT_FOUND
    error_code = 'dao:short_url_not_found'


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when a shortcode is already mapped in the data store."""

    error_code = 'dao:short_url_already_exists'


class TargetAlreadyShortenedError(DAOError):
    """Exception raised when a target URL already has a shortcode in the data store."""

    error_code = 'dao:target_already_shortened'
