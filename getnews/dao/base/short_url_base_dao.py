"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, in-process memory).

Responsibilities:
    - Store both directions of a mapping (shortcode -> target, target -> shortcode).
    - Refuse to overwrite an existing mapping in either direction.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from getnews.models import ShortURLModel
        >>> from getnews.dao.redis import ShortURLRedisDAO

        >>> dao = ShortURLRedisDAO(...)

        >>> short_url = ShortURLModel(
        ...     target="https://example.com/blog/article-123",
        ...     shortcode="a1b2c3d4e5f6g7h8",
        ... )
        >>> dao.insert(short_url)

        >>> dao.get("a1b2c3d4e5f6g7h8").target
        'https://example.com/blog/article-123'

        >>> dao.get_by_target("https://example.com/blog/article-123").shortcode
        'a1b2c3d4e5f6g7h8'
"""

from abc import ABC, abstractmethod

from getnews.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Atomically insert both directions of a mapping.
            Raises ShortURLAlreadyExistsError if the shortcode is taken.
            Raises TargetAlreadyShortenedError if the target is already mapped.
            Raises StorageError on connection or write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a mapping by shortcode.
            Raises ShortURLNotFoundError if the entry does not exist.

        get_by_target(target: str, **kwargs) -> ShortURLModel:
            Retrieve a mapping by target URL.
            Raises ShortURLNotFoundError if the entry does not exist.

        exists(shortcode: str, **kwargs) -> bool:
            Check whether a shortcode is currently mapped.

    NOTE:
        - Mappings are expected to expire automatically. The DAO does not
          provide an interface to manually delete entries.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store.

        Both directions must become visible together: no reader may observe
        one direction without the other.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a mapping with the same shortcode already exists.

            TargetAlreadyShortenedError:
                If a mapping with the same target already exists.

            StorageError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its shortcode.

        Raises:
            ShortURLNotFoundError:
                If no mapping with the given shortcode exists.

            StorageError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get_by_target(self, target: str, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its target URL.

        Raises:
            ShortURLNotFoundError:
                If the target URL has no mapping.

            StorageError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def exists(self, shortcode: str, **kwargs) -> bool:
        """Check whether a shortcode is mapped.

        Raises:
            StorageError:
                If there is an error in the data store.
        """
        pass
