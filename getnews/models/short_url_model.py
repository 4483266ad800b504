from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping.

    One record stands for both directions of the mapping
    (shortcode -> target and target -> shortcode).

    Attributes:
        target (str):
            The original long URL that the short code redirects to.
        shortcode (str):
            The unique short identifier representing the shortened URL.
        expires_at (Optional[datetime]):
            Time-To-Live(TTL) as Python datetime, after which the mapping
            is no longer valid and the shortcode may be reissued.

    Example:
        >>> url = ShortURLModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="Xb81nQzaPq02LmTt",
        ... )
        >>> url.target
        'https://example.com/article/123'
        >>> url.expires_at is None
        True
    """
    target: str
    shortcode: str
    expires_at: Optional[datetime] = None
