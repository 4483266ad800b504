"""Shortcode generation utility

This module provides a helper function for generating random, fixed-length,
Base62 shortcodes.

Functions:
    generate_shortcode(length=16) -> str:
        Generate a random shortcode suitable for use as a URL slug.

Example:
    >>> from getnews.utils import generate_shortcode
    >>> generate_shortcode()
    'q0BzF8kTn2WcY5aL'
"""

import secrets

from getnews.constants import Shortcode


ALPHABET = Shortcode.ALPHABET
BASE = len(ALPHABET)


def generate_shortcode(length: int = Shortcode.LENGTH) -> str:
    """Generate a random Base62 shortcode.

    Characters are drawn with `secrets`, so codes are not predictable from
    previously issued ones. With the default length of 16 the code space is
    62**16 (about 4.7e28), which makes collisions negligible; the caller still
    checks the store before using a code.

    Args:
        length (int, optional):
            Number of characters. Defaults to 16.

    Returns:
        str: A random alphanumeric shortcode.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is not positive.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
