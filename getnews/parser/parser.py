"""Request parsing for getnews

Turns the pieces of an incoming request into validated values:

    us.getnews.tech/trump,category=business,n=5
    ^^              ^^^^^^^^^^^^^^^^^^^^^^^^^^^
    country         argument string

Functions:
    parse_subdomain(subdomains: Sequence[str]) -> str | None
        Resolve the country code encoded in the request subdomain.

    parse_args(arg_string: str) -> ParsedQuery
        Parse a comma separated argument string into a dictionary.

    usage() -> str
        Render help text from the argument registry.

Both parsers are pure and fail fast: the first invalid piece raises a
ValidationError and nothing is returned.

Example:
    >>> parse_subdomain(['dev', 'us'])
    'us'
    >>> parse_args('trump,category=business,n=5')
    {'query': 'trump', 'category': 'business', 'n': 5}
    >>> parse_args('multi+word+query')
    {'query': 'multi word query'}
"""

from collections.abc import Sequence

from getnews.constants import DEV_SUBDOMAIN
from getnews.exceptions import ValidationError
from getnews.parser.grammar import ARGUMENT_SPECS, VALID_COUNTRIES, VALID_CATEGORIES
from getnews.types import ParsedQuery


QUERY_KEY = 'query'


def parse_subdomain(subdomains: Sequence[str]) -> str | None:
    """Resolve the country code from the request subdomains

    Subdomains are ordered the way web frameworks usually expose them, so
    the last element is the label closest to the start of the host name
    (`us.dev.getnews.tech` -> ['dev', 'us']).

    Args:
        subdomains (Sequence[str]):
            Subdomain labels of the request host.

    Returns:
        str | None:
            The two-letter country code, or None when there is no subdomain
            or the subdomain is the development marker.

    Raises:
        ValidationError:
            If the subdomain is not a valid country code.
    """
    if not subdomains:
        return None
    country = subdomains[-1]
    if country == DEV_SUBDOMAIN:
        return None
    if country not in VALID_COUNTRIES:
        raise ValidationError(f'{country} is not a valid country to query.')
    return country


def parse_args(arg_string: str) -> ParsedQuery:
    """Parse a comma separated argument string

    Chunks are handled in order and independently; a repeated argument
    overwrites the earlier value. The first chunk is the free-text query if
    it contains no '=' ('+' stands for a space there).

    Args:
        arg_string (str):
            Everything after the leading slash of the request path.

    Returns:
        ParsedQuery:
            Mapping of argument name (and optionally 'query') to its parsed value.

    Raises:
        ValidationError:
            On the first malformed chunk, unknown argument, or invalid value.
    """
    args: ParsedQuery = {}
    for index, chunk in enumerate(arg_string.split(',')):
        if index == 0 and '=' not in chunk:
            if not chunk:
                raise ValidationError(f'Unable to parse "{chunk}".')
            args[QUERY_KEY] = chunk.replace('+', ' ')
            continue
        name, value = _split_chunk(chunk)
        spec = ARGUMENT_SPECS.get(name)
        if spec is None:
            raise ValidationError(f'Invalid arguments "{chunk}".')
        args[name] = spec.parse(name, value)
    return args


def _split_chunk(chunk: str) -> tuple[str, str | None]:
    parts = chunk.split('=')
    if len(parts) == 1:
        # Only a bare flag name may go without a value
        spec = ARGUMENT_SPECS.get(chunk)
        if spec is None or not spec.flag:
            raise ValidationError(f'Unable to parse "{chunk}".')
        return chunk, None
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValidationError(f'Unable to parse "{chunk}".')
    return parts[0], parts[1]


def usage() -> str:
    """Render help text listing every recognized argument."""
    width = max(len(name) for name in ARGUMENT_SPECS)
    lines = [
        'Usage: curl getnews.tech/[query][,argument=value...]',
        '       curl <country>.getnews.tech/[query][,argument=value...]',
        '',
        'Arguments:',
    ]
    lines.extend(f'  {spec.name.ljust(width)}  {spec.description}' for spec in ARGUMENT_SPECS.values())
    lines.extend(
        [
            '',
            f'Categories: {", ".join(VALID_CATEGORIES)}',
            f'Countries: {", ".join(sorted(VALID_COUNTRIES))}',
            '',
        ]
    )
    return '\n'.join(lines)
