"""Argument grammar for getnews queries

Declares every argument a client may pass in the request path, together with
the function that validates and converts its raw string value.

Each value parser has the signature `parse(name, raw_value) -> value`, where
`raw_value` is None for a bare flag (`reverse` instead of `reverse=true`).
Parsers raise ValidationError with a message meant for the end user.

Attributes:
    VALID_COUNTRIES (frozenset[str]):
        Two-letter country codes the news API accepts.

    VALID_CATEGORIES (tuple[str, ...]):
        News categories the news API accepts.

    ARGUMENT_SPECS (Mapping[str, ArgumentSpec]):
        Read-only registry of recognized arguments, keyed by name.

Example:
    >>> from getnews.parser.grammar import ARGUMENT_SPECS
    >>> spec = ARGUMENT_SPECS['n']
    >>> spec.parse('n', '15')
    15
    >>> spec.parse('n', '100')
    Traceback (most recent call last):
        ...
    getnews.exceptions.ValidationError: Argument "n" must be an integer such that 1 <= n < 100.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from collections.abc import Callable, Mapping

from getnews.exceptions import ValidationError


# fmt: off
VALID_COUNTRIES = frozenset({
    'ae', 'ar', 'at', 'au', 'be', 'bg', 'br', 'ca', 'ch', 'cn', 'co', 'cu', 'cz',
    'de', 'eg', 'fr', 'gb', 'gr', 'hk', 'hu', 'id', 'ie', 'il', 'in', 'it', 'jp',
    'kr', 'lt', 'lv', 'ma', 'mx', 'my', 'ng', 'nl', 'no', 'nz', 'ph', 'pl', 'pt',
    'ro', 'rs', 'ru', 'sa', 'se', 'sg', 'si', 'sk', 'th', 'tr', 'tw', 'ua', 'us',
    've', 'za',
})

VALID_CATEGORIES = (
    'business', 'entertainment', 'general', 'health', 'science', 'sports', 'technology',
)
# fmt: on

MAX_RESULTS = 100
INTEGER_PATTERN = re.compile(r'-?[0-9]+')

type ValueParser = Callable[[str, str | None], str | int | bool]


@dataclass(frozen=True)
class ArgumentSpec:
    """Static description of one recognized query argument.

    Attributes:
        name (str):
            Argument name as written by the client (`name=value`).
        description (str):
            One-line help text.
        parse (ValueParser):
            Converts the raw value into its typed form or raises ValidationError.
        flag (bool):
            True if the argument may be given without a value.
    """

    name: str
    description: str
    parse: ValueParser
    flag: bool = False


def _to_int(name: str, value: str | None, message: str) -> int:
    # int() alone also accepts underscores, padding and non-ASCII digits
    if value is None or not INTEGER_PATTERN.fullmatch(value):
        raise ValidationError(message)
    return int(value)


def parse_result_count(name: str, value: str | None) -> int:
    message = f'Argument "{name}" must be an integer such that 1 <= {name} < {MAX_RESULTS}.'
    count = _to_int(name, value, message)
    if not 1 <= count < MAX_RESULTS:
        raise ValidationError(message)
    return count


def parse_page(name: str, value: str | None) -> int:
    message = f'Argument "{name}" must be an integer greater than 0.'
    page = _to_int(name, value, message)
    if page <= 0:
        raise ValidationError(message)
    return page


def parse_category(name: str, value: str | None) -> str:
    if value not in VALID_CATEGORIES:
        raise ValidationError(f'"{value}" is not a valid category.')
    return value


def parse_flag(name: str, value: str | None) -> bool:
    # A bare flag is switched on, so is any explicit value other than "false"
    return value != 'false'


def _registry(*specs: ArgumentSpec) -> Mapping[str, ArgumentSpec]:
    return MappingProxyType({spec.name: spec for spec in specs})


ARGUMENT_SPECS = _registry(
    ArgumentSpec(
        name='n',
        description=f'Number of articles to display, from 1 to {MAX_RESULTS - 1}.',
        parse=parse_result_count,
    ),
    ArgumentSpec(
        name='page',
        description='Page of results to display, starting at 1.',
        parse=parse_page,
    ),
    ArgumentSpec(
        name='category',
        description=f'Only show articles in a category: {", ".join(VALID_CATEGORIES)}.',
        parse=parse_category,
    ),
    ArgumentSpec(
        name='reverse',
        description='Reverse the order of the articles.',
        parse=parse_flag,
        flag=True,
    ),
    ArgumentSpec(
        name='nocolor',
        description='Disable ANSI colors in the output.',
        parse=parse_flag,
        flag=True,
    ),
)
