from getnews.parser.grammar import ArgumentSpec, ARGUMENT_SPECS, VALID_COUNTRIES, VALID_CATEGORIES
from getnews.parser.parser import parse_subdomain, parse_args, usage


__all__ = [
    'ArgumentSpec',
    'ARGUMENT_SPECS',
    'VALID_COUNTRIES',
    'VALID_CATEGORIES',
    'parse_subdomain',
    'parse_args',
    'usage',
]
