from typing import Any


# Type aliases for Python dictionaries
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]
type AppConfig = dict[str, Any]

# Parsed request arguments: argument name (or 'query') -> parsed value
type ParsedQuery = dict[str, str | int | bool]

# A single article as returned by the news API
type Article = dict[str, Any]
