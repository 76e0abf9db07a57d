"""URI syntax parsing package.

Provides the cursor infrastructure, URI value types, the combinator-based
grammar, and a JSON value parser built on the same combinators.

Python 3.13+.
"""

from .ast import URI, Authority, Domain, Host, IPv4Address, QueryParam
from .cursor import Cursor, ErrorEntry, ParseError, ParseOutcome, ParseResult
from .json_value import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    parse_json,
    parse_json_complete,
    to_python,
)
from .parser import URIParser

__all__ = [
    "URI",
    "Authority",
    "Cursor",
    "Domain",
    "ErrorEntry",
    "Host",
    "IPv4Address",
    "JsonArray",
    "JsonBoolean",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonString",
    "JsonValue",
    "ParseError",
    "ParseOutcome",
    "ParseResult",
    "QueryParam",
    "URIParser",
    "parse_json",
    "parse_json_complete",
    "parse_uri",
    "parse_uri_complete",
    "to_python",
]


def parse_uri(source: str) -> ParseOutcome[URI]:
    """Parse a URI from the start of source.

    Convenience function for URIParser().parse().

    Args:
        source: Text beginning with a URI

    Returns:
        ParseResult with the URI and the unconsumed suffix, or ParseError

    Example:
        >>> from urigrammar.syntax import parse_uri
        >>> result = parse_uri("https://example.org:443/about/")
        >>> result.value.port, result.value.path
        (443, ('about',))
    """
    parser = URIParser()
    return parser.parse(source)


def parse_uri_complete(source: str) -> URI:
    """Parse source as exactly one URI.

    Convenience function for URIParser().parse_complete().

    Raises:
        URISyntaxError: If the grammar fails or input remains after the URI
    """
    parser = URIParser()
    return parser.parse_complete(source)
