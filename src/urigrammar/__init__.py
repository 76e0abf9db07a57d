"""URIGrammar - combinator-based URI parser with context-labelled error trails.

Decodes ASCII URI strings of the form
scheme://[user[:pass]@]host[:port][/path][?query][#fragment] into immutable
values. Failures are returned as ParseError values whose trail records every
rule that was being attempted, innermost first.

Public API:
    parse_uri - Parse a URI prefix; returns ParseResult or ParseError
    parse_uri_complete - Parse a whole string as a URI; raises on failure
    URIParser - Parser with a configurable input size limit
    URI, Scheme, Authority, Domain, IPv4Address, QueryParam - Value types
    parse_json - JSON value parser on the same combinators

Exceptions:
    URIGrammarError - Base exception class
    URISyntaxError - URI parse errors from the *_complete helpers
    JSONSyntaxError - JSON parse errors from parse_json_complete

Submodules:
    urigrammar.syntax.parser.combinators - Generic parser combinators
    urigrammar.syntax.parser.rules - URI grammar rules over a Cursor
    urigrammar.diagnostics - Diagnostic codes, templates and formatter
"""

from .diagnostics import JSONSyntaxError, URIGrammarError, URISyntaxError
from .enums import ErrorKind, Scheme
from .syntax import (
    URI,
    Authority,
    Domain,
    IPv4Address,
    ParseError,
    ParseResult,
    QueryParam,
    URIParser,
    parse_json,
    parse_json_complete,
    parse_uri,
    parse_uri_complete,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("urigrammar")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "URI",
    "Authority",
    "Domain",
    "ErrorKind",
    "IPv4Address",
    "JSONSyntaxError",
    "ParseError",
    "ParseResult",
    "QueryParam",
    "Scheme",
    "URIGrammarError",
    "URIParser",
    "URISyntaxError",
    "__version__",
    "parse_json",
    "parse_json_complete",
    "parse_uri",
    "parse_uri_complete",
]
