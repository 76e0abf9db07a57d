"""Exceptions raised by the complete-parse helpers.

Parsers themselves never raise for malformed input; they return ParseError
values. parse_uri_complete() and parse_json_complete() turn those values
(and leftover input) into the exceptions below.

Python 3.13+. Zero external dependencies.
"""

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from urigrammar.syntax.cursor import ParseError


class URIGrammarError(Exception):
    """Base exception for all URIGrammar errors.

    Attributes:
        diagnostic: Structured diagnostic, or None for a plain message
    """

    def __init__(self, message: str | Diagnostic, *, source: str | None = None) -> None:
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error(source))
        else:
            self.diagnostic = None
            super().__init__(message)


class _InputSyntaxError(URIGrammarError):
    """Input rejected by a grammar, with the trail that rejected it.

    Attributes:
        source: The rejected input
        parse_error: Failure trail, or None when the failure is trailing input
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        source: str = "",
        parse_error: "ParseError | None" = None,
    ) -> None:
        super().__init__(message, source=source)
        self.source = source
        self.parse_error = parse_error


class URISyntaxError(_InputSyntaxError):
    """Input is not a complete URI of the supported grammar."""


class JSONSyntaxError(_InputSyntaxError):
    """Input is not a complete JSON document."""
