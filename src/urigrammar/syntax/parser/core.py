"""Core URI parser implementation.

This module provides the URIParser class that drives the grammar rules in
:mod:`urigrammar.syntax.parser.rules` over a source string.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~urigrammar.syntax.cursor.Cursor`)
    to traverse source text. Each rule returns either a
    :class:`~urigrammar.syntax.cursor.ParseResult` containing the parsed value
    and updated cursor, or a :class:`~urigrammar.syntax.cursor.ParseError`
    carrying the failure trail.

Security:
    Includes a configurable input size limit so callers passing untrusted
    input cannot make the parser build arbitrarily large segment tuples.

See Also:
    - :mod:`urigrammar.syntax.ast` - URI value types
    - :mod:`urigrammar.syntax.parser.rules` - Grammar rules
"""

import logging

from urigrammar.constants import MAX_SOURCE_SIZE
from urigrammar.diagnostics import ErrorTemplate, URISyntaxError
from urigrammar.syntax.ast import URI
from urigrammar.syntax.cursor import Cursor, ParseError, ParseOutcome
from urigrammar.syntax.parser.rules import parse_uri

__all__ = ["URIParser"]

logger = logging.getLogger(__name__)


class URIParser:
    """URI parser using immutable cursor pattern.

    Design:
    - Stateless between calls; one instance may be shared across threads
    - Failures are values (ParseError), not exceptions
    - parse_complete() is the exception-raising boundary for callers that
      need the whole input consumed

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 64 KiB)
    """

    __slots__ = ("_max_source_size",)

    def __init__(self, *, max_source_size: int | None = None) -> None:
        """Initialize parser with optional size limit.

        Args:
            max_source_size: Maximum source size in characters (default: 64 KiB).
                            Set to 0 to disable the limit (not recommended).
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    def _check_size(self, source: str) -> None:
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            diagnostic = ErrorTemplate.source_too_large(len(source), self._max_source_size)
            logger.warning("Rejected URI input: %s", diagnostic.message)
            raise ValueError(diagnostic.message)

    def parse(self, source: str) -> ParseOutcome[URI]:
        """Parse a URI from the start of source.

        Args:
            source: Text beginning with a URI

        Returns:
            ParseResult with the URI and the cursor after it (input after the
            URI is left unconsumed, not rejected), or ParseError with the
            failure trail.

        Raises:
            ValueError: If source exceeds max_source_size

        Example:
            >>> result = URIParser().parse("http://localhost/x y")
            >>> result.value.path, result.remaining
            (('x',), ' y')
        """
        self._check_size(source)
        result = parse_uri(Cursor(source, 0))
        if not logger.isEnabledFor(logging.DEBUG):
            return result
        if isinstance(result, ParseError):
            logger.debug("URI parse failed: %s", result.format_error())
        else:
            logger.debug(
                "Parsed URI %r (%d characters unconsumed)",
                source[: result.cursor.pos],
                len(source) - result.cursor.pos,
            )
        return result

    def parse_complete(self, source: str) -> URI:
        """Parse source as exactly one URI with nothing after it.

        Args:
            source: Complete URI text

        Returns:
            Parsed URI

        Raises:
            ValueError: If source exceeds max_source_size
            URISyntaxError: If the grammar fails or input remains
        """
        result = self.parse(source)
        if isinstance(result, ParseError):
            diagnostic = ErrorTemplate.uri_invalid(
                result.contexts[-1] if result.contexts else None,
                result.span(),
                result.contexts,
            )
            raise URISyntaxError(diagnostic, source=source, parse_error=result)

        if not result.cursor.is_eof:
            diagnostic = ErrorTemplate.uri_trailing_input(result.remaining, result.cursor.span())
            raise URISyntaxError(diagnostic, source=source)

        return result.value
