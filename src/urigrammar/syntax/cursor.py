"""Immutable cursor and the two outcomes every parser returns.

A parser takes a Cursor and answers with either a ParseResult (value plus
the cursor after it) or a ParseError (the failure trail). Cursors are never
mutated, so backtracking after a failed alternative is just reusing the
cursor the caller already holds.

Python 3.13+. Zero external dependencies.

Pattern Reference:
    - Rust nom parser combinator library (VerboseError trails)
    - Haskell Parsec
"""

from collections.abc import Callable
from dataclasses import dataclass

from urigrammar.diagnostics import ErrorTemplate, SourceSpan
from urigrammar.enums import ErrorKind

__all__ = ["Cursor", "ErrorEntry", "ParseError", "ParseOutcome", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """A position in a URI or JSON source.

    Example:
        >>> start = Cursor("http://a", 0)
        >>> start.skip_while(str.isalpha).remainder
        '://a'
        >>> start.pos
        0
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Character under the cursor.

        Raises:
            EOFError: At end of input; parsers test is_eof before reading.
        """
        if self.pos >= len(self.source):
            raise EOFError(ErrorTemplate.unexpected_eof(self.pos).message)
        return self.source[self.pos]

    @property
    def remainder(self) -> str:
        """Unconsumed suffix of the source."""
        return self.source[self.pos :]

    def advance(self, count: int = 1) -> "Cursor":
        """Cursor count characters further on, stopping at end of input."""
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def skip_while(self, predicate: Callable[[str], bool]) -> "Cursor":
        """Cursor past the longest run of characters accepted by predicate."""
        end = self.pos
        limit = len(self.source)
        while end < limit and predicate(self.source[end]):
            end += 1
        return self if end == self.pos else Cursor(self.source, end)

    def starts_with(self, literal: str) -> bool:
        return self.source.startswith(literal, self.pos)

    def slice_to(self, end_pos: int) -> str:
        """Text between this cursor and end_pos.

        Usage:
            >>> start = Cursor("hello world", 0)
            >>> start.slice_to(start.advance(5).pos)
            'hello'
        """
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """Up to n characters from the cursor, fewer near end of input."""
        return self.source[self.pos : self.pos + n]

    def span(self) -> SourceSpan:
        """Span from the cursor to end of input, for diagnostics."""
        return SourceSpan.to_end(self.source, self.pos)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Pattern:
        Every parser has signature:
            def parse_foo(cursor: Cursor) -> ParseResult[Foo] | ParseError:
                ...
                return ParseResult(parsed_value, new_cursor)

    Example:
        >>> result = ParseResult("http", Cursor("http://x", 7))
        >>> result.value
        'http'
        >>> result.remaining
        'x'
    """

    value: T
    cursor: Cursor

    @property
    def remaining(self) -> str:
        """Input left unconsumed by the parser."""
        return self.cursor.remainder


@dataclass(frozen=True, slots=True)
class ErrorEntry:
    """One step of a failure trail.

    Attributes:
        cursor: Position at which the step failed
        label: Primitive failure kind, or a context label added by a wrapping rule
    """

    cursor: Cursor
    label: ErrorKind | str

    @property
    def remaining(self) -> str:
        """Input suffix at the failing position."""
        return self.cursor.remainder

    @property
    def is_context(self) -> bool:
        """True if this entry was added by a context() wrapper."""
        return not isinstance(self.label, ErrorKind)


@dataclass(frozen=True, slots=True)
class ParseError:
    """Parse failure carrying an ordered trail of (position, label) entries.

    The trail is innermost failure first, outermost context label last. It is
    built only on the failure path: each wrapping combinator returns a new
    ParseError with one more entry.

    An empty trail is legitimate: numeric range checks (IPv4 octet above 255,
    port above 65535) fail without recording an entry of their own, and the
    enclosing combinators add theirs.

    A fatal error is not recovered by alt, opt or repetition: it propagates
    straight to the caller (nom's Err::Failure). Only limits that no
    alternative could satisfy, such as nesting depth, are fatal.

    Example:
        >>> cursor = Cursor("ftp://x", 0)
        >>> error = ParseError.from_kind(cursor, ErrorKind.TAG).add_context(cursor, "scheme")
        >>> error.trail()
        (('ftp://x', <ErrorKind.TAG: 'tag'>), ('ftp://x', 'scheme'))
        >>> error.format_error()
        "1:1: Expected scheme (context: scheme; found 'ftp://x')"
    """

    entries: tuple[ErrorEntry, ...] = ()
    fatal: bool = False

    @classmethod
    def from_kind(cls, cursor: Cursor, kind: ErrorKind, *, fatal: bool = False) -> "ParseError":
        """Create a single-entry error for a primitive failure."""
        return cls((ErrorEntry(cursor, kind),), fatal)

    def append(self, cursor: Cursor, kind: ErrorKind) -> "ParseError":
        """Return a new error with a combinator failure kind appended."""
        return ParseError((*self.entries, ErrorEntry(cursor, kind)), self.fatal)

    def add_context(self, cursor: Cursor, label: str) -> "ParseError":
        """Return a new error with a context label appended."""
        return ParseError((*self.entries, ErrorEntry(cursor, label)), self.fatal)

    def trail(self) -> tuple[tuple[str, ErrorKind | str], ...]:
        """Return the trail as (remaining input, label) pairs, innermost first."""
        return tuple((entry.remaining, entry.label) for entry in self.entries)

    @property
    def cursor(self) -> Cursor | None:
        """Position of the innermost failure, or None for an empty trail."""
        return self.entries[0].cursor if self.entries else None

    @property
    def kind(self) -> ErrorKind | None:
        """Innermost primitive failure kind, if any."""
        for entry in self.entries:
            if isinstance(entry.label, ErrorKind):
                return entry.label
        return None

    @property
    def contexts(self) -> tuple[str, ...]:
        """Context labels, outermost first."""
        return tuple(
            str(entry.label) for entry in reversed(self.entries) if entry.is_context
        )

    def span(self) -> SourceSpan | None:
        """Span of the innermost failure, or None for an empty trail."""
        cursor = self.cursor
        return None if cursor is None else cursor.span()

    def format_error(self) -> str:
        """One-line summary with line:column of the innermost failure.

        Example:
            >>> error = ParseError.from_kind(Cursor("http://", 7), ErrorKind.ALPHANUMERIC)
            >>> error.format_error()
            '1:8: Unexpected input (alphanumeric; found end of input)'
        """
        span = self.span()
        if span is None:
            return "Parse failed (value out of range)"
        cursor = self.entries[0].cursor
        found = "end of input" if cursor.is_eof else repr(cursor.slice_ahead(20))
        where = f"{span.line}:{span.column}"
        if contexts := self.contexts:
            return f"{where}: Expected {contexts[-1]} (context: {' > '.join(contexts)}; found {found})"
        return f"{where}: Unexpected input ({self.kind}; found {found})"

    def format_with_context(self) -> str:
        """Summary followed by the failing line and one marker per trail entry.

        Entries on the failing line are marked under their own column: a
        caret for the innermost failure and '-' for the enclosing rules.

        Example:
            >>> cursor = Cursor("http://$$$", 0)
            >>> error = ParseError.from_kind(cursor.advance(7), ErrorKind.TAG)
            >>> print(error.add_context(cursor, "uri").format_with_context())
            1:8: Expected uri (context: uri; found '$$$')
            <BLANKLINE>
               1 | http://$$$
                 | -      ^
        """
        span = self.span()
        if span is None:
            return self.format_error()

        source = self.entries[0].cursor.source
        text = source.split("\n")[span.line - 1]
        line_start = span.start - span.column + 1
        markers = [" "] * (len(text) + 1)
        for entry in reversed(self.entries):
            column = entry.cursor.pos - line_start
            if 0 <= column < len(markers):
                markers[column] = "-"
        markers[span.column - 1] = "^"

        return "\n".join(
            [
                self.format_error(),
                "",
                f"{span.line:4} | {text}",
                f"     | {''.join(markers).rstrip()}",
            ]
        )


type ParseOutcome[T] = ParseResult[T] | ParseError
