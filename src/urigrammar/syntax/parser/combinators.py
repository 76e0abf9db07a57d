"""Parser combinators over the immutable Cursor.

Every factory here returns a Parser: a plain callable taking a Cursor and
returning ParseResult[T] on success or ParseError on failure. Failures never
consume input, so any parser may be retried from the same cursor.

Failure trails follow nom's VerboseError conventions so diagnostics are
reproducible:
    - tag/tag_no_case/one_of record one primitive entry at the cursor
    - alt keeps only the LAST alternative's trail, then appends ALT
    - many1/many_m_n/count append their kind when they fall short
    - context appends its label at the position where the rule started
    - fatal errors pass through alt, opt and repetition without recovery
"""

from collections.abc import Callable
from typing import Any

from urigrammar.enums import ErrorKind
from urigrammar.syntax.cursor import Cursor, ParseError, ParseOutcome, ParseResult

__all__ = [
    "Parser",
    "alt",
    "context",
    "count",
    "delimited",
    "many0",
    "many1",
    "many_m_n",
    "map_res",
    "map_result",
    "one_of",
    "opt",
    "preceded",
    "recognize",
    "separated_list0",
    "separated_pair",
    "sequence",
    "tag",
    "tag_no_case",
    "take",
    "terminated",
]

type Parser[T] = Callable[[Cursor], ParseOutcome[T]]


# =============================================================================
# Leaf recognizers
# =============================================================================


def tag(literal: str) -> Parser[str]:
    """Match literal text exactly."""

    def _parse(cursor: Cursor) -> ParseOutcome[str]:
        if cursor.starts_with(literal):
            return ParseResult(literal, cursor.advance(len(literal)))
        return ParseError.from_kind(cursor, ErrorKind.TAG)

    return _parse


def tag_no_case(literal: str) -> Parser[str]:
    """Match literal text ignoring ASCII case; yields the text as written in the input."""
    folded = literal.lower()

    def _parse(cursor: Cursor) -> ParseOutcome[str]:
        candidate = cursor.slice_ahead(len(literal))
        if len(candidate) == len(literal) and candidate.lower() == folded:
            return ParseResult(candidate, cursor.advance(len(literal)))
        return ParseError.from_kind(cursor, ErrorKind.TAG)

    return _parse


def one_of(chars: str) -> Parser[str]:
    """Match a single character from chars."""

    def _parse(cursor: Cursor) -> ParseOutcome[str]:
        if not cursor.is_eof and cursor.current in chars:
            return ParseResult(cursor.current, cursor.advance())
        return ParseError.from_kind(cursor, ErrorKind.ONE_OF)

    return _parse


def take(n: int) -> Parser[str]:
    """Take exactly n characters; take(0) always succeeds with ''."""

    def _parse(cursor: Cursor) -> ParseOutcome[str]:
        chunk = cursor.slice_ahead(n)
        if len(chunk) < n:
            return ParseError.from_kind(cursor, ErrorKind.EOF)
        return ParseResult(chunk, cursor.advance(n))

    return _parse


# =============================================================================
# Choice and optionality
# =============================================================================


def alt[T](*parsers: Parser[T]) -> Parser[T]:
    """Ordered choice: first success wins.

    Each alternative is tried from the same cursor. When all fail, the trail
    of the last alternative is kept and ALT is appended.
    """
    if not parsers:
        msg = "alt() requires at least one parser"
        raise ValueError(msg)

    def _parse(cursor: Cursor) -> ParseOutcome[T]:
        error = ParseError()
        for parser in parsers:
            result = parser(cursor)
            if not isinstance(result, ParseError):
                return result
            if result.fatal:
                return result
            error = result
        return error.append(cursor, ErrorKind.ALT)

    return _parse


def opt[T](parser: Parser[T]) -> Parser[T | None]:
    """Make parser optional: failure becomes None with the cursor unchanged."""

    def _parse(cursor: Cursor) -> ParseOutcome[T | None]:
        result = parser(cursor)
        if isinstance(result, ParseError):
            if result.fatal:
                return result
            return ParseResult(None, cursor)
        return ParseResult(result.value, result.cursor)

    return _parse


# =============================================================================
# Repetition
# =============================================================================


def _repeat[T](
    parser: Parser[T], cursor: Cursor, values: list[T], guard: ErrorKind
) -> ParseOutcome[tuple[T, ...]]:
    # Shared tail of many0/many1: collect until the first failure.
    while True:
        result = parser(cursor)
        if isinstance(result, ParseError):
            if result.fatal:
                return result
            return ParseResult(tuple(values), cursor)
        if result.cursor.pos == cursor.pos:
            # Non-consuming success would loop forever.
            return ParseError.from_kind(cursor, guard)
        values.append(result.value)
        cursor = result.cursor


def many0[T](parser: Parser[T]) -> Parser[tuple[T, ...]]:
    """Zero or more repetitions. Never fails on inner failure."""

    def _parse(cursor: Cursor) -> ParseOutcome[tuple[T, ...]]:
        return _repeat(parser, cursor, [], ErrorKind.MANY0)

    return _parse


def many1[T](parser: Parser[T]) -> Parser[tuple[T, ...]]:
    """One or more repetitions."""

    def _parse(cursor: Cursor) -> ParseOutcome[tuple[T, ...]]:
        first = parser(cursor)
        if isinstance(first, ParseError):
            if first.fatal:
                return first
            return first.append(cursor, ErrorKind.MANY1)
        if first.cursor.pos == cursor.pos:
            return ParseError.from_kind(cursor, ErrorKind.MANY1)
        return _repeat(parser, first.cursor, [first.value], ErrorKind.MANY1)

    return _parse


def many_m_n[T](minimum: int, maximum: int, parser: Parser[T]) -> Parser[tuple[T, ...]]:
    """Between minimum and maximum repetitions, greedy.

    Stops after maximum matches without looking further, so a longer run in
    the input is left for the next parser.
    """
    if minimum > maximum:
        msg = f"many_m_n minimum ({minimum}) must not exceed maximum ({maximum})"
        raise ValueError(msg)

    def _parse(cursor: Cursor) -> ParseOutcome[tuple[T, ...]]:
        values: list[T] = []
        while len(values) < maximum:
            result = parser(cursor)
            if isinstance(result, ParseError):
                if result.fatal:
                    return result
                if len(values) < minimum:
                    return result.append(cursor, ErrorKind.MANY_M_N)
                break
            if result.cursor.pos == cursor.pos:
                return ParseError.from_kind(cursor, ErrorKind.MANY_M_N)
            values.append(result.value)
            cursor = result.cursor
        return ParseResult(tuple(values), cursor)

    return _parse


def count[T](parser: Parser[T], times: int) -> Parser[tuple[T, ...]]:
    """Exactly `times` repetitions; failure is reported at the starting cursor."""

    def _parse(cursor: Cursor) -> ParseOutcome[tuple[T, ...]]:
        values: list[T] = []
        current = cursor
        for _ in range(times):
            result = parser(current)
            if isinstance(result, ParseError):
                if result.fatal:
                    return result
                return result.append(cursor, ErrorKind.COUNT)
            values.append(result.value)
            current = result.cursor
        return ParseResult(tuple(values), current)

    return _parse


def separated_list0[T](separator: Parser[Any], parser: Parser[T]) -> Parser[tuple[T, ...]]:
    """Zero or more items separated by separator; a dangling separator is not consumed."""

    def _parse(cursor: Cursor) -> ParseOutcome[tuple[T, ...]]:
        first = parser(cursor)
        if isinstance(first, ParseError):
            if first.fatal:
                return first
            return ParseResult((), cursor)
        values = [first.value]
        current = first.cursor
        while True:
            sep = separator(current)
            if isinstance(sep, ParseError):
                if sep.fatal:
                    return sep
                break
            item = parser(sep.cursor)
            if isinstance(item, ParseError):
                if item.fatal:
                    return item
                break
            values.append(item.value)
            current = item.cursor
        return ParseResult(tuple(values), current)

    return _parse


# =============================================================================
# Sequencing
# =============================================================================


def sequence(*parsers: Parser[Any]) -> Parser[tuple[Any, ...]]:
    """Run parsers in order, yielding a tuple of their values."""

    def _parse(cursor: Cursor) -> ParseOutcome[tuple[Any, ...]]:
        values: list[Any] = []
        current = cursor
        for parser in parsers:
            result = parser(current)
            if isinstance(result, ParseError):
                return result
            values.append(result.value)
            current = result.cursor
        return ParseResult(tuple(values), current)

    return _parse


def terminated[T](parser: Parser[T], terminator: Parser[Any]) -> Parser[T]:
    """Run parser then terminator, keeping parser's value."""

    def _parse(cursor: Cursor) -> ParseOutcome[T]:
        result = parser(cursor)
        if isinstance(result, ParseError):
            return result
        end = terminator(result.cursor)
        if isinstance(end, ParseError):
            return end
        return ParseResult(result.value, end.cursor)

    return _parse


def preceded[T](prefix: Parser[Any], parser: Parser[T]) -> Parser[T]:
    """Run prefix then parser, keeping parser's value."""

    def _parse(cursor: Cursor) -> ParseOutcome[T]:
        start = prefix(cursor)
        if isinstance(start, ParseError):
            return start
        return parser(start.cursor)

    return _parse


def delimited[T](left: Parser[Any], parser: Parser[T], right: Parser[Any]) -> Parser[T]:
    """Run left, parser, right; keep the middle value."""
    return preceded(left, terminated(parser, right))


def separated_pair[A, B](
    first: Parser[A], separator: Parser[Any], second: Parser[B]
) -> Parser[tuple[A, B]]:
    """Run first, separator, second; keep the outer two values."""

    def _parse(cursor: Cursor) -> ParseOutcome[tuple[A, B]]:
        left = first(cursor)
        if isinstance(left, ParseError):
            return left
        sep = separator(left.cursor)
        if isinstance(sep, ParseError):
            return sep
        right = second(sep.cursor)
        if isinstance(right, ParseError):
            return right
        return ParseResult((left.value, right.value), right.cursor)

    return _parse


# =============================================================================
# Value transformation
# =============================================================================


def map_result[T, U](parser: Parser[T], func: Callable[[T], U]) -> Parser[U]:
    """Transform a successful value; func must not fail."""

    def _parse(cursor: Cursor) -> ParseOutcome[U]:
        result = parser(cursor)
        if isinstance(result, ParseError):
            return result
        return ParseResult(func(result.value), result.cursor)

    return _parse


def map_res[T, U](parser: Parser[T], func: Callable[[T], U]) -> Parser[U]:
    """Transform a successful value with a conversion that may raise ValueError.

    A ValueError from func becomes a MAP_RES failure at the starting cursor.
    """

    def _parse(cursor: Cursor) -> ParseOutcome[U]:
        result = parser(cursor)
        if isinstance(result, ParseError):
            return result
        try:
            value = func(result.value)
        except ValueError:
            return ParseError.from_kind(cursor, ErrorKind.MAP_RES)
        return ParseResult(value, result.cursor)

    return _parse


def recognize(parser: Parser[Any]) -> Parser[str]:
    """Yield the source text consumed by parser instead of its value."""

    def _parse(cursor: Cursor) -> ParseOutcome[str]:
        result = parser(cursor)
        if isinstance(result, ParseError):
            return result
        return ParseResult(cursor.slice_to(result.cursor.pos), result.cursor)

    return _parse


# =============================================================================
# Diagnostics
# =============================================================================


def context[T](label: str, parser: Parser[T]) -> Parser[T]:
    """Label a rule: on failure, append label at the rule's starting cursor."""

    def _parse(cursor: Cursor) -> ParseOutcome[T]:
        result = parser(cursor)
        if isinstance(result, ParseError):
            return result.add_context(cursor, label)
        return result

    return _parse
