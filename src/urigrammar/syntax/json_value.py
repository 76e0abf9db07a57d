"""JSON value parser built on the same combinators as the URI grammar.

A secondary grammar: the URI parser never calls into it. It shares the
Cursor, ParseResult and ParseError types, so its failures carry the same
kind of context trail.

Grammar (RFC 8259, whitespace allowed before every value and token):
    value   ::= object | array | string | number | "true" | "false" | "null"
    object  ::= "{" (string ":" value ("," string ":" value)*)? "}"
    array   ::= "[" (value ("," value)*)? "]"
    number  ::= "-"? ("0" | [1-9] digit*) ("." digit+)? (("e" | "E") ("+" | "-")? digit+)?

Numbers are recognized as one lexeme and converted as a whole, so the digits
after the decimal point keep their leading zeros: 1.05 and 1.5 differ.

Security:
    Nesting depth is bounded by JsonContext.max_nesting_depth. Exceeding it
    is a fatal error that no enclosing alternative can recover from. Requested
    limits are clamped by depth_clamp() so the limit is always reached before
    the interpreter recursion limit.
"""

import logging
import sys
from dataclasses import dataclass
from functools import partial

from urigrammar.constants import JSON_FRAMES_PER_LEVEL, MAX_DEPTH, RECURSION_RESERVE_FRAMES
from urigrammar.diagnostics import ErrorTemplate, JSONSyntaxError
from urigrammar.enums import ErrorKind
from urigrammar.syntax.cursor import Cursor, ParseError, ParseOutcome, ParseResult
from urigrammar.syntax.parser.combinators import (
    Parser,
    alt,
    context,
    delimited,
    map_res,
    map_result,
    one_of,
    opt,
    preceded,
    recognize,
    separated_list0,
    separated_pair,
    sequence,
    tag,
)
from urigrammar.syntax.parser.primitives import digit1, multispace0

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Values
    "JsonArray",
    "JsonBoolean",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonString",
    "JsonValue",
    # Parsing
    "JsonContext",
    "depth_clamp",
    "parse_json",
    "parse_json_complete",
    "parse_json_number",
    "parse_json_string",
    "parse_json_value",
    "to_python",
]

logger = logging.getLogger(__name__)

_SIMPLE_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_HEX_DIGITS: str = "0123456789abcdefABCDEF"
_UNICODE_ESCAPE_LEN: int = 4
_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)
_MIN_UNESCAPED: int = 0x20

# ============================================================================
# VALUES
# ============================================================================


@dataclass(frozen=True, slots=True)
class JsonString:
    """JSON string with escapes decoded."""

    value: str


@dataclass(frozen=True, slots=True)
class JsonNumber:
    """JSON number."""

    value: float


@dataclass(frozen=True, slots=True)
class JsonBoolean:
    """JSON true or false."""

    value: bool


@dataclass(frozen=True, slots=True)
class JsonNull:
    """JSON null."""


@dataclass(frozen=True, slots=True)
class JsonArray:
    """JSON array: items in document order."""

    items: tuple["JsonValue", ...]


@dataclass(frozen=True, slots=True)
class JsonObject:
    """JSON object: members in document order, duplicate keys kept."""

    members: tuple[tuple[str, "JsonValue"], ...]

    def get(self, key: str) -> "JsonValue | None":
        """Return the value of the LAST member named key, or None."""
        for name, value in reversed(self.members):
            if name == key:
                return value
        return None


type JsonValue = JsonObject | JsonArray | JsonString | JsonNumber | JsonBoolean | JsonNull


def to_python(value: JsonValue) -> object:
    """Convert a JsonValue to plain Python objects (dict, list, str, float, bool, None).

    Later duplicate keys win, matching the standard library json module.
    """
    match value:
        case JsonObject(members=members):
            return {name: to_python(member) for name, member in members}
        case JsonArray(items=items):
            return [to_python(item) for item in items]
        case JsonString(value=text):
            return text
        case JsonNumber(value=number):
            return number
        case JsonBoolean(value=flag):
            return flag
        case JsonNull():
            return None


# ============================================================================
# PARSING CONTEXT
# ============================================================================


@dataclass(frozen=True, slots=True)
class JsonContext:
    """Explicit nesting state for recursive value parsing.

    Passed as a parameter instead of held in module state, so concurrent
    parses never interfere.

    Attributes:
        max_nesting_depth: Maximum allowed array/object nesting
        current_depth: Current nesting depth (0 = top level)
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been reached."""
        return self.current_depth >= self.max_nesting_depth

    def enter_nested(self) -> "JsonContext":
        """Create new context one level deeper."""
        return JsonContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
        )


def depth_clamp(
    requested_depth: int,
    frames_per_level: int = JSON_FRAMES_PER_LEVEL,
    reserve_frames: int = RECURSION_RESERVE_FRAMES,
) -> int:
    """Clamp a nesting limit so that reaching it cannot exhaust the stack.

    Each nesting level costs frames_per_level interpreter frames, and
    reserve_frames are left for whatever called the parser. A clamped
    request is logged at WARNING.

    Example:
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(64)
        64
        >>> depth_clamp(500)
        80
    """
    limit = sys.getrecursionlimit()
    max_safe_depth = max(0, (limit - reserve_frames) // frames_per_level)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested JSON nesting depth %d exceeds what the recursion limit (%d) "
            "allows. Clamping to %d; raise sys.setrecursionlimit() for deeper input.",
            requested_depth,
            limit,
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth


# ============================================================================
# SCALARS
# ============================================================================


def _parse_unicode_escape(cursor: Cursor) -> ParseResult[int] | None:
    """Parse XXXX of a \\uXXXX escape; cursor is after the 'u'."""
    hex_digits = cursor.slice_ahead(_UNICODE_ESCAPE_LEN)
    if len(hex_digits) < _UNICODE_ESCAPE_LEN or not all(c in _HEX_DIGITS for c in hex_digits):
        return None
    return ParseResult(int(hex_digits, 16), cursor.advance(_UNICODE_ESCAPE_LEN))


def _parse_escape(cursor: Cursor) -> ParseOutcome[str]:
    """Parse escape sequence; cursor is after the backslash.

    Surrogate pairs written as two \\u escapes are combined; a lone
    surrogate is rejected.
    """
    if cursor.is_eof:
        return ParseError.from_kind(cursor, ErrorKind.EOF)

    escape_ch = cursor.current
    if escape_ch in _SIMPLE_ESCAPES:
        return ParseResult(_SIMPLE_ESCAPES[escape_ch], cursor.advance())
    if escape_ch != "u":
        return ParseError.from_kind(cursor, ErrorKind.ONE_OF)

    high = _parse_unicode_escape(cursor.advance())
    if high is None:
        return ParseError.from_kind(cursor, ErrorKind.ONE_OF)
    if high.value in _LOW_SURROGATES:
        return ParseError.from_kind(cursor, ErrorKind.ONE_OF)
    if high.value not in _HIGH_SURROGATES:
        return ParseResult(chr(high.value), high.cursor)

    if high.cursor.slice_ahead(2) != "\\u":
        return ParseError.from_kind(high.cursor, ErrorKind.TAG)
    low = _parse_unicode_escape(high.cursor.advance(2))
    if low is None or low.value not in _LOW_SURROGATES:
        return ParseError.from_kind(high.cursor, ErrorKind.ONE_OF)
    code_point = 0x10000 + ((high.value - 0xD800) << 10) + (low.value - 0xDC00)
    return ParseResult(chr(code_point), low.cursor)


def _parse_string_body(cursor: Cursor) -> ParseOutcome[str]:
    if cursor.is_eof or cursor.current != '"':
        return ParseError.from_kind(cursor, ErrorKind.CHAR)

    cursor = cursor.advance()
    parts: list[str] = []

    while not cursor.is_eof:
        ch = cursor.current

        if ch == '"':
            return ParseResult("".join(parts), cursor.advance())

        if ch == "\\":
            escaped = _parse_escape(cursor.advance())
            if isinstance(escaped, ParseError):
                return escaped
            parts.append(escaped.value)
            cursor = escaped.cursor
        elif ord(ch) < _MIN_UNESCAPED:
            # Control characters must be escaped.
            return ParseError.from_kind(cursor, ErrorKind.ONE_OF)
        else:
            parts.append(ch)
            cursor = cursor.advance()

    return ParseError.from_kind(cursor, ErrorKind.EOF)


_STRING = context("string", _parse_string_body)


def parse_json_string(cursor: Cursor) -> ParseOutcome[str]:
    """Parse string literal: "text"

    Supports escape sequences:
        \\" \\\\ \\/ \\b \\f \\n \\r \\t
        \\uXXXX (with surrogate pairs combined)

    Examples:
        "hello" → "hello"
        "with \\"quotes\\"" → 'with "quotes"'
        "\\u00E4" → "ä"
    """
    return _STRING(cursor)


def _integer_digits(cursor: Cursor) -> ParseOutcome[str]:
    # "0" | [1-9][0-9]*: a leading zero ends the integer part.
    if cursor.starts_with("0"):
        return ParseResult("0", cursor.advance())
    return digit1(cursor)


_NUMBER_LEXEME = recognize(
    sequence(
        opt(tag("-")),
        _integer_digits,
        opt(preceded(tag("."), digit1)),
        opt(sequence(one_of("eE"), opt(one_of("+-")), digit1)),
    )
)
_NUMBER = context("number", map_res(_NUMBER_LEXEME, float))


def parse_json_number(cursor: Cursor) -> ParseOutcome[float]:
    """Parse number literal: -?(0|[1-9][0-9]*)(.[0-9]+)?([eE][+-]?[0-9]+)?

    The fractional digits are consumed as one run and converted together
    with the integer part, so positional value is preserved.

    Examples:
        123.456 → 123.456
        0.05 → 0.05
        -3 → -3.0
        1. → 1.0 with "." left unconsumed
        01 → 0.0 with "1" left unconsumed
    """
    return _NUMBER(cursor)


_BOOLEAN = context(
    "boolean",
    alt(map_result(tag("true"), lambda _: True), map_result(tag("false"), lambda _: False)),
)
_NULL = context("null", tag("null"))


# ============================================================================
# COMPOSITES
# ============================================================================


def _token(literal: str) -> Parser[str]:
    # Structural token preceded by optional whitespace.
    return preceded(multispace0, tag(literal))


def parse_json_array(cursor: Cursor, ctx: JsonContext) -> ParseOutcome[JsonArray]:
    """Parse array: "[" (value ("," value)*)? "]" """
    inner = ctx.enter_nested()
    body = delimited(
        _token("["),
        separated_list0(_token(","), partial(parse_json_value, ctx=inner)),
        _token("]"),
    )
    return context("array", map_result(body, JsonArray))(cursor)


def parse_json_object(cursor: Cursor, ctx: JsonContext) -> ParseOutcome[JsonObject]:
    """Parse object: "{" (string ":" value ("," string ":" value)*)? "}" """
    inner = ctx.enter_nested()
    member = separated_pair(
        preceded(multispace0, parse_json_string),
        _token(":"),
        partial(parse_json_value, ctx=inner),
    )
    body = delimited(_token("{"), separated_list0(_token(","), member), _token("}"))
    return context("object", map_result(body, JsonObject))(cursor)


def parse_json_value(cursor: Cursor, ctx: JsonContext | None = None) -> ParseOutcome[JsonValue]:
    """Parse any JSON value after optional leading whitespace.

    Args:
        cursor: Current position in source
        ctx: Nesting state (default: top level with MAX_DEPTH limit)

    Returns:
        ParseResult with the value, or ParseError. Nesting beyond the limit
        yields a fatal ParseError.
    """
    if ctx is None:
        ctx = JsonContext(max_nesting_depth=depth_clamp(MAX_DEPTH))

    ws = multispace0(cursor)
    assert isinstance(ws, ParseResult)  # multispace0 never fails
    start = ws.cursor

    if not start.is_eof and start.current in "[{" and ctx.is_depth_exceeded():
        return ParseError.from_kind(start, ErrorKind.NESTING_DEPTH, fatal=True).add_context(
            start, "value"
        )

    value = context(
        "value",
        alt(
            partial(parse_json_object, ctx=ctx),
            partial(parse_json_array, ctx=ctx),
            map_result(parse_json_string, JsonString),
            map_result(parse_json_number, JsonNumber),
            map_result(_BOOLEAN, JsonBoolean),
            map_result(_NULL, lambda _: JsonNull()),
        ),
    )
    return value(start)


# ============================================================================
# ENTRY POINTS
# ============================================================================


def parse_json(source: str, *, max_nesting_depth: int | None = None) -> ParseOutcome[JsonValue]:
    """Parse one JSON value from the start of source.

    Trailing input (including trailing whitespace) is left unconsumed.

    Example:
        >>> result = parse_json('[1, 2.05, "x"] tail')
        >>> to_python(result.value), result.remaining
        ([1.0, 2.05, 'x'], ' tail')
    """
    return _parse_bounded(source, _nesting_limit(max_nesting_depth))


def _nesting_limit(max_nesting_depth: int | None) -> int:
    return depth_clamp(max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH)


def _parse_bounded(source: str, limit: int) -> ParseOutcome[JsonValue]:
    result = parse_json_value(Cursor(source, 0), JsonContext(max_nesting_depth=limit))
    if isinstance(result, ParseError) and logger.isEnabledFor(logging.DEBUG):
        logger.debug("JSON parse failed: %s", result.format_error())
    return result


def parse_json_complete(source: str, *, max_nesting_depth: int | None = None) -> JsonValue:
    """Parse source as exactly one JSON value, allowing surrounding whitespace.

    Raises:
        JSONSyntaxError: If the grammar fails, nesting is too deep, or
            non-whitespace input remains
    """
    limit = _nesting_limit(max_nesting_depth)
    result = _parse_bounded(source, limit)
    if isinstance(result, ParseError):
        contexts = result.contexts
        if result.kind is ErrorKind.NESTING_DEPTH:
            diagnostic = ErrorTemplate.json_nesting_depth_exceeded(limit, result.span())
        else:
            diagnostic = ErrorTemplate.json_invalid(
                contexts[-1] if contexts else None, result.span(), contexts
            )
        raise JSONSyntaxError(diagnostic, source=source, parse_error=result)

    tail = multispace0(result.cursor)
    assert isinstance(tail, ParseResult)  # multispace0 never fails
    if not tail.cursor.is_eof:
        diagnostic = ErrorTemplate.json_trailing_input(tail.remaining, tail.cursor.span())
        raise JSONSyntaxError(diagnostic, source=source)

    return result.value

