"""Primitive recognizers for the URI and JSON grammars.

This module provides low-level parsers that consume a contiguous run of
characters matching a character class. Every character class is ASCII-only:
str.isalpha() and friends accept Unicode letters and digits, which the URI
grammar does not.

Each recognizer is a Parser (Cursor -> ParseResult[str] | ParseError).
"""

from collections.abc import Callable

from urigrammar.constants import ASCII_DIGITS, JSON_WHITESPACE, URL_CODE_POINT_EXTRAS
from urigrammar.enums import ErrorKind
from urigrammar.syntax.cursor import Cursor, ParseError, ParseOutcome, ParseResult
from urigrammar.syntax.parser.combinators import Parser, many_m_n, map_result, one_of

__all__ = [
    "alpha1",
    "alphanumeric1",
    "alphanumeric_hyphen1",
    "digit1",
    "is_alpha",
    "is_alphanumeric",
    "is_url_code_point",
    "multispace0",
    "n_to_m_digits",
    "url_code_points",
]


def is_alpha(ch: str) -> bool:
    """Check if character is an ASCII letter."""
    return ch.isascii() and ch.isalpha()


def is_alphanumeric(ch: str) -> bool:
    """Check if character is an ASCII letter or digit."""
    return ch.isascii() and ch.isalnum()


def is_url_code_point(ch: str) -> bool:
    """Check if character may appear in a path segment, query key/value or fragment.

    The set is ASCII alphanumerics plus '-' and '.'.
    """
    return is_alphanumeric(ch) or ch in URL_CODE_POINT_EXTRAS


def _take_while0(cursor: Cursor, predicate: Callable[[str], bool]) -> ParseResult[str]:
    end = cursor.skip_while(predicate)
    return ParseResult(cursor.slice_to(end.pos), end)


def _take_while1(
    cursor: Cursor, predicate: Callable[[str], bool], kind: ErrorKind
) -> ParseOutcome[str]:
    end = cursor.skip_while(predicate)
    if end.pos == cursor.pos:
        return ParseError.from_kind(cursor, kind)
    return ParseResult(cursor.slice_to(end.pos), end)


def alpha1(cursor: Cursor) -> ParseOutcome[str]:
    """Parse one or more ASCII letters: [a-zA-Z]+"""
    return _take_while1(cursor, is_alpha, ErrorKind.ALPHA)


def alphanumeric1(cursor: Cursor) -> ParseOutcome[str]:
    """Parse one or more ASCII letters or digits: [a-zA-Z0-9]+

    Examples:
        user → "user"
        pw123 → "pw123"
    """
    return _take_while1(cursor, is_alphanumeric, ErrorKind.ALPHANUMERIC)


def alphanumeric_hyphen1(cursor: Cursor) -> ParseOutcome[str]:
    """Parse one or more ASCII letters, digits or hyphens: [a-zA-Z0-9-]+

    Used for domain labels. A label may start or end with '-'; the grammar
    does not enforce the RFC 1123 hyphen placement rules.
    """
    return _take_while1(
        cursor, lambda ch: ch == "-" or is_alphanumeric(ch), ErrorKind.ALPHANUMERIC
    )


def url_code_points(cursor: Cursor) -> ParseOutcome[str]:
    """Parse zero or more URL code points: [a-zA-Z0-9.-]*

    Never fails; an empty run yields "" with the cursor unchanged.
    """
    return _take_while0(cursor, is_url_code_point)


def digit1(cursor: Cursor) -> ParseOutcome[str]:
    """Parse one or more ASCII digits: [0-9]+"""
    return _take_while1(cursor, ASCII_DIGITS.__contains__, ErrorKind.DIGIT)


def multispace0(cursor: Cursor) -> ParseOutcome[str]:
    """Skip JSON whitespace (space, tab, LF, CR). Never fails."""
    return _take_while0(cursor, JSON_WHITESPACE.__contains__)


def n_to_m_digits(n: int, m: int) -> Parser[str]:
    """Parse between n and m ASCII digits, greedily.

    Consumes at most m digits even if more follow: with m=3, "1444" yields
    "144" and leaves "4" for the next parser. Fewer than n digits fails with
    ONE_OF then MANY_M_N.

    Args:
        n: Minimum digit count
        m: Maximum digit count

    Returns:
        Parser yielding the digit string
    """
    return map_result(many_m_n(n, m, one_of(ASCII_DIGITS)), "".join)
