"""Grammar rules for the URI parser.

This module composes the primitives and combinators into the URI grammar:

    uri        ::= scheme authority? ip_or_host port? path? query? fragment?
    scheme     ::= "http://" | "https://"                    (case-insensitive)
    authority  ::= alnum+ ":"? alnum* "@"
    ip_or_host ::= ip | host                                  (ip tried first)
    ip         ::= (octet ".") (octet ".") (octet ".") octet
    octet      ::= digit{1,3}                                 (value <= 255)
    host       ::= (label ".")+ alpha+ | label
    label      ::= [a-zA-Z0-9-]+
    port       ::= ":" digit{1,5}                             (value <= 65535)
    path       ::= "/" (segment "/")* segment?
    query      ::= "?" pair ("&" pair)*
    pair       ::= segment "=" segment
    fragment   ::= "#" segment
    segment    ::= [a-zA-Z0-9.-]*

Each rule takes a Cursor and returns ParseResult | ParseError. Rules are
wrapped in context() so failures carry the name of the rule being attempted.

Greedy digit runs are NOT retried shorter: "1444" as a final octet yields 144
and leaves "4" unconsumed. Likewise "example.123" as a host yields "example"
and leaves ".123", because the last label of a dotted name must be letters.
"""

from urigrammar.constants import (
    IPV4_OCTET_COUNT,
    OCTET_MAX_DIGITS,
    OCTET_MAX_VALUE,
    OCTET_MIN_DIGITS,
    PORT_MAX_DIGITS,
    PORT_MAX_VALUE,
    PORT_MIN_DIGITS,
)
from urigrammar.enums import Scheme
from urigrammar.syntax.ast import URI, Authority, Domain, Host, IPv4Address, QueryParam
from urigrammar.syntax.cursor import Cursor, ParseError, ParseOutcome, ParseResult
from urigrammar.syntax.parser.combinators import (
    Parser,
    alt,
    context,
    count,
    many0,
    many1,
    many_m_n,
    opt,
    preceded,
    separated_pair,
    sequence,
    tag,
    tag_no_case,
    take,
    terminated,
)
from urigrammar.syntax.parser.primitives import (
    alpha1,
    alphanumeric1,
    alphanumeric_hyphen1,
    n_to_m_digits,
    url_code_points,
)

__all__ = [
    "parse_authority",
    "parse_fragment",
    "parse_host",
    "parse_ip_number",
    "parse_ip_or_host",
    "parse_ipv4",
    "parse_path",
    "parse_port",
    "parse_query_params",
    "parse_scheme",
    "parse_uri",
]


# =============================================================================
# Scheme and Authority
# =============================================================================

# HTTP:// cannot shadow HTTPS:// because it fails at the fifth character.
_SCHEME = context("scheme", alt(tag_no_case("HTTP://"), tag_no_case("HTTPS://")))


def parse_scheme(cursor: Cursor) -> ParseOutcome[Scheme]:
    """Parse scheme: "http://" | "https://" (case-insensitive)

    Examples:
        HTTPS://x -> Scheme.HTTPS, remaining "x"
        ftp://x -> failure, trail [tag, alt, "scheme"]
    """
    result = _SCHEME(cursor)
    if isinstance(result, ParseError):
        return result
    return ParseResult(Scheme.from_token(result.value), result.cursor)


_AUTHORITY = context(
    "authority",
    terminated(
        separated_pair(alphanumeric1, opt(tag(":")), opt(alphanumeric1)),
        tag("@"),
    ),
)


def parse_authority(cursor: Cursor) -> ParseOutcome[Authority]:
    """Parse user info: user[:password]@

    The password is optional; "user:@" yields password None because an empty
    password is not representable. A missing "@" fails the whole rule so an
    optional caller sees "no authority" and keeps its cursor.

    Examples:
        username:password@zupzup.org -> ("username", "password")
        username@zupzup.org -> ("username", None)
    """
    result = _AUTHORITY(cursor)
    if isinstance(result, ParseError):
        return result
    user, password = result.value
    return ParseResult(Authority(user, password), result.cursor)


# =============================================================================
# Host
# =============================================================================

_DOTTED_NAME = sequence(many1(terminated(alphanumeric_hyphen1, tag("."))), alpha1)
_SINGLE_LABEL = sequence(many_m_n(1, 1, alphanumeric_hyphen1), take(0))
_HOST = context("host", alt(_DOTTED_NAME, _SINGLE_LABEL))


def parse_host(cursor: Cursor) -> ParseOutcome[Domain]:
    """Parse domain name: (label ".")+ alpha+ | label

    Examples:
        some-subsite.example.org:8080 -> "some-subsite.example.org", remaining ":8080"
        localhost:8080 -> "localhost", remaining ":8080"
        example.123 -> "example", remaining ".123"
    """
    result = _HOST(cursor)
    if isinstance(result, ParseError):
        return result
    labels, last = result.value
    names = list(labels)
    if last:
        names.append(last)
    return ParseResult(Domain(".".join(names)), result.cursor)


_IP_NUMBER = context("ip number", n_to_m_digits(OCTET_MIN_DIGITS, OCTET_MAX_DIGITS))


def parse_ip_number(cursor: Cursor) -> ParseOutcome[int]:
    """Parse IPv4 octet: 1-3 digits with value 0-255.

    An out-of-range value fails with an empty trail; it does not fall back to
    a shorter digit run.
    """
    result = _IP_NUMBER(cursor)
    if isinstance(result, ParseError):
        return result
    value = int(result.value)
    if value > OCTET_MAX_VALUE:
        return ParseError()
    return ParseResult(value, result.cursor)


_IPV4 = context(
    "ip",
    sequence(
        count(terminated(parse_ip_number, tag(".")), IPV4_OCTET_COUNT - 1),
        parse_ip_number,
    ),
)


def parse_ipv4(cursor: Cursor) -> ParseOutcome[IPv4Address]:
    """Parse IPv4 literal: octet "." octet "." octet "." octet

    Examples:
        192.168.0.1:8080 -> (192, 168, 0, 1), remaining ":8080"
        192.168.0.1444:8080 -> (192, 168, 0, 144), remaining "4:8080"
        999.168.0.0 -> failure, trail [count, "ip"]
    """
    result = _IPV4(cursor)
    if isinstance(result, ParseError):
        return result
    leading, last = result.value
    a, b, c = leading
    return ParseResult(IPv4Address((a, b, c, last)), result.cursor)


_IP_OR_HOST: Parser[Host] = context("ip or host", alt(parse_ipv4, parse_host))


def parse_ip_or_host(cursor: Cursor) -> ParseOutcome[Host]:
    """Parse host: IPv4 literal first, then domain name.

    Order matters: every IPv4 literal also matches the single-label domain
    form, so the IP branch must win when it applies.
    """
    return _IP_OR_HOST(cursor)


# =============================================================================
# Port
# =============================================================================

_PORT = context("port", preceded(tag(":"), n_to_m_digits(PORT_MIN_DIGITS, PORT_MAX_DIGITS)))


def parse_port(cursor: Cursor) -> ParseOutcome[int]:
    """Parse port: ":" followed by 1-5 digits with value 0-65535.

    Examples:
        :8080 -> 8080
        :80800 -> failure with an empty trail (out of range)
    """
    result = _PORT(cursor)
    if isinstance(result, ParseError):
        return result
    value = int(result.value)
    if value > PORT_MAX_VALUE:
        return ParseError()
    return ParseResult(value, result.cursor)


# =============================================================================
# Path, Query, Fragment
# =============================================================================

_PATH = context(
    "path",
    sequence(
        tag("/"),
        many0(terminated(url_code_points, tag("/"))),
        opt(url_code_points),
    ),
)


def parse_path(cursor: Cursor) -> ParseOutcome[tuple[str, ...]]:
    """Parse path: "/" (segment "/")* segment?

    A trailing slash does not produce an empty last segment.

    Examples:
        /a/b/c?d -> ("a", "b", "c"), remaining "?d"
        /a/b/c/?d -> ("a", "b", "c"), remaining "?d"
        / -> ()
    """
    result = _PATH(cursor)
    if isinstance(result, ParseError):
        return result
    _, segments, last = result.value
    path = list(segments)
    if last:
        path.append(last)
    return ParseResult(tuple(path), result.cursor)


_QUERY_PAIR = separated_pair(url_code_points, tag("="), url_code_points)
_QUERY_PARAMS = context(
    "query params",
    sequence(
        preceded(tag("?"), _QUERY_PAIR),
        many0(preceded(tag("&"), _QUERY_PAIR)),
    ),
)


def parse_query_params(cursor: Cursor) -> ParseOutcome[tuple[QueryParam, ...]]:
    """Parse query: "?" key "=" value ("&" key "=" value)*

    Pairs keep input order; duplicate keys are kept as separate pairs.

    Example:
        ?bla=5&blub=val#yay -> (("bla", "5"), ("blub", "val")), remaining "#yay"
    """
    result = _QUERY_PARAMS(cursor)
    if isinstance(result, ParseError):
        return result
    first, rest = result.value
    params = tuple(QueryParam(key, value) for key, value in (first, *rest))
    return ParseResult(params, result.cursor)


_FRAGMENT = context("fragment", preceded(tag("#"), url_code_points))


def parse_fragment(cursor: Cursor) -> ParseOutcome[str]:
    """Parse fragment: "#" segment"""
    return _FRAGMENT(cursor)


# =============================================================================
# URI
# =============================================================================

_URI = context(
    "uri",
    sequence(
        parse_scheme,
        opt(parse_authority),
        parse_ip_or_host,
        opt(parse_port),
        opt(parse_path),
        opt(parse_query_params),
        opt(parse_fragment),
    ),
)


def parse_uri(cursor: Cursor) -> ParseOutcome[URI]:
    """Parse a complete URI from the cursor.

    Components are tried in fixed order; optional components that fail are
    absent and leave the cursor where it was. Trailing input is NOT an error
    here; the result cursor marks where the grammar stopped.

    Example:
        https://www.zupzup.org:443/about/?someVal=5#anchor ->
            URI(HTTPS, host=Domain("www.zupzup.org"), port=443, path=("about",),
                query=(("someVal", "5"),), fragment="anchor")
    """
    result = _URI(cursor)
    if isinstance(result, ParseError):
        return result
    scheme, authority, host, port, path, query, fragment = result.value
    uri = URI(
        scheme=scheme,
        authority=authority,
        host=host,
        port=port,
        path=path,
        query=query,
        fragment=fragment,
    )
    return ParseResult(uri, result.cursor)
