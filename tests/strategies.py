"""Hypothesis strategies for generating URI components.

Provides custom strategies for property-based testing of the URI grammar
and the JSON value parser.
"""

from __future__ import annotations

import string

from hypothesis import strategies as st
from hypothesis.strategies import composite

ALNUM = string.ascii_letters + string.digits
URL_CODE_POINTS = ALNUM + "-."


@composite
def octets(draw: st.DrawFn) -> int:
    """Generate a valid IPv4 octet value."""
    return draw(st.integers(min_value=0, max_value=255))


@composite
def ipv4_literals(draw: st.DrawFn) -> tuple[str, tuple[int, int, int, int]]:
    """Generate a dotted-quad literal and its expected octets."""
    parts = (draw(octets()), draw(octets()), draw(octets()), draw(octets()))
    return ".".join(str(part) for part in parts), parts


@composite
def domain_labels(draw: st.DrawFn) -> str:
    """Generate a domain label: letters, digits and hyphens."""
    return draw(st.text(alphabet=ALNUM + "-", min_size=1, max_size=12))


@composite
def dotted_domains(draw: st.DrawFn) -> str:
    """Generate a dotted domain whose last label is letters only.

    The first label starts with a letter so the name can never be mistaken
    for an IPv4 literal.
    """
    first = draw(st.sampled_from(string.ascii_letters)) + draw(
        st.text(alphabet=ALNUM + "-", max_size=10)
    )
    middle = draw(st.lists(domain_labels(), max_size=3))
    tld = draw(st.text(alphabet=string.ascii_letters, min_size=1, max_size=6))
    return ".".join([first, *middle, tld])


@composite
def ports(draw: st.DrawFn) -> int:
    """Generate a valid port number."""
    return draw(st.integers(min_value=0, max_value=65535))


@composite
def path_segments(draw: st.DrawFn) -> str:
    """Generate a non-empty path segment."""
    return draw(st.text(alphabet=URL_CODE_POINTS, min_size=1, max_size=12))


@composite
def query_pairs(draw: st.DrawFn) -> list[tuple[str, str]]:
    """Generate one or more key=value pairs."""
    pair = st.tuples(
        st.text(alphabet=URL_CODE_POINTS, max_size=8),
        st.text(alphabet=URL_CODE_POINTS, max_size=8),
    )
    return draw(st.lists(pair, min_size=1, max_size=5))


@composite
def mixed_case_schemes(draw: st.DrawFn) -> str:
    """Generate http:// or https:// with arbitrary letter case."""
    scheme = draw(st.sampled_from(["http", "https"]))
    flips = draw(st.lists(st.booleans(), min_size=len(scheme), max_size=len(scheme)))
    cased = "".join(ch.upper() if flip else ch for ch, flip in zip(scheme, flips, strict=True))
    return cased + "://"


@composite
def uri_sources(draw: st.DrawFn) -> str:
    """Generate a complete URI accepted by the grammar."""
    scheme = draw(mixed_case_schemes())
    host = draw(st.one_of(dotted_domains(), ipv4_literals().map(lambda lit: lit[0])))
    source = scheme + host
    if draw(st.booleans()):
        source += f":{draw(ports())}"
    if draw(st.booleans()):
        source += "/" + "/".join(draw(st.lists(path_segments(), max_size=4)))
    if draw(st.booleans()):
        source += "?" + "&".join(f"{k}={v}" for k, v in draw(query_pairs()))
    if draw(st.booleans()):
        source += "#" + draw(st.text(alphabet=URL_CODE_POINTS, max_size=8))
    return source


# Printable ASCII noise for robustness tests
ascii_noise = st.text(alphabet=string.printable, max_size=80)


# JSON numbers in the grammar's lexical form
json_number_lexemes = st.builds(
    lambda sign, whole, frac, exp: f"{sign}{whole}{frac}{exp}",
    st.sampled_from(["", "-"]),
    st.integers(min_value=0, max_value=10**9).map(str),
    st.one_of(st.just(""), st.text(alphabet=string.digits, min_size=1, max_size=6).map(".{}".format)),
    st.one_of(st.just(""), st.integers(min_value=-20, max_value=20).map("e{}".format)),
)
