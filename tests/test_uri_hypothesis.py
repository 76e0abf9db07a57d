"""Hypothesis property-based tests for the URI grammar.

Complements the example-based rule tests with generated components.
"""

from __future__ import annotations

import string

from hypothesis import given, settings
from hypothesis import strategies as st

from tests.strategies import (
    dotted_domains,
    ipv4_literals,
    json_number_lexemes,
    mixed_case_schemes,
    path_segments,
    ports,
    query_pairs,
    uri_sources,
)
from urigrammar import parse_json, parse_uri
from urigrammar.enums import Scheme
from urigrammar.syntax.ast import Domain, IPv4Address
from urigrammar.syntax.cursor import Cursor, ParseError, ParseResult
from urigrammar.syntax.parser.rules import parse_ipv4, parse_port

# ============================================================================
# COMPONENT PROPERTIES
# ============================================================================


class TestComponentProperties:
    """Properties of individual rules."""

    @given(literal=ipv4_literals())
    def test_valid_ipv4_round_trips_octets(
        self, literal: tuple[str, tuple[int, int, int, int]]
    ) -> None:
        """PROPERTY: every dotted quad of 0-255 parses to its octets."""
        text, octets = literal
        result = parse_ipv4(Cursor(text, 0))

        assert isinstance(result, ParseResult)
        assert result.value == IPv4Address(octets)
        assert result.cursor.is_eof

    @given(port=ports())
    def test_valid_port(self, port: int) -> None:
        """PROPERTY: every port 0-65535 parses."""
        result = parse_port(Cursor(f":{port}", 0))

        assert isinstance(result, ParseResult)
        assert result.value == port

    @given(port=st.integers(min_value=65536, max_value=99999))
    def test_five_digit_port_out_of_range(self, port: int) -> None:
        """PROPERTY: five-digit ports above 65535 fail with an empty trail."""
        result = parse_port(Cursor(f":{port}", 0))

        assert isinstance(result, ParseError)
        assert result.trail() == ()

    @given(scheme=mixed_case_schemes())
    def test_scheme_case_insensitive(self, scheme: str) -> None:
        """PROPERTY: scheme matching ignores case."""
        result = parse_uri(scheme + "localhost")

        assert isinstance(result, ParseResult)
        assert result.value.scheme is Scheme(scheme.lower().removesuffix("://"))


# ============================================================================
# WHOLE-URI PROPERTIES
# ============================================================================


class TestURIProperties:
    """Properties of the assembled grammar."""

    @given(source=uri_sources())
    def test_generated_uris_fully_consumed(self, source: str) -> None:
        """PROPERTY: URIs built from valid components parse completely."""
        result = parse_uri(source)

        assert isinstance(result, ParseResult)
        assert result.cursor.is_eof

    @given(source=uri_sources())
    def test_deterministic(self, source: str) -> None:
        """PROPERTY: parsing the same input twice gives equal results."""
        assert parse_uri(source) == parse_uri(source)

    @given(domain=dotted_domains())
    def test_dotted_domain_host(self, domain: str) -> None:
        """PROPERTY: a dotted domain is the host verbatim."""
        result = parse_uri(f"http://{domain}")

        assert isinstance(result, ParseResult)
        assert result.value.host == Domain(domain)

    @given(segments=st.lists(path_segments(), min_size=1, max_size=6))
    def test_path_segments_preserved(self, segments: list[str]) -> None:
        """PROPERTY: non-empty segments come back in order."""
        result = parse_uri("http://localhost/" + "/".join(segments))

        assert isinstance(result, ParseResult)
        assert result.value.path == tuple(segments)

    @given(pairs=query_pairs())
    def test_query_order_preserved(self, pairs: list[tuple[str, str]]) -> None:
        """PROPERTY: query pairs keep input order, duplicates included."""
        query = "&".join(f"{key}={value}" for key, value in pairs)
        result = parse_uri(f"http://localhost?{query}")

        assert isinstance(result, ParseResult)
        assert result.value.query == tuple(pairs)

    @given(noise=st.text(alphabet=string.printable, max_size=60))
    def test_failure_never_raises(self, noise: str) -> None:
        """PROPERTY: arbitrary input yields a result or an error value."""
        result = parse_uri(noise)

        assert isinstance(result, ParseResult | ParseError)
        if isinstance(result, ParseError):
            assert all(0 <= entry.cursor.pos <= len(noise) for entry in result.entries)

    @given(source=uri_sources(), suffix=st.sampled_from([" ", "!", "%20", "~x"]))
    @settings(max_examples=100)
    def test_trailing_input_left_unconsumed(self, source: str, suffix: str) -> None:
        """PROPERTY: unsupported characters after a URI are the remainder."""
        result = parse_uri(source + suffix)

        assert isinstance(result, ParseResult)
        assert result.remaining == suffix


# ============================================================================
# JSON NUMBERS
# ============================================================================


class TestJSONNumberProperties:
    """Properties of the number grammar."""

    @given(lexeme=json_number_lexemes)
    def test_matches_float(self, lexeme: str) -> None:
        """PROPERTY: numbers convert exactly like float() on the lexeme."""
        result = parse_json(lexeme)

        assert isinstance(result, ParseResult)
        assert result.value.value == float(lexeme)  # type: ignore[union-attr]
        assert result.cursor.is_eof
