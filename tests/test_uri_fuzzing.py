"""Intensive property tests for fuzzing the URI and JSON grammars.

Excluded from normal runs; run with: pytest -m fuzz
"""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, event, given, settings
from hypothesis import strategies as st

from tests.strategies import ascii_noise, uri_sources
from urigrammar import parse_json, parse_uri
from urigrammar.syntax.cursor import ParseError, ParseResult

pytestmark = pytest.mark.fuzz


class TestURIFuzzing:
    """Mutate valid URIs and random text; parsing must never raise."""

    @given(
        source=uri_sources(),
        position=st.integers(min_value=0, max_value=80),
        noise=ascii_noise,
    )
    @settings(max_examples=1500, suppress_health_check=[HealthCheck.too_slow])
    def test_spliced_noise(self, source: str, position: int, noise: str) -> None:
        """Noise spliced into a valid URI yields a result or an error value."""
        cut = min(position, len(source))
        mutated = source[:cut] + noise + source[cut:]
        result = parse_uri(mutated)

        if isinstance(result, ParseError):
            event(f"failed: {result.contexts[-1] if result.contexts else 'range'}")
        else:
            assert isinstance(result, ParseResult)
            assert 0 <= result.cursor.pos <= len(mutated)
            event("parsed")

    @given(source=ascii_noise)
    @settings(max_examples=1500)
    def test_json_noise(self, source: str) -> None:
        """Random text never makes the JSON parser raise."""
        result = parse_json(source)

        assert isinstance(result, ParseResult | ParseError)
