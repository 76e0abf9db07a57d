"""Tests for the public package surface."""

from __future__ import annotations

import importlib

import pytest

import urigrammar


class TestPublicAPI:
    """Every name in __all__ resolves and the convenience helpers agree."""

    @pytest.mark.parametrize(
        "module_name",
        [
            "urigrammar",
            "urigrammar.diagnostics",
            "urigrammar.syntax",
            "urigrammar.syntax.parser",
            "urigrammar.syntax.json_value",
        ],
    )
    def test_all_names_resolve(self, module_name: str) -> None:
        """__all__ lists only attributes the module defines."""
        module = importlib.import_module(module_name)

        for name in module.__all__:
            assert hasattr(module, name), f"{module_name}.{name}"

    def test_version_is_string(self) -> None:
        """__version__ is populated from metadata or the dev fallback."""
        assert isinstance(urigrammar.__version__, str)
        assert urigrammar.__version__

    def test_helpers_match_parser(self) -> None:
        """parse_uri is URIParser().parse."""
        source = "http://example.org:8080/a?b=c#d"

        assert urigrammar.parse_uri(source) == urigrammar.URIParser().parse(source)
