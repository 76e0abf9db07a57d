"""Tests for diagnostic codes, templates, formatter and exceptions."""

from __future__ import annotations

import json

import pytest

from urigrammar.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    JSONSyntaxError,
    OutputFormat,
    SourceSpan,
    URIGrammarError,
    URISyntaxError,
)

# ============================================================================
# CODES AND SPANS
# ============================================================================


class TestDiagnosticCode:
    """Test code numbering."""

    def test_codes_unique(self) -> None:
        """Every code has a distinct value."""
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    def test_ranges(self) -> None:
        """URI codes are 3xxx, JSON codes are 4xxx."""
        assert DiagnosticCode.URI_INVALID.value // 1000 == 3
        assert DiagnosticCode.JSON_INVALID.value // 1000 == 4

    def test_is_json(self) -> None:
        """is_json separates the two grammars."""
        assert DiagnosticCode.JSON_TRAILING_INPUT.is_json
        assert not DiagnosticCode.URI_TRAILING_INPUT.is_json


class TestSourceSpan:
    """Test SourceSpan validation."""

    def test_valid(self) -> None:
        """A well-formed span constructs."""
        span = SourceSpan(start=0, end=3, line=1, column=1)
        assert span.end == 3

    @pytest.mark.parametrize(
        ("start", "end", "line", "column", "match"),
        [
            (-1, 0, 1, 1, "start"),
            (5, 3, 1, 1, "end"),
            (0, 0, 0, 1, "line"),
            (0, 0, 1, 0, "column"),
        ],
    )
    def test_invalid(self, start: int, end: int, line: int, column: int, match: str) -> None:
        """Negative or zero-based positions are rejected."""
        with pytest.raises(ValueError, match=match):
            SourceSpan(start=start, end=end, line=line, column=column)

    def test_to_end(self) -> None:
        """to_end derives line and column from the source."""
        assert SourceSpan.to_end("[1,\n x]", 5) == SourceSpan(start=5, end=7, line=2, column=2)
        assert SourceSpan.to_end("abc", 3) == SourceSpan(start=3, end=3, line=1, column=4)


# ============================================================================
# TEMPLATES
# ============================================================================


class TestErrorTemplate:
    """Test message templates."""

    def test_uri_invalid_known_rule(self) -> None:
        """Known rules get a hint and an RFC section link."""
        diagnostic = ErrorTemplate.uri_invalid("port", None, ("uri", "port"))

        assert diagnostic.code is DiagnosticCode.URI_INVALID
        assert diagnostic.message == "Invalid URI: expected port"
        assert diagnostic.hint is not None
        assert diagnostic.help_url == "https://www.rfc-editor.org/rfc/rfc3986#section-3.2.3"

    def test_uri_invalid_no_rule(self) -> None:
        """Without a rule the message is generic."""
        diagnostic = ErrorTemplate.uri_invalid(None, None, ())

        assert diagnostic.message == "Invalid URI"
        assert diagnostic.hint is None
        assert diagnostic.help_url == "https://www.rfc-editor.org/rfc/rfc3986"

    def test_source_too_large(self) -> None:
        """Sizes are formatted with thousands separators."""
        diagnostic = ErrorTemplate.source_too_large(70000, 65536)

        assert diagnostic.message == (
            "Source size (70,000 characters) exceeds maximum (65,536 characters)"
        )

    def test_json_nesting(self) -> None:
        """Nesting template names the limit."""
        diagnostic = ErrorTemplate.json_nesting_depth_exceeded(3, None)

        assert diagnostic.code is DiagnosticCode.JSON_NESTING_DEPTH_EXCEEDED
        assert "(3)" in diagnostic.message


# ============================================================================
# FORMATTER
# ============================================================================


class TestDiagnosticFormatter:
    """Test output formats."""

    @pytest.fixture
    def diagnostic(self) -> Diagnostic:
        """URI diagnostic with every optional field populated."""
        return ErrorTemplate.uri_invalid(
            "scheme",
            SourceSpan(start=0, end=7, line=1, column=1),
            ("uri", "scheme"),
        )

    def test_rust_format(self, diagnostic: Diagnostic) -> None:
        """Rust style lists location, context, help and note."""
        output = DiagnosticFormatter().format(diagnostic)

        assert output.split("\n") == [
            "error[URI_INVALID]: Invalid URI: expected scheme",
            "  --> line 1, column 1",
            "  = context: uri > scheme",
            "  = help: Only 'http://' and 'https://' are supported (case-insensitive)",
            "  = note: see https://www.rfc-editor.org/rfc/rfc3986#section-3.1",
        ]

    def test_rust_format_quotes_source(self) -> None:
        """Given the source, the failing line is quoted with a caret."""
        source = "http://$$$.com"
        diagnostic = ErrorTemplate.uri_invalid(
            "host", SourceSpan.to_end(source, 7), ("uri", "ip or host", "host")
        )
        lines = DiagnosticFormatter().format(diagnostic, source).split("\n")

        assert lines[1:5] == [
            "  --> line 1, column 8",
            "   |",
            " 1 | http://$$$.com",
            "   |        ^",
        ]

    def test_excerpt_keeps_caret_in_view(self) -> None:
        """A long line is cut from the left so the caret stays visible."""
        source = "http://" + "a" * 60 + "!"
        diagnostic = Diagnostic(
            code=DiagnosticCode.URI_TRAILING_INPUT,
            message="Unexpected input after URI",
            span=SourceSpan.to_end(source, 67),
        )
        lines = DiagnosticFormatter(truncate_at=20).format(diagnostic, source).split("\n")

        assert lines[3] == " 1 | ..." + "a" * 10 + "!"
        assert lines[4] == "   | " + " " * 13 + "^"

    def test_excerpt_escapes_control_characters(self) -> None:
        """Escaped characters before the caret shift it right."""
        source = "a\tb!"
        diagnostic = Diagnostic(
            code=DiagnosticCode.URI_INVALID,
            message="Invalid URI",
            span=SourceSpan.to_end(source, 3),
        )
        lines = DiagnosticFormatter().format(diagnostic, source).split("\n")

        assert lines[3] == " 1 | a\\x09b!"
        assert lines[4] == "   |       ^"

    def test_simple_format(self, diagnostic: Diagnostic) -> None:
        """Simple format is one line."""
        output = DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic)

        assert output == "URI_INVALID: Invalid URI: expected scheme"

    def test_json_format(self, diagnostic: Diagnostic) -> None:
        """JSON format round-trips through the json module."""
        output = DiagnosticFormatter(output_format=OutputFormat.JSON).format(diagnostic)
        data = json.loads(output)

        assert data["code"] == "URI_INVALID"
        assert data["code_value"] == 3002
        assert data["trail"] == ["uri", "scheme"]
        assert data["column"] == 1

    def test_color(self, diagnostic: Diagnostic) -> None:
        """Color wraps the error label in ANSI codes."""
        output = DiagnosticFormatter(color=True).format(diagnostic)

        assert output.startswith("\033[1;31merror\033[0m")

    def test_truncate_at(self) -> None:
        """truncate_at shortens long messages."""
        diagnostic = Diagnostic(code=DiagnosticCode.URI_INVALID, message="x" * 50)
        output = DiagnosticFormatter(output_format=OutputFormat.SIMPLE, truncate_at=10).format(
            diagnostic
        )

        assert output == "URI_INVALID: " + "x" * 10 + "..."

    def test_control_characters_escaped(self) -> None:
        """Control characters in messages cannot break lines."""
        diagnostic = Diagnostic(code=DiagnosticCode.URI_INVALID, message="a\nb\x1bc")
        output = DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic)

        assert "\n" not in output
        assert "\x1b" not in output

    def test_format_all(self, diagnostic: Diagnostic) -> None:
        """Multiple diagnostics are separated by a blank line."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        assert formatter.format_all([diagnostic, diagnostic]).count("\n\n") == 1

    def test_diagnostic_format_error(self, diagnostic: Diagnostic) -> None:
        """Diagnostic.format_error uses the default formatter."""
        assert diagnostic.format_error() == DiagnosticFormatter().format(diagnostic)
        assert str(diagnostic) == "Invalid URI: expected scheme"


# ============================================================================
# EXCEPTIONS
# ============================================================================


class TestExceptions:
    """Test exception hierarchy."""

    def test_hierarchy(self) -> None:
        """Syntax errors share the package base class."""
        assert issubclass(URISyntaxError, URIGrammarError)
        assert issubclass(JSONSyntaxError, URIGrammarError)

    def test_plain_message(self) -> None:
        """A string message leaves diagnostic unset."""
        error = URIGrammarError("boom")

        assert str(error) == "boom"
        assert error.diagnostic is None

    def test_diagnostic_message(self) -> None:
        """A Diagnostic is kept and formatted into the message."""
        diagnostic = ErrorTemplate.uri_invalid("host", None, ("uri", "ip or host", "host"))
        error = URISyntaxError(diagnostic, source="http://")

        assert error.diagnostic is diagnostic
        assert str(error).startswith("error[URI_INVALID]: Invalid URI: expected host")
        assert error.source == "http://"

    def test_syntax_error_quotes_source(self) -> None:
        """The exception message includes the failing line."""
        diagnostic = ErrorTemplate.uri_trailing_input(" b", SourceSpan.to_end("http://a b", 8))
        error = URISyntaxError(diagnostic, source="http://a b")

        assert " 1 | http://a b" in str(error).split("\n")
