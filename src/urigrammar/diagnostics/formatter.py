"""Rendering of diagnostics for terminals, logs and tooling.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic, SourceSpan

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# Hostile input must not forge extra log lines or terminal escapes.
_CONTROL_ESCAPES = {i: f"\\x{i:02x}" for i in range(0x20)} | {0x7F: "\\x7f"}

_RED = "\033[1;31m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


class OutputFormat(StrEnum):
    """How a diagnostic is rendered."""

    RUST = "rust"
    SIMPLE = "simple"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Render diagnostics, optionally quoting the offending source line.

    Attributes:
        output_format: Rendering style
        color: Emit ANSI escapes around the header and caret
        truncate_at: Maximum characters of message, hint or quoted line
            (None disables truncation)

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(ErrorTemplate.uri_invalid("port", None, ("uri", "port"))))
        URI_INVALID: Invalid URI: expected port
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False
    truncate_at: int | None = None

    def format(self, diagnostic: Diagnostic, source: str | None = None) -> str:
        """Render one diagnostic.

        source is only consulted by the RUST style, and only when the
        diagnostic carries a span.
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._rust(diagnostic, source)
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {self._clean(diagnostic.message)}"
            case OutputFormat.JSON:
                return self._json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic], source: str | None = None) -> str:
        return "\n\n".join(self.format(d, source) for d in diagnostics)

    def _rust(self, diagnostic: Diagnostic, source: str | None) -> str:
        """Multi-line compiler style.

        Example output (with source):
            error[URI_INVALID]: Invalid URI: expected host
              --> line 1, column 8
               |
             1 | http://$$$.com
               |        ^
              = context: uri > ip or host > host
              = help: Hosts are dotted names ending in a letter label, or IPv4 literals
              = note: see https://www.rfc-editor.org/rfc/rfc3986#section-3.2.2
        """
        label = self._paint("error", _RED)
        lines = [f"{label}[{diagnostic.code.name}]: {self._clean(diagnostic.message)}"]

        span = diagnostic.span
        if span is not None:
            lines.append(f"  --> line {span.line}, column {span.column}")
            if source is not None:
                lines.extend(self._excerpt(source, span))
        if diagnostic.trail:
            lines.append("  = context: " + " > ".join(diagnostic.trail))
        if diagnostic.hint:
            lines.append(f"  = help: {self._clean(diagnostic.hint)}")
        if diagnostic.help_url:
            lines.append(f"  = note: see {diagnostic.help_url}")
        return "\n".join(lines)

    def _excerpt(self, source: str, span: SourceSpan) -> list[str]:
        """Quote the line holding span.start with a caret under its column."""
        source_lines = source.split("\n")
        if span.line > len(source_lines):
            return []
        text = source_lines[span.line - 1]
        gutter = " " * len(str(span.line))
        caret_at = span.column - 1
        if self.truncate_at is not None and caret_at > self.truncate_at:
            # Keep the caret in view by dropping the head of the line.
            drop = caret_at - self.truncate_at // 2
            text = "..." + text[drop:]
            caret_at = caret_at - drop + 3
        quoted = self._clean(text)
        # Escaped characters before the caret widen the line.
        caret_at += len(self._escape(text[:caret_at])) - caret_at
        caret = self._paint("^", _BLUE)
        return [
            f" {gutter} |",
            f" {span.line} | {quoted}",
            f" {gutter} | {' ' * caret_at}{caret}",
        ]

    def _json(self, diagnostic: Diagnostic) -> str:
        """One JSON object per diagnostic, for tooling.

        Example output:
            {"code": "URI_INVALID", "code_value": 3002, "message": "...", "trail": ["uri", "scheme"]}
        """
        payload: dict[str, object] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._truncate(diagnostic.message),
        }
        if (span := diagnostic.span) is not None:
            payload |= {
                "start": span.start,
                "end": span.end,
                "line": span.line,
                "column": span.column,
            }
        if diagnostic.trail:
            payload["trail"] = list(diagnostic.trail)
        if diagnostic.hint:
            payload["hint"] = self._truncate(diagnostic.hint)
        if diagnostic.help_url:
            payload["help_url"] = diagnostic.help_url
        return json.dumps(payload, ensure_ascii=False)

    def _clean(self, text: str) -> str:
        return self._escape(self._truncate(text))

    def _truncate(self, text: str) -> str:
        if self.truncate_at is not None and len(text) > self.truncate_at:
            return text[: self.truncate_at] + "..."
        return text

    def _paint(self, text: str, ansi: str) -> str:
        return f"{ansi}{text}{_RESET}" if self.color else text

    @staticmethod
    def _escape(text: str) -> str:
        return text.translate(_CONTROL_ESCAPES)
