"""Diagnostic factories for every failure the URI and JSON helpers report.

Each factory pairs a message with its code, a hint and the governing RFC.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

# Hints keyed by the innermost context label of a failed URI parse.
_URI_RULE_HINTS: dict[str, str] = {
    "scheme": "Only 'http://' and 'https://' are supported (case-insensitive)",
    "authority": "User info has the form 'user[:password]@' with alphanumeric parts",
    "ip or host": "Hosts are dotted names ending in a letter label, or IPv4 literals",
    "host": "Hosts are dotted names ending in a letter label, or IPv4 literals",
    "ip": "IPv4 literals are four dot-separated numbers from 0 to 255",
    "ip number": "IPv4 octets are 1 to 3 digits with a value from 0 to 255",
    "port": "Ports are 1 to 5 digits with a value from 0 to 65535",
}

# RFC 3986 section anchors keyed by context label.
_URI_RULE_SECTIONS: dict[str, str] = {
    "scheme": "section-3.1",
    "authority": "section-3.2.1",
    "ip or host": "section-3.2.2",
    "host": "section-3.2.2",
    "ip": "section-3.2.2",
    "ip number": "section-3.2.2",
    "port": "section-3.2.3",
    "path": "section-3.3",
    "query params": "section-3.4",
    "fragment": "section-3.5",
}


class ErrorTemplate:
    """Factories for Diagnostic values.

    Exceptions take a Diagnostic built here rather than formatting their own
    message, so tests can assert on the exact wording.
    """

    _RFC3986 = "https://www.rfc-editor.org/rfc/rfc3986"
    _RFC8259 = "https://www.rfc-editor.org/rfc/rfc8259"

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Cursor read past the end of input.

        Args:
            position: Offset at which the read was attempted

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            span=None,
            hint="Check is_eof before reading the current character",
        )

    @staticmethod
    def uri_invalid(
        rule: str | None,
        span: SourceSpan | None,
        trail: tuple[str, ...],
    ) -> Diagnostic:
        """URI grammar rejected the input.

        Args:
            rule: Innermost context label that failed (None if no label)
            span: Location of the innermost failure
            trail: Context labels, outermost first

        Returns:
            Diagnostic for URI_INVALID
        """
        msg = f"Invalid URI: expected {rule}" if rule else "Invalid URI"
        section = _URI_RULE_SECTIONS.get(rule or "")
        return Diagnostic(
            code=DiagnosticCode.URI_INVALID,
            message=msg,
            span=span,
            hint=_URI_RULE_HINTS.get(rule or ""),
            help_url=f"{ErrorTemplate._RFC3986}#{section}" if section else ErrorTemplate._RFC3986,
            trail=trail,
        )

    @staticmethod
    def uri_trailing_input(remaining: str, span: SourceSpan) -> Diagnostic:
        """URI parsed but input remains after the last component.

        Args:
            remaining: Unconsumed suffix
            span: Location of the unconsumed suffix

        Returns:
            Diagnostic for URI_TRAILING_INPUT
        """
        msg = f"Unexpected trailing input after URI: {remaining!r}"
        return Diagnostic(
            code=DiagnosticCode.URI_TRAILING_INPUT,
            message=msg,
            span=span,
            hint="Path, query and fragment characters are limited to letters, digits, '-' and '.'",
            help_url=ErrorTemplate._RFC3986,
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Input exceeds the configured size limit.

        Args:
            size: Length of the rejected input
            limit: Configured maximum

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        msg = (
            f"Source size ({size:,} characters) exceeds maximum ({limit:,} characters)"
        )
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            span=None,
            hint="Configure max_source_size in the parser constructor to increase the limit",
        )

    @staticmethod
    def json_invalid(
        rule: str | None,
        span: SourceSpan | None,
        trail: tuple[str, ...],
    ) -> Diagnostic:
        """JSON grammar rejected the input.

        Args:
            rule: Innermost context label that failed (None if no label)
            span: Location of the innermost failure
            trail: Context labels, outermost first

        Returns:
            Diagnostic for JSON_INVALID
        """
        msg = f"Invalid JSON: expected {rule}" if rule else "Invalid JSON"
        return Diagnostic(
            code=DiagnosticCode.JSON_INVALID,
            message=msg,
            span=span,
            help_url=ErrorTemplate._RFC8259,
            trail=trail,
        )

    @staticmethod
    def json_trailing_input(remaining: str, span: SourceSpan) -> Diagnostic:
        """JSON value parsed but input remains.

        Args:
            remaining: Unconsumed suffix
            span: Location of the unconsumed suffix

        Returns:
            Diagnostic for JSON_TRAILING_INPUT
        """
        msg = f"Unexpected trailing input after JSON value: {remaining!r}"
        return Diagnostic(
            code=DiagnosticCode.JSON_TRAILING_INPUT,
            message=msg,
            span=span,
            hint="A JSON document holds exactly one value",
            help_url=ErrorTemplate._RFC8259,
        )

    @staticmethod
    def json_nesting_depth_exceeded(max_depth: int, span: SourceSpan | None) -> Diagnostic:
        """Arrays or objects nested beyond the depth limit.

        Args:
            max_depth: Configured maximum depth
            span: Location where the limit was hit

        Returns:
            Diagnostic for JSON_NESTING_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.JSON_NESTING_DEPTH_EXCEEDED,
            message=msg,
            span=span,
            hint="Flatten the document or raise max_nesting_depth",
        )
