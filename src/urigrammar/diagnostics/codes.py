"""Diagnostic codes, source spans and the Diagnostic record.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Stable numeric identifiers for every reportable failure.

    Ranges:
        3000-3999: URI input (grammar failure, trailing input, size limit)
        4000-4999: JSON input
    """

    # URI (3000-3999)
    UNEXPECTED_EOF = 3001
    URI_INVALID = 3002
    URI_TRAILING_INPUT = 3003
    SOURCE_TOO_LARGE = 3004

    # JSON (4000-4999)
    JSON_INVALID = 4001
    JSON_TRAILING_INPUT = 4002
    JSON_NESTING_DEPTH_EXCEEDED = 4003

    @property
    def is_json(self) -> bool:
        """True for codes raised by the JSON grammar."""
        return self.value >= 4000


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Region of the input a diagnostic refers to.

    Attributes:
        start: Offset of the first character (0-indexed)
        end: Offset one past the last character
        line: Line of start (1-indexed)
        column: Column of start (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1 or self.column < 1:
            msg = f"SourceSpan line and column are 1-indexed, got {self.line}:{self.column}"
            raise ValueError(msg)

    @classmethod
    def to_end(cls, source: str, start: int) -> "SourceSpan":
        """Span from start to the end of source, with line and column computed.

        Example:
            >>> SourceSpan.to_end("[1,\\n x]", 5)
            SourceSpan(start=5, end=7, line=2, column=2)
        """
        line = source.count("\n", 0, start) + 1
        column = start - source.rfind("\n", 0, start)
        return cls(start=start, end=len(source), line=line, column=column)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A reportable failure: what went wrong, where, and how to fix it.

    Attributes:
        code: Stable identifier
        message: One-line description
        span: Input region (None when the failure has no position)
        hint: Suggested fix
        help_url: Link to the governing RFC section
        trail: Grammar rules being attempted, outermost first
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    help_url: str | None = None
    trail: tuple[str, ...] | None = None

    def __str__(self) -> str:
        return self.message

    def format_error(self, source: str | None = None) -> str:
        """Render with the default formatter, quoting source when given.

        Example output:
            error[URI_INVALID]: Invalid URI: expected host
              --> line 1, column 8
              = context: uri > ip or host > host
              = help: Hosts are dotted names ending in a letter label, or IPv4 literals
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self, source)
