"""Enumerations for URIGrammar type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class Scheme(StrEnum):
    """URI scheme recognized by the grammar.

    StrEnum provides automatic string conversion: str(Scheme.HTTPS) == "https"
    """

    HTTP = "http"
    """Plain HTTP: http://"""

    HTTPS = "https"
    """HTTP over TLS: https://"""

    @classmethod
    def from_token(cls, token: str) -> "Scheme":
        """Map a matched scheme token (e.g. ``"HTTPS://"``) to its member.

        Raises:
            ValueError: If the token is not one of the recognized literals
        """
        name = token.lower().removesuffix("://")
        try:
            return cls(name)
        except ValueError:
            msg = f"Invalid scheme token: {token!r}"
            raise ValueError(msg) from None


class ErrorKind(StrEnum):
    """Kind of primitive failure recorded in a parse error trail.

    StrEnum provides automatic string conversion: str(ErrorKind.TAG) == "tag"
    """

    TAG = "tag"
    """Expected literal text was absent"""

    ALT = "alt"
    """Every alternative of an ordered choice failed"""

    ALPHA = "alpha"
    """Expected at least one ASCII letter"""

    ALPHANUMERIC = "alphanumeric"
    """Expected at least one ASCII letter or digit"""

    DIGIT = "digit"
    """Expected at least one ASCII digit"""

    ONE_OF = "one_of"
    """Current character is not in the allowed set"""

    CHAR = "char"
    """Expected a specific single character"""

    MANY0 = "many0"
    """Repeated parser succeeded without consuming input"""

    MANY1 = "many1"
    """Repetition matched zero times where one was required"""

    MANY_M_N = "many_m_n"
    """Repetition matched fewer times than its lower bound"""

    COUNT = "count"
    """Fixed-count repetition stopped short"""

    MAP_RES = "map_res"
    """Recognized text could not be converted to a value"""

    EOF = "eof"
    """Input ended where more was required"""

    NESTING_DEPTH = "nesting_depth"
    """Nested value exceeded the configured depth limit"""


__all__ = [
    "ErrorKind",
    "Scheme",
]
