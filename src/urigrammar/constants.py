"""Shared constants for URIGrammar.

This module provides centralized configuration constants used across
the syntax and diagnostics packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Character classes: ASCII sets used by primitive recognizers
- Numeric widths: Digit-count bounds for octets and ports
- Input limits: DoS prevention via size and depth constraints

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Character classes
    "ASCII_DIGITS",
    "URL_CODE_POINT_EXTRAS",
    "JSON_WHITESPACE",
    # Numeric widths
    "OCTET_MIN_DIGITS",
    "OCTET_MAX_DIGITS",
    "OCTET_MAX_VALUE",
    "IPV4_OCTET_COUNT",
    "PORT_MIN_DIGITS",
    "PORT_MAX_DIGITS",
    "PORT_MAX_VALUE",
    # Input limits
    "MAX_SOURCE_SIZE",
    "MAX_DEPTH",
    "JSON_FRAMES_PER_LEVEL",
    "RECURSION_RESERVE_FRAMES",
]

# ============================================================================
# CHARACTER CLASSES
# ============================================================================

# ASCII digits only. str.isdigit() returns True for Unicode digits like ² which
# int() rejects, so every digit test in the grammar goes through this set.
ASCII_DIGITS: str = "0123456789"

# Characters allowed in path segments, query keys/values and fragments on top
# of ASCII alphanumerics.
URL_CODE_POINT_EXTRAS: str = "-."

# Whitespace skipped between JSON tokens (RFC 8259 section 2).
JSON_WHITESPACE: str = " \t\n\r"

# ============================================================================
# NUMERIC WIDTHS
# ============================================================================

# An IPv4 octet is 1-3 digits, greedily consumed, then range-checked.
OCTET_MIN_DIGITS: int = 1
OCTET_MAX_DIGITS: int = 3
OCTET_MAX_VALUE: int = 0xFF
IPV4_OCTET_COUNT: int = 4

# A port is 1-5 digits, greedily consumed, then range-checked.
PORT_MIN_DIGITS: int = 1
PORT_MAX_DIGITS: int = 5
PORT_MAX_VALUE: int = 0xFFFF

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (64 KiB).
# URIs longer than this are not produced by any real client; rejecting them
# early bounds memory spent on segment and parameter tuples.
MAX_SOURCE_SIZE: int = 64 * 1024

# Maximum nesting depth for JSON arrays and objects.
# Each level costs about ten interpreter frames through the combinator stack,
# so 64 levels stay well inside the default recursion limit of 1000.
MAX_DEPTH: int = 64

# Interpreter frames one array or object level adds: parse_json_value,
# context, alt, the container parser, context, map_result, preceded,
# terminated, separated_list0 and (objects only) separated_pair.
JSON_FRAMES_PER_LEVEL: int = 10

# Frames left for the caller's own stack when clamping nesting depth.
RECURSION_RESERVE_FRAMES: int = 200
