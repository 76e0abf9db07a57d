"""URI value types produced by the grammar.

All types are immutable. Host and Scheme are closed: a host is exactly one of
Domain or IPv4Address, and match statements over them are exhaustive.

Python 3.13+. Zero external dependencies.
"""

import ipaddress
from dataclasses import dataclass
from typing import NamedTuple, TypeIs

from urigrammar.constants import IPV4_OCTET_COUNT, OCTET_MAX_VALUE, PORT_MAX_VALUE
from urigrammar.enums import Scheme

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Components
    "Authority",
    "Domain",
    "IPv4Address",
    "QueryParam",
    # Root
    "URI",
    # Type aliases
    "Host",
]

# ============================================================================
# COMPONENTS
# ============================================================================


class Authority(NamedTuple):
    """User information preceding the host: user[:password]@

    A NamedTuple so it compares equal to a plain (user, password) pair.
    """

    user: str
    password: str | None = None


class QueryParam(NamedTuple):
    """One key=value pair from the query string.

    A NamedTuple so it unpacks and compares as a plain (key, value) pair.
    """

    key: str
    value: str


@dataclass(frozen=True, slots=True)
class Domain:
    """Dotted host name, e.g. www.example.org or localhost."""

    name: str

    @staticmethod
    def guard(host: object) -> TypeIs["Domain"]:
        """Type guard for Domain."""
        return isinstance(host, Domain)


@dataclass(frozen=True, slots=True)
class IPv4Address:
    """Dotted-quad IPv4 literal.

    Attributes:
        octets: Four values, each 0-255

    Example:
        >>> IPv4Address((127, 0, 0, 1)).ip_address
        IPv4Address('127.0.0.1')
    """

    octets: tuple[int, int, int, int]

    def __post_init__(self) -> None:
        """Validate octet count and range."""
        if len(self.octets) != IPV4_OCTET_COUNT:
            msg = f"IPv4Address needs {IPV4_OCTET_COUNT} octets, got {len(self.octets)}"
            raise ValueError(msg)
        for octet in self.octets:
            if not 0 <= octet <= OCTET_MAX_VALUE:
                msg = f"IPv4 octet must be 0-{OCTET_MAX_VALUE}, got {octet}"
                raise ValueError(msg)

    @property
    def ip_address(self) -> ipaddress.IPv4Address:
        """Standard library view of the address."""
        return ipaddress.IPv4Address(bytes(self.octets))

    def __str__(self) -> str:
        return ".".join(str(octet) for octet in self.octets)

    @staticmethod
    def guard(host: object) -> TypeIs["IPv4Address"]:
        """Type guard for IPv4Address."""
        return isinstance(host, IPv4Address)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Host = Domain | IPv4Address


# ============================================================================
# ROOT
# ============================================================================


@dataclass(frozen=True, slots=True)
class URI:
    """Structured URI: scheme://[user[:pass]@]host[:port][/path][?query][#fragment]

    Absent components are None. An empty path ("/") is an empty tuple, which
    is distinct from no path at all.

    Attributes:
        scheme: HTTP or HTTPS
        authority: User info, if present
        host: Domain name or IPv4 literal
        port: 0-65535, if present
        path: Path segments in order, if a path was present
        query: Query pairs in input order (duplicates kept), if present
        fragment: Text after '#', if present
    """

    scheme: Scheme
    host: Host
    authority: Authority | None = None
    port: int | None = None
    path: tuple[str, ...] | None = None
    query: tuple[QueryParam, ...] | None = None
    fragment: str | None = None

    def __post_init__(self) -> None:
        """Validate port range."""
        if self.port is not None and not 0 <= self.port <= PORT_MAX_VALUE:
            msg = f"URI port must be 0-{PORT_MAX_VALUE}, got {self.port}"
            raise ValueError(msg)

