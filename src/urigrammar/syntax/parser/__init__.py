"""URI parser module.

This module provides the main URIParser class and the grammar organized
into focused submodules.

Module Organization:
- core.py: URIParser class (size limit, logging, complete-parse boundary)
- combinators.py: Generic combinators (tag, alt, opt, many0, count, context, ...)
- primitives.py: Character-class recognizers (alpha1, alphanumeric1, digits, ...)
- rules.py: URI grammar rules (scheme, authority, host, ip, port, path, ...)

Public API:
    URIParser: Main parser class
    Parser: Type alias for Cursor -> ParseResult | ParseError callables
"""

from urigrammar.syntax.parser.combinators import Parser
from urigrammar.syntax.parser.core import URIParser

__all__ = ["Parser", "URIParser"]
