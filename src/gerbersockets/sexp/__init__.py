"""
S-expression parsing for KiCad footprint documents.

Usage:
    from gerbersockets.sexp import SExp, parse_string

    doc = parse_string(text)
    doc.name        # 'footprint'
    doc.children
"""

from ..exceptions import ParseError
from .parser import Parser, SExp, parse_string

__all__ = [
    "SExp",
    "Parser",
    "ParseError",
    "parse_string",
]
