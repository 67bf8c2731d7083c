"""
S-expression parser for .kicad_mod documents.

Parses footprint text into a tree of :class:`SExp` nodes. Numeric atoms keep
their original spelling, so a stroke width such as ``0.07101`` can be read
back exactly as it was written.

Usage:
    from gerbersockets.sexp import parse_string

    doc = parse_string(text)
    doc.name                                  # 'footprint'
    [line["stroke"]["width"].first_raw for line in doc.find_all("fp_line")]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Union

from ..exceptions import ParseError


@dataclass
class SExp:
    """
    S-expression node.

    Either an atom (``value`` set) or a list with an optional leading
    ``name`` followed by ``children``.
    """

    name: Optional[str] = None
    children: list[SExp] = field(default_factory=list)
    value: Optional[Union[str, int, float]] = None

    # Original spelling of numeric atoms
    _original_str: Optional[str] = None

    def __post_init__(self):
        if self.name is not None and self.value is not None:
            raise ValueError("SExp cannot have both name and value")

    @property
    def is_atom(self) -> bool:
        """True if this is a leaf node (string, number, symbol)."""
        return self.name is None and not self.children

    @property
    def raw(self) -> str:
        """Atom text as written in the source (unquoted for strings)."""
        if self._original_str is not None:
            return self._original_str
        return "" if self.value is None else str(self.value)

    def __getitem__(self, key: Union[str, int]) -> SExp:
        """
        Access children by name or index.

        Examples:
            node["stroke"]    # First child named "stroke"
            node[0]           # First child
        """
        if isinstance(key, int):
            return self.children[key]

        for child in self.children:
            if child.name == key:
                return child

        names = sorted({c.name for c in self.children if c.name})
        available = f"Available: {', '.join(names)}" if names else "No named children"
        node_desc = f"'{self.name}'" if self.name else "root"
        raise KeyError(f"No child named '{key}' in {node_desc}. {available}")

    def get(self, key: str, default: Any = None) -> Optional[SExp]:
        """Get child by name, returning default if not found."""
        try:
            return self[key]
        except KeyError:
            return default

    def find(self, name: str) -> Optional[SExp]:
        """Find the first descendant with the given name."""
        for node in self.iter_all():
            if node.name == name:
                return node
        return None

    def find_all(self, name: str) -> list[SExp]:
        """Find all descendants with the given name, in document order."""
        return [node for node in self.iter_all() if node.name == name]

    def iter_all(self) -> Iterator[SExp]:
        """Iterate over this node and all descendants."""
        yield self
        for child in self.children:
            yield from child.iter_all()

    def get_first_atom(self) -> Optional[Union[str, int, float]]:
        """Get the first atom value from children."""
        for c in self.children:
            if c.is_atom:
                return c.value
        return None

    @property
    def first_raw(self) -> Optional[str]:
        """Source spelling of the first atom child."""
        for c in self.children:
            if c.is_atom:
                return c.raw
        return None

    def __repr__(self) -> str:
        if self.is_atom:
            return f"SExp(value={self.value!r})"
        if self.name:
            return f"SExp(name={self.name!r}, children=[{len(self.children)} items])"
        return f"SExp(children=[{len(self.children)} items])"

    @staticmethod
    def _is_valid_name(s: str) -> bool:
        """Check if string is a valid unquoted list name."""
        if not s:
            return False
        # Names can't start with a digit or dash (would look like number)
        if s[0].isdigit() or s[0] == "-":
            return False
        return not any(c in s for c in ' \t\n\r"()')


class Parser:
    """S-expression parser."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def parse(self) -> SExp:
        """Parse the entire document."""
        self._skip_whitespace()
        result = self._parse_expr()
        self._skip_whitespace()
        if self.pos < self.length:
            raise ParseError("Unexpected content after document", position=self.pos)
        return result

    def _parse_expr(self) -> SExp:
        self._skip_whitespace()

        if self.pos >= self.length:
            raise ParseError("Unexpected end of input", position=self.pos)

        char = self.text[self.pos]
        if char == "(":
            return self._parse_list()
        if char == '"':
            return SExp(value=self._parse_string())
        if char == ")":
            raise ParseError("Unexpected ')'", position=self.pos)
        return self._parse_atom()

    def _parse_list(self) -> SExp:
        self.pos += 1
        self._skip_whitespace()

        if self.pos >= self.length:
            raise ParseError("Unexpected end of input in list", position=self.pos)

        if self.text[self.pos] == ")":
            self.pos += 1
            return SExp()

        quoted = self.text[self.pos] == '"'
        first = self._parse_expr()

        # A leading bare symbol names the list
        if not quoted and isinstance(first.value, str) and SExp._is_valid_name(first.value):
            node = SExp(name=first.value)
        else:
            node = SExp(children=[first])

        while True:
            self._skip_whitespace()

            if self.pos >= self.length:
                raise ParseError("Unexpected end of input, expected ')'", position=self.pos)

            if self.text[self.pos] == ")":
                self.pos += 1
                break

            node.children.append(self._parse_expr())

        return node

    def _parse_string(self) -> str:
        start = self.pos
        self.pos += 1

        result = []
        while self.pos < self.length:
            char = self.text[self.pos]

            if char == '"':
                self.pos += 1
                return "".join(result)
            if char == "\\":
                self.pos += 1
                if self.pos >= self.length:
                    break
                escaped = self.text[self.pos]
                result.append({"n": "\n", "t": "\t", "r": "\r"}.get(escaped, escaped))
            else:
                result.append(char)

            self.pos += 1

        raise ParseError("Unterminated string", position=start)

    def _parse_atom(self) -> SExp:
        start = self.pos

        while self.pos < self.length and self.text[self.pos] not in ' \t\n\r()"':
            self.pos += 1

        token = self.text[start : self.pos]

        try:
            if "." in token or "e" in token.lower():
                return SExp(value=float(token), _original_str=token)
            return SExp(value=int(token), _original_str=token)
        except ValueError:
            return SExp(value=token)

    def _skip_whitespace(self):
        while self.pos < self.length and self.text[self.pos] in " \t\n\r":
            self.pos += 1


def parse_string(text: str) -> SExp:
    """Parse an S-expression string."""
    return Parser(text).parse()

