"""
Net name to stroke-width encoding.

Each character of a net name becomes one zero-length line whose stroke width
is the literal string::

    0.<order><code point>01

where ``order`` is the zero-based character position and ``code point`` the
character's ordinal, both in plain decimal. For "GND" that gives
``0.07101``, ``0.17801`` and ``0.26801`` (mm).

The two numbers are concatenated without a separator, so a width such as
``0.112301`` reads as either order 1 / code point 123 or order 11 / code
point 23. The format is kept as is and nothing here decodes it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CharacterSlot:
    """One character of a net name at its position."""

    order: int
    code_point: int

    @property
    def width_token(self) -> str:
        return width_token(self.order, self.code_point)


def width_token(order: int, code_point: int) -> str:
    """Build the stroke width string for one character slot."""
    return "0." + str(order) + str(code_point) + "01"


def character_slots(label: str) -> list[CharacterSlot]:
    """Split a label into its ordered character slots."""
    return [CharacterSlot(order=i, code_point=ord(char)) for i, char in enumerate(label)]


def encode(label: str) -> list[str]:
    """
    Encode a net name as an ordered list of width tokens.

    Args:
        label: Net name; any characters are accepted

    Returns:
        One token per character, in character order

    Example:
        >>> encode("GND")
        ['0.07101', '0.17801', '0.26801']
    """
    return [slot.width_token for slot in character_slots(label)]


__all__ = ["CharacterSlot", "width_token", "character_slots", "encode"]
