"""
Footprint element data structures and .kicad_mod serialization.

These classes describe the handful of elements a GerberSockets footprint is
made of and render them in KiCad's tab-indented S-expression layout. Every
element carries the identifier it was built with; nothing here mints
identifiers itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union


@dataclass
class Property:
    """A footprint property block (Reference, Value, ...)."""

    name: str
    value: str
    x: float
    y: float
    uuid: str
    layer: str = "F.Fab"
    hide: bool = False
    font_size: float = 1.0
    font_thickness: float = 0.15

    def to_sexp(self) -> str:
        """Convert to KiCad S-expression format."""
        lines = [f"\t(property {quote(self.name)} {quote(self.value)}"]
        lines.append(f"\t\t(at {_fmt(self.x)} {_fmt(self.y)} 0)")
        lines.append("\t\t(unlocked yes)")
        lines.append(f'\t\t(layer "{self.layer}")')
        if self.hide:
            lines.append("\t\t(hide yes)")
        lines.append(f'\t\t(uuid "{self.uuid}")')
        lines.append(_effects(self.font_size, self.font_thickness))
        lines.append("\t)")
        return "\n".join(lines)


@dataclass
class MarkLine:
    """
    A zero-length line at the origin.

    ``width`` is written verbatim so encoded widths survive unchanged.
    """

    width: str
    uuid: str
    layer: str = "User.1"

    def to_sexp(self) -> str:
        """Convert to KiCad S-expression format."""
        return f"""\t(fp_line
\t\t(start 0 0)
\t\t(end 0 0)
\t\t(stroke
\t\t\t(width {self.width})
\t\t\t(type default)
\t\t)
\t\t(layer "{self.layer}")
\t\t(uuid "{self.uuid}")
\t)"""


@dataclass
class GraphicText:
    """A text element on a footprint layer."""

    text_type: Literal["user"]
    text: str
    x: float
    y: float
    uuid: str
    layer: str = "F.Fab"
    font_size: float = 1.0
    font_thickness: float = 0.15

    def to_sexp(self) -> str:
        """Convert to KiCad S-expression format."""
        return f"""\t(fp_text {self.text_type} {quote(self.text)}
\t\t(at {_fmt(self.x)} {_fmt(self.y)} 0)
\t\t(unlocked yes)
\t\t(layer "{self.layer}")
\t\t(uuid "{self.uuid}")
{_effects(self.font_size, self.font_thickness)}
\t)"""


@dataclass
class Pad:
    """A footprint pad."""

    name: str
    uuid: str
    pad_type: Literal["smd"] = "smd"
    shape: Literal["circle"] = "circle"
    x: float = 0.0
    y: float = 0.0
    width: float = 0.1
    height: float = 0.1
    layers: tuple[str, ...] = ("F.Cu",)

    def to_sexp(self) -> str:
        """Convert to KiCad S-expression format."""
        layers_str = " ".join(f'"{layer}"' for layer in self.layers)
        return f"""\t(pad {quote(self.name)} {self.pad_type} {self.shape}
\t\t(at {_fmt(self.x)} {_fmt(self.y)})
\t\t(size {_fmt(self.width)} {_fmt(self.height)})
\t\t(layers {layers_str})
\t\t(uuid "{self.uuid}")
\t)"""


Element = Union[MarkLine, GraphicText]


@dataclass
class Footprint:
    """
    A complete footprint document.

    Elements are emitted in list order: properties, the ``attr`` line,
    graphics, then pads.
    """

    name: str
    version: int
    generator: str
    generator_version: str
    layer: str = "F.Cu"
    attr: Literal["smd"] = "smd"
    properties: list[Property] = field(default_factory=list)
    graphics: list[Element] = field(default_factory=list)
    pads: list[Pad] = field(default_factory=list)

    @property
    def uuids(self) -> list[str]:
        """All identifiers carried by this footprint, in emission order."""
        return [element.uuid for element in (*self.properties, *self.graphics, *self.pads)]

    def to_sexp(self) -> str:
        """Convert footprint to KiCad S-expression format."""
        lines = [f"(footprint {quote(self.name)}"]
        lines.append(f"\t(version {self.version})")
        lines.append(f"\t(generator {quote(self.generator)})")
        lines.append(f"\t(generator_version {quote(self.generator_version)})")
        lines.append(f'\t(layer "{self.layer}")')

        for prop in self.properties:
            lines.append(prop.to_sexp())

        lines.append(f"\t(attr {self.attr})")

        for graphic in self.graphics:
            lines.append(graphic.to_sexp())

        for pad in self.pads:
            lines.append(pad.to_sexp())

        lines.append(")")
        return "\n".join(lines) + "\n"


def quote(value: str) -> str:
    """Quote a string for S-expression output, escaping backslashes and quotes."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _effects(size: float, thickness: float) -> str:
    return f"""\t\t(effects
\t\t\t(font
\t\t\t\t(size {_fmt(size)} {_fmt(size)})
\t\t\t\t(thickness {_fmt(thickness)})
\t\t\t)
\t\t)"""


def _fmt(val: float) -> str:
    """Format a float value, removing trailing zeros."""
    if val == int(val):
        return str(int(val))
    # Round to 3 decimal places
    rounded = round(val, 3)
    if rounded == int(rounded):
        return str(int(rounded))
    return str(rounded)
