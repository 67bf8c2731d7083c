"""
GerberSockets footprint builder.

Assembles the fixed footprint template around a label's width tokens.
Identifiers are drawn from the injected source in emission order, five for
the properties, one per mark line, then one each for the reference text and
the pad, so a footprint consumes ``len(tokens) + 7`` identifiers.

Usage::

    from gerbersockets.builder import FootprintBuilder
    from gerbersockets.encoding import encode
    from gerbersockets.identifiers import UuidIdentifierSource

    builder = FootprintBuilder(UuidIdentifierSource())
    text = builder.build("GND", encode("GND"))
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .footprint import Footprint, GraphicText, MarkLine, Pad, Property
from .identifiers import IdentifierSource

logger = logging.getLogger(__name__)

FOOTPRINT_VERSION = 20240108
GENERATOR = "create-gerbersockets"
GENERATOR_VERSION = "0.1"

REFERENCE_PLACEHOLDER = "GS**"
NET_VALUE = "GND"
MARK_LAYER = "User.1"
PAD_LAYER = "F.Cu"

# Identifiers consumed beyond one per token
FIXED_IDENTIFIERS = 7


class FootprintBuilder:
    """Builds one GerberSockets footprint per label."""

    def __init__(self, identifiers: IdentifierSource):
        self.identifiers = identifiers

    def build_footprint(self, label: str, tokens: Sequence[str]) -> Footprint:
        """Build the footprint model for a label and its encoded widths."""
        next_id = self.identifiers.next_id

        fp = Footprint(
            name=label,
            version=FOOTPRINT_VERSION,
            generator=GENERATOR,
            generator_version=GENERATOR_VERSION,
            layer=PAD_LAYER,
        )

        fp.properties = [
            Property(
                "Reference",
                REFERENCE_PLACEHOLDER,
                0,
                -2,
                next_id(),
                layer="F.SilkS",
                hide=True,
                font_thickness=0.1,
            ),
            Property("Value", NET_VALUE, 0, 3.7, next_id()),
            Property("Footprint", NET_VALUE, 0, 2.2, next_id(), hide=True),
            Property("Datasheet", "", 0, 0, next_id(), hide=True),
            Property("Description", "", 0, 0, next_id(), hide=True),
        ]

        # Emission order carries the character order
        fp.graphics = [MarkLine(width=token, uuid=next_id(), layer=MARK_LAYER) for token in tokens]
        fp.graphics.append(GraphicText("user", "${REFERENCE}", 0, 5.2, next_id()))

        fp.pads = [Pad("1", next_id(), layers=(PAD_LAYER,))]

        return fp

    def build(self, label: str, tokens: Sequence[str]) -> str:
        """Build the .kicad_mod text for a label and its encoded widths."""
        text = self.build_footprint(label, tokens).to_sexp()
        logger.debug(f"Built footprint {label!r} with {len(tokens)} mark line(s)")
        return text


__all__ = [
    "FootprintBuilder",
    "FOOTPRINT_VERSION",
    "GENERATOR",
    "GENERATOR_VERSION",
    "FIXED_IDENTIFIERS",
]
