"""
gerbersockets: KiCad footprints that carry their net name in their geometry.

Every character of a net name becomes a zero-length line whose stroke width
encodes the character's position and code point. The footprints for a list of
net names are bundled into one ZIP archive.

Modules:
    encoding: Net name to stroke-width tokens
    builder: Footprint document assembly
    archive: ZIP bundle assembly
    generator: Generation runs tying the pipeline together
    validator: Structural checks of generated documents and archives
    sexp: S-expression parsing
    config: TOML configuration

Quick Start::

    from gerbersockets import generate_archive, save_archive

    result = generate_archive(["GND", "VCC"])
    save_archive(result, "output/")   # output/footprints.zip
"""

__version__ = "0.1.0"

from gerbersockets.archive import ArchiveBuilder, ZipArchiveBuilder
from gerbersockets.builder import FootprintBuilder
from gerbersockets.encoding import CharacterSlot, character_slots, encode, width_token
from gerbersockets.exceptions import (
    ArchiveFinalizationError,
    GerberSocketsError,
    NoInputError,
)
from gerbersockets.generator import (
    GeneratedArchive,
    GenerationRun,
    generate_archive,
    generate_archive_async,
    normalize_labels,
    save_archive,
)
from gerbersockets.identifiers import (
    IdentifierSource,
    SequentialIdentifierSource,
    UuidIdentifierSource,
)

__all__ = [
    # Version
    "__version__",
    # Encoding
    "CharacterSlot",
    "character_slots",
    "encode",
    "width_token",
    # Building
    "FootprintBuilder",
    "IdentifierSource",
    "UuidIdentifierSource",
    "SequentialIdentifierSource",
    # Archive
    "ArchiveBuilder",
    "ZipArchiveBuilder",
    # Generation
    "GeneratedArchive",
    "GenerationRun",
    "generate_archive",
    "generate_archive_async",
    "normalize_labels",
    "save_archive",
    # Errors
    "GerberSocketsError",
    "NoInputError",
    "ArchiveFinalizationError",
]
