"""
Footprint archive generation.

A generation run takes a snapshot of the supplied net names, drops the blank
ones, encodes and builds one footprint per remaining name, and packs them all
into a single archive.

Example::

    from gerbersockets import generate_archive, save_archive

    result = generate_archive(["GND", "VCC", "  "])
    result.entries            # ['GND.kicad_mod', 'VCC.kicad_mod']
    save_archive(result, "output/")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .archive import ArchiveBuilder, ZipArchiveBuilder
from .builder import FIXED_IDENTIFIERS, FootprintBuilder
from .encoding import encode
from .exceptions import NoInputError
from .identifiers import IdentifierSource, UuidIdentifierSource
from .utils import ensure_parent_dir

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)

FOOTPRINT_EXTENSION = ".kicad_mod"
DEFAULT_ARCHIVE_NAME = "footprints.zip"


@dataclass
class GeneratedArchive:
    """Result of a finished generation run."""

    name: str
    data: bytes
    entries: list[str] = field(default_factory=list)
    documents: dict[str, str] = field(default_factory=dict)
    identifiers_used: int = 0

    @property
    def size(self) -> int:
        return len(self.data)


# Characters removed from both ends of a label: ECMAScript WhiteSpace and
# LineTerminator, which differ from str.isspace() (BOM in, \x1c-\x1f and \x85 out)
LABEL_WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def trim_label(label: str) -> str:
    """Strip leading and trailing whitespace from one label."""
    return label.strip(LABEL_WHITESPACE)


def normalize_labels(labels: Iterable[str]) -> list[str]:
    """Trim every label and drop the ones that end up empty."""
    trimmed = (trim_label(label) for label in labels)
    return [label for label in trimmed if label]


def footprint_filename(label: str) -> str:
    """Archive entry name for a label."""
    return label + FOOTPRINT_EXTENSION


class GenerationRun:
    """
    One archive generation run.

    The run owns its identifier source and archive builder; neither may be
    shared with another run. The label list is copied when the run is created.
    """

    def __init__(
        self,
        labels: Iterable[str],
        identifiers: Optional[IdentifierSource] = None,
        archive: Optional[ArchiveBuilder] = None,
        archive_name: str = DEFAULT_ARCHIVE_NAME,
    ):
        self.labels = tuple(labels)
        self.identifiers = identifiers if identifiers is not None else UuidIdentifierSource()
        self.archive = archive if archive is not None else ZipArchiveBuilder()
        self.archive_name = archive_name
        self.builder = FootprintBuilder(self.identifiers)
        self.documents: dict[str, str] = {}
        self.identifiers_used = 0

    @classmethod
    def from_config(
        cls,
        labels: Iterable[str],
        config: Config,
        identifiers: Optional[IdentifierSource] = None,
    ) -> GenerationRun:
        """Create a run using the archive settings of a loaded config."""
        archive = ZipArchiveBuilder(
            compression=config.archive.compression,
            compresslevel=config.archive.compresslevel,
        )
        return cls(
            labels,
            identifiers=identifiers,
            archive=archive,
            archive_name=config.output.archive_name,
        )

    def build_documents(self) -> dict[str, str]:
        """
        Encode, build, and add one footprint per non-blank label.

        Returns:
            Mapping of archive entry name to document text, in archive order

        Raises:
            NoInputError: If every label is blank after trimming
        """
        names = normalize_labels(self.labels)
        if not names:
            raise NoInputError(
                "Please enter at least one net name",
                context={"supplied": len(self.labels)},
                suggestions=["Net names are trimmed; whitespace-only entries are ignored"],
            )

        logger.info(f"Generating {len(names)} footprint(s)")
        for name in names:
            tokens = encode(name)
            document = self.builder.build(name, tokens)
            self.identifiers_used += len(tokens) + FIXED_IDENTIFIERS

            filename = footprint_filename(name)
            self.archive.add(filename, document)
            self.documents[filename] = document

        return self.documents

    def _result(self, data: bytes) -> GeneratedArchive:
        return GeneratedArchive(
            name=self.archive_name,
            data=data,
            entries=list(self.documents),
            documents=dict(self.documents),
            identifiers_used=self.identifiers_used,
        )

    def run(self) -> GeneratedArchive:
        """
        Build every footprint and finalize the archive.

        Raises:
            NoInputError: If every label is blank after trimming
            ArchiveFinalizationError: If packaging the archive fails
        """
        self.build_documents()
        data = self.archive.finalize()
        logger.info(f"Archive {self.archive_name} ready ({len(data)} bytes)")
        return self._result(data)

    async def run_async(self) -> GeneratedArchive:
        """Like :meth:`run`, but finalizes the archive in a worker thread."""
        self.build_documents()
        data = await asyncio.to_thread(self.archive.finalize)
        logger.info(f"Archive {self.archive_name} ready ({len(data)} bytes)")
        return self._result(data)


def generate_archive(
    labels: Iterable[str],
    identifiers: Optional[IdentifierSource] = None,
    archive: Optional[ArchiveBuilder] = None,
    archive_name: str = DEFAULT_ARCHIVE_NAME,
) -> GeneratedArchive:
    """
    Generate a footprint archive for a list of net names.

    Args:
        labels: Net names in the order they should appear in the archive
        identifiers: Identifier source for this run (fresh UUID4 source if omitted)
        archive: Archive builder for this run (in-memory ZIP if omitted)
        archive_name: File name the bundle is delivered under

    Returns:
        GeneratedArchive with the finalized bundle bytes

    Raises:
        NoInputError: If every label is blank after trimming
        ArchiveFinalizationError: If packaging the archive fails
    """
    return GenerationRun(labels, identifiers, archive, archive_name).run()


async def generate_archive_async(
    labels: Iterable[str],
    identifiers: Optional[IdentifierSource] = None,
    archive: Optional[ArchiveBuilder] = None,
    archive_name: str = DEFAULT_ARCHIVE_NAME,
) -> GeneratedArchive:
    """Async variant of :func:`generate_archive`."""
    return await GenerationRun(labels, identifiers, archive, archive_name).run_async()


def save_archive(result: GeneratedArchive, output_dir: str | Path = ".") -> Path:
    """Write a generated archive to ``output_dir`` under its archive name."""
    path = Path(output_dir) / result.name
    ensure_parent_dir(path).write_bytes(result.data)
    logger.info(f"Saved {path}")
    return path


__all__ = [
    "GeneratedArchive",
    "GenerationRun",
    "normalize_labels",
    "trim_label",
    "footprint_filename",
    "LABEL_WHITESPACE",
    "generate_archive",
    "generate_archive_async",
    "save_archive",
    "FOOTPRINT_EXTENSION",
    "DEFAULT_ARCHIVE_NAME",
]
