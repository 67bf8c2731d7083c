"""
Archive assembly for generated footprints.

The generator only talks to the narrow :class:`ArchiveBuilder` protocol;
:class:`ZipArchiveBuilder` is the implementation used by default and packs
entries into an in-memory ZIP file.
"""

from __future__ import annotations

import io
import logging
import zipfile
from typing import Optional, Protocol, Union

from .exceptions import ArchiveFinalizationError

logger = logging.getLogger(__name__)

COMPRESSION_METHODS = {
    "deflated": zipfile.ZIP_DEFLATED,
    "stored": zipfile.ZIP_STORED,
}


class ArchiveBuilder(Protocol):
    """Collects named entries and packs them into one bundle."""

    def add(self, filename: str, content: Union[str, bytes]) -> None:
        """Add an entry. A repeated filename replaces the earlier content."""
        ...

    def finalize(self) -> bytes:
        """Pack all entries. May be called once per builder."""
        ...


class ZipArchiveBuilder:
    """
    Build a ZIP bundle in memory.

    Entries keep the position of their first ``add`` and the content of their
    last one. ``str`` content is stored as UTF-8; lone surrogates are written
    as their three-byte sequences rather than rejected.

    Example::

        builder = ZipArchiveBuilder()
        builder.add("GND.kicad_mod", text)
        data = builder.finalize()
    """

    def __init__(self, compression: str = "deflated", compresslevel: Optional[int] = None):
        if compression not in COMPRESSION_METHODS:
            raise ValueError(
                f"Unknown compression: {compression}. "
                f"Valid methods: {', '.join(sorted(COMPRESSION_METHODS))}"
            )
        self.compression = compression
        self.compresslevel = compresslevel
        self._entries: dict[str, bytes] = {}
        self._finalized = False

    @property
    def filenames(self) -> list[str]:
        """Entry names in archive order."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, filename: str, content: Union[str, bytes]) -> None:
        if self._finalized:
            raise ArchiveFinalizationError(
                "Cannot add entries to a finalized archive",
                context={"filename": filename},
                suggestions=["Create a new archive builder for each generation run"],
            )
        if isinstance(content, str):
            content = content.encode("utf-8", "surrogatepass")
        if filename in self._entries:
            logger.warning(f"Archive entry {filename!r} replaced by a later entry")
        self._entries[filename] = content

    def finalize(self) -> bytes:
        if self._finalized:
            raise ArchiveFinalizationError(
                "Archive was already finalized",
                suggestions=["Create a new archive builder for each generation run"],
            )
        self._finalized = True

        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(
                buffer,
                "w",
                COMPRESSION_METHODS[self.compression],
                compresslevel=self.compresslevel,
            ) as zf:
                for filename, content in self._entries.items():
                    zf.writestr(filename, content)
        except (OSError, ValueError, MemoryError, zipfile.LargeZipFile) as e:
            raise ArchiveFinalizationError(
                f"Could not finalize archive: {e}",
                context={"entries": len(self._entries), "compression": self.compression},
            ) from e

        data = buffer.getvalue()
        logger.info(f"Packed {len(self._entries)} entries into {len(data)} bytes")
        return data


__all__ = ["ArchiveBuilder", "ZipArchiveBuilder", "COMPRESSION_METHODS"]
