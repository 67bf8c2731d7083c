"""
Identifier sources for footprint elements.

KiCad requires a ``(uuid ...)`` on every structural element of a footprint.
A source is created per generation run and handed to the builder, so two runs
never share identifier state.

Example::

    ids = UuidIdentifierSource()
    ids.next_id()   # '3b0a6c1e-...'
    ids.issued      # 1
"""

from __future__ import annotations

import uuid
from typing import Protocol


class IdentifierSource(Protocol):
    """Protocol for anything that mints fresh identifiers."""

    def next_id(self) -> str:
        """Return an identifier never returned before by this source."""
        ...


class UuidIdentifierSource:
    """Random UUID4 identifiers, guaranteed unique within this instance."""

    def __init__(self):
        self._seen: set[str] = set()

    def next_id(self) -> str:
        while True:
            candidate = str(uuid.uuid4())
            if candidate not in self._seen:
                self._seen.add(candidate)
                return candidate

    @property
    def issued(self) -> int:
        """Number of identifiers handed out so far."""
        return len(self._seen)


class SequentialIdentifierSource:
    """
    Deterministic UUID-shaped identifiers.

    Produces ``00000000-0000-0000-0000-000000000001``, ``...0002`` and so on,
    which keeps generated documents byte-identical between runs.
    """

    def __init__(self, start: int = 1):
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")
        self._next = start
        self._start = start

    def next_id(self) -> str:
        value = self._next
        self._next += 1
        return str(uuid.UUID(int=value))

    @property
    def issued(self) -> int:
        return self._next - self._start


__all__ = ["IdentifierSource", "UuidIdentifierSource", "SequentialIdentifierSource"]
