"""
Exception hierarchy for gerbersockets.

Every error carries a message, optional context, and suggestions, and all of
them are rendered by ``str()``. Only the two run boundaries raise during
generation: :class:`NoInputError` before any work starts and
:class:`ArchiveFinalizationError` when packaging fails.

Example::

    from gerbersockets.exceptions import NoInputError

    raise NoInputError(
        "No net names to generate",
        context={"supplied": 2},
        suggestions=["Enter at least one non-blank net name"],
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class GerberSocketsError(Exception):
    """
    Base exception for all gerbersockets errors.

    Attributes:
        context: Dictionary of contextual information (label, archive, ...)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class NoInputError(GerberSocketsError):
    """
    Every supplied label was empty or whitespace after trimming.

    Raised before any encoding or archive work begins.
    """

    pass


class ArchiveFinalizationError(GerberSocketsError):
    """
    Packaging the archive failed.

    No partial bundle is ever returned alongside this error. The underlying
    cause is chained as ``__cause__`` when there is one.

    Example::

        raise ArchiveFinalizationError(
            "Could not finalize archive",
            context={"archive": "footprints.zip", "entries": 3},
        ) from exc
    """

    pass


class ValidationError(GerberSocketsError):
    """
    Input validation failed with one or more errors.

    Collects every violation instead of stopping at the first one.

    Attributes:
        errors: List of individual validation error messages
    """

    def __init__(
        self,
        errors: List[str],
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.errors = errors
        message = f"Validation failed with {len(errors)} error(s):\n"
        message += "\n".join(f"  {i + 1}. {e}" for i, e in enumerate(errors))
        super().__init__(message, context, suggestions)


class ConfigurationError(GerberSocketsError):
    """Configuration file is invalid or unreadable."""

    pass


class ParseError(GerberSocketsError):
    """
    S-expression parsing failed.

    Example::

        raise ParseError("Unterminated string", position=118)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        position: Optional[int] = None,
    ):
        ctx = context or {}
        if position is not None and "position" not in ctx:
            ctx["position"] = position
        self.position = position
        super().__init__(message, ctx, suggestions)


__all__ = [
    "GerberSocketsError",
    "NoInputError",
    "ArchiveFinalizationError",
    "ValidationError",
    "ConfigurationError",
    "ParseError",
]
