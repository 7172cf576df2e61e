"""Exception types raised by NoteWeaver.

Everything the library raises on bad input derives from :class:`NoteWeaverError`, so a
caller can tell "the run could not happen" apart from programming errors.
"""

from __future__ import annotations


class NoteWeaverError(Exception):
    """Base class for all NoteWeaver failures."""


class MalformedDirectiveError(NoteWeaverError):
    """An obligation directive is not followed by a payload line."""

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f'Template malformed, "{line}" must be followed by another line')


class DirectiveSyntaxError(NoteWeaverError, ValueError):
    """A directive or one of its calendar fields cannot be parsed."""


class ScopeBoundaryNotFoundError(NoteWeaverError):
    """A configured initial or terminal marker is missing from a document."""

    def __init__(self, marker: str, boundary: str, document: str | None = None) -> None:
        self.marker = marker
        self.boundary = boundary
        self.document = document
        where = f"{document} does not contain" if document else "document does not contain"
        super().__init__(f'{where} the {boundary} line "{marker}"')


class ScopeOrderError(NoteWeaverError):
    """The terminal marker does not come after the initial marker."""


class AmbiguousMergeError(NoteWeaverError):
    """Two outline roots with different labels were passed to ``merge``."""

    def __init__(self, destination_label: str | None, source_label: str | None) -> None:
        self.destination_label = destination_label
        self.source_label = source_label
        super().__init__(
            f"cannot merge outline {source_label!r} into {destination_label!r}: root labels differ"
        )


class NoteConfigurationError(NoteWeaverError):
    """Settings point at paths that do not exist or are missing."""
