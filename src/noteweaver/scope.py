"""Frontmatter stripping and carry-forward scope slicing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import frontmatter

from noteweaver.errors import ScopeBoundaryNotFoundError, ScopeOrderError


@dataclass
class ScopeSlice:
    """A document split around its carry-forward scope."""

    head: list[str] = field(default_factory=list)
    body: list[str] = field(default_factory=list)
    tail: list[str] = field(default_factory=list)

    def join(self, body: Sequence[str] | None = None) -> list[str]:
        """Reassemble the document, optionally with a replacement body."""

        return [*self.head, *(self.body if body is None else body), *self.tail]


def strip_frontmatter(text: str) -> list[str]:
    """Return the lines of ``text`` without a leading YAML frontmatter block.

    The block is cut at its delimiter lines without parsing the YAML, so broken
    frontmatter does not stop a run. Body lines are returned exactly as written.
    """

    lines = text.split("\n")
    handler = frontmatter.YAMLHandler()
    if not handler.detect(text):
        return lines
    for i in range(1, len(lines)):
        if handler.FM_BOUNDARY.match(lines[i]):
            return lines[i + 1 :]
    # opening delimiter without a closing one is ordinary text
    return lines


def slice_scope(
    lines: Sequence[str],
    initial: str = "",
    terminal: str = "",
    *,
    document: str | None = None,
) -> ScopeSlice:
    """Split ``lines`` into head, body and tail.

    The body starts at the first line equal to ``initial`` (inclusive) and ends right
    before the first line equal to ``terminal``. An empty marker means the start or end
    of the document.

    Raises:
        ScopeBoundaryNotFoundError: if a non-empty marker is not a line of ``lines``.
        ScopeOrderError: if the terminal line does not come after the initial line.
    """

    lines = list(lines)
    start = _index_of(lines, initial, "initial", document) if initial else 0
    end = _index_of(lines, terminal, "terminal", document) if terminal else len(lines)
    if end < start or (initial and terminal and end == start):
        raise ScopeOrderError(f'the initial line "{initial}" must precede the terminal line "{terminal}"')
    return ScopeSlice(head=lines[:start], body=lines[start:end], tail=lines[end:])


def _index_of(lines: list[str], marker: str, boundary: str, document: str | None) -> int:
    try:
        return lines.index(marker)
    except ValueError:
        raise ScopeBoundaryNotFoundError(marker, boundary, document) from None
