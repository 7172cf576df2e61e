"""Line classification for outline reconstruction.

Only two foldable line kinds exist: markdown headings and checklist items. Everything
else is plain text owned by the nearest enclosing scope.
"""

from __future__ import annotations

import re

HEADING_RE = re.compile(r"^(?P<marks>#{1,7})\s+\S")
CHECKLIST_RE = re.compile(r"^(?P<indent>\s*)-\s+\[[x /]\]")
CHECKED_RE = re.compile(r"^\s*-\s+\[x\]")


def heading_level(line: str | None) -> int:
    """Return the number of leading ``#`` of a heading line, or 0."""

    if not line:
        return 0
    m = HEADING_RE.match(line)
    if not m:
        return 0
    return len(m.group("marks"))


def checklist_level(line: str | None) -> int:
    """Return indentation depth + 1 of a checklist line, or 0.

    ``[ ]``, ``[x]`` and ``[/]`` all count as checklist markers.
    """

    if not line:
        return 0
    m = CHECKLIST_RE.match(line)
    if not m:
        return 0
    return len(m.group("indent")) + 1


def is_heading(line: str | None) -> bool:
    return heading_level(line) > 0


def is_checklist(line: str | None) -> bool:
    return checklist_level(line) > 0


def is_checked(line: str | None) -> bool:
    """True for ``- [x]`` items only."""

    return bool(line) and CHECKED_RE.match(line) is not None
