"""Template macro expansion.

Supported macros (whitespace inside the braces is optional)::

    {{ date }}  {{ date:%A %d %B }}    default format %Y-%m-%d
    {{ time }}  {{ time:%H:%M:%S }}    default format %H:%M
    {{ title }}
    {{ previous_note }}  {{ previous_note_path }}
    {{ next_note }}      {{ next_note_path }}    (applied to the previous note)

``{{ obligate ... }}`` lines are not macros; see :mod:`noteweaver.recurrence`.
"""

from __future__ import annotations

import re
from datetime import datetime

DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_TIME_FORMAT = "%H:%M"

_DATE_RE = re.compile(r"{{\s*date:?(.*?)\s*}}")
_TIME_RE = re.compile(r"{{\s*time:?(.*?)\s*}}")
_TITLE_RE = re.compile(r"{{\s*title\s*}}")
_PREVIOUS_NOTE_RE = re.compile(r"{{\s*previous_note\s*}}")
_PREVIOUS_NOTE_PATH_RE = re.compile(r"{{\s*previous_note_path\s*}}")
_NEXT_NOTE_RE = re.compile(r"{{\s*next_note\s*}}")
_NEXT_NOTE_PATH_RE = re.compile(r"{{\s*next_note_path\s*}}")


def _literal(value: str):
    # re.sub would otherwise interpret backslashes in paths
    return lambda _m: value


def expand_macros(
    text: str,
    *,
    now: datetime,
    title: str,
    previous_note: str | None = None,
    previous_note_path: str | None = None,
) -> str:
    """Expand date, time, title and previous-note macros in template text."""

    text = _DATE_RE.sub(lambda m: now.strftime(m.group(1).strip() or DEFAULT_DATE_FORMAT), text)
    text = _TIME_RE.sub(lambda m: now.strftime(m.group(1).strip() or DEFAULT_TIME_FORMAT), text)
    text = _TITLE_RE.sub(_literal(title), text)
    text = _PREVIOUS_NOTE_RE.sub(_literal(previous_note or ""), text)
    text = _PREVIOUS_NOTE_PATH_RE.sub(_literal(previous_note_path or ""), text)
    return text


def expand_next_note(text: str, *, next_note: str, next_note_path: str) -> str:
    """Point the previous note at the note that was just created."""

    text = _NEXT_NOTE_RE.sub(_literal(next_note), text)
    return _NEXT_NOTE_PATH_RE.sub(_literal(next_note_path), text)
