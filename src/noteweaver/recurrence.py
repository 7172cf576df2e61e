"""Calendar directives that decide whether a template line recurs today.

A directive is a template line of the form::

    {{ obligate DAY_OF_MONTH MONTH DAY_OF_WEEK }}

Each field is ``*`` or a comma list of integers and inclusive ``a-b`` ranges. The line
right after a directive is its payload; it is kept only when the directive fires.
Day of week uses the cron convention: 0 is Sunday, 6 is Saturday.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Sequence

from noteweaver.errors import DirectiveSyntaxError, MalformedDirectiveError
from noteweaver.logging import get_logger

logger = get_logger(__name__)

_FIELD = r"([*\-,\d]+)"
DIRECTIVE_RE = re.compile(rf"^\s*{{{{ *obligate {_FIELD} {_FIELD} {_FIELD} *}}}}\s*$")
_BARE_RE = re.compile(rf"^\s*{_FIELD}\s+{_FIELD}\s+{_FIELD}\s*$")
_RANGE_RE = re.compile(r"^(\d+)-(\d+)$")


class FieldKind(str, Enum):
    WILDCARD = "wildcard"
    VALUES = "values"


@dataclass(frozen=True)
class CalendarField:
    """One directive field: either a wildcard or an explicit set of values."""

    kind: FieldKind
    values: frozenset[int] = frozenset()

    @classmethod
    def wildcard(cls) -> "CalendarField":
        return cls(FieldKind.WILDCARD)

    @classmethod
    def of(cls, values: Sequence[int]) -> "CalendarField":
        return cls(FieldKind.VALUES, frozenset(values))

    def matches(self, value: int) -> bool:
        return self.kind is FieldKind.WILDCARD or value in self.values

    def __str__(self) -> str:
        if self.kind is FieldKind.WILDCARD:
            return "*"
        return ",".join(str(v) for v in sorted(self.values))


@dataclass(frozen=True)
class Directive:
    day_of_month: CalendarField
    month: CalendarField
    day_of_week: CalendarField

    def __str__(self) -> str:
        return f"{self.day_of_month} {self.month} {self.day_of_week}"


def parse_field(text: str) -> CalendarField:
    """Parse one field. ``*`` anywhere in the list makes the whole field a wildcard.

    Raises:
        DirectiveSyntaxError: on empty items or reversed ranges.
    """

    values: set[int] = set()
    for part in text.split(","):
        if part == "*":
            return CalendarField.wildcard()
        m = _RANGE_RE.match(part)
        if m:
            start, end = int(m.group(1)), int(m.group(2))
            if end < start:
                raise DirectiveSyntaxError(f"reversed range {part!r} in {text!r}")
            values.update(range(start, end + 1))
        elif part.isdecimal():
            values.add(int(part))
        else:
            raise DirectiveSyntaxError(f"bad item {part!r} in {text!r}")
    return CalendarField.of(sorted(values))


def is_directive(line: str) -> bool:
    """True if ``line`` is a ``{{ obligate ... }}`` template directive."""

    return DIRECTIVE_RE.match(line) is not None


def parse_directive(line: str) -> Directive:
    """Parse a directive from its macro form or its bare three-field form.

    >>> str(parse_directive("{{ obligate 1-3,5 * 0 }}"))
    '1,2,3,5 * 0'
    """

    m = DIRECTIVE_RE.match(line) or _BARE_RE.match(line)
    if not m:
        raise DirectiveSyntaxError(f"not a calendar directive: {line!r}")
    return Directive(
        day_of_month=parse_field(m.group(1)),
        month=parse_field(m.group(2)),
        day_of_week=parse_field(m.group(3)),
    )


def day_of_week(day: date) -> int:
    """0 = Sunday ... 6 = Saturday."""

    return day.isoweekday() % 7


def should_trigger(directive: Directive, day: date) -> bool:
    return (
        directive.day_of_month.matches(day.day)
        and directive.month.matches(day.month)
        and directive.day_of_week.matches(day_of_week(day))
    )


def should_emit_with_catchup(
    directive: Directive,
    last_processed_date: date | None,
    today: date,
    max_days: int | None = None,
) -> bool:
    """Decide whether a directive fires today or fired on a day with no note.

    Days strictly between ``last_processed_date`` and ``today`` are scanned one at a
    time. ``max_days`` caps how many of them are examined.
    """

    if should_trigger(directive, today):
        return True
    if last_processed_date is None:
        return False

    day = last_processed_date + timedelta(days=1)
    scanned = 0
    while day < today:
        if max_days is not None and scanned >= max_days:
            logger.debug("catch-up for %s stopped after %d days", directive, scanned)
            break
        if should_trigger(directive, day):
            logger.debug("catch-up: %s fired on skipped day %s", directive, day.isoformat())
            return True
        day += timedelta(days=1)
        scanned += 1
    return False


def apply_directives(
    lines: Sequence[str],
    today: date,
    last_processed_date: date | None = None,
    max_days: int | None = None,
) -> list[str]:
    """Resolve every directive in a template.

    Each directive line is dropped; its payload line is kept only if the directive
    fires today (or during the catch-up window).

    Raises:
        MalformedDirectiveError: if a directive is the last line.
        DirectiveSyntaxError: if a directive field cannot be parsed.
    """

    out: list[str] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if not is_directive(line):
            out.append(line)
            i += 1
            continue

        if i + 1 >= len(lines):
            raise MalformedDirectiveError(line)
        payload = lines[i + 1]
        directive = parse_directive(line)
        if should_emit_with_catchup(directive, last_processed_date, today, max_days):
            logger.debug("obligation %s due, keeping %r", directive, payload)
            out.append(payload)
        else:
            logger.debug("obligation %s not due, dropping %r", directive, payload)
        i += 2
    return out
