"""Tests for obligation directives."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from noteweaver.errors import DirectiveSyntaxError, MalformedDirectiveError
from noteweaver.recurrence import (
    CalendarField,
    FieldKind,
    apply_directives,
    day_of_week,
    is_directive,
    parse_directive,
    parse_field,
    should_emit_with_catchup,
    should_trigger,
)


def _only(day: date) -> str:
    """A bare directive that matches exactly one calendar day (by day and month)."""

    return f"{day.day} {day.month} *"


def test_parse_field_wildcard() -> None:
    """It should represent `*` with an explicit wildcard kind."""

    field = parse_field("*")
    assert field.kind is FieldKind.WILDCARD
    assert field == CalendarField.wildcard()
    assert all(field.matches(v) for v in range(0, 40))


def test_parse_field_range_expansion() -> None:
    """It should expand `1-3,5` to exactly {1, 2, 3, 5}."""

    field = parse_field("1-3,5")
    assert field.kind is FieldKind.VALUES
    assert field.values == frozenset({1, 2, 3, 5})
    assert [v for v in range(0, 10) if field.matches(v)] == [1, 2, 3, 5]
    assert str(field) == "1,2,3,5"


@pytest.mark.parametrize("text", ["", "1,,2", "5-3", "a", "1-"])
def test_parse_field_rejects_garbage(text: str) -> None:
    """It should raise a syntax error for malformed fields."""

    with pytest.raises(DirectiveSyntaxError):
        parse_field(text)


def test_parse_directive_accepts_macro_and_bare_forms() -> None:
    """It should parse both `{{ obligate ... }}` and the bare three fields."""

    macro = parse_directive("{{ obligate 1,15 * 1-5 }}")
    bare = parse_directive("1,15 * 1-5")
    assert macro == bare
    assert str(macro) == "1,15 * 1,2,3,4,5"

    with pytest.raises(DirectiveSyntaxError):
        parse_directive("- [ ] not a directive")


def test_is_directive_only_matches_macro_form() -> None:
    """It should only recognise the template macro form."""

    assert is_directive("{{ obligate * * * }}")
    assert is_directive("  {{obligate 1 2 3}}  ")
    assert not is_directive("* * *")
    assert not is_directive("{{ date }}")


def test_day_of_week_starts_on_sunday() -> None:
    """It should number days 0 = Sunday through 6 = Saturday."""

    assert day_of_week(date(2024, 1, 7)) == 0  # Sunday
    assert day_of_week(date(2024, 1, 8)) == 1  # Monday
    assert day_of_week(date(2024, 1, 13)) == 6  # Saturday


def test_wildcard_always_triggers() -> None:
    """It should fire `* * *` on any date."""

    directive = parse_directive("* * *")
    start = date(2023, 12, 25)
    assert all(should_trigger(directive, start + timedelta(days=n)) for n in range(400))


def test_all_fields_must_match() -> None:
    """It should require day-of-month, month and day-of-week to match together."""

    # the 13th, any month, only on Fridays
    directive = parse_directive("13 * 5")
    assert should_trigger(directive, date(2024, 9, 13))  # Friday
    assert not should_trigger(directive, date(2024, 8, 13))  # Tuesday
    assert not should_trigger(directive, date(2024, 9, 20))  # Friday, wrong day

    weekdays_in_june = parse_directive("* 6 1-5")
    assert should_trigger(weekdays_in_june, date(2024, 6, 3))
    assert not should_trigger(weekdays_in_june, date(2024, 6, 1))  # Saturday
    assert not should_trigger(weekdays_in_june, date(2024, 7, 1))


def test_catchup_finds_missed_day() -> None:
    """It should fire when the recurrence fell on a skipped day."""

    day0 = date(2024, 3, 10)
    today = day0 + timedelta(days=5)
    directive = parse_directive(_only(day0 + timedelta(days=3)))

    assert not should_trigger(directive, today)
    assert should_emit_with_catchup(directive, day0, today)


def test_catchup_does_not_look_ahead() -> None:
    """It should not fire for a recurrence that is not due yet."""

    day0 = date(2024, 3, 10)
    today = day0 + timedelta(days=5)
    directive = parse_directive(_only(day0 + timedelta(days=6)))

    assert not should_emit_with_catchup(directive, day0, today)


def test_catchup_excludes_last_processed_day() -> None:
    """It should start scanning the day after the last processed note."""

    day0 = date(2024, 3, 10)
    directive = parse_directive(_only(day0))
    assert not should_emit_with_catchup(directive, day0, day0 + timedelta(days=3))


def test_catchup_without_previous_date_checks_today_only() -> None:
    """It should only test today when there is no previous note."""

    today = date(2024, 3, 15)
    assert should_emit_with_catchup(parse_directive(_only(today)), None, today)
    assert not should_emit_with_catchup(parse_directive("14 3 *"), None, today)


def test_catchup_respects_max_days() -> None:
    """It should stop scanning after max_days skipped days."""

    day0 = date(2024, 3, 1)
    today = day0 + timedelta(days=20)
    directive = parse_directive(_only(day0 + timedelta(days=10)))

    assert should_emit_with_catchup(directive, day0, today)
    assert should_emit_with_catchup(directive, day0, today, max_days=10)
    assert not should_emit_with_catchup(directive, day0, today, max_days=9)


def test_apply_directives_keeps_due_payloads() -> None:
    """It should replace each directive pair with its payload or nothing."""

    lines = [
        "# Tasks",
        "{{ obligate * * * }}",
        "- [ ] every day",
        "{{ obligate 1 1 * }}",
        "- [ ] new year only",
        "- [ ] plain",
    ]
    out = apply_directives(lines, date(2024, 5, 2))
    assert out == ["# Tasks", "- [ ] every day", "- [ ] plain"]


def test_apply_directives_uses_catchup() -> None:
    """It should keep a payload whose day passed while no note was written."""

    lines = ["{{ obligate 1 * * }}", "- [ ] pay rent"]
    assert apply_directives(lines, date(2024, 5, 3), date(2024, 4, 29)) == ["- [ ] pay rent"]
    assert apply_directives(lines, date(2024, 5, 3), date(2024, 5, 1)) == []


def test_apply_directives_payload_is_taken_literally() -> None:
    """It should treat the line after a directive as payload even if it is a directive."""

    lines = ["{{ obligate * * * }}", "{{ obligate 1 1 * }}", "tail"]
    assert apply_directives(lines, date(2024, 5, 2)) == ["{{ obligate 1 1 * }}", "tail"]


def test_apply_directives_trailing_directive_is_malformed() -> None:
    """It should abort with the offending line when a directive has no payload."""

    line = "{{ obligate * * 1 }}"
    with pytest.raises(MalformedDirectiveError) as exc_info:
        apply_directives(["# Tasks", line], date(2024, 5, 2))
    assert exc_info.value.line == line
    assert line in str(exc_info.value)
