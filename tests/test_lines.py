"""Tests for line classification."""

from __future__ import annotations

import pytest

from noteweaver.outline.lines import checklist_level, heading_level, is_checked


@pytest.mark.parametrize(
    ("line", "level"),
    [
        ("# Tasks", 1),
        ("### Deep", 3),
        ("####### Seven", 7),
        ("######## Eight", 0),
        ("#NoSpace", 0),
        ("#   ", 0),
        ("  # indented", 0),
        ("plain", 0),
        ("", 0),
        (None, 0),
    ],
)
def test_heading_level(line: str | None, level: int) -> None:
    """It should count leading # only for well-formed headings."""

    assert heading_level(line) == level


@pytest.mark.parametrize(
    ("line", "level"),
    [
        ("- [ ] todo", 1),
        ("- [x] done", 1),
        ("- [/] doing", 1),
        ("  - [ ] nested", 3),
        ("\t- [ ] tab", 2),
        ("- [X] capital", 0),
        ("- [] empty", 0),
        ("- plain bullet", 0),
        ("-[ ] no space", 0),
        (None, 0),
    ],
)
def test_checklist_level(line: str | None, level: int) -> None:
    """It should derive the level from indentation and reject malformed markers."""

    assert checklist_level(line) == level


def test_is_checked_only_for_x() -> None:
    """It should treat only `[x]` as finished."""

    assert is_checked("- [x] done")
    assert is_checked("    - [x] nested done")
    assert not is_checked("- [ ] open")
    assert not is_checked("- [/] in progress")
    assert not is_checked("- [X] capital")
    assert not is_checked(None)
