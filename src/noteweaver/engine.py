"""One merge cycle: previous note + template in, new note out.

No file system access happens here; :mod:`noteweaver.vault` does the reading and
writing around it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Sequence

from noteweaver.config import MergeOptions
from noteweaver.logging import get_logger, set_step
from noteweaver.outline.merge import merge
from noteweaver.outline.prune import filter_outline
from noteweaver.outline.structure import destructure, structurize
from noteweaver.recurrence import apply_directives
from noteweaver.scope import slice_scope, strip_frontmatter
from noteweaver.template import expand_macros

logger = get_logger(__name__)


def merge_bodies(
    template_body: Sequence[str],
    previous_body: Sequence[str] | None,
    options: MergeOptions,
) -> list[str]:
    """Merge the carry-forward scope of the previous note into the template's.

    With ``keep_template_headings`` the previous outline is pruned before the merge, so
    headings that only the template has survive even when empty. Otherwise the merged
    outline is pruned as a whole.
    """

    template_tree = structurize(template_body)

    if previous_body is not None:
        previous_tree = structurize(previous_body)
        if options.keep_template_headings:
            filter_outline(
                previous_tree,
                options.delete_empty_headings,
                options.keep_until_parent_complete,
            )
        merge(template_tree, previous_tree)

    if not options.keep_template_headings:
        filter_outline(
            template_tree,
            options.delete_empty_headings,
            options.keep_until_parent_complete,
        )

    return destructure(template_tree)


@dataclass
class PreviousNote:
    """The most recent note before today, as the merge cycle needs it."""

    name: str
    path: str
    day: date
    text: str


@dataclass
class NoteBuild:
    lines: list[str]
    carried: int = 0

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def build_note(
    template_text: str,
    *,
    now: datetime,
    title: str,
    options: MergeOptions,
    previous: PreviousNote | None = None,
    initial: str = "",
    terminal: str = "",
    max_catchup_days: int | None = None,
    template_name: str | None = None,
) -> NoteBuild:
    """Build the text of a new note.

    Steps: expand macros, resolve obligation directives (with catch-up from the previous
    note's date), slice both documents to the carry-forward scope, merge, reassemble.

    Raises:
        MalformedDirectiveError: a directive is the template's last line.
        ScopeBoundaryNotFoundError: ``initial`` or ``terminal`` missing from a document.
    """

    set_step("template")
    expanded = expand_macros(
        template_text,
        now=now,
        title=title,
        previous_note=previous.name if previous else None,
        previous_note_path=previous.path if previous else None,
    )

    set_step("obligations")
    template_lines = apply_directives(
        expanded.split("\n"),
        now.date(),
        previous.day if previous else None,
        max_catchup_days,
    )
    template_scope = slice_scope(template_lines, initial, terminal, document=template_name)

    previous_body: list[str] | None = None
    if previous is not None:
        set_step("previous")
        previous_lines = strip_frontmatter(previous.text)
        previous_body = slice_scope(previous_lines, initial, terminal, document=previous.name).body

    set_step("merge")
    body = merge_bodies(template_scope.body, previous_body, options)
    carried = len(body) - len(template_scope.body)
    logger.debug("merged body has %d lines (%+d against the template)", len(body), carried)
    return NoteBuild(lines=template_scope.join(body), carried=carried)
