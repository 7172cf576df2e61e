"""Remove finished items and empty scopes from an outline."""

from __future__ import annotations

from noteweaver.models.outline import OutlineNode
from noteweaver.outline.lines import is_checked, is_checklist, is_heading


def filter_outline(
    node: OutlineNode,
    delete_empty_headings: bool,
    keep_until_parent_complete: bool = False,
) -> None:
    """Prune ``node`` in place, children before parents.

    - Checked checklist lines are always removed.
    - A checked checklist scope is removed once no children remain after pruning, so
      an unfinished sub-item keeps its finished parent alive.
    - With ``keep_until_parent_complete``, a checked item directly under an unfinished
      checklist item is kept too; it goes only when the parent and all its
      descendants are complete.
    - With ``delete_empty_headings``, a heading scope left without child scopes or
      non-blank lines is removed.

    Sizes are recomputed for the whole tree afterwards.
    """

    _filter(node, delete_empty_headings, keep_until_parent_complete)
    node.recompute_size()


def _filter(node: OutlineNode, delete_empty_headings: bool, keep_until_parent_complete: bool) -> None:
    # finished sub-items wait for an open parent item
    hold_checked = keep_until_parent_complete and is_checklist(node.label) and not is_checked(node.label)
    kept: list[OutlineNode | str] = []
    for child in node.children:
        if isinstance(child, OutlineNode):
            _filter(child, delete_empty_headings, keep_until_parent_complete)
            if not hold_checked and _is_removable(child, delete_empty_headings):
                continue
        elif is_checked(child):
            continue
        kept.append(child)
    node.children = kept


def _is_removable(node: OutlineNode, delete_empty_headings: bool) -> bool:
    if is_heading(node.label):
        return delete_empty_headings and not _has_content(node)
    if is_checked(node.label):
        return not node.children
    return False


def _has_content(node: OutlineNode) -> bool:
    return any(isinstance(c, OutlineNode) or c.strip() for c in node.children)
