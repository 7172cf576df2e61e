"""Rebuild an outline tree from flat lines and flatten it back."""

from __future__ import annotations

from typing import Sequence

from noteweaver.models.outline import OutlineNode
from noteweaver.outline.lines import checklist_level, heading_level


def structurize(lines: Sequence[str], label: str | None = None) -> OutlineNode:
    """Structure ``lines`` hierarchically by fold scope.

    ``label`` is the line that opens the scope ``lines`` belong to (``None`` for a
    document root). Scanning stops at the first line that closes that scope: a heading
    of equal or lesser level, a checklist item of equal or lesser indentation, or any
    heading once inside a checklist item. The returned node's ``size`` tells the caller
    how many lines were consumed, label included.
    """

    return _structurize(lines, 0, label)


def _structurize(lines: Sequence[str], start: int, label: str | None) -> OutlineNode:
    own_heading = heading_level(label)
    own_checklist = checklist_level(label)

    node = OutlineNode(label=label, size=1 if label is not None else 0)
    i = start
    while i < len(lines):
        line = lines[i]
        h_level = heading_level(line)
        c_level = checklist_level(line)

        if h_level:
            # checklists cannot contain sub-headings
            if own_checklist or h_level <= own_heading:
                break
        elif c_level and c_level <= own_checklist:
            break

        if h_level or c_level:
            child = _structurize(lines, i + 1, line)
            node.children.append(child)
            node.size += child.size
            i += child.size
        else:
            node.children.append(line)
            node.size += 1
            i += 1
    return node


def destructure(node: OutlineNode) -> list[str]:
    """Flatten ``node`` in pre-order: label first, then children in order."""

    out: list[str] = []
    _destructure_into(node, out)
    return out


def _destructure_into(node: OutlineNode, out: list[str]) -> None:
    if node.label is not None:
        out.append(node.label)
    for child in node.children:
        if isinstance(child, OutlineNode):
            _destructure_into(child, out)
        else:
            out.append(child)
