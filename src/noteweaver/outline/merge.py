"""Merge a carried-forward outline into today's template outline."""

from __future__ import annotations

from noteweaver.errors import AmbiguousMergeError
from noteweaver.logging import get_logger
from noteweaver.models.outline import OutlineNode
from noteweaver.outline.lines import is_checklist, is_heading

logger = get_logger(__name__)


def merge(destination: OutlineNode, source: OutlineNode) -> None:
    """Merge ``source`` into ``destination`` in place.

    ``destination`` keeps its own order and structure; ``source`` only contributes
    scopes and lines that ``destination`` lacks. Child scopes are matched by exact label
    text, first match wins when siblings share a label. ``source`` is never mutated and
    nothing from it is shared with ``destination`` afterwards.

    Merging a tree with a copy of itself leaves it unchanged only when sibling labels
    are unique: every same-labelled sibling in ``source`` is merged into the first one
    in ``destination``, so the later duplicates' children are copied into it.

    Raises:
        AmbiguousMergeError: if the two root labels differ. Nothing is mutated in that
            case; use :func:`merge_roots` to wrap both under a new root instead.
    """

    if destination.label != source.label:
        raise AmbiguousMergeError(destination.label, source.label)
    _merge_into(destination, source)


def merge_roots(destination: OutlineNode, source: OutlineNode) -> OutlineNode:
    """Merge two roots, wrapping them under a new parentless node if labels differ."""

    if destination.label != source.label:
        logger.debug(
            "root labels differ (%r vs %r), wrapping both under a new root",
            destination.label,
            source.label,
        )
        return OutlineNode(
            label=None,
            children=[destination, source.copy_tree()],
            size=destination.size + source.size,
        )
    _merge_into(destination, source)
    return destination


def _merge_into(destination: OutlineNode, source: OutlineNode) -> None:
    for child in source.children:
        if isinstance(child, OutlineNode):
            match = destination.find_child(child.label)
            if match is not None:
                old_size = match.size
                _merge_into(match, child)
                destination.size += match.size - old_size
                continue

            added = child.copy_tree()
            # carried checklist items must stay above sub-headings, otherwise the next
            # structurize would fold them into the preceding heading's scope
            if is_checklist(added.label):
                destination.children.insert(_first_heading_index(destination), added)
            else:
                destination.children.append(added)
            destination.size += added.size
        else:
            if _has_line(destination, child):
                continue
            destination.children.insert(_first_heading_index(destination), child)
            destination.size += 1


def _has_line(node: OutlineNode, line: str) -> bool:
    return any(isinstance(c, str) and c == line for c in node.children)


def _first_heading_index(node: OutlineNode) -> int:
    for i, child in enumerate(node.children):
        if isinstance(child, OutlineNode) and is_heading(child.label):
            return i
    return len(node.children)
