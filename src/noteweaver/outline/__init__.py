"""Outline reconstruction, merge and pruning."""

from __future__ import annotations

from noteweaver.outline.lines import checklist_level, heading_level, is_checked
from noteweaver.outline.merge import merge, merge_roots
from noteweaver.outline.prune import filter_outline
from noteweaver.outline.structure import destructure, structurize

__all__ = [
    "checklist_level",
    "destructure",
    "filter_outline",
    "heading_level",
    "is_checked",
    "merge",
    "merge_roots",
    "structurize",
]
