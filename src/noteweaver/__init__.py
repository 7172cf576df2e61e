"""NoteWeaver: recurring, hierarchical to-do lists across daily notes."""

from __future__ import annotations

from noteweaver.config import MergeOptions, Settings, load_settings
from noteweaver.engine import build_note, merge_bodies
from noteweaver.models.outline import OutlineNode
from noteweaver.outline import destructure, filter_outline, merge, merge_roots, structurize
from noteweaver.recurrence import parse_directive, should_emit_with_catchup, should_trigger

__all__ = [
    "MergeOptions",
    "OutlineNode",
    "Settings",
    "build_note",
    "destructure",
    "filter_outline",
    "load_settings",
    "merge",
    "merge_bodies",
    "merge_roots",
    "parse_directive",
    "should_emit_with_catchup",
    "should_trigger",
    "structurize",
]

__version__ = "0.1.0"
