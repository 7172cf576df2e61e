"""Pydantic models used across the project."""

from __future__ import annotations

from noteweaver.models.outline import OutlineNode

__all__ = [
    "OutlineNode",
]
