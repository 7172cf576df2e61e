"""Event model for the run journal.

Each daily run produces a short sequence of events. They are appended to a JSONL file
so a user can see later what was carried forward and why a note looks the way it does.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """High-level event categories."""

    SYSTEM = "system"
    NOTE = "note"
    ERROR = "error"


class ContentType(str, Enum):
    """Semantic types within a run."""

    MESSAGE = "message"

    RUN_STARTED = "run_started"
    NOTE_EXISTS = "note_exists"
    PREVIOUS_NOTE = "previous_note"
    NOTE_CREATED = "note_created"
    PREVIOUS_NOTE_LINKED = "previous_note_linked"
    RUN_FAILED = "run_failed"


class RunEvent(BaseModel):
    """A single event in a run."""

    run_id: str
    seq: int = Field(ge=1)
    ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    event_type: EventType
    content_type: ContentType

    data: str | dict | list | None = None
    metadata: dict[str, str | int | float | bool | None] = Field(default_factory=dict)
