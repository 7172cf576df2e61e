"""Append-only JSONL journal of daily runs.

Every run writes a handful of events (which previous note was used, which note was
created) so the history of a notes folder can be reconstructed later.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from noteweaver.events import ContentType, EventType, RunEvent
from noteweaver.logging import get_logger

logger = get_logger(__name__)

JOURNAL_DIRNAME = ".noteweaver"
JOURNAL_FILENAME = "events.jsonl"


def journal_path(note_dir: Path) -> Path:
    return note_dir / JOURNAL_DIRNAME / JOURNAL_FILENAME


@dataclass
class RunJournal:
    """Numbered events for a single run.

    With ``path=None`` events are still numbered and kept in memory but nothing is
    written.
    """

    run_id: str
    path: Path | None = None
    events: list[RunEvent] = field(default_factory=list)

    def emit(
        self,
        event_type: EventType,
        content_type: ContentType,
        data: str | dict | list | None = None,
        **metadata: str | int | float | bool | None,
    ) -> RunEvent:
        event = RunEvent(
            run_id=self.run_id,
            seq=len(self.events) + 1,
            event_type=event_type,
            content_type=content_type,
            data=data,
            metadata=metadata,
        )
        self.events.append(event)
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            line = json.dumps(event.model_dump(mode="json"), ensure_ascii=False)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        logger.debug("event %d %s", event.seq, content_type.value)
        return event


def read_journal(path: Path, run_id: str | None = None) -> list[RunEvent]:
    """Load events from a journal file, optionally only those of one run."""

    events: list[RunEvent] = []
    if not path.exists():
        return events
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line:
            continue
        event = RunEvent.model_validate_json(line)
        if run_id is None or event.run_id == run_id:
            events.append(event)
    return events
