"""Run journal recording."""

from __future__ import annotations

from noteweaver.recording.journal import RunJournal, journal_path, read_journal

__all__ = ["RunJournal", "journal_path", "read_journal"]
