"""Daily run against a folder of dated markdown notes.

A note's name is its path relative to the notes folder, without ``.md``, formatted
with ``Settings.date_format`` (which may contain ``/`` for nested folders).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path

from noteweaver.config import Settings
from noteweaver.engine import PreviousNote, build_note
from noteweaver.errors import NoteConfigurationError, NoteWeaverError
from noteweaver.events import ContentType, EventType, RunEvent
from noteweaver.logging import get_logger, log_exception, run_context, set_step
from noteweaver.recording.journal import JOURNAL_DIRNAME, RunJournal, journal_path
from noteweaver.template import expand_next_note

logger = get_logger(__name__)


@dataclass(frozen=True)
class DatedNote:
    path: Path
    name: str
    day: date


@dataclass
class DailyRunResult:
    path: Path
    created: bool
    previous: Path | None = None
    carried: int = 0
    events: list[RunEvent] = field(default_factory=list)


def note_name(path: Path, note_dir: Path) -> str:
    return path.relative_to(note_dir).with_suffix("").as_posix()


def find_notes(note_dir: Path, date_format: str) -> list[DatedNote]:
    """Return every note under ``note_dir`` whose name parses as a date, newest first.

    Files whose names do not match ``date_format`` exactly are ignored.
    """

    notes: list[DatedNote] = []
    for path in note_dir.rglob("*.md"):
        rel = path.relative_to(note_dir)
        if rel.parts and rel.parts[0] == JOURNAL_DIRNAME:
            continue
        name = note_name(path, note_dir)
        try:
            day = datetime.strptime(name, date_format).date()
        except ValueError:
            logger.debug("skipping %s: name does not match %r", rel, date_format)
            continue
        notes.append(DatedNote(path=path, name=name, day=day))
    notes.sort(key=lambda n: (n.day, n.name), reverse=True)
    return notes


def last_note_before(notes: list[DatedNote], today: date) -> DatedNote | None:
    """Return the newest note dated strictly before ``today``."""

    earlier = [n for n in notes if n.day < today]
    return max(earlier, key=lambda n: n.day, default=None)


def resolve_template(settings: Settings) -> Path:
    """Return the template file, accepting a path given without its ``.md`` suffix."""

    if settings.template_path is None or str(settings.template_path) == "":
        raise NoteConfigurationError("You must specify a template file in the settings.")
    candidates = [settings.template_path]
    if settings.template_path.suffix != ".md":
        candidates.append(settings.template_path.with_name(settings.template_path.name + ".md"))
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise NoteConfigurationError(
        f'The template file "{settings.template_path}" specified in the settings does not exist.'
    )


def resolve_note_dir(settings: Settings) -> Path:
    if settings.note_path is None or str(settings.note_path) == "":
        raise NoteConfigurationError("You must specify a note path in the settings.")
    if not settings.note_path.is_dir():
        raise NoteConfigurationError(
            f'The note path "{settings.note_path}" specified in the settings does not exist.'
        )
    return settings.note_path


def run_daily(settings: Settings, now: datetime | None = None) -> DailyRunResult:
    """Create today's note from the template and the most recent earlier note.

    If today's note already exists it is left untouched, so content is never carried
    forward twice.
    """

    now = now or datetime.now()
    note_dir = resolve_note_dir(settings)
    template_file = resolve_template(settings)

    title = now.strftime(settings.date_format)
    new_path = note_dir / f"{title}.md"

    with run_context(run_id=title, step="start"):
        journal = RunJournal(
            run_id=title,
            path=journal_path(note_dir) if settings.journal_enabled else None,
        )
        journal.emit(EventType.SYSTEM, ContentType.RUN_STARTED, {"note": str(new_path)})

        if new_path.exists():
            logger.info("today's note already exists: %s", new_path)
            journal.emit(EventType.NOTE, ContentType.NOTE_EXISTS, str(new_path))
            return DailyRunResult(path=new_path, created=False, events=journal.events)

        set_step("discover")
        last = last_note_before(find_notes(note_dir, settings.date_format), now.date())
        previous: PreviousNote | None = None
        if last is not None:
            logger.info("carrying forward from %s", last.name)
            previous = PreviousNote(
                name=last.path.stem,
                path=last.path.relative_to(note_dir).as_posix(),
                day=last.day,
                text=last.path.read_text(encoding="utf-8"),
            )
            journal.emit(EventType.NOTE, ContentType.PREVIOUS_NOTE, last.name, day=last.day.isoformat())
        else:
            logger.info("no earlier note found, using the template only")

        try:
            build = build_note(
                template_file.read_text(encoding="utf-8"),
                now=now,
                title=title,
                options=settings.merge_options(),
                previous=previous,
                initial=settings.initial,
                terminal=settings.terminal,
                max_catchup_days=settings.max_catchup_days,
                template_name=template_file.stem,
            )
        except NoteWeaverError as exc:
            log_exception(logger, "could not build note", note=title, template=str(template_file))
            journal.emit(EventType.ERROR, ContentType.RUN_FAILED, str(exc), error=type(exc).__name__)
            raise

        set_step("write")
        new_path.parent.mkdir(parents=True, exist_ok=True)
        new_path.write_text(build.text, encoding="utf-8")
        logger.info("created %s (%+d lines carried)", new_path, build.carried)
        journal.emit(EventType.NOTE, ContentType.NOTE_CREATED, str(new_path), carried=build.carried)

        if last is not None:
            _link_previous(last.path, new_path, note_dir, journal)

        return DailyRunResult(
            path=new_path,
            created=True,
            previous=last.path if last else None,
            carried=build.carried,
            events=journal.events,
        )


def _link_previous(previous_path: Path, new_path: Path, note_dir: Path, journal: RunJournal) -> None:
    set_step("link")
    old = previous_path.read_text(encoding="utf-8")
    updated = expand_next_note(
        old,
        next_note=new_path.stem,
        next_note_path=new_path.relative_to(note_dir).as_posix(),
    )
    if updated != old:
        previous_path.write_text(updated, encoding="utf-8")
        journal.emit(EventType.NOTE, ContentType.PREVIOUS_NOTE_LINKED, str(previous_path))
