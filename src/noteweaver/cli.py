"""CLI entrypoints for NoteWeaver."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from pathlib import Path

import typer

from noteweaver.config import load_settings
from noteweaver.engine import PreviousNote, build_note
from noteweaver.errors import NoteWeaverError
from noteweaver.logging import configure_logging, get_logger
from noteweaver.recurrence import parse_directive, should_emit_with_catchup, should_trigger
from noteweaver.vault import run_daily

app = typer.Typer(add_completion=False, help="Carry unfinished to-dos forward into today's note")
logger = get_logger(__name__)


def _parse_day(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {value!r}") from None


def _now_for(day: date | None) -> datetime:
    now = datetime.now()
    if day is None:
        return now
    return datetime.combine(day, time(now.hour, now.minute))


def _fail(exc: NoteWeaverError) -> None:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command()
def run(
    day: str | None = typer.Option(None, "--date", help="Build the note for this day instead of today"),
    note_path: Path | None = typer.Option(
        None,
        "--note-path",
        help="Notes folder (overrides NOTEWEAVER_NOTE_PATH)",
    ),
    template_path: Path | None = typer.Option(
        None,
        "--template",
        help="Template file (overrides NOTEWEAVER_TEMPLATE_PATH)",
    ),
) -> None:
    """Create today's note, carrying forward what is still open."""

    settings = load_settings()
    if note_path is not None:
        settings.note_path = note_path
    if template_path is not None:
        settings.template_path = template_path

    configure_logging(settings.log_level)

    try:
        result = run_daily(settings, now=_now_for(_parse_day(day)))
    except NoteWeaverError as exc:
        _fail(exc)
        return
    typer.echo(str(result.path))


@app.command()
def preview(
    template: Path = typer.Argument(..., exists=True, dir_okay=False, help="Template file"),
    previous: Path | None = typer.Option(
        None,
        "--previous",
        exists=True,
        dir_okay=False,
        help="Previous note to carry forward from",
    ),
    previous_date: str | None = typer.Option(
        None,
        "--previous-date",
        help="Date of the previous note (YYYY-MM-DD); defaults to the day before",
    ),
    day: str | None = typer.Option(None, "--date", help="Day to build the note for"),
) -> None:
    """Print the note that would be created, without writing anything."""

    settings = load_settings()
    configure_logging(settings.log_level)

    now = _now_for(_parse_day(day))
    prev: PreviousNote | None = None
    if previous is not None:
        prev_day = _parse_day(previous_date) or now.date() - timedelta(days=1)
        prev = PreviousNote(
            name=previous.stem,
            path=previous.as_posix(),
            day=prev_day,
            text=previous.read_text(encoding="utf-8"),
        )

    try:
        build = build_note(
            template.read_text(encoding="utf-8"),
            now=now,
            title=now.strftime(settings.date_format),
            options=settings.merge_options(),
            previous=prev,
            initial=settings.initial,
            terminal=settings.terminal,
            max_catchup_days=settings.max_catchup_days,
            template_name=template.stem,
        )
    except NoteWeaverError as exc:
        _fail(exc)
        return
    typer.echo(build.text)


@app.command()
def check(
    directive: str = typer.Argument(..., help='Directive, e.g. "1,15 * *" or "{{ obligate * * 1-5 }}"'),
    day: str | None = typer.Option(None, "--date", help="Day to test (default today)"),
    since: str | None = typer.Option(None, "--since", help="Last processed day, enables catch-up"),
) -> None:
    """Tell whether an obligation directive fires on a day."""

    try:
        parsed = parse_directive(directive)
    except NoteWeaverError as exc:
        _fail(exc)
        return

    today = _parse_day(day) or date.today()
    last = _parse_day(since)
    fired_today = should_trigger(parsed, today)
    due = should_emit_with_catchup(parsed, last, today)
    if fired_today:
        typer.echo(f"{parsed}: due on {today.isoformat()}")
    elif due:
        typer.echo(f"{parsed}: missed since {last.isoformat()}, due now")
    else:
        typer.echo(f"{parsed}: not due")
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()
