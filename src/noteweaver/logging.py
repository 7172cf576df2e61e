"""Logging utilities.

Log records carry the note being built (``run``) and the stage of the merge cycle
(``step``), so a log of several daily runs can be read back per note.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Any, Iterator

from rich.logging import RichHandler

_run_var: contextvars.ContextVar[str] = contextvars.ContextVar("noteweaver_run", default="-")
_step_var: contextvars.ContextVar[str] = contextvars.ContextVar("noteweaver_step", default="-")


class _NoteContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.run_id = _run_var.get()  # type: ignore[attr-defined]
        record.step = _step_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def run_context(*, run_id: str, step: str | None = None) -> Iterator[None]:
    """Bind the note name (and optionally the starting step) for the enclosed block."""

    token_run = _run_var.set(run_id)
    token_step = _step_var.set(step or "-")
    try:
        yield
    finally:
        _step_var.reset(token_step)
        _run_var.reset(token_run)


def set_step(step: str) -> None:
    """Mark the stage of the merge cycle that is running now."""

    _step_var.set(step)


def configure_logging(level: str = "INFO") -> None:
    """Install a single rich handler on the root logger.

    Calling this again replaces the handler instead of stacking another one.
    """

    root = logging.getLogger()
    for h in [h for h in root.handlers if isinstance(h, RichHandler)]:
        root.removeHandler(h)

    handler = RichHandler(rich_tracebacks=True, show_path=False, markup=False)
    handler.addFilter(_NoteContextFilter())
    handler.setFormatter(logging.Formatter("[%(run_id)s:%(step)s] %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_exception(logger: logging.Logger, msg: str, **context: Any) -> None:
    """Log the exception being handled, with the note context appended."""

    details = " ".join(f"{k}={v}" for k, v in context.items())
    if details:
        logger.exception("%s %s", msg, details)
    else:
        logger.exception("%s", msg)
