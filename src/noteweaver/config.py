"""Application configuration.

Configuration is loaded from environment variables. For local use, you can provide a
`.env` file and set `NOTEWEAVER_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MergeOptions(BaseModel):
    """Policy bundle passed into each merge cycle.

    The outline core never reads :class:`Settings` directly; callers hand it one of these.
    """

    delete_empty_headings: bool = True
    # When true the previous note is pruned before it is merged, so template headings
    # survive even if they end up empty. When false the merged outline is pruned.
    keep_template_headings: bool = True
    keep_until_parent_complete: bool = False


class Settings(BaseSettings):
    """NoteWeaver settings.

    All fields are environment-configurable. Prefix is `NOTEWEAVER_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTEWEAVER_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="INFO")

    # Notes
    note_path: Path | None = Field(default=None)
    template_path: Path | None = Field(default=None)
    # strftime format of note names relative to note_path (may contain "/")
    date_format: str = Field(default="%Y-%m-%d")

    # Carry-forward scope. Empty means start / end of the document.
    initial: str = Field(default="")
    terminal: str = Field(default="")

    # Pruning policy
    delete_empty_headings: bool = Field(default=True)
    keep_template_headings: bool = Field(default=True)
    keep_until_parent_complete: bool = Field(default=False)

    # Recurrence
    max_catchup_days: int | None = Field(default=None, ge=0, le=3660)

    # Journal
    journal_enabled: bool = Field(default=True)

    def merge_options(self) -> MergeOptions:
        """Return the pruning policy as an explicit parameter bundle."""

        return MergeOptions(
            delete_empty_headings=self.delete_empty_headings,
            keep_template_headings=self.keep_template_headings,
            keep_until_parent_complete=self.keep_until_parent_complete,
        )


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("NOTEWEAVER_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
