"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from noteweaver.config import MergeOptions, Settings, load_settings


def test_defaults() -> None:
    """It should default to ISO note names and template-preserving pruning."""

    settings = Settings()
    assert settings.date_format == "%Y-%m-%d"
    assert settings.merge_options() == MergeOptions(
        delete_empty_headings=True,
        keep_template_headings=True,
        keep_until_parent_complete=False,
    )


def test_env_vars_use_prefix(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """It should read NOTEWEAVER_* variables."""

    monkeypatch.setenv("NOTEWEAVER_NOTE_PATH", str(tmp_path))
    monkeypatch.setenv("NOTEWEAVER_KEEP_UNTIL_PARENT_COMPLETE", "true")
    monkeypatch.setenv("NOTEWEAVER_MAX_CATCHUP_DAYS", "31")

    settings = Settings()

    assert settings.note_path == tmp_path
    assert settings.max_catchup_days == 31
    assert settings.merge_options().keep_until_parent_complete is True


def test_load_settings_from_env_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """It should honour NOTEWEAVER_ENV_FILE."""

    env_file = tmp_path / "custom.env"
    env_file.write_text('NOTEWEAVER_INITIAL="## Todo"\nNOTEWEAVER_DELETE_EMPTY_HEADINGS=false\n', encoding="utf-8")
    monkeypatch.setenv("NOTEWEAVER_ENV_FILE", str(env_file))

    settings = load_settings()

    assert settings.initial == "## Todo"
    assert settings.delete_empty_headings is False
