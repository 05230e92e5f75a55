import dataclasses
from pathlib import Path

import pytest
import toml

from corecount.settings import (
    DEFAULT_MAX_WORKERS,
    DEFAULT_MIN_WORKERS,
    Settings,
    SettingsDict,
    fill_missing_settings,
    get_settings,
)

DEFAULT_SETTINGS_DICT: SettingsDict = {
    "min_workers": DEFAULT_MIN_WORKERS,
    "max_workers": DEFAULT_MAX_WORKERS,
    "prefer_physical": False,
}


def make_settings_dict(
    min_workers: int | None = None,
    max_workers: int | None = None,
    prefer_physical: bool | None = None,
) -> SettingsDict:
    """Make a settings dict with default values if missing"""
    return {
        "min_workers": (
            min_workers if min_workers is not None else DEFAULT_MIN_WORKERS
        ),
        "max_workers": (
            max_workers if max_workers is not None else DEFAULT_MAX_WORKERS
        ),
        "prefer_physical": (
            prefer_physical if prefer_physical is not None else False
        ),
    }


def test_settings_roundtrip_dict(tmp_path: Path) -> None:
    source = make_settings_dict(min_workers=2, max_workers=8, prefer_physical=True)
    settings = Settings.from_dict(source, path=tmp_path / "settings.toml")
    assert settings.to_dict() == source


def test_flush_to_disk(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    settings = Settings.from_dict(make_settings_dict(max_workers=4), path=path)
    settings.flush_to_disk()

    assert toml.load(path) == make_settings_dict(max_workers=4)


fill_settings_test_cases: tuple[tuple[dict[str, object], SettingsDict, bool], ...] = (
    # Complete settings
    (dict(make_settings_dict(2, 8, True)), make_settings_dict(2, 8, True), False),
    # Nothing set
    ({}, DEFAULT_SETTINGS_DICT, True),
    # Invalid types
    ({"min_workers": "4", "max_workers": 8, "prefer_physical": True},
     make_settings_dict(max_workers=8, prefer_physical=True), True),
    ({"min_workers": True, "max_workers": 8, "prefer_physical": True},
     make_settings_dict(max_workers=8, prefer_physical=True), True),
    ({"min_workers": 2, "max_workers": 8.0, "prefer_physical": False},
     make_settings_dict(min_workers=2), True),
    ({"min_workers": 2, "max_workers": 8, "prefer_physical": "yes"},
     make_settings_dict(min_workers=2, max_workers=8), True),
    # Out of range
    ({"min_workers": 0, "max_workers": 8, "prefer_physical": False},
     make_settings_dict(max_workers=8), True),
    ({"min_workers": 1, "max_workers": 4096, "prefer_physical": False},
     make_settings_dict(), True),
    # Maximum below minimum
    ({"min_workers": 8, "max_workers": 4, "prefer_physical": False},
     make_settings_dict(min_workers=8, max_workers=8), True),
    # Minimum above the default maximum
    ({"min_workers": 32, "prefer_physical": False},
     make_settings_dict(min_workers=32, max_workers=32), True),
    # Unknown keys are dropped
    ({"min_workers": 1, "max_workers": 16, "prefer_physical": False, "a": 1},
     make_settings_dict(), False),
)  # fmt: skip


@pytest.mark.parametrize(
    "incomplete_settings, result, settings_updated", fill_settings_test_cases
)
def test_fill_missing_settings(
    incomplete_settings: dict[str, object],
    result: SettingsDict,
    settings_updated: bool,
) -> None:
    assert fill_missing_settings(incomplete_settings) == (result, settings_updated)


def test_get_settings_missing_file(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    settings = get_settings(path)

    assert settings == Settings.from_dict(DEFAULT_SETTINGS_DICT, path=path)

    # Defaults are written to disk
    assert toml.load(path) == DEFAULT_SETTINGS_DICT


def test_get_settings_invalid_toml(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    path.write_text("min_workers = = 3\n[[", encoding="utf-8")

    settings = get_settings(path)
    assert settings.to_dict() == DEFAULT_SETTINGS_DICT


def test_get_settings_complete_file_not_rewritten(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    contents = (
        "# My settings\nmin_workers = 2\nmax_workers = 6\nprefer_physical = true\n"
    )
    path.write_text(contents, encoding="utf-8")

    settings = get_settings(path)
    assert settings.to_dict() == make_settings_dict(2, 6, True)
    assert path.read_text(encoding="utf-8") == contents


def test_settings_fields() -> None:
    # Only the persisted values and the path, nothing shared between threads
    assert [field.name for field in dataclasses.fields(Settings)] == [
        "min_workers",
        "max_workers",
        "prefer_physical",
        "path",
    ]
