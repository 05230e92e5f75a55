import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import Self, TypedDict

import toml

logger = logging.getLogger(__name__)

# Allowed range for min_workers and max_workers
WORKER_LIMIT_RANGE = (1, 1024)

DEFAULT_MIN_WORKERS = 1
DEFAULT_MAX_WORKERS = 16


class SettingsDict(TypedDict):
    """Complete dict of settings"""

    min_workers: int
    max_workers: int
    prefer_physical: bool


@dataclass
class Settings:
    """Class holding user settings for the worker recommendation"""

    min_workers: int
    max_workers: int
    prefer_physical: bool
    path: Path

    @classmethod
    def from_dict(cls, source: SettingsDict, path: Path) -> Self:
        return cls(
            min_workers=source["min_workers"],
            max_workers=source["max_workers"],
            prefer_physical=source["prefer_physical"],
            path=path,
        )

    def to_dict(self) -> SettingsDict:
        return {
            "min_workers": self.min_workers,
            "max_workers": self.max_workers,
            "prefer_physical": self.prefer_physical,
        }

    def flush_to_disk(self) -> None:
        # toml.load(path) uses encoding='utf-8'
        with self.path.open("w", encoding="utf-8") as f:
            toml.dump(self.to_dict(), f)
        logger.info(f"Wrote settings to disk: {self}")


def read_settings(path: Path) -> MutableMapping[str, object]:
    return toml.load(path)


def get_boolean_setting(
    incomplete_settings: Mapping[str, object],
    key: str,
    settings_updated: bool,
    *,
    default: bool,
) -> tuple[bool, bool]:
    """Return value, settings_updated"""
    value = incomplete_settings.get(key, None)

    if not isinstance(value, bool):
        return default, True

    return value, settings_updated


def get_worker_limit_setting(
    incomplete_settings: Mapping[str, object],
    key: str,
    settings_updated: bool,
    *,
    default: int,
) -> tuple[int, bool]:
    """Return value, settings_updated"""
    value = incomplete_settings.get(key, None)
    low, high = WORKER_LIMIT_RANGE

    # bool is a subclass of int
    if not isinstance(value, int) or isinstance(value, bool):
        return default, True

    if not low <= value <= high:
        return default, True

    return value, settings_updated


def fill_missing_settings(
    incomplete_settings: Mapping[str, object],
) -> tuple[SettingsDict, bool]:
    """Get settings from `incomplete_settings` and fill with defaults if missing"""
    settings_updated = False

    min_workers, settings_updated = get_worker_limit_setting(
        incomplete_settings,
        "min_workers",
        settings_updated,
        default=DEFAULT_MIN_WORKERS,
    )

    max_workers, settings_updated = get_worker_limit_setting(
        incomplete_settings,
        "max_workers",
        settings_updated,
        default=max(DEFAULT_MAX_WORKERS, min_workers),
    )

    if max_workers < min_workers:
        settings_updated = True
        max_workers = min_workers

    prefer_physical, settings_updated = get_boolean_setting(
        incomplete_settings, "prefer_physical", settings_updated, default=False
    )

    return {
        "min_workers": min_workers,
        "max_workers": max_workers,
        "prefer_physical": prefer_physical,
    }, settings_updated


def get_settings(path: Path) -> Settings:
    """
    Read the stored settings into a Settings object

    NOTE: Will write to the path if any setting is missing or invalid
    """
    try:
        incomplete_settings = read_settings(path)
    except Exception as e:
        # Error either in reading or parsing file
        incomplete_settings = {}
        logger.warning("Error reading settings file, using all defaults.", exc_info=e)

    settings_dict, settings_updated = fill_missing_settings(incomplete_settings)

    settings = Settings.from_dict(settings_dict, path=path)

    if settings_updated:
        settings.flush_to_disk()

    logger.info(f"Read settings from disk: {settings}")
    return settings
