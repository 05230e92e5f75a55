from pathlib import Path

from appdirs import AppDirs

dirs = AppDirs(appname="corecount")

LOG_DIR = Path(dirs.user_log_dir)
DEFAULT_SETTINGS_PATH = Path(dirs.user_config_dir) / "settings.toml"


def ensure_directory(path: Path) -> None:
    """Create `path` and its parents unless it exists"""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RuntimeError(f"Could not create directory '{path}'") from e
