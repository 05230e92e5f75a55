import logging
import platform
from datetime import date
from itertools import count
from pathlib import Path

from corecount import VERSION_STRING
from corecount.directories import LOG_DIR, ensure_directory

logger = logging.getLogger(__name__)


def get_logpath(log_dir: Path) -> Path:
    """Return the first unused `<date>.<n>.log` path in log_dir"""
    today = date.today().isoformat()
    return next(
        path
        for path in (log_dir / f"{today}.{i}.log" for i in count())
        if not path.exists()
    )


def setup_logging(loglevel: int, log_dir: Path = LOG_DIR) -> Path:
    """Log to a new file in log_dir, returning its path"""
    ensure_directory(log_dir)
    logpath = get_logpath(log_dir)

    logging.basicConfig(
        filename=logpath,
        level=loglevel,
        format="%(asctime)s;%(levelname)-8s;%(name)-30s;%(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.captureWarnings(True)

    logger.info(
        f"corecount {VERSION_STRING} on {platform.uname()}, "
        f"python {platform.python_version()}"
    )
    return logpath
