import logging

from corecount.counts import logical_count, physical_count
from corecount.settings import Settings

logger = logging.getLogger(__name__)


def recommend_worker_count(cpu_count: int, minimum: int, maximum: int) -> int:
    """Recommend cpu_count restricted to [minimum, maximum]"""
    assert 1 <= minimum <= maximum

    return max(minimum, min(maximum, cpu_count))


def recommend_workers(settings: Settings) -> int:
    """Recommend an amount of workers for the current cpu"""
    prefer_physical = settings.prefer_physical
    minimum, maximum = settings.min_workers, settings.max_workers

    cpu_count = physical_count() if prefer_physical else logical_count()
    workers = recommend_worker_count(cpu_count, minimum, maximum)

    logger.debug(
        f"Recommending {workers} workers from {cpu_count} "
        f"{'physical' if prefer_physical else 'logical'} cores"
    )
    return workers
