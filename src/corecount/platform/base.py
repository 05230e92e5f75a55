import logging
from typing import Protocol

from corecount.errors import ProbeError

logger = logging.getLogger(__name__)

# Returned when nothing better can be determined
FALLBACK_CORE_COUNT = 1


class CoreProbe(Protocol):  # pragma: no coverage
    """Protocol for the platform specific core counters"""

    @property
    def name(self) -> str:
        raise NotImplementedError

    def logical_count(self) -> int:
        raise NotImplementedError

    def physical_count(self) -> int:
        raise NotImplementedError


def positive_or_fallback(value: int, *, fallback: int) -> int:
    """Return value if it is positive, else fallback"""
    if value < 1:
        return fallback

    return value


class FallbackProbe:
    """
    Base class for probes that query the operating system

    Subclasses implement read_logical_count and read_physical_count, raising
    ProbeError on failure. The public methods never raise: a failed logical
    query yields FALLBACK_CORE_COUNT, a failed physical query yields the
    logical count.
    """

    name = "base"

    def read_logical_count(self) -> int:  # pragma: no coverage
        raise NotImplementedError

    def read_physical_count(self) -> int:  # pragma: no coverage
        raise NotImplementedError

    def logical_count(self) -> int:
        """Return the amount of logical cores, at least 1"""
        try:
            value = self.read_logical_count()
        except ProbeError as e:
            logger.debug(f"Logical core query failed on {self.name}", exc_info=e)
            return FALLBACK_CORE_COUNT

        if value < 1:
            logger.debug(f"Logical core query on {self.name} returned {value}")

        return positive_or_fallback(value, fallback=FALLBACK_CORE_COUNT)

    def physical_count(self) -> int:
        """Return the amount of physical cores, the logical count if unknown"""
        try:
            value = self.read_physical_count()
        except ProbeError as e:
            logger.debug(
                f"Physical core query failed on {self.name}, using logical count",
                exc_info=e,
            )
            return self.logical_count()

        if value < 1:
            logger.debug(
                f"Physical core query on {self.name} returned {value}, "
                "using logical count"
            )
            return self.logical_count()

        return value


class UnknownProbe:
    """Probe for platforms we know nothing about"""

    name = "unknown"

    def logical_count(self) -> int:
        return FALLBACK_CORE_COUNT

    def physical_count(self) -> int:
        return FALLBACK_CORE_COUNT
