"""
Core detection on Windows

Logical cores come from GetSystemInfo (pywin32). Physical cores are counted
from the SYSTEM_LOGICAL_PROCESSOR_INFORMATION records returned by
GetLogicalProcessorInformation, which is called twice: once to get the
required buffer size and once to fill the buffer.
"""

import ctypes
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol

from corecount.errors import AllocationFailed, QueryUnavailable
from corecount.platform.base import FallbackProbe

logger = logging.getLogger(__name__)

# LOGICAL_PROCESSOR_RELATIONSHIP
RELATION_PROCESSOR_CORE = 0
RELATION_NUMA_NODE = 1
RELATION_CACHE = 2
RELATION_PROCESSOR_PACKAGE = 3

# Index of dwNumberOfProcessors in the tuple from win32api.GetSystemInfo
SYSTEM_INFO_NUMBER_OF_PROCESSORS = 5


class SystemLogicalProcessorInformation(ctypes.Structure):
    """SYSTEM_LOGICAL_PROCESSOR_INFORMATION from winnt.h"""

    _fields_ = [
        ("ProcessorMask", ctypes.c_size_t),  # ULONG_PTR
        ("Relationship", ctypes.c_int),
        # Union of ProcessorCore, NumaNode, Cache and Reserved[2]
        ("Reserved", ctypes.c_ulonglong * 2),
    ]


RECORD_SIZE = ctypes.sizeof(SystemLogicalProcessorInformation)


class GetProcessorInformation(Protocol):  # pragma: no coverage
    """
    Protocol for GetLogicalProcessorInformation

    Sets length to the required size and returns False if the buffer is
    missing or too small.
    """

    def __call__(
        self, buffer: "ctypes.Array[ctypes.c_char] | None", length: ctypes.c_uint32
    ) -> bool:
        raise NotImplementedError


def kernel32_get_processor_information(
    buffer: "ctypes.Array[ctypes.c_char] | None", length: ctypes.c_uint32
) -> bool:  # pragma: no coverage
    try:
        kernel32 = ctypes.windll.kernel32  # type: ignore [attr-defined]
    except AttributeError as e:
        raise QueryUnavailable("kernel32 is only available on Windows") from e

    try:
        return bool(
            kernel32.GetLogicalProcessorInformation(buffer, ctypes.byref(length))
        )
    except OSError as e:
        raise QueryUnavailable("GetLogicalProcessorInformation raised") from e


def read_system_info_processors() -> int:
    """Return dwNumberOfProcessors from GetSystemInfo"""
    try:
        import win32api  # type: ignore [import]
    except ImportError as e:
        raise QueryUnavailable("pywin32 is not installed") from e

    try:
        system_info = win32api.GetSystemInfo()
    except Exception as e:
        raise QueryUnavailable("GetSystemInfo failed") from e

    return int(system_info[SYSTEM_INFO_NUMBER_OF_PROCESSORS])


@contextmanager
def processor_information(
    get_processor_information: GetProcessorInformation,
) -> Iterator[memoryview]:
    """Yield a view of the filled processor information buffer"""
    length = ctypes.c_uint32(0)
    get_processor_information(None, length)

    if length.value == 0:
        raise QueryUnavailable("GetLogicalProcessorInformation reported size 0")

    try:
        buffer = ctypes.create_string_buffer(length.value)
    except MemoryError as e:
        raise AllocationFailed(f"Could not allocate {length.value} bytes") from e

    if not get_processor_information(buffer, length):
        raise QueryUnavailable("GetLogicalProcessorInformation failed")

    view = memoryview(buffer)[: length.value]
    try:
        yield view
    finally:
        view.release()


def count_processor_cores(data: bytes | memoryview) -> int:
    """Count the processor core records in a processor information buffer"""
    count = 0
    # A trailing partial record is skipped
    for offset in range(0, len(data) - RECORD_SIZE + 1, RECORD_SIZE):
        record = SystemLogicalProcessorInformation.from_buffer_copy(data, offset)
        if record.Relationship == RELATION_PROCESSOR_CORE:
            count += 1

    return count


@dataclass
class WindowsProbe(FallbackProbe):
    name: str = "windows"
    query_system_info_processors: Callable[[], int] = read_system_info_processors
    get_processor_information: GetProcessorInformation = (
        kernel32_get_processor_information
    )

    def read_logical_count(self) -> int:
        return self.query_system_info_processors()

    def read_physical_count(self) -> int:
        with processor_information(self.get_processor_information) as data:
            return count_processor_cores(data)
