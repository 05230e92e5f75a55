"""
Error classes raised while probing the operating system for core counts.

These never reach callers of the public counting functions. Each probe catches
ProbeError and falls back to a simpler value instead.
"""


class ProbeError(Exception):
    """Base class for failures while querying the operating system"""


class QueryUnavailable(ProbeError):
    """Exception raised when a system query is absent or disallowed"""


class DataUnparseable(ProbeError):
    """Exception raised when the system returns malformed or incomplete data"""


class AllocationFailed(ProbeError):
    """Exception raised when a buffer for a system query could not be allocated"""


class SourceUnreadable(ProbeError):
    """Exception raised when a system information file could not be read"""
