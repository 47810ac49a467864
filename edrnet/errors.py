"""Exception hierarchy for histogram building and network generation.

Every fatal condition raised by the library derives from EDRNetError so the
command-line entry points can report it and exit with a non-zero status.
The concrete classes also inherit from the matching builtin exception, so
callers that only catch ValueError / OSError / MemoryError keep working.
"""


class EDRNetError(Exception):
    """Base class for all fatal edrnet errors."""


class InvalidArgumentError(EDRNetError, ValueError):
    """Raised for bad input values (counts, flags, decay rate, node indices)."""


class ResourceExhaustedError(EDRNetError, MemoryError):
    """Raised when an array for the matrix, histogram or weights cannot be allocated."""


class IOFailureError(EDRNetError, OSError):
    """Raised when an input or output file cannot be opened, read or written."""


class SamplingExhaustedError(EDRNetError, RuntimeError):
    """Raised when a caller-imposed draw budget runs out before the edge target."""
