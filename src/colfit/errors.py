"""Print failures and the status values returned by the entry points."""

from __future__ import annotations

import errno
from enum import IntEnum


class PrintStatus(IntEnum):
    """Result of a print call. Negative values follow errno numbering."""

    OK = 0
    NO_MEMORY = -errno.ENOMEM
    NOT_SUPPORTED = -errno.ENOSYS


class ColfitError(Exception):
    """Base class for failures raised inside a print call."""

    status: PrintStatus = PrintStatus.OK


class BufferAllocationError(ColfitError):
    """The scratch line buffer could not be allocated."""

    status = PrintStatus.NO_MEMORY


class StreamNotSupportedError(ColfitError):
    """No writable in-memory stream is available for string output."""

    status = PrintStatus.NOT_SUPPORTED
