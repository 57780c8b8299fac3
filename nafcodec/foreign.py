"""
Runtime boundary helpers for host-supplied file-like objects.

- ``HOST_LOCK`` / ``host_lock()``: process-wide lock held for the full
  duration of every call into a host object. Host objects (sockets, buffers,
  decompressors, pipes) are not assumed re-entrant or thread-safe, so this is
  required for correctness. Native files never take it.
- ``foreign_errors``: the "last foreign error" slot. When a host object fails
  in a way the stream layer cannot express natively, the original exception is
  parked here in addition to the error raised to the caller, so the outermost
  caller can inspect or re-raise it. Set on failure, cleared when drained.
- ``reinterpret()``: turn a host exception into a native ``OSError`` when it
  carries an errno, or into an ``OpaqueIoError`` when it does not.
"""

from __future__ import annotations

import os
import threading
from typing import Optional

from .errors import OpaqueIoError


HOST_LOCK = threading.RLock()


def host_lock() -> threading.RLock:
    return HOST_LOCK


class ForeignErrorSlot:
    def __init__(self):
        self._lock = threading.Lock()
        self._error: Optional[BaseException] = None

    def restore(self, error: BaseException) -> None:
        """Park ``error``; replaces any error not yet drained."""
        with self._lock:
            self._error = error

    def peek(self) -> Optional[BaseException]:
        with self._lock:
            return self._error

    def take(self) -> Optional[BaseException]:
        with self._lock:
            error, self._error = self._error, None
            return error

    def clear(self) -> None:
        self.take()

    def raise_if_set(self) -> None:
        error = self.take()
        if error is not None:
            raise error

    def __bool__(self) -> bool:
        return self.peek() is not None


foreign_errors = ForeignErrorSlot()


def extract_errno(error: BaseException) -> Optional[int]:
    code = getattr(error, "errno", None)
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    return None


def reinterpret(error: BaseException, message: str = "host call failed") -> OSError:
    """Convert a host-side exception into the equivalent native I/O error.

    An integer ``errno`` attribute is kept as-is, so ``OSError`` picks the
    matching subclass (``FileNotFoundError`` for ENOENT and so on). Without
    one, the result is an :class:`OpaqueIoError` carrying ``message``.
    """
    code = extract_errno(error)
    if code is None:
        return OpaqueIoError(message)
    strerror = getattr(error, "strerror", None)
    if not isinstance(strerror, str):
        strerror = os.strerror(code)
    filename = getattr(error, "filename", None)
    if filename is not None:
        return OSError(code, strerror, filename)
    return OSError(code, strerror)
