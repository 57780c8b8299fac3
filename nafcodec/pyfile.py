from __future__ import annotations

import io
import logging

from .errors import OpaqueIoError, StreamTypeError, UnsupportedSeekError
from .foreign import foreign_errors, host_lock, reinterpret


logger = logging.getLogger(__name__)

_WHENCE = (io.SEEK_SET, io.SEEK_CUR, io.SEEK_END)


class ForeignStreamAdapter(io.RawIOBase):
    """A raw, seekable byte stream backed by a host file-like object.

    The host object only has to provide ``read(n) -> bytes`` and
    ``seek(offset, whence) -> int``. It is probed once with ``read(0)`` when
    the adapter is built, and every later call goes through the host lock.
    Closing the adapter does not close the host object.
    """

    def __init__(self, handle):
        super().__init__()
        with host_lock():
            probe = handle.read(0)
        if not isinstance(probe, bytes):
            raise StreamTypeError(type(probe).__name__)
        self._handle = handle

    @property
    def handle(self):
        return self._handle

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file")
        view = memoryview(buffer).cast("B")
        size = len(view)
        try:
            with host_lock():
                data = self._handle.read(size)
        except Exception as exc:
            raise _host_failure(exc, "read method failed") from exc
        if not isinstance(data, bytes):
            err = StreamTypeError(type(data).__name__)
            foreign_errors.restore(err)
            raise err
        n = len(data)
        if n > size:
            raise OpaqueIoError(f"read returned {n} bytes, more than the {size} requested")
        view[:n] = data
        return n

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file")
        if whence not in _WHENCE:
            raise ValueError(f"invalid whence ({whence}, should be 0, 1 or 2)")
        try:
            with host_lock():
                pos = self._handle.seek(offset, whence)
        except Exception as exc:
            raise UnsupportedSeekError(str(exc) or type(exc).__name__) from exc
        if isinstance(pos, bool) or not isinstance(pos, int):
            err = StreamTypeError(type(pos).__name__, expected="int")
            foreign_errors.restore(err)
            raise err
        if pos < 0:
            raise OpaqueIoError(f"seek returned a negative position: {pos}")
        return pos


def _host_failure(exc: Exception, message: str) -> OSError:
    err = reinterpret(exc, message)
    if isinstance(err, OpaqueIoError):
        # nothing native to carry the host error, keep it for the caller
        foreign_errors.restore(exc)
    else:
        logger.debug("reinterpreted %s from host object as errno %d", type(exc).__name__, err.errno)
    return err
