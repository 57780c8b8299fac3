from __future__ import annotations

import io
import logging
import os
from typing import Union

from .pyfile import ForeignStreamAdapter


logger = logging.getLogger(__name__)

_NATIVE_TYPES = (io.BufferedReader, io.FileIO)


class StreamSource(io.RawIOBase):
    """The byte stream an archive is read from.

    Holds exactly one of a native file opened from a path, or a
    :class:`ForeignStreamAdapter` around a host file-like object, and
    forwards reads and seeks to it. The source owns what it holds:
    closing the source closes the native file or the adapter (never the
    host object behind an adapter).
    """

    def __init__(self, stream: Union[io.BufferedReader, io.FileIO, ForeignStreamAdapter]):
        super().__init__()
        if not isinstance(stream, (ForeignStreamAdapter,) + _NATIVE_TYPES):
            raise TypeError(
                f"expected a native file or ForeignStreamAdapter, found {type(stream).__name__}"
            )
        self._stream = stream

    @classmethod
    def from_path(cls, path) -> "StreamSource":
        return cls(open(os.fspath(path), "rb"))

    @classmethod
    def from_handle(cls, handle) -> "StreamSource":
        return cls(ForeignStreamAdapter(handle))

    @classmethod
    def open(cls, source) -> "StreamSource":
        """Open a path natively, or wrap anything else as a host object."""
        if isinstance(source, (str, bytes, os.PathLike)):
            return cls.from_path(source)
        logger.debug("wrapping %s as a foreign stream", type(source).__name__)
        return cls.from_handle(source)

    @property
    def is_foreign(self) -> bool:
        return isinstance(self._stream, ForeignStreamAdapter)

    @property
    def name(self):
        if self.is_foreign:
            return getattr(self._stream.handle, "name", None)
        return self._stream.name

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def fileno(self) -> int:
        return self._stream.fileno()

    def readinto(self, buffer) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file")
        return self._stream.readinto(buffer)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file")
        return self._stream.seek(offset, whence)

    def tell(self) -> int:
        return self.seek(0, io.SEEK_CUR)

    def close(self) -> None:
        if self.closed:
            return
        stream = getattr(self, "_stream", None)
        try:
            if stream is not None:
                stream.close()
        finally:
            super().close()
