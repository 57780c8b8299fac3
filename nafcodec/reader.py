from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import List, Optional

from .constants import BLOCK_LAYOUT
from .data import Flag, Header, Size
from .errors import FormatError, NafError, TruncatedError
from .header import read_exact, read_header, read_title, read_varint
from .source import StreamSource


logger = logging.getLogger(__name__)


@dataclass
class BlockInfo:
    name: str
    flag: Flag
    original_size: int
    compressed_size: int
    offset: int  # start of the compressed payload

    def size(self) -> Size:
        return Size(self.name, self.original_size, self.compressed_size)


class ArchiveReader:
    """Reads the header, title and block layout of a NAF archive.

    ``source`` may be a path, a host file-like object, or an already built
    :class:`StreamSource`. Sources built here are closed with the reader;
    a ``StreamSource`` passed in is borrowed and left open.
    """

    def __init__(self, source):
        self.source = source
        self.f: Optional[StreamSource] = None
        self._owns_stream = False
        self.header: Optional[Header] = None
        self.title: Optional[str] = None
        self.blocks: List[BlockInfo] = []

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self):
        if self.f is not None:
            return
        if isinstance(self.source, StreamSource):
            self.f = self.source
            self._owns_stream = False
        else:
            self.f = StreamSource.open(self.source)
            self._owns_stream = True
        try:
            self.f.seek(0)
            self.header = read_header(self.f)
            flags = self.header.flags
            self.title = read_title(self.f) if flags.test(Flag.TITLE) else None
            self._load_blocks(self.f.tell())
        except (NafError, OSError, ValueError) as exc:
            self.close()
            raise exc

    def close(self):
        if self.f is not None:
            if self._owns_stream:
                self.f.close()
            self.f = None

    def sizes(self) -> List[Size]:
        self._check_open()
        return [block.size() for block in self.blocks]

    def block(self, name: str) -> BlockInfo:
        self._check_open()
        for info in self.blocks:
            if info.name == name:
                return info
        raise KeyError(name)

    def read_block(self, name: str) -> bytes:
        """Return the compressed payload of block ``name`` as stored."""
        info = self.block(name)
        self.f.seek(info.offset)
        return read_exact(self.f, info.compressed_size)

    # internals
    def _check_open(self):
        if self.f is None:
            raise RuntimeError("Archive not open")

    def _load_blocks(self, start: int):
        flags = self.header.flags
        self.blocks = []
        end = self.f.seek(0, io.SEEK_END)
        self.f.seek(start)
        for name, bit in BLOCK_LAYOUT:
            flag = Flag(bit)
            if not flags.test(flag):
                continue
            original = read_varint(self.f)
            compressed = read_varint(self.f)
            offset = self.f.tell()
            if offset + compressed > end:
                raise TruncatedError(
                    f"{name} block needs {compressed} bytes at offset {offset}, archive ends at {end}"
                )
            pos = self.f.seek(compressed, io.SEEK_CUR)
            if pos != offset + compressed:
                raise FormatError(f"Seek past {name} block landed at {pos}, expected {offset + compressed}")
            logger.debug("found %s block at %d: %d -> %d bytes", name, offset, original, compressed)
            self.blocks.append(BlockInfo(name, flag, original, compressed, offset))
