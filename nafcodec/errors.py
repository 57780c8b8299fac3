import io


class NafError(Exception):
    """Base class for nafcodec-specific errors."""


# Archive contents
class FormatError(NafError, ValueError):
    pass


class TruncatedError(NafError, EOFError):
    pass


# Byte-source layer
class StreamError(NafError, OSError):
    """Failure reported by the byte-source layer."""


class StreamTypeError(StreamError, TypeError):
    """A host object returned a value of the wrong type from read or seek."""

    def __init__(self, type_name: str, expected: str = "bytes"):
        self.type_name = type_name
        self.expected = expected
        super().__init__(f"expected {expected}, found {type_name}")


class OpaqueIoError(StreamError):
    """A host object failed without an OS error code to reinterpret."""


class UnsupportedSeekError(StreamError, io.UnsupportedOperation):
    """A host object could not seek."""
