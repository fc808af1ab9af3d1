"""
I/O endpoints for a session.

The interpreter only needs two things: read one byte (blocking until one is
available, or None at end of stream) and write bytes. Anything with a
``read_byte()`` method is a source and anything with a ``write(bytes)``
method is a sink, so ``io.BytesIO`` and ``sys.stdout.buffer`` work as sinks
directly.
"""

from typing import Optional, Protocol, Union


class ByteSource(Protocol):
    def read_byte(self) -> Optional[int]:
        ...


class ByteSink(Protocol):
    def write(self, data: bytes):
        ...


class EmptySource:
    """Always at end of stream."""

    def read_byte(self) -> Optional[int]:
        return None


class BufferSource:
    """Serve bytes from memory. A str is mapped one byte per code point."""

    def __init__(self, data: Union[bytes, bytearray, str] = b''):
        if isinstance(data, str):
            data = data.encode('latin-1')
        self.data = bytes(data)
        self.position = 0

    def read_byte(self) -> Optional[int]:
        if self.position >= len(self.data):
            return None
        value = self.data[self.position]
        self.position += 1
        return value

    def feed(self, data: Union[bytes, str]) -> None:
        """Append more input, e.g. after an EndOfInput."""
        if isinstance(data, str):
            data = data.encode('latin-1')
        self.data = self.data[self.position:] + bytes(data)
        self.position = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.position


class StreamSource:
    """Blocking reads from a binary stream such as sys.stdin.buffer."""

    def __init__(self, stream):
        self.stream = stream

    def read_byte(self) -> Optional[int]:
        chunk = self.stream.read(1)
        if not chunk:
            return None
        if isinstance(chunk, str):
            # text streams such as sys.stdin or io.StringIO
            chunk = chunk.encode('latin-1')
        return chunk[0]


class NullSink:
    def write(self, data: bytes) -> int:
        return len(data)


class BufferSink:
    """Collect output in memory."""

    def __init__(self):
        self.buffer = bytearray()

    def write(self, data: bytes) -> int:
        self.buffer.extend(data)
        return len(data)

    def getvalue(self) -> bytes:
        return bytes(self.buffer)

    def text(self) -> str:
        return self.buffer.decode('latin-1')

    def clear(self) -> None:
        self.buffer.clear()


class StreamSink:
    """Write to a binary stream, flushing after each write by default."""

    def __init__(self, stream, flush: bool = True):
        self.stream = stream
        self.flush = flush

    def write(self, data: bytes) -> int:
        n = self.stream.write(data)
        if self.flush:
            self.stream.flush()
        return n


def as_source(obj) -> ByteSource:
    if obj is None:
        return EmptySource()
    if isinstance(obj, (bytes, bytearray, str)):
        return BufferSource(obj)
    if hasattr(obj, 'read_byte'):
        return obj
    if hasattr(obj, 'read'):
        return StreamSource(obj)
    raise TypeError(f"Cannot use {type(obj).__name__} as an input source")


def as_sink(obj) -> ByteSink:
    if obj is None:
        return NullSink()
    if hasattr(obj, 'write'):
        return obj
    raise TypeError(f"Cannot use {type(obj).__name__} as an output sink")
