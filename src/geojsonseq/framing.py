from __future__ import annotations

from typing import BinaryIO

RS = b"\x1e"
LF = b"\n"

# RFC 7464 whitespace; trailing LF is the optional record terminator.
_WHITESPACE = b" \t\r\n"


class RecordReader:
    """Split a binary stream into RS-delimited records, one per call.

    Nothing past the separator that ends the current record is consumed.
    Streams with `peek` (e.g. `open(path, "rb")`) are scanned a buffer at a
    time; others are read a byte at a time.
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._peekable = callable(getattr(stream, "peek", None))
        self._eof = False

    def _chunk(self) -> bytes:
        if self._peekable:
            return self._stream.peek(1)
        return self._stream.read(1)

    def _consume(self, n: int) -> None:
        # Byte-at-a-time reads have already consumed their chunk.
        if self._peekable:
            self._stream.read(n)

    def next_record(self) -> bytes | None:
        """Return the next record, b"" for an empty one, None at end of input."""

        if self._eof:
            return None

        buf = bytearray()
        seen_any = False
        while True:
            chunk = self._chunk()
            if not chunk:
                self._eof = True
                if not seen_any:
                    return None
                break
            seen_any = True

            start = 0
            if not buf:
                # Leading separators of this record.
                start = len(chunk) - len(chunk.lstrip(RS))
            end = chunk.find(RS, start)
            if end == -1:
                buf += chunk[start:]
                self._consume(len(chunk))
                continue
            buf += chunk[start:end]
            self._consume(end + 1)
            if buf:
                break

        return bytes(buf).rstrip(_WHITESPACE)

    def get_ref(self) -> BinaryIO:
        return self._stream

    def into_inner(self) -> BinaryIO:
        return self._stream


class RecordWriter:
    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def write_record(self, payload: bytes) -> None:
        # One write per record: a failing sink never sees a lone separator.
        self._stream.write(RS + payload + LF)
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()

    def get_ref(self) -> BinaryIO:
        return self._stream

    def into_inner(self) -> BinaryIO:
        return self._stream
