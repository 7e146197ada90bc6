from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any, BinaryIO

from .errors import JsonSyntaxError, TransportError
from .framing import RecordWriter
from .geo import to_value


class GeoJsonSeqWriter:
    """Write GeoJSON objects to a binary stream, one RS-framed record each."""

    def __init__(self, stream: BinaryIO, *, ensure_ascii: bool = False):
        self._records = RecordWriter(stream)
        self._ensure_ascii = ensure_ascii

    def write_object(self, obj: Any) -> None:
        """Write `obj` as one record.

        The object is not checked against the GeoJSON schema: a mapping that
        is not GeoJSON is written as is and only a reader will reject it.
        """

        value = to_value(obj)

        # Serialize completely before touching the stream.
        try:
            payload = json.dumps(value, ensure_ascii=self._ensure_ascii, allow_nan=False)
        except (TypeError, ValueError, RecursionError) as e:
            raise JsonSyntaxError(f"cannot encode {type(obj).__name__} as JSON: {e}") from e

        data = payload.encode("utf-8")
        try:
            self._records.write_record(data)
        except (OSError, ValueError) as e:
            # ValueError: the stream is closed.
            raise TransportError(f"failed to write record: {e}", raw=data) from e

    def write_objects(self, objs: Iterable[Any]) -> int:
        n = 0
        for obj in objs:
            self.write_object(obj)
            n += 1
        return n

    def __enter__(self) -> GeoJsonSeqWriter:
        return self

    def __exit__(self, *exc_info) -> None:
        self._records.get_ref().close()

    def get_ref(self) -> BinaryIO:
        return self._records.get_ref()

    def into_inner(self) -> BinaryIO:
        return self._records.into_inner()
