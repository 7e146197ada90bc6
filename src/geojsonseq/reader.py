from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

import geojson

from .errors import GeoJsonSeqError, GeoJsonValidityError, JsonSyntaxError, TransportError
from .framing import RecordReader
from .geo import DEFAULT_PRECISION, InvalidGeoJson, from_value

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> float:
    # json.loads accepts NaN and Infinity by default; they are not JSON.
    raise ValueError(f"{name} is not valid JSON")


class GeoJsonSeqReader:
    """Read GeoJSON objects from a binary stream of RS-framed records.

    Iterating yields one object per record and stops at end of input. A bad
    record raises from `next()` but does not end iteration; the following
    `next()` moves on to the next record.
    """

    def __init__(self, stream: BinaryIO, *, precision: int | None = DEFAULT_PRECISION):
        self._records = RecordReader(stream)
        self._precision = precision
        self._index = 0

    @property
    def records_read(self) -> int:
        return self._index

    def next_item(self) -> geojson.GeoJSON | None:
        """Read the next GeoJSON object, or None once the stream is exhausted."""

        while True:
            try:
                raw = self._records.next_record()
            except (OSError, ValueError) as e:
                # ValueError: the stream was closed under us.
                raise TransportError(f"failed to read record {self._index}: {e}") from e

            if raw is None:
                return None
            if not raw:
                logger.debug("skipping empty record")
                continue

            index = self._index
            self._index += 1

            try:
                value = json.loads(raw, parse_constant=_reject_constant)
            except (ValueError, RecursionError) as e:
                # JSONDecodeError, UnicodeDecodeError for non UTF-8 payloads,
                # or nesting deeper than the parser can follow.
                logger.debug("record %d is not JSON: %s", index, e)
                raise JsonSyntaxError(f"record {index}: {e}", raw=raw) from e

            try:
                return from_value(value, precision=self._precision)
            except (InvalidGeoJson, RecursionError) as e:
                logger.debug("record %d is not GeoJSON: %s", index, e)
                raise GeoJsonValidityError(f"record {index}: {e}", raw=raw) from e

    def read_item(self) -> geojson.GeoJSON | None:
        return self.next_item()

    def __iter__(self) -> GeoJsonSeqReader:
        return self

    def __next__(self) -> geojson.GeoJSON:
        item = self.next_item()
        if item is None:
            raise StopIteration
        return item

    def __enter__(self) -> GeoJsonSeqReader:
        return self

    def __exit__(self, *exc_info) -> None:
        self._records.get_ref().close()

    def get_ref(self) -> BinaryIO:
        return self._records.get_ref()

    def into_inner(self) -> BinaryIO:
        """Give the stream back; it is positioned right after the last separator read."""

        return self._records.into_inner()


@dataclass(frozen=True)
class SeqItem:
    obj: geojson.GeoJSON | None
    error: GeoJsonSeqError | None


def iter_items(
    stream: BinaryIO,
    *,
    precision: int | None = DEFAULT_PRECISION,
    stop_on_transport_error: bool = True,
) -> Iterator[SeqItem]:
    """Iterate a GeoJSON text sequence, reporting bad records instead of raising."""

    rdr = GeoJsonSeqReader(stream, precision=precision)
    while True:
        try:
            obj = rdr.next_item()
        except GeoJsonSeqError as e:
            yield SeqItem(obj=None, error=e)
            if isinstance(e, TransportError) and stop_on_transport_error:
                return
            continue
        if obj is None:
            return
        yield SeqItem(obj=obj, error=None)
