from __future__ import annotations


class GeoJsonSeqError(Exception):
    """Base class for everything the reader and writer raise.

    `kind` names the layer that failed: "io" (the stream), "json" (the bytes
    are not JSON) or "geojson" (the JSON is not a GeoJSON object).
    """

    kind: str = "unknown"

    def __init__(self, message: str, *, raw: bytes | None = None):
        super().__init__(message)
        self.raw = raw


class TransportError(GeoJsonSeqError):
    kind = "io"


class JsonSyntaxError(GeoJsonSeqError):
    kind = "json"


class GeoJsonValidityError(GeoJsonSeqError):
    kind = "geojson"


ERROR_KINDS = (TransportError.kind, JsonSyntaxError.kind, GeoJsonValidityError.kind)
