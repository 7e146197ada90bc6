from .errors import GeoJsonSeqError, GeoJsonValidityError, JsonSyntaxError, TransportError
from .reader import GeoJsonSeqReader, SeqItem, iter_items
from .writer import GeoJsonSeqWriter

__all__ = [
    "GeoJsonSeqError",
    "GeoJsonSeqReader",
    "GeoJsonSeqWriter",
    "GeoJsonValidityError",
    "JsonSyntaxError",
    "SeqItem",
    "TransportError",
    "iter_items",
]
