from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import geojson
from geojson.mapping import to_mapping

# Geometry class and how many array levels wrap its positions.
GEOMETRY_TYPES = {
    "Point": (geojson.Point, 0),
    "MultiPoint": (geojson.MultiPoint, 1),
    "LineString": (geojson.LineString, 1),
    "MultiLineString": (geojson.MultiLineString, 2),
    "Polygon": (geojson.Polygon, 2),
    "MultiPolygon": (geojson.MultiPolygon, 3),
}

GEOJSON_TYPES = frozenset({*GEOMETRY_TYPES, "GeometryCollection", "Feature", "FeatureCollection"})

# None keeps coordinates exactly as read.
DEFAULT_PRECISION: int | None = None


class InvalidGeoJson(ValueError):
    pass


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _foreign_members(obj: dict[str, Any], known: tuple[str, ...]) -> dict[str, Any]:
    return {k: v for k, v in obj.items() if k not in known and k != "type"}


def _check_bbox(obj: dict[str, Any]) -> None:
    bbox = obj.get("bbox")
    if bbox is None:
        return
    if not isinstance(bbox, list) or len(bbox) < 4 or len(bbox) % 2:
        raise InvalidGeoJson("bbox must be an array of 2*n numbers")
    if not all(_is_number(v) for v in bbox):
        raise InvalidGeoJson("bbox must contain only numbers")


def _position(pos: Any, precision: int | None) -> list[int | float]:
    # Two or more numbers; extra values beyond altitude are allowed.
    if not isinstance(pos, list) or len(pos) < 2 or not all(_is_number(v) for v in pos):
        raise InvalidGeoJson(f"a position must be an array of two or more numbers, got {pos!r}")
    if precision is None:
        return pos
    return [round(v, precision) for v in pos]


def _coordinates(coords: Any, depth: int, precision: int | None) -> Any:
    if depth == 0:
        return _position(coords, precision)
    if not isinstance(coords, list):
        raise InvalidGeoJson(f"expected an array of coordinates, got {coords!r}")
    return [_coordinates(c, depth - 1, precision) for c in coords]


def _check_line(line: list[Any]) -> None:
    if len(line) < 2:
        raise InvalidGeoJson("a line must have two or more positions")


def _check_polygon(rings: list[Any]) -> None:
    for ring in rings:
        if len(ring) < 4:
            raise InvalidGeoJson("a linear ring must have four or more positions")
        if ring[0] != ring[-1]:
            raise InvalidGeoJson("a linear ring must end where it started")


def _geometry(obj: Any, *, precision: int | None) -> geojson.GeoJSON:
    if not isinstance(obj, dict):
        raise InvalidGeoJson(f"geometry must be an object, got {type(obj).__name__}")

    kind = obj.get("type")
    _check_bbox(obj)

    if kind == "GeometryCollection":
        geometries = obj.get("geometries")
        if not isinstance(geometries, list):
            raise InvalidGeoJson("GeometryCollection requires a 'geometries' array")
        out = geojson.GeometryCollection([_geometry(g, precision=precision) for g in geometries])
        out.update(_foreign_members(obj, ("geometries",)))
        return out

    entry = GEOMETRY_TYPES.get(kind) if isinstance(kind, str) else None
    if entry is None:
        raise InvalidGeoJson(f"unknown geometry type: {kind!r}")
    cls, depth = entry

    if "coordinates" not in obj:
        raise InvalidGeoJson(f"{kind} requires a 'coordinates' array")
    coords = _coordinates(obj["coordinates"], depth, precision)

    if kind == "LineString":
        _check_line(coords)
    elif kind == "MultiLineString":
        for line in coords:
            _check_line(line)
    elif kind == "Polygon":
        _check_polygon(coords)
    elif kind == "MultiPolygon":
        for polygon in coords:
            _check_polygon(polygon)

    # The constructor rounds coordinates; set them after it runs.
    out = cls()
    out["coordinates"] = coords
    out.update(_foreign_members(obj, ("coordinates",)))
    return out


def _feature(obj: Any, *, precision: int | None) -> geojson.Feature:
    if not isinstance(obj, dict) or obj.get("type") != "Feature":
        raise InvalidGeoJson("expected a Feature object")
    if "geometry" not in obj:
        raise InvalidGeoJson("Feature requires a 'geometry' member")
    _check_bbox(obj)

    geometry = obj["geometry"]
    properties = obj.get("properties")
    if properties is not None and not isinstance(properties, dict):
        raise InvalidGeoJson("Feature 'properties' must be an object or null")
    fid = obj.get("id")
    if fid is not None and (not isinstance(fid, (str, int, float)) or isinstance(fid, bool)):
        raise InvalidGeoJson("Feature 'id' must be a string or a number")

    out = geojson.Feature(
        id=fid,
        geometry=_geometry(geometry, precision=precision) if geometry is not None else None,
        properties=properties,
    )
    out.update(_foreign_members(obj, ("id", "geometry", "properties")))
    return out


def _feature_collection(obj: dict[str, Any], *, precision: int | None) -> geojson.FeatureCollection:
    features = obj.get("features")
    if not isinstance(features, list):
        raise InvalidGeoJson("FeatureCollection requires a 'features' array")
    _check_bbox(obj)

    out = geojson.FeatureCollection([_feature(f, precision=precision) for f in features])
    out.update(_foreign_members(obj, ("features",)))
    return out


def from_value(value: Any, *, precision: int | None = DEFAULT_PRECISION) -> geojson.GeoJSON:
    """Convert a parsed JSON value into a python-geojson object.

    Raises InvalidGeoJson when the value is well-formed JSON but not a GeoJSON
    Feature, FeatureCollection or geometry.
    """

    if not isinstance(value, dict):
        raise InvalidGeoJson(f"expected a JSON object, got {type(value).__name__}")

    kind = value.get("type")
    if kind not in GEOJSON_TYPES:
        raise InvalidGeoJson(f"not a GeoJSON type: {kind!r}")

    if kind == "FeatureCollection":
        return _feature_collection(value, precision=precision)
    if kind == "Feature":
        return _feature(value, precision=precision)
    return _geometry(value, precision=precision)


def to_value(obj: Any) -> Mapping[str, Any]:
    """Return the JSON-ready mapping for a GeoJSON object.

    Accepts python-geojson objects, plain dicts and anything exposing
    `__geo_interface__` (e.g. shapely geometries).
    """

    mapping = to_mapping(obj)
    if not isinstance(mapping, Mapping):
        raise TypeError(f"{type(obj).__name__} is not a GeoJSON object")
    return mapping
