from __future__ import annotations

import geojson
import pytest

from geojsonseq.geo import InvalidGeoJson, from_value, to_value


def test_feature_collection_members_become_geojson_objects() -> None:
    fc = from_value(
        {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]}, "properties": None},
            ],
        }
    )

    assert isinstance(fc, geojson.FeatureCollection)
    (feature,) = fc.features
    assert isinstance(feature, geojson.Feature)
    assert isinstance(feature.geometry, geojson.Point)


def test_foreign_members_and_bbox_are_kept() -> None:
    feature = from_value(
        {
            "type": "Feature",
            "geometry": None,
            "properties": {"a": 1},
            "bbox": [0, 0, 1, 1],
            "title": "x",
        }
    )

    assert feature["title"] == "x"
    assert feature["bbox"] == [0, 0, 1, 1]
    assert feature["geometry"] is None


@pytest.mark.parametrize(
    "value",
    [
        [1, 2],
        "Point",
        {},
        {"type": "Circle", "coordinates": [0, 0]},
        {"type": "Point"},
        {"type": "Point", "coordinates": [0]},
        {"type": "Point", "coordinates": ["a", 0]},
        {"type": "Point", "coordinates": [[0, 0], [1, 1]]},
        {"type": "Point", "coordinates": [True, False]},
        {"type": "MultiPoint", "coordinates": [[0, 0], [1, True]]},
        {"type": "LineString", "coordinates": [[0, 0]]},
        {"type": "MultiPolygon", "coordinates": [[[[0, 0], [1, 0], [0, 0]]]]},
        {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 1]]]},
        {"type": "GeometryCollection"},
        {"type": "Feature", "properties": {}},
        {"type": "Feature", "geometry": None, "properties": []},
        {"type": "Feature", "geometry": None, "id": True},
        {"type": "Feature", "geometry": None, "bbox": [0, 0, 1]},
        {"type": "FeatureCollection", "features": {}},
        {"type": "FeatureCollection", "features": [{"type": "Point", "coordinates": [0, 0]}]},
    ],
)
def test_invalid_geojson_is_rejected(value) -> None:
    with pytest.raises(InvalidGeoJson):
        from_value(value)


def test_to_value_returns_mapping_for_geojson_and_dicts() -> None:
    point = geojson.Point((1, 2))

    assert to_value(point) is point
    assert to_value({"type": "Point", "coordinates": [1, 2]}) == point


def test_to_value_rejects_non_mappings() -> None:
    with pytest.raises(TypeError):
        to_value(5)


def test_coordinates_are_kept_exactly_by_default() -> None:
    point = from_value({"type": "Point", "coordinates": [0.123456789012, 51.5]})

    assert isinstance(point, geojson.Point)
    assert point["coordinates"] == [0.123456789012, 51.5]


def test_precision_rounds_when_requested() -> None:
    line = from_value({"type": "LineString", "coordinates": [[0.123456789, 1], [2, 3.987654321]]}, precision=3)

    assert line["coordinates"] == [[0.123, 1], [2, 3.988]]


@pytest.mark.parametrize(
    "value",
    [
        {"type": "Point", "coordinates": [1, 2, 3, 4]},
        {"type": "LineString", "coordinates": [[0, 0, 10, 100], [1, 1, 20, 200]]},
        {"type": "MultiPoint", "coordinates": []},
        {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]]},
    ],
)
def test_valid_geometries_are_accepted(value) -> None:
    assert from_value(value) == value
