# backend/binsurvey/services/export/geojson.py
from typing import Iterable

from shapely.geometry import Point, mapping, shape

from binsurvey.schemas.commons import iso_instant
from binsurvey.schemas.entry import BinSurveyEntry


def entry_to_feature(entry: BinSurveyEntry) -> dict:
    geom = mapping(Point(entry.longitude, entry.latitude))  # EPSG:4326 [lon, lat]
    return {
        "type": "Feature",
        "geometry": {"type": geom["type"], "coordinates": list(geom["coordinates"])},
        "properties": {
            "id": entry.id,
            "datetime": iso_instant(entry.datetime),
            "street": entry.street,
            "binTypes": list(entry.bin_types),
            "quantity": entry.quantity,
            "comments": entry.comments,
            "synced": entry.synced,
        },
    }


def entries_to_feature_collection(entries: Iterable[BinSurveyEntry]) -> dict:
    return {"type": "FeatureCollection", "features": [entry_to_feature(e) for e in entries]}


def features_to_records(collection: dict) -> list[dict]:
    """Read an exported FeatureCollection back into flat records (snake_case keys)."""
    records = []
    for feat in collection.get("features", []):
        pt = shape(feat["geometry"])
        props = feat.get("properties") or {}
        records.append({
            "id": props.get("id"),
            "datetime": props.get("datetime"),
            "street": props.get("street"),
            "latitude": pt.y,
            "longitude": pt.x,
            "bin_types": list(props.get("binTypes") or []),
            "quantity": props.get("quantity"),
            "comments": props.get("comments"),
            "synced": bool(props.get("synced")),
        })
    return records
