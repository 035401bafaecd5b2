from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException

from binsurvey.api.deps import get_storage
from binsurvey.config import MUNICIPALITY
from binsurvey.services.storage import Storage
from binsurvey.services.streets.gazetteer import MUNICIPALITIES, get_municipality
from binsurvey.services.streets.proximity import (
    Location,
    all_streets,
    nearby_with_distance,
    search_streets,
)

router = APIRouter()


@router.get("")
@router.get("/", include_in_schema=False)
def street_options(
    mode: Literal["nearby", "search", "all"] = "nearby",
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    q: str = "",
    municipality: str = MUNICIPALITY,
):
    m = get_municipality(municipality)
    if not m:
        raise HTTPException(status_code=404, detail="municipality not found")

    # GPS が無い場合は nearby を無効化するだけ（エラーにはしない）
    location = Location(latitude, longitude) if latitude is not None and longitude is not None else None
    if mode == "nearby":
        center = Location(m.latitude, m.longitude)
        streets = [
            {"street": s, "distanceKm": round(d, 3)}
            for s, d in nearby_with_distance(location, m.streets, center)
        ]
    elif mode == "search":
        streets = [{"street": s} for s in search_streets(m.streets, q)]
    else:
        streets = [{"street": s} for s in all_streets(m.streets)]

    return {
        "municipality": m.name,
        "mode": mode,
        "nearbyAvailable": location is not None,
        "streets": streets,
    }


@router.get("/municipalities")
def list_municipalities():
    return [
        {"name": m.name, "latitude": m.latitude, "longitude": m.longitude, "streetCount": len(m.streets)}
        for m in MUNICIPALITIES.values()
    ]


@router.delete("/{street:path}/reset")
def reset_street(street: str, storage: Storage = Depends(get_storage)):
    deleted = storage.delete_entries_by_street(street)
    return {"message": f"Deleted {deleted} entries for {street}", "deletedCount": deleted}
