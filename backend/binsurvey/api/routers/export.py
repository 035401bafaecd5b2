# backend/binsurvey/api/routers/export.py
import codecs
import tempfile
import time
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse
from pyproj.exceptions import CRSError

from binsurvey.api.deps import get_storage
from binsurvey.services.export.geojson import entries_to_feature_collection
from binsurvey.services.export.shapefile import export_entries_shapefile
from binsurvey.services.export.tabular import entries_to_csv
from binsurvey.services.storage import Storage

router = APIRouter()


def _attachment(ext: str) -> dict[str, str]:
    filename = f"waste-bin-survey-{int(time.time() * 1000)}.{ext}"
    return {"Content-Disposition": f"attachment; filename=\"{filename}\""}


@router.get("/csv")
def export_csv(storage: Storage = Depends(get_storage)):
    content = entries_to_csv(storage.get_all_entries())
    return Response(content=content, media_type="text/csv", headers=_attachment("csv"))


@router.get("/geojson")
def export_geojson(storage: Storage = Depends(get_storage)):
    collection = entries_to_feature_collection(storage.get_all_entries())
    return JSONResponse(content=collection, media_type="application/geo+json", headers=_attachment("geojson"))


@router.get("/shapefile")
def export_shapefile(target_epsg: int = 4326, encoding: str = "UTF-8", storage: Storage = Depends(get_storage)):
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise HTTPException(status_code=400, detail=f"unknown encoding: {encoding}")
    entries = storage.get_all_entries()
    # 一時ディレクトリにZIPを作成し、メモリに読み込んで返す（サーバ上に残さない）
    with tempfile.TemporaryDirectory() as tmpdir:
        out = Path(tmpdir) / "waste-bin-survey.zip"
        try:
            export_entries_shapefile(entries, out, target_epsg, encoding)
        except CRSError:
            raise HTTPException(status_code=400, detail=f"unknown EPSG code: {target_epsg}")
        data = out.read_bytes()
    return Response(content=data, media_type="application/zip", headers=_attachment("zip"))
