# backend/binsurvey/api/routers/report.py
import time

from fastapi import APIRouter, Depends, Response

from binsurvey.api.deps import get_storage
from binsurvey.schemas.report import StreetReport
from binsurvey.services.export.tabular import street_reports_to_csv
from binsurvey.services.report.streets import aggregate_by_street
from binsurvey.services.storage import Storage

router = APIRouter()


@router.get("/streets")
def street_report(storage: Storage = Depends(get_storage)) -> list[StreetReport]:
    return aggregate_by_street(storage.get_all_entries())


@router.get("/streets/csv")
def street_report_csv(storage: Storage = Depends(get_storage)):
    content = street_reports_to_csv(aggregate_by_street(storage.get_all_entries()))
    filename = f"street-report-{int(time.time() * 1000)}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=\"{filename}\""},
    )
