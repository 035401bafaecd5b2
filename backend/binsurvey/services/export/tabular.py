# backend/binsurvey/services/export/tabular.py
import csv
import io
from typing import Iterable

from binsurvey.schemas.commons import iso_instant
from binsurvey.schemas.entry import BinSurveyEntry
from binsurvey.schemas.report import StreetReport
from binsurvey.services.streets.gazetteer import BIN_TYPES

ENTRY_HEADERS = ["ID", "Date/Time", "Street", "Latitude", "Longitude", "Bin Types", "Quantity", "Comments", "Synced"]
REPORT_HEADERS = ["Street", "Total Bins", "Green", "Blue", "Brown", "Yellow", "Surveys", "Last Survey"]
BIN_TYPE_SEPARATOR = ", "


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _bool(value: bool) -> str:
    return "true" if value else "false"


def entries_to_csv(entries: Iterable[BinSurveyEntry]) -> str:
    lines = [",".join(ENTRY_HEADERS)]
    for e in entries:
        lines.append(",".join([
            str(e.id),
            iso_instant(e.datetime),
            _quote(e.street),
            repr(e.latitude),
            repr(e.longitude),
            _quote(BIN_TYPE_SEPARATOR.join(e.bin_types)),
            str(e.quantity),
            _quote(e.comments or ""),
            _bool(e.synced),
        ]))
    return "\n".join(lines)


def read_entries_csv(text: str) -> list[dict]:
    """Parse an ``entries_to_csv`` export back into field dicts (snake_case keys)."""
    rows = []
    for row in csv.DictReader(io.StringIO(text)):
        bin_types = row["Bin Types"]
        rows.append({
            "id": int(row["ID"]),
            "datetime": row["Date/Time"],
            "street": row["Street"],
            "latitude": float(row["Latitude"]),
            "longitude": float(row["Longitude"]),
            "bin_types": bin_types.split(BIN_TYPE_SEPARATOR) if bin_types else [],
            "quantity": int(row["Quantity"]),
            "comments": row["Comments"] or None,
            "synced": row["Synced"] == "true",
        })
    return rows


def street_reports_to_csv(reports: Iterable[StreetReport]) -> str:
    lines = [",".join(REPORT_HEADERS)]
    for r in reports:
        lines.append(",".join(
            [_quote(r.street), str(r.total_bins)]
            + [str(r.bin_counts.get(t, 0)) for t in BIN_TYPES]
            + [str(r.entry_count), _quote(r.last_survey)]
        ))
    return "\n".join(lines)
