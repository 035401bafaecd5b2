# backend/binsurvey/services/report/streets.py
from typing import Iterable

from binsurvey.schemas.commons import as_utc
from binsurvey.schemas.entry import BinSurveyEntry
from binsurvey.schemas.report import StreetReport
from binsurvey.services.streets.gazetteer import BIN_TYPES


def aggregate_by_street(entries: Iterable[BinSurveyEntry]) -> list[StreetReport]:
    """
    Per-street rollup of the entry log.

    ``bin_counts`` counts entries tagged with each type (an entry with
    binTypes ["Green", "Green"] adds 1 to Green). Sorted by total bins
    descending; ties keep the order in which streets first appear.
    """
    groups: dict[str, list[BinSurveyEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.street, []).append(entry)

    reports = []
    for street, street_entries in groups.items():
        counts = {t: 0 for t in BIN_TYPES}
        for entry in street_entries:
            for bin_type in set(entry.bin_types):
                if bin_type in counts:
                    counts[bin_type] += 1
        last = max(as_utc(e.datetime) for e in street_entries)
        reports.append(
            StreetReport(
                street=street,
                total_bins=sum(e.quantity for e in street_entries),
                bin_counts=counts,
                entry_count=len(street_entries),
                last_survey_at=last,
                last_survey=last.strftime("%Y-%m-%d"),
            )
        )
    reports.sort(key=lambda r: r.total_bins, reverse=True)
    return reports
