from __future__ import annotations

from binsurvey.services.report.streets import aggregate_by_street


def test_street_rollup_example(make_entry):
    entries = [
        make_entry(1, street="StreetA", quantity=3, bin_types=["Green"]),
        make_entry(2, street="StreetA", quantity=2, bin_types=["Blue"]),
        make_entry(3, street="StreetB", quantity=5, bin_types=["Yellow"]),
    ]

    reports = aggregate_by_street(entries)

    assert [r.street for r in reports] == ["StreetA", "StreetB"]
    a, b = reports
    assert a.total_bins == 5
    assert a.bin_counts == {"Green": 1, "Blue": 1, "Brown": 0, "Yellow": 0}
    assert a.entry_count == 2
    assert b.total_bins == 5
    assert b.bin_counts["Yellow"] == 1


def test_sorted_by_total_descending(make_entry):
    entries = [
        make_entry(1, street="Small", quantity=1),
        make_entry(2, street="Big", quantity=9),
        make_entry(3, street="Middle", quantity=4),
    ]

    assert [r.street for r in aggregate_by_street(entries)] == ["Big", "Middle", "Small"]


def test_histogram_counts_entries_not_tag_occurrences(make_entry):
    entries = [
        make_entry(1, street="Kanari", quantity=3, bin_types=["Green", "Green", "Blue"]),
        make_entry(2, street="Kanari", quantity=1, bin_types=["Green"]),
    ]

    (report,) = aggregate_by_street(entries)

    assert report.bin_counts == {"Green": 2, "Blue": 1, "Brown": 0, "Yellow": 0}
    assert report.total_bins == 4


def test_last_survey_is_most_recent(make_entry):
    entries = [
        make_entry(1, street="Kanari", minutes=0),
        make_entry(2, street="Kanari", minutes=60 * 24 * 3),
        make_entry(3, street="Kanari", minutes=60),
    ]

    (report,) = aggregate_by_street(entries)

    assert report.last_survey_at == entries[1].datetime
    assert report.last_survey == "2024-05-04"


def test_empty_log():
    assert aggregate_by_street([]) == []
