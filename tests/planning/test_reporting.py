from datetime import date

from mkorplan.fleet import Job
from mkorplan.planning import (
    catalog_dataframe,
    fleet_dataframe,
    jobs_dataframe,
    segments_dataframe,
    timeline_grid,
    totals_dataframe,
)


def test_catalog_dataframe_lists_each_diameter(catalog):
    frame = catalog_dataframe(catalog)
    assert list(frame["diameter"]) == catalog.diameters()
    row = frame.set_index("diameter").loc[200]
    assert row["operational_cycle"] == 13.0
    assert row["label"] == "DN-200"


def test_fleet_and_jobs_tables(make_unit):
    job = Job(start=date(2024, 1, 1), durations=(2, 1, 5, 1, 2, 3))
    units = [make_unit("a", "DN-200", jobs=(job,)), make_unit("b", "DN-200 (2)")]
    fleet = fleet_dataframe(units)
    assert list(fleet["job_starts"]) == ["2024-01-01", ""]
    assert list(fleet["total_days"]) == [14, 14]
    jobs = jobs_dataframe(units)
    assert len(jobs) == 1
    assert jobs.iloc[0]["end"] == date(2024, 1, 14)


def test_segments_and_grid(make_unit):
    units = [make_unit("a", "A", durations=(1, 0, 2)), make_unit("b", "B", start=date(2024, 1, 3), durations=(1,))]
    segments = segments_dataframe(units)
    assert list(segments["stage"]) == ["transit", "working", "transit"]
    grid = timeline_grid(units, "2024-01-01", "2024-01-04")
    assert list(grid.loc["A"]) == ["transit", "working", "working", ""]
    assert list(grid.loc["B"]) == ["", "", "transit", ""]


def test_totals_and_empty_frames(catalog):
    totals = totals_dataframe([], catalog)
    assert set(totals["units"]) == {0}
    assert fleet_dataframe([]).empty
    assert segments_dataframe([]).empty
