from datetime import timedelta

import pytest

from app.services.proximity_alerts import find_nearby, format_distance
from app.utils.geo import EARTH_RADIUS_KM

from conftest import NOW

USER = (15.50, 73.80)
KM_PER_DEGREE_LAT = EARTH_RADIUS_KM * 3.141592653589793 / 180


def north_of_user(km):
    return USER[0] + km / KM_PER_DEGREE_LAT


def test_keeps_reports_within_radius_nearest_first(make_report):
    reports = [
        make_report(id="ten", latitude=north_of_user(10), longitude=USER[1]),
        make_report(id="four", latitude=north_of_user(4), longitude=USER[1]),
        make_report(id="six", latitude=north_of_user(6), longitude=USER[1]),
        make_report(id="two", latitude=north_of_user(2), longitude=USER[1]),
    ]

    nearby = find_nearby(*USER, reports, radius_km=5, now=NOW)

    assert [r["id"] for r in nearby] == ["two", "four"]
    assert nearby[0]["distance_km"] == pytest.approx(2, abs=1e-6)
    assert nearby[1]["distance_km"] == pytest.approx(4, abs=1e-6)


def test_excludes_reports_outside_default_window(make_report):
    fresh = make_report(id="fresh", created_at=NOW - timedelta(hours=23))
    stale = make_report(id="stale", created_at=NOW - timedelta(hours=25))

    nearby = find_nearby(*USER, [fresh, stale], now=NOW)

    assert [r["id"] for r in nearby] == ["fresh"]


def test_custom_window(make_report):
    report = make_report(created_at=NOW - timedelta(hours=30))
    assert find_nearby(*USER, [report], within_last_hours=48, now=NOW)


def test_empty_input_returns_empty_list():
    assert find_nearby(*USER, [], now=NOW) == []


def test_skips_undated_unlocated_and_deleted_reports(make_report):
    reports = [
        make_report(id="undated", created_at=None),
        make_report(id="no-lat", latitude=None),
        make_report(id="deleted", deleted_at=NOW - timedelta(minutes=5)),
        make_report(id="ok"),
    ]
    assert [r["id"] for r in find_nearby(*USER, reports, now=NOW)] == ["ok"]


def test_accepts_iso_string_timestamps(make_report):
    report = make_report(created_at=(NOW - timedelta(hours=2)).isoformat().replace("+00:00", "Z"))
    assert len(find_nearby(*USER, [report], now=NOW)) == 1


def test_no_severity_gate_by_default(make_report):
    report = make_report(severity="low")
    assert len(find_nearby(*USER, [report], now=NOW)) == 1


def test_min_severity_is_opt_in(make_report):
    reports = [make_report(id="low", severity="low"), make_report(id="crit", severity="critical")]
    nearby = find_nearby(*USER, reports, now=NOW, min_severity="high")
    assert [r["id"] for r in nearby] == ["crit"]


def test_input_reports_are_not_mutated(make_report):
    report = make_report()
    find_nearby(*USER, [report], now=NOW)
    assert "distance_km" not in report


def test_report_on_the_radius_edge_is_kept(make_report):
    report = make_report(latitude=north_of_user(5), longitude=USER[1])
    nearby = find_nearby(*USER, [report], radius_km=5 + 1e-9, now=NOW)
    assert len(nearby) == 1


def test_format_distance():
    assert format_distance(1.234) == "1.2 km"
    assert format_distance(0.06) == "0.1 km"
    assert format_distance(4) == "4.0 km"
