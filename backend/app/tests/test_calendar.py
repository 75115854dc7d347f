"""
Tests for the calendar month grid.
"""
import pytest
from datetime import date, timedelta
from types import SimpleNamespace
from app.core.exceptions import ValidationError
from app.services.calendar_service import build_month_grid, activities_for_date


def _stop(stop_id, start, end, city="Paris", activities=None):
    return SimpleNamespace(
        id=stop_id,
        seq=stop_id,
        city=SimpleNamespace(name=city),
        start_date=start,
        end_date=end,
        activities=activities or []
    )


def test_month_grid_starts_on_sunday():
    # February 2026 starts on a Sunday and ends on a Saturday
    weeks = build_month_grid(2026, 2, [], today=date(2026, 2, 14))
    assert len(weeks) == 4
    assert weeks[0][0]["date"] == date(2026, 2, 1)
    assert weeks[-1][-1]["date"] == date(2026, 2, 28)
    assert all(day["is_current_month"] for week in weeks for day in week)


def test_month_grid_pads_with_neighbouring_months():
    weeks = build_month_grid(2026, 3, [], today=date(2026, 2, 14))
    assert len(weeks) == 5
    last = weeks[-1][-1]
    assert last["date"] == date(2026, 4, 4)
    assert last["is_current_month"] is False
    assert all(len(week) == 7 for week in weeks)
    assert all(week[0]["date"].weekday() == 6 for week in weeks)


def test_month_grid_flags_today_selected_and_stops():
    stops = [
        _stop(1, date(2026, 2, 10), date(2026, 2, 12), "Paris"),
        _stop(2, date(2026, 2, 12), date(2026, 2, 15), "Rome"),
        _stop(3, None, None, "Nowhere"),
    ]
    weeks = build_month_grid(2026, 2, stops, selected=date(2026, 2, 11), today=date(2026, 2, 14))
    days = {day["date"]: day for week in weeks for day in week}

    assert days[date(2026, 2, 14)]["is_today"] is True
    assert days[date(2026, 2, 11)]["is_selected"] is True
    assert [s["city_name"] for s in days[date(2026, 2, 12)]["stops"]] == ["Paris", "Rome"]
    assert days[date(2026, 2, 16)]["has_trips"] is False
    assert sum(1 for day in days.values() if day["has_trips"]) == 6


def test_invalid_month():
    with pytest.raises(ValidationError):
        build_month_grid(2026, 13, [])


def test_activities_for_date_collects_covering_stops():
    stops = [
        _stop(1, date(2026, 2, 10), date(2026, 2, 12), activities=["louvre", "eiffel"]),
        _stop(2, date(2026, 2, 12), date(2026, 2, 15), activities=["colosseum"]),
    ]
    assert activities_for_date(stops, date(2026, 2, 12)) == ["louvre", "eiffel", "colosseum"]
    assert activities_for_date(stops, date(2026, 2, 14)) == ["colosseum"]
    assert activities_for_date(stops, date(2026, 3, 1)) == []


def test_calendar_endpoints(client, trip, auth_headers, cities, activities, future):
    stop = client.post(
        f"/api/trips/{trip['id']}/stops",
        json={"city_id": cities["Paris"], "start_date": future.isoformat(), "end_date": (future + timedelta(days=2)).isoformat()},
        headers=auth_headers
    ).json()
    client.post(
        f"/api/trips/{trip['id']}/stops/{stop['id']}/activities",
        json={"activity_id": activities["Louvre Museum"], "scheduled_date": future.isoformat()},
        headers=auth_headers
    )

    response = client.get(f"/api/calendar/{trip['id']}/month", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert (data["year"], data["month"]) == (future.year, future.month)
    covered = [day for week in data["weeks"] for day in week if day["has_trips"]]
    assert covered[0]["date"] == future.isoformat()
    assert covered[0]["stops"][0]["city_name"] == "Paris"

    response = client.get(f"/api/calendar/{trip['id']}/days/{future.isoformat()}", headers=auth_headers)
    assert response.status_code == 200
    assert [a["name"] for a in response.json()["activities"]] == ["Louvre Museum"]
