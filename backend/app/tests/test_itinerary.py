"""
Tests for trip stops, scheduled activities, catalog search and cloning.
"""
from datetime import date, timedelta
from decimal import Decimal
from app.models.activity import Activity, TripActivity
from app.models.cost_item import CostItem, CostCategory


def _add_stop(client, headers, trip_id, city_id, start, days=2):
    return client.post(
        f"/api/trips/{trip_id}/stops",
        json={
            "city_id": city_id,
            "start_date": start.isoformat(),
            "end_date": (start + timedelta(days=days)).isoformat(),
            "notes": "Book museum tickets"
        },
        headers=headers
    )


def test_add_stops_assigns_sequence(client, trip, auth_headers, cities, future):
    first = _add_stop(client, auth_headers, trip["id"], cities["Paris"], future)
    assert first.status_code == 201
    assert first.json()["seq"] == 1
    assert first.json()["city"]["name"] == "Paris"
    assert Decimal(first.json()["accommodation_estimate"]) == Decimal("180")

    second = _add_stop(client, auth_headers, trip["id"], cities["Rome"], future + timedelta(days=3))
    assert second.json()["seq"] == 2


def test_duplicate_city_conflict(client, trip, auth_headers, cities, future):
    _add_stop(client, auth_headers, trip["id"], cities["Paris"], future)
    response = _add_stop(client, auth_headers, trip["id"], cities["Paris"], future + timedelta(days=4))
    assert response.status_code == 409
    assert response.json()["message"] == "This city is already added to the trip"


def test_add_stop_unknown_city(client, trip, auth_headers, reference_data, future):
    response = _add_stop(client, auth_headers, trip["id"], 9999, future)
    assert response.status_code == 404


def test_add_stop_requires_edit_rights(client, trip, other_headers, cities, future):
    response = _add_stop(client, other_headers, trip["id"], cities["Paris"], future)
    assert response.status_code == 403


def test_itinerary_orders_stops_and_activities(client, trip, auth_headers, cities, activities, future):
    paris = _add_stop(client, auth_headers, trip["id"], cities["Paris"], future).json()
    rome = _add_stop(client, auth_headers, trip["id"], cities["Rome"], future + timedelta(days=3)).json()

    client.post(
        f"/api/trips/{trip['id']}/stops/{paris['id']}/activities",
        json={"activity_id": activities["Louvre Museum"], "scheduled_date": (future + timedelta(days=1)).isoformat()},
        headers=auth_headers
    )
    client.post(
        f"/api/trips/{trip['id']}/stops/{paris['id']}/activities",
        json={
            "activity_id": activities["Eiffel Tower Summit"],
            "scheduled_date": future.isoformat(),
            "start_time": "18:00:00"
        },
        headers=auth_headers
    )

    response = client.get(f"/api/trips/{trip['id']}/itinerary", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["trip"]["id"] == trip["id"]
    assert [stop["id"] for stop in data["stops"]] == [paris["id"], rome["id"]]
    assert [a["name"] for a in data["stops"][0]["activities"]] == ["Eiffel Tower Summit", "Louvre Museum"]


def test_update_stop_revalidates_dates(client, trip, auth_headers, cities, future):
    stop = _add_stop(client, auth_headers, trip["id"], cities["Paris"], future).json()

    response = client.put(
        f"/api/trips/{trip['id']}/stops/{stop['id']}",
        json={"end_date": (future - timedelta(days=1)).isoformat()},
        headers=auth_headers
    )
    assert response.status_code == 400

    response = client.put(
        f"/api/trips/{trip['id']}/stops/{stop['id']}",
        json={"notes": "Stay near the Marais", "local_transport_cost": "40"},
        headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["notes"] == "Stay near the Marais"


def test_reorder_stops(client, trip, auth_headers, cities, future):
    ids = [
        _add_stop(client, auth_headers, trip["id"], cities[name], future + timedelta(days=i * 3)).json()["id"]
        for i, name in enumerate(["Paris", "Rome", "London"])
    ]

    response = client.post(
        f"/api/trips/{trip['id']}/stops/reorder",
        json={"stop_ids": [ids[2], ids[0], ids[1]]},
        headers=auth_headers
    )
    assert response.status_code == 200
    assert [(s["id"], s["seq"]) for s in response.json()] == [(ids[2], 1), (ids[0], 2), (ids[1], 3)]


def test_reorder_rejects_foreign_stop(client, trip, auth_headers, cities, future):
    stop_id = _add_stop(client, auth_headers, trip["id"], cities["Paris"], future).json()["id"]
    response = client.post(
        f"/api/trips/{trip['id']}/stops/reorder",
        json={"stop_ids": [stop_id, 12345]},
        headers=auth_headers
    )
    assert response.status_code == 400


def test_delete_stop_removes_activities(client, db, trip, auth_headers, cities, activities, future):
    stop = _add_stop(client, auth_headers, trip["id"], cities["Paris"], future).json()
    client.post(
        f"/api/trips/{trip['id']}/stops/{stop['id']}/activities",
        json={"activity_id": activities["Louvre Museum"], "scheduled_date": future.isoformat()},
        headers=auth_headers
    )
    db.add(CostItem(trip_id=trip["id"], trip_stop_id=stop["id"], category=CostCategory.MEALS, amount=Decimal("50")))
    db.commit()

    response = client.delete(f"/api/trips/{trip['id']}/stops/{stop['id']}", headers=auth_headers)
    assert response.status_code == 204

    assert db.query(TripActivity).count() == 0
    # Cost items stay on the trip
    assert db.query(CostItem).one().trip_stop_id is None


def test_add_activity_copies_catalog_details(client, trip, auth_headers, cities, activities, future):
    stop = _add_stop(client, auth_headers, trip["id"], cities["Rome"], future).json()

    response = client.post(
        f"/api/trips/{trip['id']}/stops/{stop['id']}/activities",
        json={
            "activity_id": activities["Colosseum Tour"],
            "scheduled_date": future.isoformat(),
            "start_time": "09:30:00",
            "notes": "Skip the line"
        },
        headers=auth_headers
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Colosseum Tour"
    assert Decimal(data["cost"]) == Decimal("25")
    assert data["duration_minutes"] == 150
    assert data["activity"]["category"] == "culture"


def test_duplicate_activity_slot_conflict(client, trip, auth_headers, cities, activities, future):
    stop = _add_stop(client, auth_headers, trip["id"], cities["Rome"], future).json()
    payload = {"activity_id": activities["Colosseum Tour"], "scheduled_date": future.isoformat(), "start_time": "09:30:00"}
    url = f"/api/trips/{trip['id']}/stops/{stop['id']}/activities"

    assert client.post(url, json=payload, headers=auth_headers).status_code == 201
    response = client.post(url, json=payload, headers=auth_headers)
    assert response.status_code == 409
    assert response.json()["message"] == "This activity is already scheduled for this time"


def test_activity_validation(client, db, trip, auth_headers, cities, activities, future):
    stop = _add_stop(client, auth_headers, trip["id"], cities["Rome"], future).json()
    url = f"/api/trips/{trip['id']}/stops/{stop['id']}/activities"

    response = client.post(
        url,
        json={"activity_id": activities["Colosseum Tour"], "scheduled_date": (date.today() - timedelta(days=1)).isoformat()},
        headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Scheduled date cannot be in the past"

    db.query(Activity).filter(Activity.id == activities["Vatican Museums"]).update({Activity.deleted: True})
    db.commit()
    response = client.post(
        url,
        json={"activity_id": activities["Vatican Museums"], "scheduled_date": future.isoformat()},
        headers=auth_headers
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Selected activity not found or has been deleted"


def test_update_activity_switches_catalog_entry(client, trip, auth_headers, cities, activities, future):
    stop = _add_stop(client, auth_headers, trip["id"], cities["Rome"], future).json()
    created = client.post(
        f"/api/trips/{trip['id']}/stops/{stop['id']}/activities",
        json={"activity_id": activities["Colosseum Tour"], "scheduled_date": future.isoformat()},
        headers=auth_headers
    ).json()

    response = client.put(
        f"/api/trips/{trip['id']}/activities/{created['id']}",
        json={"activity_id": activities["Vatican Museums"], "notes": "Morning slot"},
        headers=auth_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Vatican Museums"
    assert Decimal(data["cost"]) == Decimal("30")
    assert data["notes"] == "Morning slot"

    response = client.delete(f"/api/trips/{trip['id']}/activities/{created['id']}", headers=auth_headers)
    assert response.status_code == 204


def test_update_activity_rejects_blank_name(client, db, trip, auth_headers, cities, activities, future):
    stop = _add_stop(client, auth_headers, trip["id"], cities["Rome"], future).json()
    created = client.post(
        f"/api/trips/{trip['id']}/stops/{stop['id']}/activities",
        json={"activity_id": activities["Colosseum Tour"], "scheduled_date": future.isoformat()},
        headers=auth_headers
    ).json()
    url = f"/api/trips/{trip['id']}/activities/{created['id']}"

    response = client.put(url, json={"name": None}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Activity name is required"

    # null activity_id keeps the catalog link
    response = client.put(url, json={"activity_id": None, "name": "Colosseum at dusk"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Colosseum at dusk"
    assert db.query(TripActivity).filter(TripActivity.id == created["id"]).one().activity_id == activities["Colosseum Tour"]


def test_update_activity_into_taken_slot_conflicts(client, trip, auth_headers, cities, activities, future):
    stop = _add_stop(client, auth_headers, trip["id"], cities["Rome"], future).json()
    url = f"/api/trips/{trip['id']}/stops/{stop['id']}/activities"
    client.post(
        url,
        json={"activity_id": activities["Colosseum Tour"], "scheduled_date": future.isoformat(), "start_time": "09:00:00"},
        headers=auth_headers
    )
    later = client.post(
        url,
        json={"activity_id": activities["Colosseum Tour"], "scheduled_date": future.isoformat(), "start_time": "15:00:00"},
        headers=auth_headers
    ).json()

    response = client.put(
        f"/api/trips/{trip['id']}/activities/{later['id']}",
        json={"start_time": "09:00:00"},
        headers=auth_headers
    )
    assert response.status_code == 409
    assert response.json()["message"] == "This activity is already scheduled for this time"

    response = client.put(
        f"/api/trips/{trip['id']}/activities/{later['id']}",
        json={"notes": "Sunset tour"},
        headers=auth_headers
    )
    assert response.status_code == 200


def test_trip_stats(client, trip, auth_headers, cities, activities, future):
    paris = _add_stop(client, auth_headers, trip["id"], cities["Paris"], future).json()
    _add_stop(client, auth_headers, trip["id"], cities["Rome"], future + timedelta(days=3))
    for name in ["Louvre Museum", "Seine River Cruise"]:
        client.post(
            f"/api/trips/{trip['id']}/stops/{paris['id']}/activities",
            json={"activity_id": activities[name], "scheduled_date": future.isoformat()},
            headers=auth_headers
        )

    response = client.get(f"/api/trips/{trip['id']}/stats", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["stops_count"] == 2
    assert data["activities_count"] == 2
    assert Decimal(data["total_cost"]) == Decimal("40")


def test_city_and_activity_search(client, auth_headers, cities):
    response = client.get("/api/cities/search", params={"q": "japan"}, headers=auth_headers)
    assert [c["name"] for c in response.json()] == ["Tokyo"]

    response = client.get("/api/cities/popular", params={"limit": 2}, headers=auth_headers)
    assert [c["name"] for c in response.json()] == ["New York", "Paris"]

    response = client.get(f"/api/cities/{cities['Paris']}/activities", headers=auth_headers)
    assert [a["name"] for a in response.json()] == ["Eiffel Tower Summit", "Louvre Museum", "Seine River Cruise"]

    response = client.get(
        "/api/activities/search",
        params={"q": "museum", "city_id": cities["Rome"]},
        headers=auth_headers
    )
    assert [a["name"] for a in response.json()] == ["Vatican Museums"]


def test_clone_suggested_trip(client, admin_headers, auth_headers, user, cities, future):
    suggestion = client.post(
        "/api/trips",
        json={
            "name": "Classic Europe",
            "start_date": future.isoformat(),
            "end_date": (future + timedelta(days=6)).isoformat(),
            "trip_type": "admin_defined",
            "is_public": True
        },
        headers=admin_headers
    ).json()
    _add_stop(client, admin_headers, suggestion["id"], cities["Paris"], future)
    _add_stop(client, admin_headers, suggestion["id"], cities["Rome"], future + timedelta(days=3))

    response = client.get("/api/suggestions", headers=auth_headers)
    assert [t["id"] for t in response.json()] == [suggestion["id"]]

    response = client.post(f"/api/suggestions/{suggestion['id']}/clone", headers=auth_headers)
    assert response.status_code == 201
    clone = response.json()
    assert clone["name"] == "Classic Europe (Copy)"
    assert clone["user_id"] == user.id
    assert clone["is_public"] is False
    assert clone["trip_type"] == "custom"
    assert clone["meta"]["cloned_from"] == suggestion["id"]

    itinerary = client.get(f"/api/trips/{clone['id']}/itinerary", headers=auth_headers).json()
    assert [(s["seq"], s["city"]["name"]) for s in itinerary["stops"]] == [(1, "Paris"), (2, "Rome")]


def test_clone_with_overrides(client, admin_headers, auth_headers, future):
    suggestion = client.post(
        "/api/trips",
        json={
            "name": "Classic Europe",
            "start_date": future.isoformat(),
            "end_date": (future + timedelta(days=6)).isoformat(),
            "trip_type": "admin_defined",
            "is_public": True
        },
        headers=admin_headers
    ).json()

    response = client.post(
        f"/api/suggestions/{suggestion['id']}/clone",
        json={"name": "My Europe", "start_date": (future + timedelta(days=60)).isoformat()},
        headers=auth_headers
    )
    assert response.status_code == 201
    assert response.json()["name"] == "My Europe"
    assert response.json()["start_date"] == (future + timedelta(days=60)).isoformat()


def test_custom_trip_cannot_be_cloned_as_suggestion(client, trip, other_headers):
    response = client.post(f"/api/suggestions/{trip['id']}/clone", headers=other_headers)
    assert response.status_code == 404
