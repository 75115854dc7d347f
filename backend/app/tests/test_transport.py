"""
Tests for transport reference costs and trip transport legs.
"""
from datetime import datetime, timedelta
from decimal import Decimal


def _leg(cities, currencies, start, **overrides):
    leg = {
        "from_city_id": cities["Paris"],
        "to_city_id": cities["London"],
        "transport_mode": "train",
        "provider": "Eurostar",
        "departure_time": start.isoformat(),
        "arrival_time": (start + timedelta(hours=2, minutes=20)).isoformat(),
        "cost": "92",
        "currency_id": currencies["EUR"],
        "booking_reference": "EU123"
    }
    leg.update(overrides)
    return leg


def _start(future):
    return datetime(future.year, future.month, future.day, 9, 0)


def test_transport_modes(client):
    response = client.get("/api/transport/modes")
    assert response.status_code == 200
    modes = response.json()
    assert [m["id"] for m in modes] == ["plane", "train", "bus", "car", "ferry", "walking", "bicycle", "other"]
    assert modes[0]["name"] == "Plane"


def test_reference_costs_either_direction(client, auth_headers, cities):
    response = client.get(
        "/api/transport/costs",
        params={"from_city_id": cities["Rome"], "to_city_id": cities["Paris"]},
        headers=auth_headers
    )
    assert response.status_code == 200
    rows = response.json()
    assert sorted(r["mode"] for r in rows) == ["plane", "train"]
    assert all(r["currency"]["code"] == "EUR" for r in rows)

    all_costs = client.get("/api/transport/costs", headers=auth_headers).json()
    assert len(all_costs) == 6


def test_add_reference_cost_admin_only(client, auth_headers, admin_headers, cities, currencies):
    payload = {
        "from_city_id": cities["Bangkok"],
        "to_city_id": cities["Mumbai"],
        "mode": "plane",
        "avg_cost": "180",
        "avg_duration_minutes": 260,
        "provider": "IndiGo",
        "currency_id": currencies["USD"]
    }
    assert client.post("/api/transport/costs", json=payload, headers=auth_headers).status_code == 403

    response = client.post("/api/transport/costs", json=payload, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["from_city"]["name"] == "Bangkok"


def test_add_reference_cost_validation(client, admin_headers, cities, currencies):
    payload = {
        "from_city_id": cities["Paris"],
        "to_city_id": cities["Paris"],
        "mode": "train",
        "avg_cost": "40",
        "currency_id": currencies["EUR"]
    }
    response = client.post("/api/transport/costs", json=payload, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Destination city must be different from origin city"

    payload.update(to_city_id=cities["Rome"], avg_cost="-1")
    response = client.post("/api/transport/costs", json=payload, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Cost cannot be negative"

    payload.update(avg_cost="40", to_city_id=9999)
    assert client.post("/api/transport/costs", json=payload, headers=admin_headers).status_code == 404

    payload.update(to_city_id=cities["Rome"], currency_id=9999)
    assert client.post("/api/transport/costs", json=payload, headers=admin_headers).status_code == 404


def test_add_and_list_legs(client, trip, auth_headers, cities, currencies, future):
    start = _start(future)
    later = client.post(
        f"/api/trips/{trip['id']}/transport",
        json=_leg(cities, currencies, start + timedelta(days=3), from_city_id=cities["London"], to_city_id=cities["New York"],
                  transport_mode="plane", provider="British Airways", cost="550", currency_id=currencies["USD"]),
        headers=auth_headers
    )
    assert later.status_code == 201
    assert later.json()["to_city"]["name"] == "New York"

    earlier = client.post(f"/api/trips/{trip['id']}/transport", json=_leg(cities, currencies, start), headers=auth_headers)
    assert earlier.status_code == 201
    assert earlier.json()["currency"]["symbol"] == "€"

    response = client.get(f"/api/trips/{trip['id']}/transport", headers=auth_headers)
    assert [leg["provider"] for leg in response.json()] == ["Eurostar", "British Airways"]

    response = client.get(
        f"/api/trips/{trip['id']}/transport",
        params={"from_city_id": cities["Paris"], "to_city_id": cities["London"]},
        headers=auth_headers
    )
    assert [leg["provider"] for leg in response.json()] == ["Eurostar"]


def test_leg_validation(client, trip, auth_headers, cities, currencies, future):
    start = _start(future)
    response = client.post(
        f"/api/trips/{trip['id']}/transport",
        json=_leg(cities, currencies, start, to_city_id=cities["Paris"]),
        headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Destination city must be different from origin city"

    response = client.post(
        f"/api/trips/{trip['id']}/transport",
        json=_leg(cities, currencies, start, arrival_time=start.isoformat()),
        headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Arrival time must be after departure time"


def test_update_leg_revalidates(client, trip, auth_headers, cities, currencies, future):
    start = _start(future)
    leg = client.post(f"/api/trips/{trip['id']}/transport", json=_leg(cities, currencies, start), headers=auth_headers).json()

    response = client.put(
        f"/api/trips/{trip['id']}/transport/{leg['id']}",
        json={"arrival_time": (start - timedelta(hours=1)).isoformat()},
        headers=auth_headers
    )
    assert response.status_code == 400

    response = client.put(
        f"/api/trips/{trip['id']}/transport/{leg['id']}",
        json={"cost": "80", "notes": "Standard premier"},
        headers=auth_headers
    )
    assert response.status_code == 200
    assert Decimal(response.json()["cost"]) == Decimal("80")
    assert response.json()["provider"] == "Eurostar"

    response = client.delete(f"/api/trips/{trip['id']}/transport/{leg['id']}", headers=auth_headers)
    assert response.status_code == 204


def test_trip_transport_total_converts_through_usd(client, trip, auth_headers, cities, currencies, future):
    start = _start(future)
    client.post(f"/api/trips/{trip['id']}/transport", json=_leg(cities, currencies, start), headers=auth_headers)
    client.post(
        f"/api/trips/{trip['id']}/transport",
        json=_leg(cities, currencies, start + timedelta(days=2), from_city_id=cities["London"], to_city_id=cities["New York"],
                  cost="50", currency_id=currencies["USD"]),
        headers=auth_headers
    )

    response = client.get(f"/api/trips/{trip['id']}/transport/total", headers=auth_headers)
    assert response.status_code == 200
    # 92 EUR = 100 USD
    assert Decimal(response.json()["total_cost"]) == Decimal("150")

    response = client.get(f"/api/trips/{trip['id']}/transport/total", params={"currency": "eur"}, headers=auth_headers)
    assert response.json()["currency"] == "EUR"
    assert Decimal(response.json()["total_cost"]) == Decimal("138")
