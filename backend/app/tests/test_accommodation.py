"""
Tests for trip accommodation endpoints.
"""
from datetime import timedelta
from app.models.accommodation import Accommodation


def _listing_id(db, name):
    return db.query(Accommodation).filter(Accommodation.name == name).one().id


def test_city_accommodations_sorted_by_name(client, auth_headers, cities):
    response = client.get(f"/api/cities/{cities['Paris']}/accommodations", headers=auth_headers)
    assert response.status_code == 200
    assert [a["name"] for a in response.json()] == ["Hotel Le Marais", "Montmartre Studio"]


def test_add_and_list_stays(client, db, trip, auth_headers, reference_data, future):
    marais = _listing_id(db, "Hotel Le Marais")
    studio = _listing_id(db, "Montmartre Studio")

    late = client.post(
        f"/api/trips/{trip['id']}/accommodations",
        json={
            "accommodation_id": studio,
            "check_in_date": (future + timedelta(days=4)).isoformat(),
            "check_out_date": (future + timedelta(days=6)).isoformat(),
            "notes": ""
        },
        headers=auth_headers
    )
    assert late.status_code == 201
    assert late.json()["nights"] == 2
    assert late.json()["notes"] is None

    early = client.post(
        f"/api/trips/{trip['id']}/accommodations",
        json={
            "accommodation_id": marais,
            "check_in_date": future.isoformat(),
            "check_out_date": (future + timedelta(days=3)).isoformat()
        },
        headers=auth_headers
    )
    assert early.json()["accommodation"]["name"] == "Hotel Le Marais"

    response = client.get(f"/api/trips/{trip['id']}/accommodations", headers=auth_headers)
    assert [s["accommodation"]["name"] for s in response.json()] == ["Hotel Le Marais", "Montmartre Studio"]
    assert [s["nights"] for s in response.json()] == [3, 2]

    response = client.get(f"/api/trips/{trip['id']}/accommodations/count", headers=auth_headers)
    assert response.json() == {"trip_id": trip["id"], "count": 2}


def test_stay_validation(client, db, trip, auth_headers, reference_data, future):
    marais = _listing_id(db, "Hotel Le Marais")
    response = client.post(
        f"/api/trips/{trip['id']}/accommodations",
        json={"accommodation_id": marais, "check_in_date": future.isoformat(), "check_out_date": future.isoformat()},
        headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Check-out date must be after check-in date"

    response = client.post(
        f"/api/trips/{trip['id']}/accommodations",
        json={"accommodation_id": 9999, "check_in_date": future.isoformat(), "check_out_date": (future + timedelta(days=1)).isoformat()},
        headers=auth_headers
    )
    assert response.status_code == 404


def test_update_and_delete_stay(client, db, trip, auth_headers, reference_data, future):
    marais = _listing_id(db, "Hotel Le Marais")
    stay = client.post(
        f"/api/trips/{trip['id']}/accommodations",
        json={"accommodation_id": marais, "check_in_date": future.isoformat(), "check_out_date": (future + timedelta(days=1)).isoformat()},
        headers=auth_headers
    ).json()

    response = client.put(
        f"/api/trips/{trip['id']}/accommodations/{stay['id']}",
        json={
            "accommodation_id": marais,
            "check_in_date": future.isoformat(),
            "check_out_date": (future + timedelta(days=4)).isoformat(),
            "notes": "Late check-in"
        },
        headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["nights"] == 4
    assert response.json()["notes"] == "Late check-in"

    response = client.delete(f"/api/trips/{trip['id']}/accommodations/{stay['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get(f"/api/trips/{trip['id']}/accommodations/count", headers=auth_headers).json()["count"] == 0
