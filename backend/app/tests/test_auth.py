"""
Tests for authentication and profile endpoints.
"""
from app.models.user import User


def test_signup(client):
    """Test user signup."""
    response = client.post(
        "/api/auth/signup",
        json={
            "email": "Test@Example.com",
            "name": "Test User",
            "password": "testpassword123"
        }
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "test@example.com"
    assert data["name"] == "Test User"
    assert data["is_admin"] is False
    assert "hashed_password" not in data


def test_signup_duplicate_email(client):
    payload = {"email": "dup@example.com", "name": "Dup", "password": "testpassword123"}
    assert client.post("/api/auth/signup", json=payload).status_code == 201

    response = client.post("/api/auth/signup", json=payload)
    assert response.status_code == 400
    assert response.json()["message"] == "Email already exists"


def test_signup_short_password(client):
    response = client.post(
        "/api/auth/signup",
        json={"email": "short@example.com", "name": "Short", "password": "abc"}
    )
    assert response.status_code == 400


def test_login(client):
    """Test user login."""
    client.post(
        "/api/auth/signup",
        json={"email": "test2@example.com", "name": "Second", "password": "testpassword123"}
    )

    response = client.post(
        "/api/auth/login",
        json={"email": "test2@example.com", "password": "testpassword123"}
    )
    assert response.status_code == 200
    assert "access_token" in response.json()
    assert response.json()["token_type"] == "bearer"


def test_login_invalid_credentials(client):
    """Test login with invalid credentials."""
    response = client.post(
        "/api/auth/login",
        json={"email": "nonexistent@example.com", "password": "wrongpassword"}
    )
    assert response.status_code == 401
    assert response.json()["error_code"] == "ERR_UNAUTHORIZED"


def test_login_suspended_user(client, db, user):
    user.is_active = False
    db.commit()

    response = client.post(
        "/api/auth/login",
        json={"email": user.email, "password": "secret123"}
    )
    assert response.status_code == 403


def test_me_requires_token(client):
    response = client.get("/api/users/me")
    assert response.status_code in (401, 403)

    response = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_me_and_logout(client, auth_headers, user):
    response = client.get("/api/users/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == user.id

    response = client.post("/api/auth/logout", headers=auth_headers)
    assert response.status_code == 200


def test_update_profile(client, db, auth_headers, user, cities, currencies):
    response = client.put(
        "/api/users/me",
        json={
            "name": "Renamed",
            "home_city_id": cities["Paris"],
            "currency_id": currencies["EUR"],
            "preferences": {"theme": "dark"}
        },
        headers=auth_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Renamed"
    assert data["home_city_id"] == cities["Paris"]
    assert data["preferences"] == {"theme": "dark"}

    refreshed = db.query(User).filter(User.id == user.id).one()
    assert refreshed.currency_id == currencies["EUR"]


def test_update_profile_unknown_city(client, auth_headers, reference_data):
    response = client.put("/api/users/me", json={"home_city_id": 9999}, headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error_code"] == "ERR_NOT_FOUND"


def test_upload_profile_photo(client, auth_headers, tmp_path, monkeypatch):
    from app.core.config import settings
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))

    response = client.post(
        "/api/users/me/photo",
        files={"file": ("me.png", b"\x89PNG fake image", "image/png")},
        headers=auth_headers
    )
    assert response.status_code == 200
    photo = response.json()["photo"]
    assert photo.startswith("avatars/") and photo.endswith(".png")
    assert (tmp_path / photo).exists()
