"""
Shared test fixtures: in-memory database, API client and signed-in users.
"""
import os
import tempfile

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="voyage-uploads-"))

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.db.seed import seed_reference_data
from app.core.security import create_access_token, get_password_hash
from app.models.city import City
from app.models.activity import Activity
from app.models.currency import Currency
from app.models.user import User
from app.services import currency_service

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_currency_cache():
    currency_service.clear_currency_cache()
    yield
    currency_service.clear_currency_cache()


def make_user(db, email: str, name: str = None, is_admin: bool = False, password: str = "secret123") -> User:
    user = User(
        email=email,
        name=name or email.split("@")[0],
        hashed_password=get_password_hash(password),
        is_admin=is_admin,
        preferences={}
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def headers_for(user: User) -> dict:
    token = create_access_token(data={"sub": user.email, "user_id": user.id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(db):
    return make_user(db, "traveller@example.com", "Traveller")


@pytest.fixture
def other_user(db):
    return make_user(db, "other@example.com", "Other")


@pytest.fixture
def admin(db):
    return make_user(db, "admin@example.com", "Admin", is_admin=True)


@pytest.fixture
def auth_headers(user):
    return headers_for(user)


@pytest.fixture
def other_headers(other_user):
    return headers_for(other_user)


@pytest.fixture
def admin_headers(admin):
    return headers_for(admin)


@pytest.fixture
def reference_data(db):
    """Seeded currencies, cities, activities, accommodations and transport costs."""
    seed_reference_data(db)
    return db


@pytest.fixture
def future():
    """First day of a trip a month from now."""
    return date.today() + timedelta(days=30)


@pytest.fixture
def trip(client, auth_headers, future):
    response = client.post(
        "/api/trips",
        json={
            "name": "Europe Tour",
            "description": "Summer in Europe",
            "start_date": future.isoformat(),
            "end_date": (future + timedelta(days=9)).isoformat(),
            "budget": "1000"
        },
        headers=auth_headers
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def cities(reference_data):
    """Seeded city ids by name."""
    return {city.name: city.id for city in reference_data.query(City).all()}


@pytest.fixture
def activities(reference_data):
    """Seeded catalog activity ids by name."""
    return {activity.name: activity.id for activity in reference_data.query(Activity).all()}


@pytest.fixture
def currencies(reference_data):
    """Seeded currency ids by code."""
    return {currency.code: currency.id for currency in reference_data.query(Currency).all()}
