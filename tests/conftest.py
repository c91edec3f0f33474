"""Shared test fixtures: in-memory database, HTTP client and admin sessions."""

import os

# Must be set before anything from app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEND_EMAILS"] = "false"
os.environ["SESSION_BACKEND"] = "database"

import itertools
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app import crud, models  # noqa: F401
from app.db.database import Base, SessionLocal, engine
from app.main import app
from app.models.registration import Registration

API = "/api/v1"
ADMIN_USERNAME = "admin"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery"

_email_counter = itertools.count(1)


def registration_form(**overrides):
    """A valid public registration body (camelCase keys, as the form posts them)"""
    form = {
        "title": "Dr",
        "gender": "Female",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "phone": "+234 803 555 0101",
        "email": f"ada{next(_email_counter)}@example.com",
        "ageRange": "25-34",
        "attendanceType": "Physical",
        "country": "NG",
        "countryName": "Nigeria",
        "stateOfOrigin": "Lagos",
        "howDidYouHear": "Social Media",
    }
    form.update(overrides)
    return form


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin(db):
    return crud.admin_user.create_admin(
        db,
        username=ADMIN_USERNAME,
        email=ADMIN_EMAIL,
        password=ADMIN_PASSWORD,
        full_name="Test Admin",
    )


@pytest.fixture
def admin_client(client, admin):
    """A client holding a live admin session cookie"""
    response = client.post(
        f"{API}/admin/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def make_registration(db):
    """Factory inserting registrations directly, with control over every column"""

    def _make(**overrides):
        values = {
            "title": "Mr",
            "gender": "Male",
            "first_name": "Alan",
            "last_name": "Turing",
            "phone": "+44 20 7946 0958",
            "email": f"user{next(_email_counter)}@example.com",
            "age_range": "35-44",
            "attendance_type": "Physical",
            "country_code": "GB",
            "country_name": "United Kingdom",
            "state_of_origin": "London",
            "how_did_you_hear": "Website",
            "registration_date": datetime.now(),
            "status": "active",
        }
        values.update(overrides)
        registration = Registration(**values)
        db.add(registration)
        db.commit()
        db.refresh(registration)
        return registration

    return _make
