"""Public registration form and statistics."""

import json
from unittest.mock import patch

import pytest

from app import crud
from app.schemas.registration import RegistrationSubmission
from app.services.email_service import email_service
from tests.conftest import API, registration_form

REGISTER = f"{API}/register"
STATS = f"{API}/stats"


def test_valid_submission_is_stored(client, db):
    form = registration_form(firstName="Ngozi", lastName="Okonjo")

    response = client.post(REGISTER, json=form)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Registration completed successfully!"
    data = body["data"]
    assert data["email"] == form["email"]
    assert data["full_name"] == "Ngozi Okonjo"
    assert data["attendance_type"] == "Physical"
    assert data["country"] == "Nigeria"
    assert data["email_status"] == "Confirmation email sent successfully."

    stored = crud.registration.get(db, id=data["registration_id"])
    assert stored.country_code == "NG"
    assert stored.status == "active"
    assert stored.venue_attendance_status is None

    entries = crud.admin_log.get_by_action(db, action="registration_created")
    assert len(entries) == 1
    assert json.loads(entries[0].details) == {
        "action": "registration_created",
        "registration_id": data["registration_id"],
        "email": form["email"],
        "country": "Nigeria",
        "attendance_type": "Physical",
    }


def test_missing_fields_are_all_reported(client):
    response = client.post(REGISTER, json={"firstName": "Only"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert "First name is required" not in body["details"]
    assert "Last name is required" in body["details"]
    assert "Email is required" in body["details"]
    assert "How did you hear is required" in body["details"]


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"email": "not-an-email"}, "Invalid email format"),
        ({"phone": "12345"}, "Invalid phone number format"),
        ({"phone": "call me maybe!"}, "Invalid phone number format"),
    ],
)
def test_format_errors(client, overrides, message):
    response = client.post(REGISTER, json=registration_form(**overrides))
    assert response.status_code == 400
    assert response.json()["details"] == [message]


def test_duplicate_email_is_rejected(client):
    form = registration_form()
    assert client.post(REGISTER, json=form).status_code == 200

    response = client.post(REGISTER, json=registration_form(email=form["email"]))

    assert response.status_code == 400
    assert response.json()["details"] == ["Email address is already registered"]


def test_markup_is_stripped(client, db):
    response = client.post(REGISTER, json=registration_form(firstName="  <b>Chimamanda</b> "))

    stored = crud.registration.get(db, id=response.json()["data"]["registration_id"])
    assert stored.first_name == "Chimamanda"


def test_submission_cleans_every_field_before_validation():
    submission = RegistrationSubmission.model_validate(
        registration_form(firstName=" <i>Ngozi</i> ", title=None, stateOfOrigin=7)
    )

    assert submission.first_name == "Ngozi"
    assert submission.title == ""
    assert submission.state_of_origin == "7"
    assert "clean_text" in RegistrationSubmission.__pydantic_decorators__.field_validators


def test_email_failure_does_not_fail_registration(client):
    with patch.object(email_service, "send_registration_confirmation", return_value=False) as send:
        response = client.post(REGISTER, json=registration_form(firstName="Wole"))

    assert response.status_code == 200
    assert response.json()["data"]["email_status"] == "Confirmation email failed to send."
    assert send.call_args.args[1] == "Wole"


def test_register_only_accepts_post(client):
    response = client.get(REGISTER)
    assert response.status_code == 405
    assert response.json()["error"] == "Method not allowed"


def test_statistics(client, make_registration):
    make_registration(attendance_type="Physical", country_name="Ghana", age_range="18-24")
    make_registration(attendance_type="Virtual", country_name="Ghana", age_range="18-24")
    make_registration(attendance_type="Virtual", country_name="Kenya", status="cancelled", age_range="25-34")

    response = client.get(STATS)

    assert response.status_code == 200
    stats = response.json()["data"]
    assert stats["total"] == 3
    assert stats["active"] == 2
    assert stats["cancelled"] == 1
    assert stats["recent"] == 3
    assert stats["by_country"][0] == {"country_name": "Ghana", "count": 2}
    assert {row["attendance_type"]: row["count"] for row in stats["by_attendance"]} == {"Physical": 1, "Virtual": 2}
    assert {row["age_range"]: row["count"] for row in stats["by_age"]} == {"18-24": 2, "25-34": 1}
    assert stats["last_updated"]
