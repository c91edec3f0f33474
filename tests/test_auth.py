"""Admin login, logout, status check and the session gate."""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest

from app import crud
from app.core import security
from app.core.exceptions import SessionExpired, Unauthenticated
from app.models.admin_session import AdminSessionRecord
from app.services.activity_logger import RequestContext
from app.services.auth_service import AuthService
from app.services.session_store import AdminSession, DatabaseSessionStore, InMemorySessionStore, utcnow
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_USERNAME, API

LOGIN = f"{API}/admin/auth/login"
LOGOUT = f"{API}/admin/auth/logout"
CHECK = f"{API}/admin/auth/check"


def _session(login_time):
    return AdminSession(
        admin_id=1,
        username=ADMIN_USERNAME,
        email=ADMIN_EMAIL,
        full_name="Test Admin",
        role="admin",
        login_time=login_time,
    )


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

def test_login_success_sets_cookie_and_returns_admin(client, admin, db):
    response = client.post(LOGIN, json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Login successful"
    assert body["data"]["admin"] == {
        "id": admin.id,
        "username": ADMIN_USERNAME,
        "email": ADMIN_EMAIL,
        "full_name": "Test Admin",
        "role": "admin",
    }
    assert body["data"]["session_id"]
    assert response.cookies.get("admin_session") == body["data"]["session_id"]

    db.expire_all()
    assert crud.admin_user.get(db, id=admin.id).last_login is not None
    assert len(crud.admin_log.get_by_action(db, action="login_success")) == 1


def test_login_accepts_email_as_username(client, admin):
    response = client.post(LOGIN, json={"username": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200


def test_wrong_password_is_rejected_and_logged_once(client, admin, db):
    response = client.post(
        LOGIN,
        json={"username": "admin", "password": "wrong"},
        headers={"User-Agent": "pytest-agent"},
    )

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid credentials"

    entries = crud.admin_log.get_by_action(db, action="login_failed")
    assert len(entries) == 1
    assert entries[0].details == "Failed login attempt for username: admin"
    assert entries[0].user_agent == "pytest-agent"
    assert entries[0].ip_address


def test_unknown_user_and_inactive_admin_fail_identically(client, admin, db):
    unknown = client.post(LOGIN, json={"username": "nobody", "password": ADMIN_PASSWORD})

    crud.admin_user.update(db, db_obj=admin, obj_in={"is_active": False})
    inactive = client.post(LOGIN, json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})

    assert unknown.status_code == inactive.status_code == 401
    assert unknown.json()["error"] == inactive.json()["error"] == "Invalid credentials"
    assert set(unknown.json()) == set(inactive.json())


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"username": "admin"}, "Username and password are required"),
        ({"password": "x"}, "Username and password are required"),
        ({"username": "   ", "password": "x"}, "Username and password cannot be empty"),
        ({"username": "admin", "password": ""}, "Username and password cannot be empty"),
    ],
)
def test_login_requires_both_fields(client, admin, payload, message):
    response = client.post(LOGIN, json=payload)
    assert response.status_code == 400
    assert response.json()["error"] == message


# ---------------------------------------------------------------------------
# Logout / check
# ---------------------------------------------------------------------------

def test_logout_twice_never_errors(admin_client, db):
    first = admin_client.post(LOGOUT)
    second = admin_client.post(LOGOUT)

    assert first.status_code == second.status_code == 200
    assert second.json()["message"] == "Logout successful"
    assert len(crud.admin_log.get_by_action(db, action="logout")) == 1


def test_logout_without_session_succeeds(client):
    response = client.post(LOGOUT)
    assert response.status_code == 200


def test_check_reports_authentication_state(client, admin):
    anonymous = client.get(CHECK)
    assert anonymous.status_code == 200
    assert anonymous.json()["data"] == {"authenticated": False}
    assert anonymous.json()["message"] == "Not authenticated"

    client.post(LOGIN, json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    authenticated = client.get(CHECK)
    assert authenticated.json()["data"]["authenticated"] is True
    assert authenticated.json()["data"]["admin"]["username"] == ADMIN_USERNAME

    client.post(LOGOUT)
    assert client.get(CHECK).json()["data"] == {"authenticated": False}


def test_session_token_accepted_from_header(client, admin):
    login = client.post(LOGIN, json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    token = login.json()["data"]["session_id"]
    client.cookies.clear()

    response = client.get(f"{API}/admin/registrations", headers={"X-Admin-Session": token})
    assert response.status_code == 200


def test_admin_routes_require_a_session(client):
    for method, path in [
        ("GET", f"{API}/admin/registrations"),
        ("DELETE", f"{API}/admin/registrations"),
        ("POST", f"{API}/admin/attendance"),
    ]:
        response = client.request(method, path, json={})
        assert response.status_code == 401, path
        assert response.json()["error"] == "Authentication required"


def test_expired_session_is_destroyed_over_http(client, admin, db):
    store = DatabaseSessionStore(db)
    token = store.create(_session(utcnow() - timedelta(hours=24, seconds=1)))

    response = client.get(CHECK, headers={"X-Admin-Session": token})

    assert response.status_code == 401
    assert response.json()["error"] == "Session expired"
    assert store.get(token) is None


def test_login_purges_abandoned_sessions(client, admin, db):
    store = DatabaseSessionStore(db)
    abandoned = [store.create(_session(utcnow() - timedelta(days=30))) for _ in range(3)]
    recent = store.create(_session(utcnow() - timedelta(hours=1)))

    response = client.post(LOGIN, json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    assert db.query(AdminSessionRecord).count() == 2
    assert all(store.get(token) is None for token in abandoned)
    assert store.get(recent) is not None


def test_unknown_token_is_unauthenticated(client):
    response = client.get(f"{API}/admin/registrations", headers={"X-Admin-Session": "not-a-session"})
    assert response.status_code == 401
    assert response.json()["error"] == "Authentication required"


# ---------------------------------------------------------------------------
# TTL boundary
# ---------------------------------------------------------------------------

@pytest.fixture
def auth():
    return AuthService(db=MagicMock(), store=InMemorySessionStore(), activity=MagicMock())


def test_session_valid_just_inside_ttl(auth):
    login_time = utcnow()
    token = auth.store.create(_session(login_time))

    session = auth.require_admin_session(token, now=login_time + timedelta(hours=24, seconds=-1))
    assert session.username == ADMIN_USERNAME

    # Exactly 24 hours is still inside the window
    assert auth.require_admin_session(token, now=login_time + timedelta(hours=24)) is not None


def test_session_expired_just_past_ttl(auth):
    login_time = utcnow()
    token = auth.store.create(_session(login_time))

    with pytest.raises(SessionExpired):
        auth.require_admin_session(token, now=login_time + timedelta(hours=24, seconds=1))

    assert auth.store.get(token) is None
    # Once destroyed the session is simply gone
    with pytest.raises(Unauthenticated):
        auth.require_admin_session(token, now=login_time)


def test_missing_token_is_unauthenticated(auth):
    with pytest.raises(Unauthenticated):
        auth.require_admin_session(None)


def test_logout_only_logs_existing_sessions(auth):
    token = auth.store.create(_session(utcnow()))
    context = RequestContext(ip_address="127.0.0.1", user_agent="test")

    auth.logout(token, context)
    auth.logout(token, context)

    auth.activity.log.assert_called_once_with("logout", f"Logout for username: {ADMIN_USERNAME}", context)


def test_in_memory_purge_keeps_live_sessions(auth):
    now = utcnow()
    stale = auth.store.create(_session(now - timedelta(hours=24, seconds=1)))
    live = auth.store.create(_session(now - timedelta(hours=23)))

    assert auth.store.purge_expired(now - auth.ttl) == 1
    assert auth.store.get(stale) is None
    assert auth.store.get(live) is not None
    assert auth.store.purge_expired(now - auth.ttl) == 0


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

def test_unknown_user_check_costs_one_bcrypt_comparison():
    with patch.object(security.bcrypt, "hashpw") as hashpw, patch.object(
        security.bcrypt, "checkpw", return_value=False
    ) as checkpw:
        security.burn_password_check("anything")

    hashpw.assert_not_called()
    checkpw.assert_called_once()


def test_password_round_trip():
    hashed = security.get_password_hash("correct horse")
    assert security.verify_password("correct horse", hashed)
    assert not security.verify_password("wrong horse", hashed)
    assert not security.verify_password("correct horse", "not-a-bcrypt-hash")
