"""Integration tests for API endpoints."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from passlib.hash import bcrypt

import todo_api.core.auth as auth_module
from todo_api.core.security import verify_password
from todo_api.models import User


def test_root_endpoint(client: TestClient):
    """Test the liveness endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "ToDoList Api is running now!"


def test_health_endpoint(client: TestClient):
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_register_user(client: TestClient, test_user_data):
    """Test user registration."""
    response = client.post("/auth/register", json=test_user_data)
    assert response.status_code == 201
    assert response.json() == {"id": 1, "username": "alice"}
    assert response.headers["location"] == "/users/1"


def test_register_stores_hash_not_password(client: TestClient, db_session, test_user_data):
    client.post("/auth/register", json=test_user_data)

    user = db_session.execute(select(User)).scalar_one()
    assert user.password_hash != test_user_data["password"]
    assert verify_password(test_user_data["password"], user.password_hash)


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "", "password": "pw123"},
        {"username": "alice", "password": ""},
        {"username": "   ", "password": "pw123"},
        {"username": "alice", "password": " \t"},
        {"username": "alice"},
        {},
    ],
)
def test_register_requires_username_and_password(client: TestClient, db_session, payload):
    response = client.post("/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Username and password required."
    assert db_session.execute(select(func.count()).select_from(User)).scalar_one() == 0


def test_register_rejects_overlong_username(client: TestClient):
    response = client.post("/auth/register", json={"username": "a" * 101, "password": "pw"})
    assert response.status_code == 400


def test_register_duplicate_user(client: TestClient, db_session, test_user_data):
    """Test registering a duplicate user."""
    response = client.post("/auth/register", json=test_user_data)
    assert response.status_code == 201

    response = client.post("/auth/register", json=test_user_data)
    assert response.status_code == 409
    assert db_session.execute(select(func.count()).select_from(User)).scalar_one() == 1


def test_register_duplicate_caught_by_unique_constraint(
    client: TestClient, db_session, test_user_data, monkeypatch
):
    """A registration that slips past the pre-check still gets 409."""
    client.post("/auth/register", json=test_user_data)
    monkeypatch.setattr(auth_module, "get_user_by_username", lambda db, username: None)

    response = client.post("/auth/register", json=test_user_data)

    assert response.status_code == 409
    assert db_session.execute(select(func.count()).select_from(User)).scalar_one() == 1


def test_register_duplicate_differing_only_in_case(
    client: TestClient, db_session, test_user_data
):
    client.post("/auth/register", json=test_user_data)

    response = client.post("/auth/register", json={"username": "Alice", "password": "pw456"})

    assert response.status_code == 409
    assert db_session.execute(select(func.count()).select_from(User)).scalar_one() == 1


def test_register_case_variant_caught_by_unique_index(
    client: TestClient, db_session, test_user_data, monkeypatch
):
    client.post("/auth/register", json=test_user_data)
    monkeypatch.setattr(auth_module, "get_user_by_username", lambda db, username: None)

    response = client.post("/auth/register", json={"username": "ALICE", "password": "pw123"})

    assert response.status_code == 409
    assert db_session.execute(select(func.count()).select_from(User)).scalar_one() == 1


def test_login_user(client: TestClient, test_user_data):
    """Test user login."""
    client.post("/auth/register", json=test_user_data)

    response = client.post("/auth/login", json=test_user_data)
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"token"}
    assert data["token"].count(".") == 2


def test_login_invalid_credentials(client: TestClient, test_user_data):
    """Wrong password and unknown username are indistinguishable."""
    client.post("/auth/register", json=test_user_data)

    wrong_password = client.post(
        "/auth/login", json={"username": "alice", "password": "WrongPassword123!"}
    )
    unknown_user = client.post(
        "/auth/login", json={"username": "mallory", "password": "pw123"}
    )

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()
    assert wrong_password.headers["www-authenticate"] == "Bearer"


def test_login_username_ignores_case(client: TestClient, test_user_data):
    client.post("/auth/register", json=test_user_data)

    response = client.post("/auth/login", json={"username": "ALICE", "password": "pw123"})

    assert response.status_code == 200
    assert "token" in response.json()


def test_login_checks_password_beyond_72_bytes(client: TestClient):
    """Passwords sharing a 72-byte prefix are still different passwords."""
    prefix = "p" * 72
    client.post("/auth/register", json={"username": "alice", "password": prefix + "correct"})

    wrong = client.post(
        "/auth/login", json={"username": "alice", "password": prefix + "WRONG-totally"}
    )
    right = client.post("/auth/login", json={"username": "alice", "password": prefix + "correct"})

    assert wrong.status_code == 401
    assert right.status_code == 200


def test_login_upgrades_plain_bcrypt_hash(client: TestClient, db_session):
    db_session.add(User(username="alice", password_hash=bcrypt.using(rounds=4).hash("pw123")))
    db_session.commit()

    response = client.post("/auth/login", json={"username": "alice", "password": "pw123"})
    assert response.status_code == 200

    db_session.expire_all()
    user = db_session.execute(select(User)).scalar_one()
    assert user.password_hash.startswith("$bcrypt-sha256$")
    assert verify_password("pw123", user.password_hash)


def test_login_with_missing_fields(client: TestClient):
    response = client.post("/auth/login", json={})
    assert response.status_code == 401


def test_malformed_body_is_bad_request(client: TestClient):
    response = client.post(
        "/auth/register", content="not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert "detail" in response.json()
