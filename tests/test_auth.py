"""Tests for registration, login and bearer-token resolution."""

from datetime import timedelta

from fastapi.testclient import TestClient

from utils.auth import TokenSession, create_access_token, decode_token, get_password_hash, verify_password


def test_password_hash_roundtrip() -> None:
    hashed = get_password_hash("s3cret-password")

    assert hashed != "s3cret-password"
    assert verify_password("s3cret-password", hashed)
    assert not verify_password("wrong-password", hashed)


def test_register_returns_user_without_password(client: TestClient) -> None:
    response = client.post(
        "/auth/register",
        json={"name": "Carol", "email": "Carol@Example.com", "password": "long-enough"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "carol@example.com"
    assert data["name"] == "Carol"
    assert "id" in data and "createdAt" in data
    assert "password" not in data and "hashedPassword" not in data


def test_register_rejects_duplicate_email(client: TestClient, alice: dict) -> None:
    response = client.post(
        "/auth/register",
        json={"name": "Other Alice", "email": "ALICE@example.com", "password": "long-enough"},
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Email already registered"}


def test_register_validates_body(client: TestClient) -> None:
    response = client.post("/auth/register", json={"name": "Dan", "email": "not-an-email", "password": "long-enough"})

    assert response.status_code == 400
    assert "message" in response.json()


def test_login_with_bad_password_is_unauthorized(client: TestClient, alice: dict) -> None:
    response = client.post("/auth/login", data={"username": "alice@example.com", "password": "nope-nope"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid credentials"}


def test_login_unknown_email_is_unauthorized(client: TestClient) -> None:
    response = client.post("/auth/login", data={"username": "ghost@example.com", "password": "whatever1"})

    assert response.status_code == 401


def test_me_returns_current_user(client: TestClient, alice: dict) -> None:
    response = client.get("/users/me", headers=alice)

    assert response.status_code == 200
    assert response.json()["email"] == "alice@example.com"


def test_me_without_token_is_unauthorized(client: TestClient) -> None:
    response = client.get("/users/me")

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}


def test_me_with_garbage_token_is_unauthorized(client: TestClient) -> None:
    response = client.get("/users/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_token_for_unknown_user_is_unauthorized(client: TestClient, settings) -> None:
    token = create_access_token({"sub": "0" * 32}, settings)

    response = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_expired_token_does_not_decode(settings) -> None:
    token = create_access_token({"sub": "abc"}, settings, expires_delta=timedelta(minutes=-1))

    assert decode_token(token, settings) is None


def test_token_signed_with_other_key_does_not_decode(settings) -> None:
    other = settings.model_copy(update={"secret_key": "another-secret"})
    token = create_access_token({"sub": "abc"}, other)

    assert decode_token(token, settings) is None


def test_token_session_without_token_has_no_user(db_session, settings) -> None:
    assert TokenSession(None, db_session, settings).current_user_id() is None
