from datetime import timedelta

from app.utils.security import create_access_token

API = "/api/auth"


def test_register_creates_user_and_returns_token(client):
    response = client.post(
        f"{API}/register",
        json={"name": "  Carol  ", "email": "carol@example.com", "password": "secret1"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    user = body["data"]["user"]
    assert user["name"] == "Carol"
    assert user["email"] == "carol@example.com"
    assert user["role"] == "user"
    assert "createdAt" in user
    assert "passwordHash" not in user
    assert body["data"]["token"]


def test_register_as_organizer(client):
    response = client.post(
        f"{API}/register",
        json={
            "name": "Olga",
            "email": "olga@example.com",
            "password": "secret1",
            "role": "organizer",
        },
    )

    assert response.status_code == 201
    assert response.json()["data"]["user"]["role"] == "organizer"


def test_register_cannot_self_assign_admin(client):
    response = client.post(
        f"{API}/register",
        json={
            "name": "Mallory",
            "email": "mallory@example.com",
            "password": "secret1",
            "role": "admin",
        },
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Validation failed"


def test_register_duplicate_email(client, attendee):
    response = client.post(
        f"{API}/register",
        json={"name": "Alice Again", "email": attendee.email, "password": "secret1"},
    )

    assert response.status_code == 409
    assert response.json()["error"] == "Email already exists"


def test_register_rejects_short_password(client):
    response = client.post(
        f"{API}/register",
        json={"name": "Dave", "email": "dave@example.com", "password": "123"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"
    assert response.json()["details"]


def test_login_success(client, make_user):
    make_user(email="erin@example.com", password="hunter22")

    response = client.post(
        f"{API}/login", json={"email": "erin@example.com", "password": "hunter22"}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["email"] == "erin@example.com"
    assert data["token"]


def test_login_wrong_password_and_unknown_email_look_the_same(client, make_user):
    make_user(email="frank@example.com", password="hunter22")

    wrong_password = client.post(
        f"{API}/login", json={"email": "frank@example.com", "password": "nope"}
    )
    unknown_email = client.post(
        f"{API}/login", json={"email": "ghost@example.com", "password": "hunter22"}
    )

    for response in (wrong_password, unknown_email):
        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "Invalid credentials",
            "message": "Email or password is incorrect",
        }


def test_login_fails_for_google_only_account(client, attendee):
    response = client.post(
        f"{API}/login", json={"email": attendee.email, "password": "anything"}
    )

    assert response.status_code == 401


def test_google_login_creates_then_reuses_account(client):
    payload = {"googleId": "g-123", "name": "Gina", "email": "gina@example.com"}

    first = client.post(f"{API}/google", json=payload)
    second = client.post(f"{API}/google", json=payload)

    assert first.status_code == 201
    assert second.status_code == 200
    assert first.json()["data"]["user"]["id"] == second.json()["data"]["user"]["id"]


def test_google_login_links_existing_email(client, attendee):
    response = client.post(
        f"{API}/google",
        json={"googleId": "g-alice", "name": "Alice", "email": attendee.email},
    )

    assert response.status_code == 200
    assert response.json()["data"]["user"]["id"] == attendee.id


def test_profile_requires_token(client):
    response = client.get(f"{API}/profile")

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "Access denied",
        "message": "No token provided",
    }


def test_profile_rejects_garbage_token(client):
    response = client.get(
        f"{API}/profile", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_profile_rejects_expired_token(client, attendee):
    token = create_access_token(attendee, expires_delta=timedelta(seconds=-10))

    response = client.get(
        f"{API}/profile", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Token expired"


def test_get_and_update_profile(client, attendee_headers):
    profile = client.get(f"{API}/profile", headers=attendee_headers)
    assert profile.status_code == 200
    assert profile.json()["data"]["user"]["email"] == "alice@example.com"

    updated = client.put(
        f"{API}/profile", json={"name": "Alice Updated"}, headers=attendee_headers
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["user"]["name"] == "Alice Updated"


def test_update_profile_email_taken(client, attendee_headers, other_user):
    response = client.put(
        f"{API}/profile", json={"email": other_user.email}, headers=attendee_headers
    )

    assert response.status_code == 409
