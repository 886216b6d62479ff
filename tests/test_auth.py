"""Registration, login and the bearer-token gate."""

from datetime import timedelta

from marketplace.core.security import create_access_token


class TestRegister:
    def test_register_returns_token_and_user(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "Bob@Example.COM ", "username": "bob_1", "password": "longenough"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["token"]
        assert data["user"]["email"] == "bob@example.com"
        assert data["user"]["username"] == "bob_1"
        assert "password" not in data["user"]
        assert "password_hash" not in data["user"]

    def test_register_twice_with_same_email_conflicts(self, client, register):
        register(email="dup@example.com", username="first")

        response = client.post(
            "/api/auth/register",
            json={"email": "DUP@example.com", "username": "second", "password": "anotherpass"},
        )
        assert response.status_code == 409
        assert response.json() == {"message": "Already Registered!"}

    def test_register_rejects_invalid_payload(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "not-an-email", "username": "x", "password": "short"},
        )
        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["errors"]}
        assert fields == {"email", "username", "password"}

    def test_register_rejects_username_with_bad_characters(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "c@example.com", "username": "bad name!", "password": "longenough"},
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "username"


class TestLogin:
    def test_login_with_valid_credentials(self, client, register):
        _, user = register(email="carol@example.com", username="carol", password="carolpass")

        response = client.post(
            "/api/auth/login", json={"email": "carol@example.com", "password": "carolpass"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["user"]["id"] == user["id"]
        assert "password_hash" not in data["user"]

    def test_wrong_password_and_unknown_email_fail_identically(self, client, register):
        register(email="dave@example.com", username="dave", password="davepass1")

        wrong_password = client.post(
            "/api/auth/login", json={"email": "dave@example.com", "password": "nope-nope"}
        )
        unknown_email = client.post(
            "/api/auth/login", json={"email": "nobody@example.com", "password": "davepass1"}
        )
        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json() == {"message": "Invalid email or password"}

    def test_login_requires_password(self, client):
        response = client.post("/api/auth/login", json={"email": "e@example.com", "password": ""})
        assert response.status_code == 400


class TestMe:
    def test_me_returns_current_user(self, client, register):
        headers, user = register()

        response = client.get("/api/auth/me", headers=headers)
        assert response.status_code == 200
        assert response.json()["user"] == user

    def test_me_without_token_is_unauthorized(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert "message" in response.json()

    def test_me_with_garbage_token_is_unauthorized(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})
        assert response.status_code == 401

    def test_me_with_expired_token_is_unauthorized(self, client, register):
        _, user = register()
        token = create_access_token(user["id"], expires_delta=timedelta(seconds=-10))

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_me_for_vanished_user_is_not_found(self, client):
        token = create_access_token(999)

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}
