class TestUpdateUser:
    def test_update_own_username(self, client, register):
        headers, user = register()

        response = client.put(f"/api/users/{user['id']}", json={"username": "alice.new"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["user"]["username"] == "alice.new"
        assert "password_hash" not in response.json()["user"]

    def test_update_password_allows_login_with_new_one(self, client, register):
        headers, user = register(email="pw@example.com", password="oldpassword")

        response = client.put(f"/api/users/{user['id']}", json={"password": "newpassword"}, headers=headers)
        assert response.status_code == 200

        old = client.post("/api/auth/login", json={"email": "pw@example.com", "password": "oldpassword"})
        new = client.post("/api/auth/login", json={"email": "pw@example.com", "password": "newpassword"})
        assert old.status_code == 401
        assert new.status_code == 200

    def test_cannot_update_someone_else(self, client, register):
        headers, _ = register()
        _, other = register(email="bob@example.com", username="bob")

        response = client.put(f"/api/users/{other['id']}", json={"username": "hijack"}, headers=headers)
        assert response.status_code == 403
        assert response.json() == {"message": "You can only update your own profile"}

    def test_empty_update_is_rejected(self, client, register):
        headers, user = register()

        response = client.put(f"/api/users/{user['id']}", json={}, headers=headers)
        assert response.status_code == 400
        assert response.json()["errors"]

    def test_malformed_id_is_not_found(self, client, register):
        headers, _ = register()

        response = client.put("/api/users/abc", json={"username": "whatever"}, headers=headers)
        assert response.status_code == 404

    def test_update_requires_authentication(self, client, register):
        _, user = register()

        response = client.put(f"/api/users/{user['id']}", json={"username": "anon"})
        assert response.status_code == 401
