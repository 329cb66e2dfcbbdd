from fastapi.testclient import TestClient


class TestProfileRoutes:

    def test_get_profile(self, client: TestClient, register_user):
        user, headers = register_user(full_name="Erin")

        response = client.get("/api/profile", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"]["key"] == "profile.retrieved"
        assert body["data"]["full_name"] == "Erin"
        assert body["data"]["id"] == user["id"]

    def test_update_profile_trims_full_name(self, client: TestClient, register_user):
        _, headers = register_user(full_name="Erin")

        response = client.put("/api/profile", json={"full_name": "  Erin Smith  "}, headers=headers)

        assert response.status_code == 200
        assert response.json()["data"]["full_name"] == "Erin Smith"
        assert response.json()["message"]["key"] == "profile.updated"

    def test_update_profile_rejects_short_name(self, client: TestClient, register_user):
        _, headers = register_user()

        response = client.put("/api/profile", json={"full_name": "E"}, headers=headers)

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "full_name"

    def test_profile_requires_token(self, client: TestClient):
        assert client.get("/api/profile").status_code == 401
        assert client.put("/api/profile", json={"full_name": "Nobody"}).status_code == 401

    def test_change_password_then_login_with_new_one(self, client: TestClient, register_user):
        register_user(email="frank@example.com", password="password123")
        login = client.post("/api/auth/login", json={"email": "frank@example.com", "password": "password123"})
        headers = {"Authorization": f"Bearer {login.json()['data']['token']['token']}"}

        response = client.put(
            "/api/profile/password",
            json={"current_password": "password123", "new_password": "even-better-pass"},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["message"]["key"] == "profile.passwordChanged"
        old = client.post("/api/auth/login", json={"email": "frank@example.com", "password": "password123"})
        new = client.post("/api/auth/login", json={"email": "frank@example.com", "password": "even-better-pass"})
        assert old.status_code == 401
        assert new.status_code == 200

    def test_change_password_with_wrong_current_password(self, client: TestClient, register_user):
        _, headers = register_user(password="password123")

        response = client.put(
            "/api/profile/password",
            json={"current_password": "guess-guess", "new_password": "even-better-pass"},
            headers=headers,
        )

        assert response.status_code == 400
        assert response.json()["message"]["key"] == "profile.errors.invalidCurrentPassword"
