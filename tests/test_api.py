"""API tests: routes, status mapping and bearer auth through FastAPI's TestClient."""

import unittest

from fastapi.testclient import TestClient

from app.core.database import get_db
from app.main import app
from tests.support import make_service, memory_sessionmaker

PREFIX = "/api/v1"


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.SessionLocal = memory_sessionmaker()

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def _register(self, username="alice", email="alice@x.com", password="secret1"):
        return self.client.post(
            f"{PREFIX}/auth/register",
            json={"username": username, "email": email, "password": password},
        )

    def _login(self, email="alice@x.com", password="secret1"):
        return self.client.post(f"{PREFIX}/auth/login", json={"email": email, "password": password})

    def _auth(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}


class TestRegisterAndLogin(ApiTestCase):
    def test_register_created(self) -> None:
        resp = self._register()
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["user"]["username"], "alice")
        self.assertEqual(body["user"]["role"], "common")
        self.assertEqual(body["token_type"], "bearer")
        self.assertEqual(body["expires_in"], 24 * 3600)
        self.assertTrue(body["access_token"])
        self.assertNotIn("password_hash", body["user"])

    def test_duplicate_email_is_400(self) -> None:
        self._register()
        resp = self._register(username="alice2", email="ALICE@x.com", password="secret2")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"detail": "Email is already registered."})

    def test_duplicate_username_is_400(self) -> None:
        self._register()
        resp = self._register(username="Alice", email="other@x.com")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"detail": "Username is already taken."})

    def test_validation_is_400(self) -> None:
        resp = self._register(username="al")
        self.assertEqual(resp.status_code, 400)

    def test_overlong_input_is_400(self) -> None:
        overlong = {
            "username": "a" * 300,
            "email": "a" * 300 + "@x.com",
            "password": "p" * 200,
        }
        for field, value in overlong.items():
            with self.subTest(field=field):
                payload = {"username": "alice", "email": "alice@x.com", "password": "secret1"}
                payload[field] = value
                resp = self.client.post(f"{PREFIX}/auth/register", json=payload)
                self.assertEqual(resp.status_code, 400)

    def test_missing_field_is_422(self) -> None:
        resp = self.client.post(f"{PREFIX}/auth/register", json={"username": "alice"})
        self.assertEqual(resp.status_code, 422)

    def test_login(self) -> None:
        user_id = self._register().json()["user"]["id"]
        resp = self._login()
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["id"], user_id)

    def test_login_failures_share_message(self) -> None:
        self._register()
        wrong_pw = self._login(password="wrongpw")
        unknown = self._login(email="nobody@x.com")
        self.assertEqual(wrong_pw.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong_pw.json(), unknown.json())


class TestProfileRoutes(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.token = self._register().json()["access_token"]

    def test_me_requires_token(self) -> None:
        resp = self.client.get(f"{PREFIX}/users/me")
        self.assertEqual(resp.status_code, 401)

    def test_me_rejects_bad_token(self) -> None:
        resp = self.client.get(f"{PREFIX}/users/me", headers=self._auth("not-a-token"))
        self.assertEqual(resp.status_code, 401)

    def test_me(self) -> None:
        resp = self.client.get(f"{PREFIX}/users/me", headers=self._auth(self.token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], "alice@x.com")

    def test_update_me(self) -> None:
        resp = self.client.put(
            f"{PREFIX}/users/me",
            json={"username": "alice2"},
            headers=self._auth(self.token),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["username"], "alice2")
        self.assertEqual(resp.json()["email"], "alice@x.com")

    def test_change_password(self) -> None:
        resp = self.client.put(
            f"{PREFIX}/users/me/password",
            json={"current_password": "secret1", "new_password": "secret2"},
            headers=self._auth(self.token),
        )
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(self._login(password="secret2").status_code, 200)

    def test_change_password_same_is_400(self) -> None:
        resp = self.client.put(
            f"{PREFIX}/users/me/password",
            json={"current_password": "secret1", "new_password": "secret1"},
            headers=self._auth(self.token),
        )
        self.assertEqual(resp.status_code, 400)

    def test_change_password_wrong_current_is_401(self) -> None:
        resp = self.client.put(
            f"{PREFIX}/users/me/password",
            json={"current_password": "nope123", "new_password": "secret2"},
            headers=self._auth(self.token),
        )
        self.assertEqual(resp.status_code, 401)

    def test_delete_me(self) -> None:
        resp = self.client.request(
            "DELETE",
            f"{PREFIX}/users/me",
            json={"password": "secret1"},
            headers=self._auth(self.token),
        )
        self.assertEqual(resp.status_code, 204)
        # The token outlives the account; the profile is simply gone.
        resp = self.client.get(f"{PREFIX}/users/me", headers=self._auth(self.token))
        self.assertEqual(resp.status_code, 404)


class TestListUsersRoute(ApiTestCase):
    def test_common_user_forbidden(self) -> None:
        token = self._register().json()["access_token"]
        resp = self.client.get(f"{PREFIX}/users", headers=self._auth(token))
        self.assertEqual(resp.status_code, 403)

    def test_admin_lists_newest_first(self) -> None:
        db = self.SessionLocal()
        try:
            make_service(db).register("root", "root@x.com", "rootpw1", role="admin")
        finally:
            db.close()
        self._register()
        token = self._login(email="root@x.com", password="rootpw1").json()["access_token"]
        resp = self.client.get(f"{PREFIX}/users", headers=self._auth(token))
        self.assertEqual(resp.status_code, 200)
        usernames = [u["username"] for u in resp.json()["users"]]
        self.assertEqual(usernames, ["alice", "root"])


class TestHealth(ApiTestCase):
    def test_health(self) -> None:
        resp = self.client.get(f"{PREFIX}/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["database"], "connected")
        self.assertEqual(resp.json()["status"], "ok")


if __name__ == "__main__":
    unittest.main()
