"""HTTP tests for user management and first-run setup."""

import threading
import time
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from api_support import ADMIN, OPERATOR, clear_overrides, make_client, quick_hash, sign_in
from app.api.routes import setup as setup_routes
from app.core.security import (
    ROLE_ADMINISTRATOR,
    ROLE_OPERATOR,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    verify_password,
)
from app.main import app
from app.services.users import count_users
from fake_store import FakeStore


class UsersApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        rounds = patch("app.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)
        self.store = FakeStore()
        self.client = make_client(self.store)

    def tearDown(self) -> None:
        clear_overrides()


class TestListUsers(UsersApiTestCase):
    def test_admin_lists_users_without_hashes(self) -> None:
        self.store.add("users", username="zoe", password_hash=quick_hash("secret1"), role=ROLE_OPERATOR)
        self.store.add("users", username="anna", password_hash=quick_hash("secret2"), role=ROLE_ADMINISTRATOR)
        sign_in(self.client, ADMIN)
        resp = self.client.get("/api/users")
        self.assertEqual(resp.status_code, 200)
        users = resp.json()
        self.assertEqual([u["username"] for u in users], ["anna", "zoe"])
        for u in users:
            self.assertEqual(set(u), {"id", "username", "role"})

    def test_operator_forbidden(self) -> None:
        sign_in(self.client, OPERATOR)
        self.assertEqual(self.client.get("/api/users").status_code, 403)


class TestCreateUser(UsersApiTestCase):
    def test_password_is_stored_hashed(self) -> None:
        sign_in(self.client, ADMIN)
        resp = self.client.post(
            "/api/users",
            json={"username": "referee", "password": "whistle1", "role": ROLE_OPERATOR},
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["role"], ROLE_OPERATOR)
        self.assertNotIn("password_hash", resp.json())
        row = self.store.rows("users")[0]
        self.assertNotEqual(row["password_hash"], "whistle1")
        self.assertTrue(verify_password("whistle1", row["password_hash"]))

    def test_duplicate_username_is_409(self) -> None:
        self.store.add("users", username="referee", password_hash=quick_hash("whistle1"), role=ROLE_OPERATOR)
        sign_in(self.client, ADMIN)
        resp = self.client.post(
            "/api/users",
            json={"username": "referee", "password": "another1", "role": ROLE_OPERATOR},
        )
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["detail"], "Username already exists")

    def test_other_store_errors_are_500(self) -> None:
        sign_in(self.client, ADMIN)
        self.store.fail_next("permission denied for table users", code="42501")
        resp = self.client.post(
            "/api/users",
            json={"username": "referee", "password": "whistle1", "role": ROLE_OPERATOR},
        )
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["detail"], "permission denied for table users")

    def test_short_username_or_password_is_400(self) -> None:
        sign_in(self.client, ADMIN)
        short_name = self.client.post(
            "/api/users", json={"username": "abc", "password": "whistle1", "role": ROLE_OPERATOR}
        )
        short_pass = self.client.post(
            "/api/users", json={"username": "referee", "password": "12345", "role": ROLE_OPERATOR}
        )
        self.assertEqual(short_name.status_code, 400)
        self.assertEqual(short_pass.status_code, 400)
        self.assertEqual(self.store.rows("users"), [])

    def test_long_username_reports_allowed_range(self) -> None:
        sign_in(self.client, ADMIN)
        resp = self.client.post(
            "/api/users",
            json={"username": "x" * (USERNAME_MAX_LEN + 1), "password": "whistle1", "role": ROLE_OPERATOR},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], f"Username must be {USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} characters.")

    def test_unknown_role_rejected(self) -> None:
        sign_in(self.client, ADMIN)
        resp = self.client.post(
            "/api/users", json={"username": "referee", "password": "whistle1", "role": "superuser"}
        )
        self.assertEqual(resp.status_code, 422)

    def test_created_user_can_log_in(self) -> None:
        sign_in(self.client, ADMIN)
        self.client.post(
            "/api/users",
            json={"username": "referee", "password": "whistle1", "role": ROLE_OPERATOR},
        )
        self.client.cookies.clear()
        resp = self.client.post("/api/login", json={"username": "referee", "password": "whistle1"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["role"], ROLE_OPERATOR)


class TestUpdateAndDeleteUser(UsersApiTestCase):
    def test_promote_and_change_password(self) -> None:
        row = self.store.add("users", username="referee", password_hash=quick_hash("whistle1"), role=ROLE_OPERATOR)
        sign_in(self.client, ADMIN)
        resp = self.client.put(
            f"/api/users/{row['id']}",
            json={"role": ROLE_ADMINISTRATOR, "password": "newpass1"},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["role"], ROLE_ADMINISTRATOR)
        stored = self.store.rows("users")[0]
        self.assertTrue(verify_password("newpass1", stored["password_hash"]))

    def test_update_unknown_user_is_404(self) -> None:
        sign_in(self.client, ADMIN)
        self.assertEqual(
            self.client.put("/api/users/404", json={"role": ROLE_OPERATOR}).status_code, 404
        )

    def test_delete_user(self) -> None:
        row = self.store.add("users", username="referee", password_hash=quick_hash("whistle1"), role=ROLE_OPERATOR)
        sign_in(self.client, ADMIN)
        self.assertEqual(self.client.delete(f"/api/users/{row['id']}").status_code, 200)
        self.assertEqual(self.store.rows("users"), [])
        self.assertEqual(self.client.delete(f"/api/users/{row['id']}").status_code, 404)


class TestSetup(UsersApiTestCase):
    def test_status_reflects_user_table(self) -> None:
        self.assertEqual(self.client.get("/api/setup").json(), {"has_users": False})
        self.store.add("users", username="admin", password_hash=quick_hash("admin-pass"), role=ROLE_ADMINISTRATOR)
        self.assertEqual(self.client.get("/api/setup").json(), {"has_users": True})

    def test_first_administrator_created_without_session(self) -> None:
        resp = self.client.post("/api/setup", json={"username": "admin", "password": "admin-pass"})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["role"], ROLE_ADMINISTRATOR)
        login = self.client.post("/api/login", json={"username": "admin", "password": "admin-pass"})
        self.assertEqual(login.json()["role"], ROLE_ADMINISTRATOR)

    def test_setup_validates_lengths(self) -> None:
        resp = self.client.post("/api/setup", json={"username": "adm", "password": "admin-pass"})
        self.assertEqual(resp.status_code, 400)

    def test_later_setup_requires_administrator(self) -> None:
        self.store.add("users", username="admin", password_hash=quick_hash("admin-pass"), role=ROLE_ADMINISTRATOR)
        body = {"username": "second", "password": "second-pass"}

        self.assertEqual(self.client.post("/api/setup", json=body).status_code, 401)
        sign_in(self.client, OPERATOR)
        self.assertEqual(self.client.post("/api/setup", json=body).status_code, 403)
        sign_in(self.client, ADMIN)
        self.assertEqual(self.client.post("/api/setup", json=body).status_code, 201)
        self.assertEqual(len(self.store.rows("users")), 2)

    def test_concurrent_first_setup_creates_one_administrator(self) -> None:
        def slow_count(store):
            # Widen the gap between the emptiness check and the insert.
            count = count_users(store)
            time.sleep(0.2)
            return count

        statuses: list[int] = []

        def attempt(username: str) -> None:
            client = TestClient(app)
            resp = client.post("/api/setup", json={"username": username, "password": "admin-pass"})
            statuses.append(resp.status_code)

        with patch.object(setup_routes, "count_users", slow_count):
            threads = [threading.Thread(target=attempt, args=(name,)) for name in ("first", "second")]
            for t in threads:
                t.start()
            for t in threads:
                t.join(timeout=10)

        self.assertEqual(sorted(statuses), [201, 401])
        self.assertEqual(len(self.store.rows("users")), 1)

    def test_duplicate_setup_username_is_409(self) -> None:
        self.store.add("users", username="admin", password_hash=quick_hash("admin-pass"), role=ROLE_ADMINISTRATOR)
        sign_in(self.client, ADMIN)
        resp = self.client.post("/api/setup", json={"username": "admin", "password": "other-pass"})
        self.assertEqual(resp.status_code, 409)


if __name__ == "__main__":
    unittest.main()
