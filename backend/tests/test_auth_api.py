import unittest

from support import ApiTestCase


class TestAuthApi(ApiTestCase):
    async def test_register_login_and_me(self) -> None:
        user_id, _ = await self.register("alice")

        resp = await self.client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})
        self.assertEqual(resp.status_code, 200)
        token = resp.json()["token"]

        me = await self.client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["id"], user_id)
        self.assertNotIn("password_hash", me.json())

    async def test_duplicate_username_conflicts(self) -> None:
        await self.register("alice")
        resp = await self.client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "other@example.com", "password": "secret123"},
        )
        self.assertEqual(resp.status_code, 409)

    async def test_email_uniqueness_ignores_case(self) -> None:
        resp = await self.client.post(
            "/api/auth/register",
            json={"username": "bob", "email": "Bob@Example.com", "password": "secret123"},
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["user"]["email"], "bob@example.com")

        resp = await self.client.post(
            "/api/auth/register",
            json={"username": "bobby", "email": "bob@example.com", "password": "secret123"},
        )
        self.assertEqual(resp.status_code, 409)

    async def test_bad_password_is_unauthorized(self) -> None:
        await self.register("alice")
        resp = await self.client.post("/api/auth/login", json={"username": "alice", "password": "nope"})
        self.assertEqual(resp.status_code, 401)

    async def test_missing_or_invalid_token(self) -> None:
        self.assertEqual((await self.client.get("/api/boards")).status_code, 401)
        resp = await self.client.get("/api/boards", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(resp.status_code, 401)

    async def test_validation_errors_are_400(self) -> None:
        resp = await self.client.post("/api/auth/register", json={"username": "al"})
        self.assertEqual(resp.status_code, 400)

    async def test_health(self) -> None:
        resp = await self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")


if __name__ == "__main__":
    unittest.main()
