from __future__ import annotations

import unittest

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.db import Base, build_engine, get_db
from app.main import app


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    """Fresh in-memory SQLite schema per test."""

    async def asyncSetUp(self) -> None:
        self.engine = build_engine(
            "sqlite+aiosqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)

    async def asyncTearDown(self) -> None:
        await self.engine.dispose()


class ApiTestCase(DatabaseTestCase):
    """Drives the app over ASGI with ``get_db`` bound to the test database."""

    async def asyncSetUp(self) -> None:
        await super().asyncSetUp()

        async def _get_test_db():
            async with self.session_factory() as session:
                yield session

        app.dependency_overrides[get_db] = _get_test_db
        self.client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")

    async def asyncTearDown(self) -> None:
        await self.client.aclose()
        app.dependency_overrides.clear()
        await super().asyncTearDown()

    async def register(self, username: str) -> tuple[int, dict]:
        resp = await self.client.post(
            "/api/auth/register",
            json={"username": username, "email": f"{username}@example.com", "password": "secret123"},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        body = resp.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['token']}"}

    async def create_board(self, headers: dict, name: str = "Board") -> dict:
        resp = await self.client.post("/api/boards", json={"name": name}, headers=headers)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    async def create_column(self, headers: dict, board_id: int, name: str) -> dict:
        resp = await self.client.post("/api/columns", json={"board_id": board_id, "name": name}, headers=headers)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    async def create_task(self, headers: dict, column_id: int, title: str) -> dict:
        resp = await self.client.post("/api/tasks", json={"column_id": column_id, "title": title}, headers=headers)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    async def invite(self, headers: dict, board_id: int, username: str) -> httpx.Response:
        return await self.client.post(
            "/api/members/invite",
            json={"board_id": board_id, "email": f"{username}@example.com"},
            headers=headers,
        )
