from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from signon.core.config import Settings
from signon.db.session import Database


class FakeHasher:
    """Deterministic stand-in for the Argon2 hasher so tests stay fast."""

    def hash(self, password: str) -> str:
        return "fake$" + password[::-1]

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == self.hash(password)


@pytest.fixture()
def fake_hasher() -> FakeHasher:
    return FakeHasher()


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'signon.sqlite3'}"


@pytest.fixture()
def settings(tmp_path: Path, database_url: str) -> Settings:
    return Settings(database_url=database_url, static_dir=tmp_path / "static", log_level="debug")


@pytest_asyncio.fixture()
async def database(database_url: str) -> AsyncIterator[Database]:
    db = Database(database_url)
    await db.initialize()
    try:
        yield db
    finally:
        await db.dispose()


@pytest_asyncio.fixture()
async def session(database: Database) -> AsyncIterator[AsyncSession]:
    async with database.session() as session:
        yield session
