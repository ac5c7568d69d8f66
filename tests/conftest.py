"""
Shared fixtures.

Every test gets its own SQLite file under ``tmp_path`` and fake
e‑mail/image collaborators, so nothing leaves the process.
"""

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from routine_api.app.core.config import Settings
from routine_api.app.core.db import DocumentStore
from routine_api.app.core.deps import Services, build_services
from routine_api.app.core.security import create_access_token
from routine_api.app.main import create_app
from routine_api.app.schemas.user import UserRegister

from .fakes import FakeAssetStorage, FakeEmailTransport


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        secret_key="test-secret",
        database_url=str(tmp_path / "routine.db"),
        app_url="http://app.test",
    )


@pytest.fixture
def store(settings: Settings) -> DocumentStore:
    return DocumentStore(settings.database_url)


@pytest.fixture
def mailer() -> FakeEmailTransport:
    return FakeEmailTransport()


@pytest.fixture
def assets() -> FakeAssetStorage:
    return FakeAssetStorage()


@pytest.fixture
def services(settings, store, mailer, assets) -> Services:
    return build_services(settings, store, mailer=mailer, assets=assets)


@pytest.fixture
def make_user(services: Services):
    """Register a user and return the stored profile."""

    async def _make(name: str = "Jane Doe", email: str = "jane@example.com", password: str = "secret123"):
        return await services.users.register(UserRegister(name=name, email=email, password=password))

    return _make


@pytest.fixture
def app(settings, mailer, assets):
    return create_app(settings, mailer=mailer, assets=assets)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers(settings):
    def _headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user_id, settings)}"}

    return _headers
