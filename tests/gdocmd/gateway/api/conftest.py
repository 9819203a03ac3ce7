import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient

from gdocmd.gateway import create_app
from gdocmd.gateway.config import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(chars_per_page=3000, log_dir=str(tmp_path / "logs"), cors_origins=["*"])


@pytest.fixture
def app(settings) -> FastAPI:
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        yield client
