import httpx
import pytest
from httpx import ASGITransport

from menu_scraper.config import Settings


@pytest.fixture
def settings():
    return Settings(environment="", node_env="", supabase_env="", _env_file=None)


@pytest.fixture
def dev_settings():
    return Settings(environment="development", node_env="", supabase_env="", _env_file=None)


@pytest.fixture
def no_dev_env(monkeypatch):
    for name in ("ENVIRONMENT", "NODE_ENV", "SUPABASE_ENV"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
async def client(no_dev_env):
    from menu_scraper.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c
