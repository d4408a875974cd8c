import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from restdemo.api.main import create_app
from restdemo.store.registry import StoreRegistry


@pytest.fixture
def stores():
    return StoreRegistry()


@pytest.fixture
def app(stores):
    return create_app(stores=stores)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def async_client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
