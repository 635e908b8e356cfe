import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app

FRONTEND_URL = "http://localhost:5173"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'products.db'}",
        frontend_url=FRONTEND_URL,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def create_product(client):
    """POST a product and return its ``data`` payload."""

    def _create(name: str = "Monitor", price=300, **extra) -> dict:
        r = client.post("/api/products", json={"name": name, "price": price, **extra})
        assert r.status_code == 201, f"unexpected status: {r.status_code}, body: {r.text}"
        return r.json()["data"]

    return _create
