import os

# Settings are read at import time; point the app at a throwaway database first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["RATE_LIMIT_PER_MINUTE"] = "20"

import pytest
from fastapi.testclient import TestClient

from app.schemas.product import ProductCreate
from app.services.product_repository import open_repository

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"
RATE_LIMIT = 20


def make_product(**overrides) -> ProductCreate:
    values = {
        "name": "Test Product",
        "price": 10.0,
        "description": "created by test",
        "category": "test",
        "stock": 1,
    }
    values.update(overrides)
    return ProductCreate(**values)


@pytest.fixture()
async def repository():
    async with open_repository(TEST_DB_URL) as repo:
        yield repo


@pytest.fixture()
def client():
    from app.api.products import limiter
    from app.main import app

    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
