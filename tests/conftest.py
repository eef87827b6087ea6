"""
MockAPI — Test Configuration (conftest.py)
===========================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── sample_products: Small product collection covering every filter/sort case
    ├── sample_posts:    Posts owned by two users
    ├── store:           CollectionStore built from the samples
    ├── test_settings:   Settings with simulated latency switched off
    └── test_client:     HTTPX AsyncClient wired to a fresh app
"""

import os

# Override settings BEFORE any mockapi import creates the singleton
os.environ["LATENCY_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENVIRONMENT"] = "test"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mockapi.config import Settings
from mockapi.store import CollectionStore


@pytest.fixture
def sample_products():
    """
    Five products:
        - two share a price (stability checks)
        - one is on sale and out of stock
        - one has no tags and no description
    """
    return [
        {
            "id": 1,
            "categoryId": "a",
            "name": "Zeta",
            "description": "Plain widget",
            "tags": ["basic"],
            "price": 50,
            "originalPrice": 50,
            "inStock": True,
            "rating": 3,
            "createdAt": "2023-01-01",
        },
        {
            "id": 2,
            "categoryId": "a",
            "name": "Alpha",
            "description": "Discounted gadget",
            "tags": ["Sale", "Gadget"],
            "price": 20,
            "originalPrice": 40,
            "inStock": False,
            "rating": 4,
            "createdAt": "2023-06-01",
        },
        {
            "id": 3,
            "categoryId": "b",
            "name": "mango",
            "description": "Fresh fruit",
            "tags": ["food"],
            "price": 20,
            "originalPrice": 25,
            "inStock": True,
            "rating": 4,
            "createdAt": "2023-03-15T12:00:00Z",
        },
        {
            "id": 4,
            "categoryId": "b",
            "name": "Kiwi",
            "price": 5,
            "originalPrice": 5,
            "inStock": True,
            "rating": 2,
            "createdAt": "2024-01-01T00:00:00+02:00",
        },
        {
            "id": 5,
            "categoryId": 1,
            "name": "Banana",
            "description": "Yellow WIDGET-shaped fruit",
            "tags": None,
            "price": 1,
            "originalPrice": 2,
            "inStock": True,
            "rating": 5,
            "createdAt": "not-a-date",
        },
    ]


@pytest.fixture
def sample_posts():
    return [
        {"id": 1, "userId": 1, "title": "First"},
        {"id": 2, "userId": 2, "title": "Second"},
        {"id": 3, "userId": 1, "title": "Third"},
    ]


@pytest.fixture
def store(sample_products, sample_posts):
    return CollectionStore(
        {
            "products": sample_products,
            "posts": sample_posts,
            "users": [{"id": 1, "name": "Maya"}, {"id": 2, "name": "Jonas"}],
            "movies": [
                {"id": 1, "title": "Arrival", "genre": "Sci-Fi", "watched": True},
                {"id": 2, "title": "Parasite", "genre": "Drama", "watched": False},
                {"id": 3, "title": "Whiplash", "genre": "Drama", "watched": True},
            ],
            "cart": [],
        }
    )


@pytest.fixture
def test_settings():
    return Settings(latency_enabled=False, log_level="WARNING")


@pytest_asyncio.fixture
async def test_client(test_settings, store):
    """
    HTTPX AsyncClient talking to an app with the sample store injected.

    ASGITransport does not run the lifespan, so the store is passed to
    create_app directly.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/health")
            assert response.status_code == 200
    """
    from mockapi.main import create_app

    app = create_app(config=test_settings, store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
