# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Runs the app on the in-memory storage backend (fresh per client)
# - Provides account/token/product fixtures for API tests
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-pytest-only")
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_PASSWORD", None)

import pytest
from fastapi.testclient import TestClient


# =============================================================================
# Helpers
# =============================================================================

def auth_header(token: str) -> dict[str, str]:
    """Authorization header for a bearer token."""
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    """
    Test client with the application lifespan running.

    Entering the client starts the lifespan, which builds new in-memory
    repositories, so every test starts with an empty catalog.
    """
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def product_payload():
    """A valid product create body."""
    return {
        "title": "Mouse",
        "description": "Wireless mouse",
        "price": 19.99,
        "image": "https://x.com/m.jpg",
    }


@pytest.fixture
def user_token(client):
    """Token for a freshly registered regular account."""
    response = client.post(
        "/api/auth/register",
        json={"name": "Ann Lee", "email": "ann@x.com", "password": "Abcdef1"},
    )
    assert response.status_code == 201
    return response.json()["data"]["token"]


@pytest.fixture
def admin_token(client):
    """Token for an admin account created directly in storage."""
    from app.auth.security import create_access_token, hash_password
    from core.models import Role

    admin = client.app.state.users.create(
        name="Admin User",
        email="admin@prodmanager.com",
        password_hash=hash_password("Admin123!"),
        role=Role.ADMIN,
    )
    return create_access_token(admin.id, admin.role.value)


@pytest.fixture
def make_products(client):
    """Factory inserting n products straight into storage."""
    from core.models import ProductCreate

    def _make(n: int, **overrides):
        created = []
        for i in range(n):
            data = {
                "title": f"Product {i + 1}",
                "description": f"Description for product {i + 1}",
                "price": float(i + 1),
                "image": f"https://img.example.com/{i + 1}.jpg",
            }
            data.update(overrides)
            created.append(client.app.state.products.create(ProductCreate(**data)))
        return created

    return _make
