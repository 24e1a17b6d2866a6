# =============================================================================
# core/seed.py - Startup Seeding
# =============================================================================
# - seed_demo_products: three demonstration products, only into an empty
#   catalog
# - seed_admin_account: the bootstrap admin, only if the email is unused
# =============================================================================

import logging

from core.models import ProductCreate, Role, User
from core.repositories import ProductRepository, UserRepository
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)


DEMO_PRODUCTS = [
    {
        "title": "MacBook Pro",
        "description": "High-performance laptop for professionals",
        "price": 1999.99,
        "image": "https://images.unsplash.com/photo-1541807084-5c52b6b3adef?w=400",
    },
    {
        "title": "iPhone 15",
        "description": "Latest smartphone with advanced features",
        "price": 999.99,
        "image": "https://images.unsplash.com/photo-1592750475338-74b7b21085ab?w=400",
    },
    {
        "title": "AirPods Pro",
        "description": "Wireless earbuds with noise cancellation",
        "price": 249.99,
        "image": "https://images.unsplash.com/photo-1606220838315-056192d5e927?w=400",
    },
]


def seed_demo_products(products: ProductRepository) -> int:
    """
    Insert the demonstration products if the catalog is empty.

    Returns:
        Number of products inserted (0 when the catalog already has data)
    """
    if products.count() > 0:
        return 0

    for item in DEMO_PRODUCTS:
        products.create(ProductCreate(**item))

    logger.info(f"Seeded {len(DEMO_PRODUCTS)} demo products")
    return len(DEMO_PRODUCTS)


def seed_admin_account(users: UserRepository, name: str, email: str, password: str) -> User:
    """Make sure an admin account exists for email."""
    user = AuthService(users).ensure_account(name=name, email=email, password=password, role=Role.ADMIN)
    if user.role != Role.ADMIN:
        logger.warning(f"Account {email} already exists with role '{user.role.value}', not promoted")
    else:
        logger.info(f"Admin account ready: {user.email}")
    return user
