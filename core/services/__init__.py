# =============================================================================
# core/services/ - Business Logic Services
# =============================================================================
# - product_service.py: Catalog CRUD, pagination metadata
# - auth_service.py: Registration, login, bootstrap accounts
# =============================================================================

from .auth_service import AuthService
from .product_service import ProductService

__all__ = [
    "AuthService",
    "ProductService",
]
