# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - product.py: Product record, write payloads, list query, pagination
# - user.py: Account record, roles, public view, auth result
# - envelope.py: The uniform response wrapper and field error record
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Product Models - Catalog records
# -----------------------------------------------------------------------------
from .product import (
    CamelModel,
    Pagination,
    Product,
    ProductCreate,
    ProductQuery,
    ProductSortField,
    ProductUpdate,
    SortOrder,
)

# -----------------------------------------------------------------------------
# User Models - Accounts and roles
# -----------------------------------------------------------------------------
from .user import (
    AuthResult,
    Role,
    User,
    UserPublic,
)

# -----------------------------------------------------------------------------
# Envelope Models - Response wrapper
# -----------------------------------------------------------------------------
from .envelope import (
    Envelope,
    FieldError,
)

__all__ = [
    # Product
    "CamelModel",
    "Pagination",
    "Product",
    "ProductCreate",
    "ProductQuery",
    "ProductSortField",
    "ProductUpdate",
    "SortOrder",
    # User
    "AuthResult",
    "Role",
    "User",
    "UserPublic",
    # Envelope
    "Envelope",
    "FieldError",
]
