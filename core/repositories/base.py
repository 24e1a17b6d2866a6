# =============================================================================
# core/repositories/base.py - Storage Protocols
# =============================================================================
# Handlers and services depend on these protocols only. The concrete backend
# is chosen once at startup (STORAGE_BACKEND) and owned by the application
# lifespan.
#
# Failure contract for every implementation:
# - missing records are reported as None, never raised
# - unique violations raise UniqueViolationError(field)
# - an unreachable backend raises StorageUnavailableError
# =============================================================================

from typing import Any, Protocol

from core.models import Product, ProductCreate, ProductQuery, Role, User


class ProductRepository(Protocol):
    """Catalog storage."""

    def list(self, query: ProductQuery) -> tuple[list[Product], int]:
        """Return one page of products and the total match count."""
        ...

    def get(self, product_id: int) -> Product | None:
        ...

    def create(self, data: ProductCreate) -> Product:
        ...

    def update(self, product_id: int, changes: dict[str, Any]) -> Product | None:
        """Apply only the given fields; None when the product does not exist."""
        ...

    def delete(self, product_id: int) -> Product | None:
        """Remove and return the deleted snapshot; None when absent."""
        ...

    def count(self) -> int:
        ...

    def ping(self) -> None:
        """Raise StorageUnavailableError when the backend is unreachable."""
        ...

    def close(self) -> None:
        ...


class UserRepository(Protocol):
    """Account storage."""

    def get_by_id(self, user_id: int) -> User | None:
        ...

    def get_by_email(self, email: str) -> User | None:
        ...

    def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
        is_active: bool = True,
    ) -> User:
        ...

    def close(self) -> None:
        ...
