# =============================================================================
# core/repositories/memory.py - In-Process Storage
# =============================================================================
# Dict-backed repositories for local development and tests. State lives on
# the repository instance, which the application lifespan creates and
# discards, so every app instance starts empty.
# =============================================================================

import logging
from itertools import count
from typing import Any

from app.exceptions import UniqueViolationError
from core.models import Product, ProductCreate, ProductQuery, Role, User
from lib.utils import utc_now

logger = logging.getLogger(__name__)


class InMemoryProductRepository:
    """Products held in a dict keyed by id."""

    def __init__(self):
        self._rows: dict[int, Product] = {}
        self._ids = count(1)

    def _matches(self, product: Product, keyword: str | None) -> bool:
        if not keyword:
            return True
        needle = keyword.casefold()
        return needle in product.title.casefold() or needle in product.description.casefold()

    def list(self, query: ProductQuery) -> tuple[list[Product], int]:
        rows = [p for p in self._rows.values() if self._matches(p, query.keyword)]

        # Secondary key first: sorts are stable, so equal primary keys keep
        # ascending id order in both directions.
        rows.sort(key=lambda p: p.id)
        column = query.sort.column
        rows.sort(key=lambda p: getattr(p, column), reverse=query.descending)

        total = len(rows)
        page = rows[query.offset:query.offset + query.limit]
        return [p.model_copy() for p in page], total

    def get(self, product_id: int) -> Product | None:
        product = self._rows.get(product_id)
        return product.model_copy() if product else None

    def create(self, data: ProductCreate) -> Product:
        now = utc_now()
        product = Product(id=next(self._ids), created_at=now, updated_at=now, **data.model_dump())
        self._rows[product.id] = product
        logger.debug(f"Stored product {product.id}")
        return product.model_copy()

    def update(self, product_id: int, changes: dict[str, Any]) -> Product | None:
        current = self._rows.get(product_id)
        if current is None:
            return None
        updated = current.model_copy(update={**changes, "updated_at": utc_now()})
        self._rows[product_id] = updated
        return updated.model_copy()

    def delete(self, product_id: int) -> Product | None:
        product = self._rows.pop(product_id, None)
        return product.model_copy() if product else None

    def count(self) -> int:
        return len(self._rows)

    def ping(self) -> None:
        return None

    def close(self) -> None:
        self._rows.clear()


class InMemoryUserRepository:
    """Accounts held in a dict keyed by id, with a unique email index."""

    def __init__(self):
        self._rows: dict[int, User] = {}
        self._by_email: dict[str, int] = {}
        self._ids = count(1)

    def get_by_id(self, user_id: int) -> User | None:
        return self._rows.get(user_id)

    def get_by_email(self, email: str) -> User | None:
        user_id = self._by_email.get(email.lower())
        return self._rows.get(user_id) if user_id is not None else None

    def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
        is_active: bool = True,
    ) -> User:
        key = email.lower()
        if key in self._by_email:
            raise UniqueViolationError("email", email)

        user = User(
            id=next(self._ids),
            name=name,
            email=key,
            password_hash=password_hash,
            role=role,
            is_active=is_active,
            created_at=utc_now(),
        )
        self._rows[user.id] = user
        self._by_email[key] = user.id
        return user

    def close(self) -> None:
        self._rows.clear()
        self._by_email.clear()
