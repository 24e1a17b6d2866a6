# =============================================================================
# core/repositories/supabase.py - Postgres Storage via Supabase
# =============================================================================
# Repositories backed by PostgREST tables. Expected schema:
#
#   products(id bigint identity primary key, title text, description text,
#            price double precision, image text,
#            created_at timestamptz default now(), updated_at timestamptz default now())
#   accounts(id bigint identity primary key, name text, email text unique,
#            password_hash text, role text default 'user',
#            is_active boolean default true, created_at timestamptz default now())
#
# See db/schema.sql for the full DDL.
# =============================================================================

import logging
from typing import Any

from supabase import Client

from core.models import Product, ProductCreate, ProductQuery, Role, User
from lib.supabase_client import SupabaseClient, translate_storage_errors
from lib.utils import utc_now

logger = logging.getLogger(__name__)


def _quote_filter_value(value: str) -> str:
    """Quote a value for a PostgREST or=() filter so commas and parens are literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _contains_pattern(keyword: str) -> str:
    """
    ilike pattern matching keyword as a literal substring.

    % and _ are escaped so they match themselves, as in the in-memory
    backend. PostgREST still reads * as a wildcard.
    """
    literal = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{literal}%"


class SupabaseProductRepository:
    """Products stored in a Postgres table."""

    def __init__(self, client: Client, table: str = "products"):
        self._client = client
        self._table = table

    def _query(self):
        return self._client.table(self._table)

    def list(self, query: ProductQuery) -> tuple[list[Product], int]:
        request = self._query().select("*", count="exact")

        if query.keyword:
            pattern = _quote_filter_value(_contains_pattern(query.keyword))
            request = request.or_(f"title.ilike.{pattern},description.ilike.{pattern}")

        request = (
            request
            .order(query.sort.column, desc=query.descending)
            .order("id")
            .range(query.offset, query.offset + query.limit - 1)
        )

        with translate_storage_errors("list products"):
            response = request.execute()

        rows = response.data or []
        total = response.count if response.count is not None else len(rows)
        return [Product.model_validate(row) for row in rows], total

    def get(self, product_id: int) -> Product | None:
        with translate_storage_errors("fetch product"):
            response = (
                self._query()
                .select("*")
                .eq("id", product_id)
                .limit(1)
                .execute()
            )
        rows = response.data or []
        return Product.model_validate(rows[0]) if rows else None

    def create(self, data: ProductCreate) -> Product:
        with translate_storage_errors("insert product"):
            response = self._query().insert(data.model_dump()).execute()

        if not response.data:
            raise RuntimeError("Insert returned no data")

        product = Product.model_validate(response.data[0])
        logger.info(f"Created product: {product.id}")
        return product

    def update(self, product_id: int, changes: dict[str, Any]) -> Product | None:
        row = {**changes, "updated_at": utc_now().isoformat()}
        with translate_storage_errors("update product"):
            response = (
                self._query()
                .update(row)
                .eq("id", product_id)
                .execute()
            )
        rows = response.data or []
        return Product.model_validate(rows[0]) if rows else None

    def delete(self, product_id: int) -> Product | None:
        with translate_storage_errors("delete product"):
            response = (
                self._query()
                .delete()
                .eq("id", product_id)
                .execute()
            )
        rows = response.data or []
        return Product.model_validate(rows[0]) if rows else None

    def count(self) -> int:
        with translate_storage_errors("count products"):
            response = self._query().select("id", count="exact").limit(1).execute()
        return response.count or 0

    def ping(self) -> None:
        with translate_storage_errors("ping"):
            self._query().select("id").limit(1).execute()

    def close(self) -> None:
        SupabaseClient.reset()


class SupabaseUserRepository:
    """Accounts stored in a Postgres table with a unique email column."""

    def __init__(self, client: Client, table: str = "accounts"):
        self._client = client
        self._table = table

    def _first(self, column: str, value: Any) -> User | None:
        with translate_storage_errors("fetch account"):
            response = (
                self._client.table(self._table)
                .select("*")
                .eq(column, value)
                .limit(1)
                .execute()
            )
        rows = response.data or []
        return User.model_validate(rows[0]) if rows else None

    def get_by_id(self, user_id: int) -> User | None:
        return self._first("id", user_id)

    def get_by_email(self, email: str) -> User | None:
        return self._first("email", email.lower())

    def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
        is_active: bool = True,
    ) -> User:
        row = {
            "name": name,
            "email": email.lower(),
            "password_hash": password_hash,
            "role": role.value,
            "is_active": is_active,
        }
        with translate_storage_errors("insert account"):
            response = self._client.table(self._table).insert(row).execute()

        if not response.data:
            raise RuntimeError("Insert returned no data")

        user = User.model_validate(response.data[0])
        logger.info(f"Created account: {user.id} ({user.role.value})")
        return user

    def close(self) -> None:
        SupabaseClient.reset()
