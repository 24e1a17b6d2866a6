# =============================================================================
# core/services/product_service.py - Product Business Logic
# =============================================================================
# Handles catalog CRUD on top of an injected ProductRepository.
# Separates HTTP concerns from storage logic.
#
# "Not found" is detected here and raised as ProductNotFoundError before any
# write is attempted; every other storage failure propagates unchanged.
# =============================================================================

import logging
from typing import Any

from app.exceptions import ProductNotFoundError
from core.models import Pagination, Product, ProductCreate, ProductQuery, ProductUpdate
from core.repositories import ProductRepository

logger = logging.getLogger(__name__)


class ProductService:
    """
    Service for catalog operations.

    Provides a clean interface between API routes and storage.
    """

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def list_products(self, query: ProductQuery) -> tuple[list[Product], Pagination]:
        """
        List one page of products.

        Args:
            query: Paging, sorting and keyword parameters

        Returns:
            Tuple of (products on the page, pagination metadata)
        """
        products, total = self.repository.list(query)
        pagination = Pagination.from_counts(query.page, query.limit, total)
        return products, pagination

    def get_product(self, product_id: int) -> Product:
        """
        Get a product by ID.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        product = self.repository.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def create_product(self, payload: dict[str, Any]) -> Product:
        """
        Create a product from a request body.

        The payload is checked again by ProductCreate (required fields,
        bounds, URL) and price is coerced to a float.

        Raises:
            pydantic.ValidationError: If a field is missing or out of bounds
        """
        data = ProductCreate.model_validate(payload)
        product = self.repository.create(data)
        logger.info(f"Created product: {product.id} ({product.title})")
        return product

    def update_product(self, product_id: int, payload: dict[str, Any]) -> Product:
        """
        Partially update a product.

        Only fields present in the payload change; absent fields keep their
        stored values.

        Raises:
            ProductNotFoundError: If the product doesn't exist
            pydantic.ValidationError: If a provided field is invalid
        """
        current = self.get_product(product_id)
        changes = ProductUpdate.model_validate(payload).changes()

        if not changes:
            return current  # Nothing to update

        updated = self.repository.update(product_id, changes)
        if updated is None:
            # Deleted between the lookup and the write
            raise ProductNotFoundError(product_id)

        logger.info(f"Updated product: {product_id} ({', '.join(sorted(changes))})")
        return updated

    def delete_product(self, product_id: int) -> Product:
        """
        Delete a product and return its last snapshot.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        self.get_product(product_id)
        deleted = self.repository.delete(product_id)
        if deleted is None:
            raise ProductNotFoundError(product_id)

        logger.info(f"Deleted product: {product_id}")
        return deleted
