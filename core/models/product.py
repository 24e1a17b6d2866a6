# =============================================================================
# core/models/product.py - Product Schemas
# =============================================================================
# These models define the API contract for catalog operations:
# - Product: a stored catalog record as returned to clients
# - ProductCreate / ProductUpdate: write payloads checked before storage
# - ProductQuery: list parameters (paging, sorting, keyword search)
# - Pagination: metadata returned alongside a list page
#
# Wire names are camelCase (createdAt, itemsPerPage); Python attributes and
# database columns stay snake_case.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lib.utils import is_valid_url, page_offset, total_pages


# Title characters accepted by the catalog (letters, digits, spaces, - and _)
TITLE_PATTERN = r"^[a-zA-Z0-9\s\-_]+$"

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> dict[str, Any]:
        """JSON-ready dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True)


class Product(CamelModel):
    """
    A catalog record.

    Example:
        {
            "id": 7,
            "title": "Mouse",
            "description": "Wireless mouse",
            "price": 19.99,
            "image": "https://x.com/m.jpg",
            "createdAt": "2025-06-19T20:01:40Z",
            "updatedAt": "2025-06-19T20:01:40Z"
        }
    """

    id: int = Field(..., ge=1, description="Server-generated identifier")
    title: str = Field(..., description="Product title")
    description: str = Field(..., description="Product description")
    price: float = Field(..., ge=0, description="Price (non-negative)")
    image: str = Field(..., description="Image URL")
    created_at: datetime | None = Field(default=None, description="Creation time")
    updated_at: datetime | None = Field(default=None, description="Last modification time")


class ProductCreate(BaseModel):
    """
    Payload for creating a product.

    All four fields are required. Price strings such as "19.99" are
    coerced to floats.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, pattern=TITLE_PATTERN)
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    image: str = Field(..., min_length=1)

    @field_validator("image")
    @classmethod
    def _image_is_url(cls, value: str) -> str:
        if not is_valid_url(value):
            raise ValueError("Image must be a valid URL")
        return value


class ProductUpdate(BaseModel):
    """
    Partial update payload.

    Only the fields present in the request are applied; use
    `model_dump(exclude_unset=True)` to get the changes. An explicit null is
    rejected since every stored field is non-null.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH, pattern=TITLE_PATTERN)
    description: str | None = Field(default=None, min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    image: str | None = Field(default=None, min_length=1)

    @field_validator("title", "description", "price", "image", mode="before")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @field_validator("image")
    @classmethod
    def _image_is_url(cls, value: str | None) -> str | None:
        if value is not None and not is_valid_url(value):
            raise ValueError("Image must be a valid URL")
        return value

    def changes(self) -> dict[str, Any]:
        """Fields explicitly provided by the client."""
        return self.model_dump(exclude_unset=True)


class ProductSortField(str, Enum):
    """Fields a product list can be ordered by (wire names)."""
    ID = "id"
    TITLE = "title"
    PRICE = "price"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

    @property
    def column(self) -> str:
        """Storage column / attribute name for this sort field."""
        return {
            "createdAt": "created_at",
            "updatedAt": "updated_at",
        }.get(self.value, self.value)


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class ProductQuery(BaseModel):
    """
    List parameters for GET /api/products.

    Defaults: page 1, 10 per page, newest first, no keyword filter.
    """

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    sort: ProductSortField = Field(default=ProductSortField.CREATED_AT)
    order: SortOrder = Field(default=SortOrder.DESC)
    keyword: str | None = Field(default=None, min_length=1, max_length=50)

    @property
    def offset(self) -> int:
        return page_offset(self.page, self.limit)

    @property
    def descending(self) -> bool:
        return self.order == SortOrder.DESC


class Pagination(CamelModel):
    """Pagination metadata returned with a product list page."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def from_counts(cls, page: int, limit: int, total_items: int) -> "Pagination":
        pages = total_pages(total_items, limit)
        return cls(
            current_page=page,
            total_pages=pages,
            total_items=total_items,
            items_per_page=limit,
            has_next_page=page < pages,
            has_prev_page=page > 1,
        )
