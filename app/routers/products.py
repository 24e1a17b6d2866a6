# =============================================================================
# app/routers/products.py - Product CRUD Endpoints
# =============================================================================
# GET    /api/products        public, paginated list
# GET    /api/products/{id}   public
# POST   /api/products        any authenticated role
# PUT    /api/products/{id}   any authenticated role, partial update
# DELETE /api/products/{id}   admin only
#
# Each endpoint runs its pipeline (sanitize -> validate -> authenticate ->
# authorize) before the handler. Storage failures are not caught here.
# =============================================================================

from fastapi import APIRouter, Request
from starlette.responses import Response

from app.dependencies import get_product_service
from app.exceptions import envelope_response
from app.pipeline import Pipeline, RequestContext, authenticate, require_roles, sanitize, validate
from app.pipeline.rules import (
    PRODUCT_CREATE_RULES,
    PRODUCT_ID_RULES,
    PRODUCT_QUERY_RULES,
    PRODUCT_UPDATE_RULES,
)
from core.models import ProductQuery, Role

router = APIRouter()

QUERY_FIELDS = ("page", "limit", "sort", "order", "keyword")

any_role = require_roles(Role.USER, Role.ADMIN)
admin_only = require_roles(Role.ADMIN)

list_pipeline = Pipeline(sanitize, validate(*PRODUCT_QUERY_RULES))
get_pipeline = Pipeline(sanitize, validate(*PRODUCT_ID_RULES))
create_pipeline = Pipeline(sanitize, validate(*PRODUCT_CREATE_RULES), authenticate, any_role)
update_pipeline = Pipeline(sanitize, validate(*PRODUCT_ID_RULES, *PRODUCT_UPDATE_RULES), authenticate, any_role)
delete_pipeline = Pipeline(sanitize, validate(*PRODUCT_ID_RULES), authenticate, admin_only)


def _product_id(context: RequestContext) -> int:
    return int(context.params["id"])


# =============================================================================
# Endpoints
# =============================================================================

@router.get("")
async def list_products(request: Request) -> Response:
    """
    List products with pagination, sorting and keyword search.

    Query: page (>=1), limit (1-100), sort (id|title|price|createdAt|updatedAt),
    order (ASC|DESC), keyword (matches title or description, case-insensitive).
    """
    return await list_pipeline.run(request, _list_products)


async def _list_products(context: RequestContext) -> Response:
    query = ProductQuery.model_validate(
        {name: context.query[name] for name in QUERY_FIELDS if name in context.query}
    )
    products, pagination = get_product_service(context.request).list_products(query)
    return envelope_response(
        200,
        "Products fetched successfully",
        data=[product.to_json() for product in products],
        pagination=pagination.to_json(),
    )


@router.get("/{id}")
async def get_product(request: Request) -> Response:
    """Get a single product. 404 if it doesn't exist."""
    return await get_pipeline.run(request, _get_product)


async def _get_product(context: RequestContext) -> Response:
    product = get_product_service(context.request).get_product(_product_id(context))
    return envelope_response(200, "Product fetched successfully", data=product.to_json())


@router.post("", status_code=201)
async def create_product(request: Request) -> Response:
    """
    Create a product.

    Body: {title, description, price, image}. Requires a bearer token.
    """
    return await create_pipeline.run(request, _create_product)


async def _create_product(context: RequestContext) -> Response:
    product = get_product_service(context.request).create_product(context.body)
    return envelope_response(201, "Product created successfully", data=product.to_json())


@router.put("/{id}")
async def update_product(request: Request) -> Response:
    """
    Partially update a product.

    Only the fields present in the body change. Requires a bearer token.
    """
    return await update_pipeline.run(request, _update_product)


async def _update_product(context: RequestContext) -> Response:
    product = get_product_service(context.request).update_product(_product_id(context), context.body)
    return envelope_response(200, "Product updated successfully", data=product.to_json())


@router.delete("/{id}")
async def delete_product(request: Request) -> Response:
    """Delete a product and return its snapshot. Admin only."""
    return await delete_pipeline.run(request, _delete_product)


async def _delete_product(context: RequestContext) -> Response:
    product = get_product_service(context.request).delete_product(_product_id(context))
    return envelope_response(200, "Product deleted successfully", data=product.to_json())
