# =============================================================================
# app/pipeline/rules.py - Route Rule Sets
# =============================================================================
# Field rules for every route that accepts input. Messages are client-facing.
# =============================================================================

from core.models import ProductSortField, Role, SortOrder
from core.models.product import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, TITLE_PATTERN

from .validator import (
    FieldRule,
    IsEmail,
    IsInteger,
    IsNumber,
    IsUrl,
    Length,
    Location,
    Matches,
    OneOf,
)

# -----------------------------------------------------------------------------
# Accounts
# -----------------------------------------------------------------------------

NAME_PATTERN = r"^[a-zA-Z\s]+$"
# At least one lower-case letter, one upper-case letter and one digit
PASSWORD_PATTERN = r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)"

REGISTER_RULES = (
    FieldRule(
        "name",
        Length(2, 50, message="Name must be between 2 and 50 characters"),
        Matches(NAME_PATTERN, message="Name must contain only letters and spaces"),
    ),
    FieldRule("email", IsEmail()),
    FieldRule(
        "password",
        Length(6, 100, message="Password must be between 6 and 100 characters"),
        Matches(
            PASSWORD_PATTERN,
            message="Password must contain at least one uppercase letter, one lowercase letter, and one number",
        ),
    ),
    FieldRule(
        "role",
        OneOf([role.value for role in Role], message="Role must be either user or admin"),
        optional=True,
    ),
)

LOGIN_RULES = (
    FieldRule("email", IsEmail()),
    FieldRule("password", Length(1, message="Password is required")),
)

# -----------------------------------------------------------------------------
# Products
# -----------------------------------------------------------------------------

_TITLE_CHECKS = (
    Length(1, TITLE_MAX_LENGTH, message=f"Title must be between 1 and {TITLE_MAX_LENGTH} characters"),
    Matches(
        TITLE_PATTERN,
        message="Title can only contain letters, numbers, spaces, hyphens, and underscores",
    ),
)
_DESCRIPTION_CHECKS = (
    Length(
        1,
        DESCRIPTION_MAX_LENGTH,
        message=f"Description must be between 1 and {DESCRIPTION_MAX_LENGTH} characters",
    ),
)
_PRICE_CHECKS = (IsNumber(min=0, message="Price must be a positive number"),)
_IMAGE_CHECKS = (IsUrl(message="Image must be a valid URL"),)

PRODUCT_CREATE_RULES = (
    FieldRule("title", *_TITLE_CHECKS),
    FieldRule("description", *_DESCRIPTION_CHECKS),
    FieldRule("price", *_PRICE_CHECKS),
    FieldRule("image", *_IMAGE_CHECKS),
)

PRODUCT_UPDATE_RULES = (
    FieldRule("title", *_TITLE_CHECKS, optional=True),
    FieldRule("description", *_DESCRIPTION_CHECKS, optional=True),
    FieldRule("price", *_PRICE_CHECKS, optional=True),
    FieldRule("image", *_IMAGE_CHECKS, optional=True),
)

PRODUCT_ID_RULES = (
    FieldRule("id", IsInteger(min=1, message="ID must be a positive integer"), location=Location.PARAM),
)

PRODUCT_QUERY_RULES = (
    FieldRule(
        "page",
        IsInteger(min=1, message="Page must be a positive integer"),
        location=Location.QUERY,
        optional=True,
    ),
    FieldRule(
        "limit",
        IsInteger(min=1, max=100, message="Limit must be between 1 and 100"),
        location=Location.QUERY,
        optional=True,
    ),
    FieldRule(
        "sort",
        OneOf(
            [field.value for field in ProductSortField],
            message="Sort field must be one of: id, title, price, createdAt, updatedAt",
        ),
        location=Location.QUERY,
        optional=True,
    ),
    FieldRule(
        "order",
        OneOf([order.value for order in SortOrder], message="Order must be either ASC or DESC"),
        location=Location.QUERY,
        optional=True,
    ),
    FieldRule(
        "keyword",
        Length(1, 50, message="Keyword must be between 1 and 50 characters"),
        location=Location.QUERY,
        optional=True,
    ),
)
