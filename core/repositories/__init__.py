# =============================================================================
# core/repositories/ - Storage Backends
# =============================================================================
# - base.py: ProductRepository / UserRepository protocols
# - supabase.py: Postgres tables through the Supabase client
# - memory.py: In-process dicts for development and tests
#
# build_repositories() picks the backend from settings.STORAGE_BACKEND.
# =============================================================================

import logging

from app.config import Settings
from lib.supabase_client import SupabaseClient

from .base import ProductRepository, UserRepository
from .memory import InMemoryProductRepository, InMemoryUserRepository
from .supabase import SupabaseProductRepository, SupabaseUserRepository

logger = logging.getLogger(__name__)


def build_repositories(config: Settings) -> tuple[ProductRepository, UserRepository]:
    """
    Create the product and account repositories for the configured backend.

    Raises:
        StorageUnavailableError: If the Supabase client cannot be created
    """
    if config.STORAGE_BACKEND == "memory":
        logger.info("Using in-memory storage")
        return InMemoryProductRepository(), InMemoryUserRepository()

    client = SupabaseClient.get_client()
    logger.info(f"Using Supabase storage (tables: {config.PRODUCTS_TABLE}, {config.ACCOUNTS_TABLE})")
    return (
        SupabaseProductRepository(client, table=config.PRODUCTS_TABLE),
        SupabaseUserRepository(client, table=config.ACCOUNTS_TABLE),
    )


__all__ = [
    "ProductRepository",
    "UserRepository",
    "InMemoryProductRepository",
    "InMemoryUserRepository",
    "SupabaseProductRepository",
    "SupabaseUserRepository",
    "build_repositories",
]
