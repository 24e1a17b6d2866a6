# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns the process-wide Supabase client and the translation of
# PostgREST/transport failures into the API's exception taxonomy:
#
#   Postgres 23505 (unique_violation)      -> UniqueViolationError(field)
#   Postgres 23503 (foreign_key_violation) -> ForeignKeyViolationError
#   httpx transport errors                 -> StorageUnavailableError
#
# Anything else is re-raised untouched and surfaces as a 500.
#
# Usage:
#   from lib.supabase_client import SupabaseClient, translate_storage_errors
#
#   client = SupabaseClient.get_client()
#   with translate_storage_errors("insert product"):
#       client.table("products").insert(row).execute()
# =============================================================================

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Iterator

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from app.config import settings
from app.exceptions import ForeignKeyViolationError, StorageUnavailableError, UniqueViolationError

# Set up logging for this module
logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

# Postgres detail text: 'Key (email)=(ann@x.com) already exists.'
_KEY_DETAIL = re.compile(r"Key \((?P<field>[^)]+)\)=\((?P<value>.*)\)")


class SupabaseClient:
    """
    Singleton holder for the Supabase client.

    One client instance is shared across the application. All methods are
    class methods for easy access without instantiation.
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses the service_role key, which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            StorageUnavailableError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                logger.error(f"Failed to create Supabase client: {e}")
                raise StorageUnavailableError(str(e)) from e
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used on shutdown)."""
        cls._instance = None


def _key_detail(error: APIError) -> tuple[str | None, str | None]:
    for text in (error.details, error.message):
        if text:
            match = _KEY_DETAIL.search(str(text))
            if match:
                return match.group("field"), match.group("value")
    return None, None


@contextmanager
def translate_storage_errors(operation: str) -> Iterator[None]:
    """
    Map storage failures raised inside the block to API exceptions.

    Args:
        operation: Short description used in log lines (e.g. "list products")
    """
    try:
        yield
    except APIError as e:
        if e.code == UNIQUE_VIOLATION:
            field, value = _key_detail(e)
            raise UniqueViolationError(field or "value", value) from e
        if e.code == FOREIGN_KEY_VIOLATION:
            raise ForeignKeyViolationError(details={"operation": operation}) from e
        logger.error(f"Storage error during {operation}: {e.code} {e.message}")
        raise
    except httpx.TransportError as e:
        logger.error(f"Storage unreachable during {operation}: {e}")
        raise StorageUnavailableError(str(e)) from e
