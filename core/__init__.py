# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the catalog and account logic:
# - models/: Pydantic schemas for data validation
# - repositories/: Storage protocols plus Supabase and in-memory backends
# - services/: Product and account operations on top of a repository
# - seed.py: Demonstration products and the bootstrap admin account
#
# Routing and request parsing live in app/; services receive plain values
# and repositories, never Request objects.
# =============================================================================
