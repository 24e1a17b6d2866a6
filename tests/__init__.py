# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the ProdManager API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_pipeline.py: Sanitizer, validator, authorizer and pipeline ordering
# - test_security.py: Password hashing and access tokens
# - test_repositories.py: In-memory and Supabase storage backends
# - test_errors.py: Error normalizer
# - test_auth_api.py / test_products_api.py: Endpoint integration tests
#
# Run tests with: pytest
# =============================================================================
