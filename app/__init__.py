# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App entry point, lifespan, middleware, routers
# - config.py: Environment variable loading and settings
# - exceptions.py: Exception taxonomy and the error normalizer
# - pipeline/: Sanitize / validate / authenticate / authorize stages
# - auth/: Tokens, password hashing and auth routes
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
