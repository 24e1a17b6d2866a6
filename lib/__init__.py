# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Shared Supabase client and storage error translation
# - utils.py: Shared utilities (UTC time, URL checks, pagination math)
#
# Import the submodules directly; supabase_client depends on app settings,
# so it is not loaded here.
# =============================================================================
