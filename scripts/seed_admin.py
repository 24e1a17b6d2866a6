#!/usr/bin/env python3
# =============================================================================
# scripts/seed_admin.py - Create the Admin Account
# =============================================================================
# Ensures an admin account exists in the configured storage. Does nothing if
# the email is already registered.
#
# Usage:
#   python scripts/seed_admin.py <email> <password> [name]
#   python scripts/seed_admin.py                      # Uses ADMIN_EMAIL / ADMIN_PASSWORD
#
# Prerequisites:
#   - STORAGE_BACKEND=supabase with SUPABASE_URL / SUPABASE_SERVICE_KEY set
#     (the memory backend forgets the account when this script exits)
# =============================================================================

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import settings
from core.repositories import build_repositories
from core.seed import seed_admin_account


def main():
    """Create the admin account from argv or settings."""
    args = sys.argv[1:]
    email = args[0] if len(args) > 0 else settings.ADMIN_EMAIL
    password = args[1] if len(args) > 1 else settings.ADMIN_PASSWORD
    name = args[2] if len(args) > 2 else settings.ADMIN_NAME

    if not email or not password:
        print("Usage: python scripts/seed_admin.py <email> <password> [name]")
        print("Or set ADMIN_EMAIL and ADMIN_PASSWORD in your .env file")
        sys.exit(1)

    if settings.STORAGE_BACKEND == "memory":
        print("WARNING: STORAGE_BACKEND=memory, the account will not persist")

    _, users = build_repositories(settings)
    user = seed_admin_account(users, name=name, email=email, password=password)

    print("=" * 60)
    print(f"Account:  {user.email}")
    print(f"Role:     {user.role.value}")
    print(f"Active:   {user.is_active}")
    print("=" * 60)


if __name__ == "__main__":
    main()
