# =============================================================================
# lib/ - Standalone Client Modules
# =============================================================================
# This package contains reusable clients for external services:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - auth0_client.py: Auth0 Management API client (users)
# - utils.py: Shared utilities (error base class, timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.auth0_client import Auth0ClientError, Auth0ManagementClient, get_management_client
from lib.utils import ApplicationError, drop_none, utc_now_iso

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Auth0
    "Auth0ClientError",
    "Auth0ManagementClient",
    "get_management_client",
    # Utils
    "ApplicationError",
    "drop_none",
    "utc_now_iso",
]
