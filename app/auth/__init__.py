# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides Auth0 bearer-token authentication and permission checks.
#
# Usage:
#   from app.auth import get_current_user, require_permission, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user": user.sub}
# =============================================================================

from app.auth.dependencies import get_current_user, require_permission, scoped_company
from app.auth.models import AuthUser, MeResponse

__all__ = [
    "get_current_user",
    "require_permission",
    "scoped_company",
    "AuthUser",
    "MeResponse",
]
