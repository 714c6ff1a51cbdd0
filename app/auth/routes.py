# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Actual login is handled by Auth0 client-side.
# These routes are for getting caller info after authentication.
# =============================================================================

import logging
from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, MeResponse
from core.permissions import capabilities

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me", response_model=MeResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> MeResponse:
    """
    Get the current caller's identity and UI capabilities.

    Raises:
        401: If not authenticated
    """
    return MeResponse(
        sub=user.sub,
        email=user.email,
        rol=user.rol,
        permisos=user.permisos,
        empresas=user.empresas,
        capabilities=capabilities(user.permisos),
    )
