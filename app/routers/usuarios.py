# =============================================================================
# app/routers/usuarios.py - Auth0 User Management Endpoints
# =============================================================================
# Proxy to the Auth0 Management API. Every endpoint requires a bearer token
# plus usuarios:read (GET) or usuarios:write (POST/PATCH/DELETE).
#
# Responses served from mock data (Auth0 credentials not configured) carry
# the header "X-Mock-Data: true".
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from app.auth import AuthUser, require_permission
from core.models.usuario import UsuarioCreate, UsuarioResponse, UsuarioUpdate
from core.permissions import Permission
from core.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

MOCK_HEADER = "X-Mock-Data"

CanRead = Annotated[AuthUser, Depends(require_permission(Permission.USUARIOS_READ))]
CanWrite = Annotated[AuthUser, Depends(require_permission(Permission.USUARIOS_WRITE))]


def _flag_mock(response: Response) -> None:
    if UserService.using_mock():
        response.headers[MOCK_HEADER] = "true"


@router.get("", response_model=list[UsuarioResponse], response_model_by_alias=True)
async def list_users(
    response: Response,
    user: CanRead,
    page: Annotated[int, Query(ge=0, description="Zero-based page")] = 0,
    per_page: Annotated[int, Query(ge=1, le=100, description="Users per page")] = 100,
    q: Annotated[str | None, Query(description="Auth0 search query (Lucene syntax)")] = None,
):
    """List users of the tenant."""
    _flag_mock(response)
    return UserService.list_users(page=page, per_page=per_page, q=q or None)


@router.get("/{user_id}", response_model=UsuarioResponse, response_model_by_alias=True)
async def get_user(user_id: str, response: Response, user: CanRead):
    """Get one user. Ids like auth0|123 may be sent URL-encoded."""
    _flag_mock(response)
    return UserService.get_user(user_id)


@router.post("", status_code=201, response_model=UsuarioResponse, response_model_by_alias=True)
async def create_user(payload: UsuarioCreate, response: Response, user: CanWrite):
    """Create a user. app_metadata may be an object or a JSON string."""
    _flag_mock(response)
    logger.info(f"User {user.sub} creating user {payload.email}")
    return UserService.create_user(payload)


@router.patch("/{user_id}", response_model=UsuarioResponse, response_model_by_alias=True)
async def update_user(user_id: str, payload: UsuarioUpdate, response: Response, user: CanWrite):
    _flag_mock(response)
    logger.info(f"User {user.sub} updating user {user_id}")
    return UserService.update_user(user_id, payload)


@router.delete("/{user_id}")
async def delete_user(user_id: str, response: Response, user: CanWrite):
    _flag_mock(response)
    logger.info(f"User {user.sub} deleting user {user_id}")
    message = UserService.delete_user(user_id)
    return {"success": True, "message": message}
