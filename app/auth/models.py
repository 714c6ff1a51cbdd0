# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field

from core.permissions import Permission, Role, has_permission


class AuthUser(BaseModel):
    """
    Authenticated caller extracted from the Auth0 access token.

    rol, permisos and empresas come from the token's app_metadata claim;
    permisos are already resolved against the role defaults.
    """

    model_config = ConfigDict(frozen=True)

    sub: str
    email: str | None = None
    rol: str = Role.USUARIO.value
    permisos: list[str] = Field(default_factory=list)
    empresas: list[str] = Field(default_factory=list)

    def can(self, permission: str | Permission) -> bool:
        return has_permission(self.permisos, permission)

    @property
    def allowed_companies(self) -> list[str] | None:
        """Company ids the caller may see; None means all (admin:all)."""
        if self.can(Permission.ADMIN_ALL):
            return None
        return list(self.empresas)


class MeResponse(BaseModel):
    """Response for GET /auth/me."""

    sub: str
    email: str | None = None
    rol: str
    permisos: list[str]
    empresas: list[str]
    capabilities: dict[str, bool]
