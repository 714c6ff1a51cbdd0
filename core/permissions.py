# =============================================================================
# core/permissions.py - Roles and Permissions
# =============================================================================
# Static role -> permission tables and the helpers that read them.
#
# Roles and permissions are stored in Auth0 app_metadata as plain strings
# ("contador", "contabilidad:write"), so the enums below are str-valued and
# compare equal to those strings.
#
# Usage:
#   from core.permissions import Permission, has_permission
#   if has_permission(user.permisos, Permission.FINANZAS_WRITE): ...
# =============================================================================

from enum import Enum
from typing import Any, Iterable


class Role(str, Enum):
    """
    User roles, from most to least privileged.

    - super_admin: full system access across all companies
    - admin_empresa: administrator of the assigned companies
    - contador: accountant, read/write on ledgers and finances
    - usuario: read-only access
    """
    SUPER_ADMIN = "super_admin"
    ADMIN_EMPRESA = "admin_empresa"
    CONTADOR = "contador"
    USUARIO = "usuario"


class Permission(str, Enum):
    """Permission strings granted to users."""
    ADMIN_ALL = "admin:all"
    EMPRESAS_READ = "empresas:read"
    EMPRESAS_WRITE = "empresas:write"
    CONTABILIDAD_READ = "contabilidad:read"
    CONTABILIDAD_WRITE = "contabilidad:write"
    FINANZAS_READ = "finanzas:read"
    FINANZAS_WRITE = "finanzas:write"
    USUARIOS_READ = "usuarios:read"
    USUARIOS_WRITE = "usuarios:write"


# Roles that always carry admin:all
ADMIN_ROLES = frozenset({Role.SUPER_ADMIN.value, Role.ADMIN_EMPRESA.value})

_ALL_PERMISSIONS = [p.value for p in Permission]

ROLE_PERMISSIONS: dict[str, list[str]] = {
    Role.SUPER_ADMIN.value: list(_ALL_PERMISSIONS),
    Role.ADMIN_EMPRESA.value: list(_ALL_PERMISSIONS),
    Role.CONTADOR.value: [
        Permission.EMPRESAS_READ.value,
        Permission.CONTABILIDAD_READ.value,
        Permission.CONTABILIDAD_WRITE.value,
        Permission.FINANZAS_READ.value,
        Permission.FINANZAS_WRITE.value,
    ],
    Role.USUARIO.value: [
        Permission.EMPRESAS_READ.value,
        Permission.CONTABILIDAD_READ.value,
        Permission.FINANZAS_READ.value,
    ],
}

ROLE_LEVELS: dict[str, int] = {
    Role.SUPER_ADMIN.value: 4,
    Role.ADMIN_EMPRESA.value: 3,
    Role.CONTADOR.value: 2,
    Role.USUARIO.value: 1,
}

ROLE_DESCRIPTIONS: dict[str, str] = {
    Role.SUPER_ADMIN.value: "Acceso completo al sistema",
    Role.ADMIN_EMPRESA.value: "Administrador de empresa",
    Role.CONTADOR.value: "Acceso a funciones contables",
    Role.USUARIO.value: "Acceso básico al sistema",
}

PERMISSION_DESCRIPTIONS: dict[str, str] = {
    Permission.ADMIN_ALL.value: "Administración Total",
    Permission.EMPRESAS_READ.value: "Ver Empresas",
    Permission.EMPRESAS_WRITE.value: "Gestionar Empresas",
    Permission.CONTABILIDAD_READ.value: "Ver Contabilidad",
    Permission.CONTABILIDAD_WRITE.value: "Editar Contabilidad",
    Permission.FINANZAS_READ.value: "Ver Finanzas",
    Permission.FINANZAS_WRITE.value: "Gestionar Finanzas",
    Permission.USUARIOS_READ.value: "Ver Usuarios",
    Permission.USUARIOS_WRITE.value: "Gestionar Usuarios",
}

PERMISSION_CATEGORIES: dict[str, list[str]] = {
    "Administración": [Permission.ADMIN_ALL.value],
    "Empresas": [Permission.EMPRESAS_READ.value, Permission.EMPRESAS_WRITE.value],
    "Contabilidad": [Permission.CONTABILIDAD_READ.value, Permission.CONTABILIDAD_WRITE.value],
    "Finanzas": [Permission.FINANZAS_READ.value, Permission.FINANZAS_WRITE.value],
    "Usuarios": [Permission.USUARIOS_READ.value, Permission.USUARIOS_WRITE.value],
}


def _value(item: str | Enum) -> str:
    return item.value if isinstance(item, Enum) else item


def _with_admin_all(role: str, permissions: list[str]) -> list[str]:
    if role in ADMIN_ROLES and Permission.ADMIN_ALL.value not in permissions:
        return [Permission.ADMIN_ALL.value, *permissions]
    return permissions


def get_permissions_for_role(role: str | Role) -> list[str]:
    """
    Default permissions for a role.

    Unknown roles get an empty list. Admin roles always include admin:all.
    """
    role = _value(role)
    return _with_admin_all(role, list(ROLE_PERMISSIONS.get(role, [])))


def has_permission(permissions: Iterable[str], permission: str | Permission) -> bool:
    """True if permission is held, or admin:all is held."""
    held = {_value(p) for p in permissions}
    return Permission.ADMIN_ALL.value in held or _value(permission) in held


def has_role(role: str | Role | None, required_role: str | Role) -> bool:
    """True if role ranks at or above required_role. Unknown roles rank 0."""
    user_level = ROLE_LEVELS.get(_value(role), 0) if role else 0
    return user_level >= ROLE_LEVELS.get(_value(required_role), 0)


def resolve_permissions(role: str | None, permissions: Iterable[str] | None) -> list[str]:
    """
    Effective permissions for a user record.

    Explicit permissions win; an empty list falls back to the role defaults.
    """
    explicit = [_value(p) for p in permissions or []]
    if not explicit:
        return get_permissions_for_role(role or Role.USUARIO.value)
    return _with_admin_all(role or "", explicit)


def build_app_metadata(
    role: str | Role,
    permissions: Iterable[str],
    companies: list[str],
    subdomain: str | None = None,
) -> dict[str, Any]:
    """
    Build the Auth0 app_metadata payload for a user.

    Example:
        build_app_metadata("contador", ["contabilidad:read"], ["emp-1"])
        # {"app_metadata": {"rol": "contador", "permisos": [...],
        #                   "empresas": ["emp-1"], "subdominio": "emp-1"}}
    """
    role = _value(role)
    final_permissions = _with_admin_all(role, [_value(p) for p in permissions])
    return {
        "app_metadata": {
            "rol": role,
            "permisos": final_permissions,
            "empresas": list(companies),
            "subdominio": subdomain or (companies[0] if companies else ""),
        }
    }


def capabilities(permissions: Iterable[str]) -> dict[str, bool]:
    """UI capability flags derived from a permission list."""
    held = list(permissions)
    can = {
        "view_contabilidad": has_permission(held, Permission.CONTABILIDAD_READ),
        "edit_contabilidad": has_permission(held, Permission.CONTABILIDAD_WRITE),
        "view_finanzas": has_permission(held, Permission.FINANZAS_READ),
        "edit_finanzas": has_permission(held, Permission.FINANZAS_WRITE),
        "view_empresas": has_permission(held, Permission.EMPRESAS_READ),
        "edit_empresas": has_permission(held, Permission.EMPRESAS_WRITE),
        "view_usuarios": has_permission(held, Permission.USUARIOS_READ),
        "edit_usuarios": has_permission(held, Permission.USUARIOS_WRITE),
    }
    result = {f"can_{name}": value for name, value in can.items()}
    result["is_admin"] = has_permission(held, Permission.ADMIN_ALL)
    return result


def role_catalog() -> list[dict[str, Any]]:
    """Roles with description, level and default permissions, highest first."""
    return [
        {
            "rol": role.value,
            "descripcion": ROLE_DESCRIPTIONS[role.value],
            "nivel": ROLE_LEVELS[role.value],
            "permisos": get_permissions_for_role(role),
        }
        for role in Role
    ]


def permission_catalog() -> list[dict[str, Any]]:
    """Permissions with description and category."""
    category_of = {
        permission: category
        for category, members in PERMISSION_CATEGORIES.items()
        for permission in members
    }
    return [
        {
            "permiso": permission.value,
            "descripcion": PERMISSION_DESCRIPTIONS[permission.value],
            "categoria": category_of[permission.value],
        }
        for permission in Permission
    ]
