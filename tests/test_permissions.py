# =============================================================================
# tests/test_permissions.py - Role/Permission Table Tests
# =============================================================================
# Run with: poetry run pytest tests/test_permissions.py -v
# =============================================================================

import pytest

from core.permissions import (
    Permission,
    Role,
    build_app_metadata,
    capabilities,
    get_permissions_for_role,
    has_permission,
    has_role,
    permission_catalog,
    resolve_permissions,
    role_catalog,
)


ALL_PERMISSIONS = {p.value for p in Permission}


class TestGetPermissionsForRole:
    """Default permission sets."""

    @pytest.mark.parametrize("role", ["super_admin", "admin_empresa"])
    def test_admin_roles_get_everything(self, role):
        permissions = get_permissions_for_role(role)
        assert set(permissions) == ALL_PERMISSIONS
        assert "admin:all" in permissions

    def test_contador(self):
        assert get_permissions_for_role("contador") == [
            "empresas:read",
            "contabilidad:read",
            "contabilidad:write",
            "finanzas:read",
            "finanzas:write",
        ]

    def test_usuario(self):
        assert get_permissions_for_role(Role.USUARIO) == [
            "empresas:read",
            "contabilidad:read",
            "finanzas:read",
        ]

    def test_unknown_role_is_empty(self):
        assert get_permissions_for_role("auditor") == []

    def test_result_is_a_copy(self):
        get_permissions_for_role("usuario").append("usuarios:write")
        assert "usuarios:write" not in get_permissions_for_role("usuario")


class TestHasPermission:

    def test_held_permission(self):
        assert has_permission(["finanzas:read"], "finanzas:read")

    def test_missing_permission(self):
        assert not has_permission(["finanzas:read"], "finanzas:write")

    def test_admin_all_grants_everything(self):
        assert has_permission(["admin:all"], Permission.USUARIOS_WRITE)

    def test_empty_list(self):
        assert not has_permission([], "empresas:read")


class TestHasRole:

    def test_higher_role_satisfies_lower(self):
        assert has_role("admin_empresa", "contador")

    def test_same_role(self):
        assert has_role("contador", Role.CONTADOR)

    def test_lower_role_fails(self):
        assert not has_role("usuario", "contador")

    def test_unknown_or_missing_role_ranks_zero(self):
        assert not has_role("auditor", "usuario")
        assert not has_role(None, "usuario")


class TestResolvePermissions:

    def test_explicit_permissions_win(self):
        assert resolve_permissions("contador", ["finanzas:read"]) == ["finanzas:read"]

    def test_empty_falls_back_to_role(self):
        assert resolve_permissions("contador", []) == get_permissions_for_role("contador")

    def test_no_role_falls_back_to_usuario(self):
        assert resolve_permissions(None, None) == get_permissions_for_role("usuario")

    def test_admin_role_gets_admin_all(self):
        assert resolve_permissions("admin_empresa", ["empresas:read"])[0] == "admin:all"


class TestBuildAppMetadata:

    def test_shape(self):
        result = build_app_metadata("contador", ["contabilidad:read"], ["emp-1", "emp-2"])
        assert result == {
            "app_metadata": {
                "rol": "contador",
                "permisos": ["contabilidad:read"],
                "empresas": ["emp-1", "emp-2"],
                "subdominio": "emp-1",
            }
        }

    def test_admin_gets_admin_all_prepended(self):
        metadata = build_app_metadata("super_admin", ["empresas:read"], [])["app_metadata"]
        assert metadata["permisos"] == ["admin:all", "empresas:read"]

    def test_admin_all_not_duplicated(self):
        metadata = build_app_metadata("admin_empresa", ["admin:all"], [])["app_metadata"]
        assert metadata["permisos"] == ["admin:all"]

    def test_subdomain_defaults_to_empty(self):
        assert build_app_metadata("usuario", [], [])["app_metadata"]["subdominio"] == ""

    def test_explicit_subdomain(self):
        metadata = build_app_metadata("usuario", [], ["emp-1"], subdomain="acme")["app_metadata"]
        assert metadata["subdominio"] == "acme"


class TestCapabilities:

    def test_read_only_user(self):
        caps = capabilities(get_permissions_for_role("usuario"))
        assert caps["can_view_contabilidad"]
        assert not caps["can_edit_contabilidad"]
        assert not caps["can_view_usuarios"]
        assert not caps["is_admin"]

    def test_admin(self):
        caps = capabilities(["admin:all"])
        assert all(caps.values())


class TestCatalogs:

    def test_role_catalog_is_ordered_by_level(self):
        levels = [entry["nivel"] for entry in role_catalog()]
        assert levels == [4, 3, 2, 1]

    def test_role_catalog_entry(self):
        contador = next(r for r in role_catalog() if r["rol"] == "contador")
        assert contador["descripcion"] == "Acceso a funciones contables"
        assert "contabilidad:write" in contador["permisos"]

    def test_every_permission_has_a_category(self):
        catalog = permission_catalog()
        assert {p["permiso"] for p in catalog} == ALL_PERMISSIONS
        assert all(p["categoria"] for p in catalog)
        admin = next(p for p in catalog if p["permiso"] == "admin:all")
        assert admin["categoria"] == "Administración"
