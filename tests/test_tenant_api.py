# =============================================================================
# tests/test_tenant_api.py - Company-Scoped Read API Tests
# =============================================================================
# /empresas, /contabilidad and /tesoreria with SupabaseClient mocked out,
# plus the public role catalog.
#
# Run with: poetry run pytest tests/test_tenant_api.py -v
# =============================================================================

from unittest.mock import patch

import pytest

API = "/api/v1"


# =============================================================================
# Empresas
# =============================================================================

@pytest.fixture
def empresas_db():
    with patch("core.services.empresa_service.SupabaseClient") as mock:
        yield mock


class TestEmpresas:

    def test_admin_sees_all(self, client, admin_headers, empresas_db):
        empresas_db.fetch_rows.return_value = [{"id": "emp-1"}, {"id": "emp-2"}]

        response = client.get(f"{API}/empresas", headers=admin_headers)

        assert response.status_code == 200
        assert len(response.json()) == 2
        assert empresas_db.fetch_rows.call_args.kwargs["in_"] is None

    def test_user_sees_assigned_only(self, client, auth_headers, empresas_db):
        empresas_db.fetch_rows.return_value = [{"id": "emp-1"}]

        client.get(f"{API}/empresas", headers=auth_headers(rol="usuario", empresas=["emp-1"]))

        assert empresas_db.fetch_rows.call_args.kwargs["in_"] == {"id": ["emp-1"]}

    def test_user_without_companies(self, client, auth_headers, empresas_db):
        response = client.get(f"{API}/empresas", headers=auth_headers(rol="usuario"))

        assert response.json() == []
        empresas_db.fetch_rows.assert_not_called()

    def test_get_assigned(self, client, auth_headers, empresas_db):
        empresas_db.fetch_row.return_value = {"id": "emp-1", "nombre": "Acme SAC"}

        response = client.get(f"{API}/empresas/emp-1", headers=auth_headers(empresas=["emp-1"]))

        assert response.status_code == 200
        assert response.json()["nombre"] == "Acme SAC"

    def test_get_unassigned_forbidden(self, client, auth_headers, empresas_db):
        response = client.get(f"{API}/empresas/emp-2", headers=auth_headers(empresas=["emp-1"]))

        assert response.status_code == 403
        empresas_db.fetch_row.assert_not_called()

    def test_get_missing(self, client, admin_headers, empresas_db):
        empresas_db.fetch_row.return_value = None

        response = client.get(f"{API}/empresas/nope", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "Empresa not found"

    def test_by_pais(self, client, admin_headers, empresas_db):
        empresas_db.fetch_rows.return_value = []

        response = client.get(f"{API}/empresas/pais/PE", headers=admin_headers)

        assert response.status_code == 200
        assert empresas_db.fetch_rows.call_args.kwargs["filters"] == {"pais_id": "PE"}

    def test_requires_empresas_read(self, client, auth_headers, empresas_db):
        response = client.get(f"{API}/empresas", headers=auth_headers(permisos=["finanzas:read"]))

        assert response.status_code == 403


# =============================================================================
# Contabilidad
# =============================================================================

@pytest.fixture
def contabilidad_db():
    with patch("core.services.contabilidad_service.SupabaseClient") as mock:
        yield mock


def _asiento(asiento_id, fecha, debito, credito):
    return {
        "id": asiento_id,
        "fecha": fecha,
        "estado": "confirmado",
        "empresa_id": "emp-1",
        "movimientos": [
            {"cuenta": "1011", "debito": debito, "credito": 0},
            {"cuenta": "4011", "debito": 0, "credito": credito},
        ],
    }


class TestContabilidad:

    def test_empresa_id_required(self, client, admin_headers, contabilidad_db):
        response = client.get(f"{API}/contabilidad/cuentas", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "empresa_id is required"

    def test_cuentas(self, client, admin_headers, contabilidad_db):
        contabilidad_db.fetch_rows.return_value = [{"codigo": "10"}, {"codigo": "101"}]

        response = client.get(f"{API}/contabilidad/cuentas", headers=admin_headers, params={"empresa_id": "emp-1"})

        assert response.json() == {"data": [{"codigo": "10"}, {"codigo": "101"}], "total": 2}
        contabilidad_db.fetch_rows.assert_called_once_with(
            "plan_cuentas", filters={"empresa_id": "emp-1"}, order_by="codigo"
        )

    def test_cuentas_other_company_forbidden(self, client, auth_headers, contabilidad_db):
        response = client.get(
            f"{API}/contabilidad/cuentas",
            headers=auth_headers(rol="contador", empresas=["emp-1"]),
            params={"empresa_id": "emp-9"},
        )

        assert response.status_code == 403

    def test_asientos_with_totals(self, client, admin_headers, contabilidad_db):
        contabilidad_db.fetch_rows.return_value = [
            _asiento("a2", "2024-03-02", 50, 40),
            _asiento("a1", "2024-03-01", 100.5, 100.5),
        ]

        response = client.get(
            f"{API}/contabilidad/asientos",
            headers=admin_headers,
            params={"empresa_id": "emp-1", "fecha_desde": "2024-03-01", "fecha_hasta": "2024-03-31"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert body["page"] == 1
        assert body["limit"] == 50
        first, second = body["data"]
        assert first["cuadrado"] is False
        assert first["total_debito"] == 50
        assert first["total_credito"] == 40
        assert second["cuadrado"] is True
        kwargs = contabilidad_db.fetch_rows.call_args.kwargs
        assert kwargs["desc"] is True
        assert kwargs["gte"] == {"fecha": "2024-03-01"}
        assert kwargs["lte"] == {"fecha": "2024-03-31"}

    def test_asientos_pagination(self, client, admin_headers, contabilidad_db):
        contabilidad_db.fetch_rows.return_value = [
            _asiento(f"a{i}", "2024-03-01", 1, 1) for i in range(5)
        ]

        response = client.get(
            f"{API}/contabilidad/asientos",
            headers=admin_headers,
            params={"empresa_id": "emp-1", "page": 2, "limit": 2},
        )

        body = response.json()
        assert body["total"] == 5
        assert [a["id"] for a in body["data"]] == ["a2", "a3"]

    def test_requires_contabilidad_read(self, client, auth_headers, contabilidad_db):
        response = client.get(
            f"{API}/contabilidad/asientos",
            headers=auth_headers(permisos=["empresas:read"], empresas=["emp-1"]),
            params={"empresa_id": "emp-1"},
        )

        assert response.status_code == 403


# =============================================================================
# Tesoreria
# =============================================================================

@pytest.fixture
def tesoreria_db():
    with patch("core.services.tesoreria_service.SupabaseClient") as mock:
        yield mock


class TestTesoreria:

    def test_active_accounts(self, client, auth_headers, tesoreria_db):
        tesoreria_db.fetch_rows.return_value = [{"id": "cb-1"}]

        response = client.get(
            f"{API}/tesoreria/cuentas",
            headers=auth_headers(empresas=["emp-1"]),
            params={"empresa_id": "emp-1"},
        )

        assert response.status_code == 200
        assert response.json() == {"data": [{"id": "cb-1"}], "total": 1}
        assert tesoreria_db.fetch_rows.call_args.kwargs["filters"] == {"empresa_id": "emp-1", "activa": True}

    def test_movimientos_newest_first(self, client, admin_headers, tesoreria_db):
        tesoreria_db.fetch_rows.return_value = []

        client.get(f"{API}/tesoreria/movimientos", headers=admin_headers, params={"empresa_id": "emp-1"})

        kwargs = tesoreria_db.fetch_rows.call_args.kwargs
        assert kwargs["order_by"] == "fecha"
        assert kwargs["desc"] is True

    def test_empresa_id_required(self, client, admin_headers, tesoreria_db):
        response = client.get(f"{API}/tesoreria/movimientos", headers=admin_headers)

        assert response.status_code == 400

    def test_requires_finanzas_read(self, client, auth_headers, tesoreria_db):
        response = client.get(
            f"{API}/tesoreria/cuentas",
            headers=auth_headers(permisos=["contabilidad:read"], empresas=["emp-1"]),
            params={"empresa_id": "emp-1"},
        )

        assert response.status_code == 403

    def test_requires_token(self, client, tesoreria_db):
        response = client.get(f"{API}/tesoreria/cuentas", params={"empresa_id": "emp-1"})

        assert response.status_code == 401


# =============================================================================
# Roles, Health, Root
# =============================================================================

class TestPublicEndpoints:

    def test_roles_are_public(self, client):
        response = client.get(f"{API}/roles")

        assert response.status_code == 200
        assert [r["rol"] for r in response.json()] == ["super_admin", "admin_empresa", "contador", "usuario"]

    def test_permisos(self, client):
        response = client.get(f"{API}/roles/permisos")

        assert len(response.json()) == 9

    def test_health(self, client):
        response = client.get(f"{API}/health")

        assert response.json()["status"] == "healthy"

    def test_readiness_degraded(self, client):
        from lib.supabase_client import SupabaseClientError

        with patch("app.routers.health.SupabaseClient") as mock:
            mock.ping.side_effect = SupabaseClientError("Database ping failed: timeout")
            response = client.get(f"{API}/health/ready")

        body = response.json()
        assert body["status"] == "degraded"
        assert body["checks"]["auth0"] == "mock"

    def test_readiness_ok(self, client):
        with patch("app.routers.health.SupabaseClient"):
            response = client.get(f"{API}/health/ready")

        assert response.json()["status"] == "ready"

    def test_unknown_route(self, client):
        response = client.get(f"{API}/facturas")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    def test_root(self, client):
        assert client.get("/").json()["name"] == "ContaEmpresa API"


# =============================================================================
# CORS
# =============================================================================

ORIGIN = "http://app.contaempresa.test"


class TestCors:

    def test_preflight(self, client):
        response = client.options(
            f"{API}/paises",
            headers={
                "Origin": ORIGIN,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "authorization, content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] in (ORIGIN, "*")
        assert "POST" in response.headers["access-control-allow-methods"]

    def test_simple_request_allows_origin(self, client):
        with patch("core.services.pais_service.SupabaseClient") as mock:
            mock.fetch_rows.return_value = []
            response = client.get(f"{API}/paises", headers={"Origin": ORIGIN})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] in (ORIGIN, "*")

    def test_mock_flag_is_exposed(self, client, admin_headers):
        response = client.get(f"{API}/auth0-users", headers={**admin_headers, "Origin": ORIGIN})

        assert response.headers["X-Mock-Data"] == "true"
        assert "X-Mock-Data" in response.headers["access-control-expose-headers"]
