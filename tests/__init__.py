# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the ContaEmpresa API:
# - test_permissions.py: Role/permission tables and helpers
# - test_models.py: Unit tests for Pydantic model validation
# - test_paises.py, test_nomencladores.py: Reference data endpoints
# - test_usuarios.py, test_auth0_client.py: Auth0 user management
# - test_auth.py: Caller authentication
# - test_supabase_client.py: Database error mapping
# - test_tenant_api.py: Company-scoped reads, roles, health
#
# Run tests with: poetry run pytest
# =============================================================================
