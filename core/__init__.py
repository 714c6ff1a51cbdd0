# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - permissions.py: Role and permission tables
# - models/: Pydantic schemas for data validation
# - services/: Per-resource logic over Supabase and Auth0
#
# Code in this package should NOT import from FastAPI.
# Errors are raised as app.exceptions types and rendered by the app layer.
# =============================================================================
