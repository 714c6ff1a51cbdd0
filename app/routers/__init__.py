# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - paises.py: Country registry CRUD
# - nomencladores.py: Per-country catalogs CRUD
# - usuarios.py: Auth0 user management proxy
# - roles.py: Role and permission catalog
# - empresas.py: Company reads
# - contabilidad.py: Chart of accounts and journal entries
# - tesoreria.py: Bank accounts and treasury movements
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import paises
from . import nomencladores
from . import usuarios
from . import roles
from . import empresas
from . import contabilidad
from . import tesoreria

__all__ = [
    "health",
    "paises",
    "nomencladores",
    "usuarios",
    "roles",
    "empresas",
    "contabilidad",
    "tesoreria",
]
