# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .pais_service import PaisService
from .nomenclador_service import NomencladorService
from .user_service import UserService
from .empresa_service import EmpresaService, ensure_company_access
from .contabilidad_service import ContabilidadService
from .tesoreria_service import TesoreriaService

__all__ = [
    "PaisService",
    "NomencladorService",
    "UserService",
    "EmpresaService",
    "ensure_company_access",
    "ContabilidadService",
    "TesoreriaService",
]
