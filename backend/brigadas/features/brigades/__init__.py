"""Brigades feature module.

Brigade records, their equipment inventories and the statistics over them.
"""

from .router import router as brigades_router
from .service import BrigadeService
from .repository import BrigadeRepositoryInterface, SQLAlchemyBrigadeRepository
from .equipment import EQUIPMENT_CATEGORIES, EquipmentCategory, get_category
from .dependencies import get_brigade_service, BrigadeServiceDep

__all__ = [
    # Router
    "brigades_router",
    # Service
    "BrigadeService",
    # Repository
    "BrigadeRepositoryInterface",
    "SQLAlchemyBrigadeRepository",
    # Equipment
    "EQUIPMENT_CATEGORIES",
    "EquipmentCategory",
    "get_category",
    # Dependencies
    "get_brigade_service",
    "BrigadeServiceDep",
]
