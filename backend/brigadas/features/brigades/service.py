"""Brigade service: orchestrates the repository for each API operation."""

from typing import Any, Dict, List, Optional

import structlog

from brigadas.core.decorators import service_error_handler
from brigadas.core.exceptions import NotFoundError, ValidationError
from .equipment import detail_categories, get_category
from .repository import BrigadeRepositoryInterface
from .schemas import BrigadeCreate, BrigadeStatistics, BrigadeUpdate
from .transformers import BrigadeTransformer

logger = structlog.get_logger(__name__)

BRIGADE_NOT_FOUND = "Brigada no encontrada"
NAME_REQUIRED = "El nombre de la brigada es requerido"


class BrigadeService:
    """Service for brigade and equipment operations."""

    def __init__(
        self,
        repository: BrigadeRepositoryInterface,
        transformer: Optional[BrigadeTransformer] = None,
    ):
        self.repository = repository
        self.transformer = transformer or BrigadeTransformer()

    @service_error_handler("BrigadeService")
    async def list_brigades(self) -> List[Dict[str, Any]]:
        """Active brigades ordered by name, without pagination."""
        rows = await self.repository.list_active()
        return self.transformer.rows_to_dicts(rows)

    @service_error_handler("BrigadeService")
    async def get_brigade(self, brigade_id: int) -> Dict[str, Any]:
        """Brigade row plus the rows of every equipment category.

        Each category is read with its own query; categories without rows
        come back as empty lists.

        :raises NotFoundError: If the brigade does not exist or is inactive
        """
        brigade = await self.repository.get_active(brigade_id)
        if brigade is None:
            raise NotFoundError(
                BRIGADE_NOT_FOUND,
                service="BrigadeService",
                operation="get_brigade",
                context={"brigade_id": brigade_id},
            )

        equipment: Dict[str, List[Dict[str, Any]]] = {}
        for category in detail_categories():
            rows = await self.repository.list_equipment(category, brigade_id)
            equipment[category.key] = self.transformer.rows_to_dicts(rows)

        return {
            "brigade": self.transformer.row_to_dict(brigade),
            "equipment": equipment,
        }

    @service_error_handler("BrigadeService")
    async def create_brigade(self, payload: BrigadeCreate) -> int:
        """Create a brigade with its nested equipment, all or nothing.

        :returns: Id of the new brigade
        :raises ValidationError: If the brigade name is missing or empty
        """
        if not payload.nombre_brigada or not payload.nombre_brigada.strip():
            raise ValidationError(
                NAME_REQUIRED,
                service="BrigadeService",
                operation="create_brigade",
                field="nombreBrigada",
            )

        return await self.repository.create_with_equipment(payload)

    @service_error_handler("BrigadeService")
    async def update_brigade(self, brigade_id: int, payload: BrigadeUpdate) -> None:
        """Overwrite the core fields of an active brigade.

        Fields missing from the payload are written as 0 or empty text; this
        is not a partial update.

        :raises NotFoundError: If no active brigade has this id
        """
        affected = await self.repository.update_core_fields(
            brigade_id, payload.core_values()
        )
        if affected == 0:
            raise NotFoundError(
                BRIGADE_NOT_FOUND,
                service="BrigadeService",
                operation="update_brigade",
                context={"brigade_id": brigade_id},
            )
        logger.info("Brigade updated", brigade_id=brigade_id)

    @service_error_handler("BrigadeService")
    async def delete_brigade(self, brigade_id: int) -> None:
        """Soft-delete a brigade by id, whether or not it is still active.

        :raises NotFoundError: If no brigade has this id
        """
        affected = await self.repository.soft_delete(brigade_id)
        if affected == 0:
            raise NotFoundError(
                BRIGADE_NOT_FOUND,
                service="BrigadeService",
                operation="delete_brigade",
                context={"brigade_id": brigade_id},
            )
        logger.info("Brigade deactivated", brigade_id=brigade_id)

    @service_error_handler("BrigadeService")
    async def get_statistics(self) -> BrigadeStatistics:
        row = await self.repository.statistics()
        return BrigadeStatistics(
            total_brigadas=row.get("total_brigadas") or 0,
            total_bomberos=row.get("total_bomberos") or 0,
            promedio_bomberos_por_brigada=float(
                row.get("promedio_bomberos_por_brigada") or 0
            ),
        )

    @service_error_handler("BrigadeService")
    async def list_equipment(
        self, brigade_id: int, category_key: str
    ) -> List[Dict[str, Any]]:
        """Rows of one equipment category for a brigade id.

        The brigade itself is not checked: an unknown or inactive id yields
        an empty list.
        """
        rows = await self.repository.list_equipment(
            get_category(category_key), brigade_id
        )
        return self.transformer.rows_to_dicts(rows)
