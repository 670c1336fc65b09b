"""Repository pattern implementation for the brigades feature.

Isolates data access from the service layer. All statements are built with
SQLAlchemy Core so every value reaches the database as a bound parameter.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import func, insert, select, true, update
from sqlalchemy.ext.asyncio import AsyncSession

from .equipment import EQUIPMENT_CATEGORIES, EquipmentCategory
from .models import Brigade
from .schemas import BrigadeCreate

logger = structlog.get_logger(__name__)

brigades = Brigade.__table__


class BrigadeRepositoryInterface(ABC):
    """Interface for brigade repository.

    Rows are returned as plain dictionaries keyed by column name.
    """

    @abstractmethod
    async def list_active(self) -> List[Dict[str, Any]]:
        """Get all active brigades ordered by name."""

    @abstractmethod
    async def get_active(self, brigade_id: int) -> Optional[Dict[str, Any]]:
        """Get an active brigade by id.

        :param brigade_id: Brigade identifier
        :returns: Brigade row if found and active, None otherwise
        """

    @abstractmethod
    async def list_equipment(
        self, category: EquipmentCategory, brigade_id: int
    ) -> List[Dict[str, Any]]:
        """Get the rows of one equipment category that belong to a brigade."""

    @abstractmethod
    async def create_with_equipment(self, payload: BrigadeCreate) -> int:
        """Insert a brigade and all of its equipment in one transaction.

        :param payload: Validated creation payload
        :returns: Generated brigade id
        """

    @abstractmethod
    async def update_core_fields(self, brigade_id: int, values: Dict[str, Any]) -> int:
        """Overwrite the core fields of an active brigade.

        :returns: Number of rows affected
        """

    @abstractmethod
    async def soft_delete(self, brigade_id: int) -> int:
        """Mark a brigade inactive, regardless of its current state.

        :returns: Number of rows affected
        """

    @abstractmethod
    async def statistics(self) -> Dict[str, Any]:
        """Aggregate count, sum and average of firefighters over active brigades."""


class SQLAlchemyBrigadeRepository(BrigadeRepositoryInterface):
    """SQLAlchemy implementation of the brigade repository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_active(self) -> List[Dict[str, Any]]:
        stmt = (
            select(brigades)
            .where(brigades.c.activo == true())
            .order_by(brigades.c.nombre_brigada)
        )
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def get_active(self, brigade_id: int) -> Optional[Dict[str, Any]]:
        stmt = select(brigades).where(
            brigades.c.id == brigade_id,
            brigades.c.activo == true(),
        )
        result = await self.db.execute(stmt)
        row = result.mappings().one_or_none()
        return dict(row) if row is not None else None

    async def list_equipment(
        self, category: EquipmentCategory, brigade_id: int
    ) -> List[Dict[str, Any]]:
        table = category.table
        stmt = (
            select(table)
            .where(table.c.brigada_id == brigade_id)
            .order_by(table.c.id)
        )
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def create_with_equipment(self, payload: BrigadeCreate) -> int:
        # The transaction begins with the first statement on the session
        try:
            result = await self.db.execute(
                insert(brigades)
                .values(**payload.core_values())
                .returning(brigades.c.id)
            )
            brigade_id: int = result.scalar_one()

            inserted: Dict[str, int] = {}
            for category in EQUIPMENT_CATEGORIES:
                for row in category.rows_for(payload, brigade_id):
                    await self.db.execute(insert(category.table).values(**row))
                    inserted[category.key] = inserted.get(category.key, 0) + 1

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.warning("Brigade creation rolled back")
            raise

        logger.info(
            "Brigade created",
            brigade_id=brigade_id,
            equipment_rows=inserted,
        )
        return brigade_id

    async def update_core_fields(self, brigade_id: int, values: Dict[str, Any]) -> int:
        stmt = (
            update(brigades)
            .where(brigades.c.id == brigade_id, brigades.c.activo == true())
            .values(**values)
        )
        try:
            result = await self.db.execute(stmt)
            if result.rowcount == 0:
                await self.db.rollback()
                return 0
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return result.rowcount

    async def soft_delete(self, brigade_id: int) -> int:
        stmt = update(brigades).where(brigades.c.id == brigade_id).values(activo=False)
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount

    async def statistics(self) -> Dict[str, Any]:
        stmt = select(
            func.count().label("total_brigadas"),
            func.coalesce(func.sum(brigades.c.cantidad_bomberos_activos), 0).label(
                "total_bomberos"
            ),
            func.coalesce(func.avg(brigades.c.cantidad_bomberos_activos), 0).label(
                "promedio_bomberos_por_brigada"
            ),
        ).where(brigades.c.activo == true())
        result = await self.db.execute(stmt)
        return dict(result.mappings().one())
