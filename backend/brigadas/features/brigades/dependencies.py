"""Dependencies for the brigades feature.

Injects the repository into the service following dependency inversion.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from brigadas.core import get_db
from .repository import BrigadeRepositoryInterface, SQLAlchemyBrigadeRepository
from .service import BrigadeService


async def get_brigade_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BrigadeRepositoryInterface:
    """Get brigade repository instance.

    :param db: Database session from the live pool
    :returns: Brigade repository implementation
    """
    return SQLAlchemyBrigadeRepository(db)


async def get_brigade_service(
    repository: Annotated[
        BrigadeRepositoryInterface, Depends(get_brigade_repository)
    ],
) -> BrigadeService:
    """Get brigade service instance."""
    return BrigadeService(repository)


# Type alias for cleaner dependency injection
BrigadeServiceDep = Annotated[BrigadeService, Depends(get_brigade_service)]
