"""Brigade API endpoints."""

import re
from typing import Annotated, Optional

import structlog
from fastapi import APIRouter, Body, Depends, status

from brigadas.core.exceptions import ValidationError
from .dependencies import BrigadeServiceDep
from .equipment import MEDICATIONS, PPE, TOOLS
from .schemas import (
    BrigadeCreate,
    BrigadeUpdate,
    CreatedResponse,
    DataResponse,
    ErrorResponse,
    ListResponse,
    MessageResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(
    tags=["brigadas"],
    responses={
        400: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)

INVALID_ID = "El ID debe ser un número válido"

_NUMERIC_ID = re.compile(r"^[+-]?\d+$")
# Identity columns are 32-bit integers
_MAX_ID = 2**31 - 1


def validate_numeric_id(brigade_id: str) -> int:
    """Parse the ``id`` path segment before any database work.

    :raises ValidationError: If the segment is not an integer
    """
    candidate = brigade_id.strip()
    if not _NUMERIC_ID.match(candidate) or abs(int(candidate)) > _MAX_ID:
        raise ValidationError(
            INVALID_ID, operation="validate_numeric_id", value=brigade_id
        )
    return int(candidate)


BrigadeIdDep = Annotated[int, Depends(validate_numeric_id)]


# Registered before /brigadas/{brigade_id} so it is never read as an id
@router.get("/estadisticas", response_model=DataResponse)
async def get_statistics(service: BrigadeServiceDep) -> DataResponse:
    """Count, total firefighters and average per brigade over active brigades."""
    statistics = await service.get_statistics()
    return DataResponse(data=statistics.model_dump(by_alias=True))


@router.get("/brigadas", response_model=ListResponse)
async def list_brigades(service: BrigadeServiceDep) -> ListResponse:
    """List active brigades ordered by name."""
    brigades = await service.list_brigades()
    return ListResponse(data=brigades, count=len(brigades))


@router.get(
    "/brigadas/{brigade_id}",
    response_model=DataResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_brigade(brigade_id: BrigadeIdDep, service: BrigadeServiceDep) -> DataResponse:
    """
    Get a brigade with its complete equipment inventory.

    The response carries the brigade row and one list per equipment
    category, empty when the brigade has nothing registered in it.
    """
    detail = await service.get_brigade(brigade_id)
    return DataResponse(data=detail)


@router.post(
    "/brigadas",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_brigade(
    service: BrigadeServiceDep,
    payload: Annotated[Optional[BrigadeCreate], Body()] = None,
) -> CreatedResponse:
    """
    Create a brigade together with its equipment.

    The brigade and every equipment row are inserted in a single
    transaction: if any insert fails nothing is stored.
    """
    brigade_id = await service.create_brigade(payload or BrigadeCreate())
    return CreatedResponse(
        message="Brigada creada exitosamente",
        data={"brigadeId": brigade_id},
    )


@router.put(
    "/brigadas/{brigade_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_brigade(
    brigade_id: BrigadeIdDep,
    service: BrigadeServiceDep,
    payload: Annotated[Optional[BrigadeUpdate], Body()] = None,
) -> MessageResponse:
    """
    Update the core fields of an active brigade.

    Every core field is overwritten: fields left out of the body are stored
    as 0 or empty text. Equipment is not modified.
    """
    await service.update_brigade(brigade_id, payload or BrigadeUpdate())
    return MessageResponse(message="Brigada actualizada exitosamente")


@router.delete(
    "/brigadas/{brigade_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_brigade(
    brigade_id: BrigadeIdDep, service: BrigadeServiceDep
) -> MessageResponse:
    """Soft-delete a brigade (marks it inactive)."""
    await service.delete_brigade(brigade_id)
    return MessageResponse(message="Brigada eliminada exitosamente")


# === Equipment subsets ===


@router.get("/brigadas/{brigade_id}/epp", response_model=DataResponse)
async def get_brigade_ppe(
    brigade_id: BrigadeIdDep, service: BrigadeServiceDep
) -> DataResponse:
    """PPE rows of a brigade."""
    return DataResponse(data=await service.list_equipment(brigade_id, PPE))


@router.get("/brigadas/{brigade_id}/herramientas", response_model=DataResponse)
async def get_brigade_tools(
    brigade_id: BrigadeIdDep, service: BrigadeServiceDep
) -> DataResponse:
    """Tool rows of a brigade."""
    return DataResponse(data=await service.list_equipment(brigade_id, TOOLS))


@router.get("/brigadas/{brigade_id}/medicamentos", response_model=DataResponse)
async def get_brigade_medications(
    brigade_id: BrigadeIdDep, service: BrigadeServiceDep
) -> DataResponse:
    """Medication rows of a brigade."""
    return DataResponse(data=await service.list_equipment(brigade_id, MEDICATIONS))


AVAILABLE_ROUTES = [
    "GET /api/health",
    "GET /api/brigadas",
    "GET /api/brigadas/:id",
    "POST /api/brigadas",
    "PUT /api/brigadas/:id",
    "DELETE /api/brigadas/:id",
    "GET /api/estadisticas",
    "GET /api/brigadas/:id/epp",
    "GET /api/brigadas/:id/herramientas",
    "GET /api/brigadas/:id/medicamentos",
]
