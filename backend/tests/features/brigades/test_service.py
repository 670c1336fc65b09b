from decimal import Decimal

import pytest
from unittest.mock import AsyncMock

from brigadas.core.exceptions import DatabaseError, NotFoundError, ValidationError
from brigadas.features.brigades.equipment import DETAIL_ORDER
from brigadas.features.brigades.schemas import BrigadeCreate, BrigadeUpdate
from brigadas.features.brigades.service import (
    BRIGADE_NOT_FOUND,
    NAME_REQUIRED,
    BrigadeService,
)


@pytest.fixture
def mock_repository():
    return AsyncMock()


@pytest.fixture
def service(mock_repository):
    return BrigadeService(mock_repository)


async def test_get_brigade_not_found(service, mock_repository):
    """Unknown or inactive ids raise NotFoundError"""
    # Setup
    mock_repository.get_active.return_value = None

    # Execute
    with pytest.raises(NotFoundError) as exc_info:
        await service.get_brigade(999999)

    # Verify
    assert exc_info.value.public_error == BRIGADE_NOT_FOUND
    mock_repository.list_equipment.assert_not_awaited()


async def test_get_brigade_assembles_all_categories(service, mock_repository):
    """Categories without rows come back as empty lists"""
    # Setup
    mock_repository.get_active.return_value = {"id": 1, "nombre_brigada": "Brigada Norte"}
    mock_repository.list_equipment.return_value = []

    # Execute
    detail = await service.get_brigade(1)

    # Verify
    assert detail["brigade"] == {"id": 1, "nombre_brigada": "Brigada Norte"}
    assert list(detail["equipment"].keys()) == list(DETAIL_ORDER)
    assert all(rows == [] for rows in detail["equipment"].values())
    assert mock_repository.list_equipment.await_count == 12


async def test_create_requires_name(service, mock_repository):
    """A blank name is rejected before touching the database"""
    with pytest.raises(ValidationError) as exc_info:
        await service.create_brigade(BrigadeCreate(nombreBrigada="   "))

    assert exc_info.value.public_error == NAME_REQUIRED
    mock_repository.create_with_equipment.assert_not_awaited()


async def test_create_without_body_requires_name(service, mock_repository):
    with pytest.raises(ValidationError):
        await service.create_brigade(BrigadeCreate())

    mock_repository.create_with_equipment.assert_not_awaited()


async def test_create_returns_new_id(service, mock_repository):
    mock_repository.create_with_equipment.return_value = 42
    payload = BrigadeCreate(nombreBrigada="Brigada Norte")

    assert await service.create_brigade(payload) == 42
    mock_repository.create_with_equipment.assert_awaited_once_with(payload)


async def test_update_overwrites_missing_fields(service, mock_repository):
    """Fields left out of the body are written as 0 or empty text"""
    # Setup
    mock_repository.update_core_fields.return_value = 1

    # Execute
    await service.update_brigade(5, BrigadeUpdate(nombreBrigada="Brigada Oeste"))

    # Verify
    mock_repository.update_core_fields.assert_awaited_once_with(
        5,
        {
            "nombre_brigada": "Brigada Oeste",
            "cantidad_bomberos_activos": 0,
            "contacto_celular_comandante": "",
            "encargado_logistica": "",
            "contacto_celular_logistica": "",
            "numero_emergencia_publico": "",
        },
    )


async def test_update_missing_brigade(service, mock_repository):
    mock_repository.update_core_fields.return_value = 0

    with pytest.raises(NotFoundError):
        await service.update_brigade(999999, BrigadeUpdate())


async def test_delete_missing_brigade(service, mock_repository):
    mock_repository.soft_delete.return_value = 0

    with pytest.raises(NotFoundError):
        await service.delete_brigade(999999)


async def test_delete_brigade(service, mock_repository):
    mock_repository.soft_delete.return_value = 1

    await service.delete_brigade(5)

    mock_repository.soft_delete.assert_awaited_once_with(5)


async def test_statistics_without_brigades_are_zero(service, mock_repository):
    mock_repository.statistics.return_value = {
        "total_brigadas": 0,
        "total_bomberos": 0,
        "promedio_bomberos_por_brigada": 0,
    }

    statistics = await service.get_statistics()

    assert statistics.model_dump(by_alias=True) == {
        "totalBrigadas": 0,
        "totalBomberos": 0,
        "promedioBomberosPorBrigada": 0.0,
    }


async def test_statistics_average_is_a_float(service, mock_repository):
    mock_repository.statistics.return_value = {
        "total_brigadas": 2,
        "total_bomberos": 25,
        "promedio_bomberos_por_brigada": Decimal("12.5"),
    }

    statistics = await service.get_statistics()

    assert statistics.promedio_bomberos_por_brigada == 12.5


async def test_list_equipment_uses_requested_category(service, mock_repository):
    # Setup
    mock_repository.list_equipment.return_value = [
        {"id": 1, "brigada_id": 5, "nombre_medicamento": "Ibuprofeno", "cantidad": 10}
    ]

    # Execute
    rows = await service.list_equipment(5, "medicamentos")

    # Verify
    category, brigade_id = mock_repository.list_equipment.call_args[0]
    assert category.key == "medicamentos"
    assert brigade_id == 5
    assert rows[0]["nombre_medicamento"] == "Ibuprofeno"


async def test_repository_failure_becomes_database_error(service, mock_repository):
    mock_repository.list_active.side_effect = RuntimeError("connection reset")

    with pytest.raises(DatabaseError) as exc_info:
        await service.list_brigades()

    assert isinstance(exc_info.value.original_error, RuntimeError)
