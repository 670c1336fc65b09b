from decimal import Decimal

import pytest

from brigadas.features.brigades.equipment import (
    DETAIL_ORDER,
    EQUIPMENT_CATEGORIES,
    Shape,
    detail_categories,
    get_category,
)
from brigadas.features.brigades.schemas import BrigadeCreate, GenericEquipmentItem


def test_registry_covers_every_category_once():
    keys = [category.key for category in EQUIPMENT_CATEGORIES]

    assert len(keys) == 12
    assert len(set(keys)) == 12
    assert set(keys) == set(DETAIL_ORDER)
    assert [category.key for category in detail_categories()] == list(DETAIL_ORDER)


def test_only_boots_and_gloves_are_singletons():
    singletons = {
        category.key
        for category in EQUIPMENT_CATEGORIES
        if category.shape is Shape.SINGLETON
    }

    assert singletons == {"botasForestales", "guantesCuero"}


def test_unknown_category_raises_key_error():
    with pytest.raises(KeyError):
        get_category("extintores")


def test_generic_label_prefers_tipo_over_nombre():
    """tipo wins when both keys are sent"""
    # Setup
    item = GenericEquipmentItem(tipo="Pala", nombre="Herramienta")

    # Execute
    row = get_category("herramientas").to_row(item, brigade_id=7)

    # Verify
    assert row == {
        "brigada_id": 7,
        "tipo_herramienta": "Pala",
        "cantidad": 0,
        "observaciones": "",
    }


def test_generic_label_falls_back_to_nombre():
    """Medications usually arrive with nombre only"""
    # Setup
    payload = BrigadeCreate.model_validate(
        {"medicamentos": [{"nombre": "Paracetamol", "cantidad": 20}]}
    )

    # Execute
    rows = list(get_category("medicamentos").rows_for(payload, brigade_id=3))

    # Verify
    assert rows == [
        {
            "brigada_id": 3,
            "nombre_medicamento": "Paracetamol",
            "cantidad": 20,
            "observaciones": "",
        }
    ]


def test_generic_item_without_label_yields_null_label():
    item = GenericEquipmentItem(cantidad=2)

    row = get_category("rescateAnimal").to_row(item, brigade_id=1)

    assert row["tipo_item"] is None


def test_null_values_use_defaults():
    payload = BrigadeCreate.model_validate(
        {
            "herramientas": [{"tipo": None, "nombre": "Hacha", "cantidad": None}],
            "medicamentos": None,
        }
    )

    rows = list(get_category("herramientas").rows_for(payload, brigade_id=1))

    assert rows[0]["tipo_herramienta"] == "Hacha"
    assert rows[0]["cantidad"] == 0
    assert list(get_category("medicamentos").rows_for(payload, brigade_id=1)) == []


def test_ppe_rows_keep_per_size_quantities():
    # Setup
    payload = BrigadeCreate.model_validate(
        {
            "equipamientoEPP": [
                {"tipo": "Casco", "cantidadM": 4, "cantidadL": 2},
                {"tipo": "Chaqueta", "cantidadXL": 1, "observaciones": "Nomex"},
            ]
        }
    )

    # Execute
    rows = list(get_category("equipamientoEPP").rows_for(payload, brigade_id=9))

    # Verify
    assert len(rows) == 2
    assert rows[0] == {
        "brigada_id": 9,
        "tipo_equipo": "Casco",
        "cantidad_xs": 0,
        "cantidad_s": 0,
        "cantidad_m": 4,
        "cantidad_l": 2,
        "cantidad_xl": 0,
        "observaciones": "",
    }
    assert rows[1]["observaciones"] == "Nomex"


def test_singleton_section_inserts_one_row():
    """A boots object yields exactly one row with missing sizes at zero"""
    # Setup
    payload = BrigadeCreate.model_validate({"botasForestales": {"talla40": 5}})

    # Execute
    rows = list(get_category("botasForestales").rows_for(payload, brigade_id=2))

    # Verify
    assert len(rows) == 1
    assert rows[0]["talla_40"] == 5
    assert rows[0]["talla_37"] == 0
    assert rows[0]["otra_talla"] == 0


def test_absent_sections_insert_nothing():
    payload = BrigadeCreate.model_validate({"nombreBrigada": "Brigada Norte"})

    for category in EQUIPMENT_CATEGORIES:
        assert list(category.rows_for(payload, brigade_id=1)) == []


def test_vehicle_amounts_are_decimals():
    payload = BrigadeCreate.model_validate(
        {"logisticaVehiculos": [{"tipo": "Combustible", "montoAproximado": 150.5}]}
    )

    rows = list(get_category("logisticaVehiculos").rows_for(payload, brigade_id=4))

    assert rows[0]["tipo_item"] == "Combustible"
    assert rows[0]["monto_aproximado"] == Decimal("150.5")
    assert rows[0]["costo"] == Decimal("0")


def test_numeric_phone_numbers_are_kept_as_text():
    payload = BrigadeCreate.model_validate(
        {"nombreBrigada": "Brigada Sur", "contactoCelularComandante": 71234567}
    )

    assert payload.core_values()["contacto_celular_comandante"] == "71234567"
