"""Equipment category registry.

Every inventory category is described once here: the key used in request
and response bodies, the table it persists to, the payload schema of its
items and whether the payload section is a list or a single object. The
repository iterates this registry instead of hand-writing one insert per
category.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Type

from sqlalchemy import Table

from brigadas.core.models import Base
from .models import (
    AnimalRescue,
    FieldLogistics,
    FoodAndBeverage,
    ForestryBoots,
    GeneralCleaning,
    GeneralEquipment,
    LeatherGloves,
    Medication,
    PersonalCleaning,
    PersonalProtectiveEquipment,
    Tool,
    VehicleLogistics,
)
from .schemas import (
    BrigadeCreate,
    EquipmentItem,
    ForestryBootsStock,
    GenericEquipmentItem,
    LeatherGlovesStock,
    PPEItem,
    VehicleLogisticsItem,
)


class Shape(str, Enum):
    """How a category's payload section is shaped."""

    LIST = "list"
    SINGLETON = "singleton"


@dataclass(frozen=True)
class EquipmentCategory:
    """Persistence description of one equipment category."""

    key: str
    field: str
    model: Type[Base]
    schema: Type[EquipmentItem]
    shape: Shape = Shape.LIST
    label_column: Optional[str] = None

    @property
    def table(self) -> Table:
        return self.model.__table__  # type: ignore[return-value]

    def items_from(self, payload: BrigadeCreate) -> List[EquipmentItem]:
        """Items present in the payload section; an absent section yields none."""
        section = getattr(payload, self.field)
        if section is None:
            return []
        if self.shape is Shape.SINGLETON:
            return [section]
        return list(section)

    def to_row(self, item: EquipmentItem, brigade_id: int) -> Dict[str, Any]:
        row: Dict[str, Any] = {"brigada_id": brigade_id}
        if self.label_column:
            row[self.label_column] = item.label
        for column in self.schema.column_fields():
            row[column] = getattr(item, column)
        return row

    def rows_for(self, payload: BrigadeCreate, brigade_id: int) -> Iterator[Dict[str, Any]]:
        """Insert rows for this category, in payload order."""
        for item in self.items_from(payload):
            yield self.to_row(item, brigade_id)


# Insertion order of the creation transaction
EQUIPMENT_CATEGORIES: tuple[EquipmentCategory, ...] = (
    EquipmentCategory(
        key="equipamientoEPP",
        field="equipamiento_epp",
        model=PersonalProtectiveEquipment,
        schema=PPEItem,
    ),
    EquipmentCategory(
        key="botasForestales",
        field="botas_forestales",
        model=ForestryBoots,
        schema=ForestryBootsStock,
        shape=Shape.SINGLETON,
    ),
    EquipmentCategory(
        key="guantesCuero",
        field="guantes_cuero",
        model=LeatherGloves,
        schema=LeatherGlovesStock,
        shape=Shape.SINGLETON,
    ),
    EquipmentCategory(
        key="equipamientoGeneral",
        field="equipamiento_general",
        model=GeneralEquipment,
        schema=GenericEquipmentItem,
        label_column="tipo_equipo",
    ),
    EquipmentCategory(
        key="herramientas",
        field="herramientas",
        model=Tool,
        schema=GenericEquipmentItem,
        label_column="tipo_herramienta",
    ),
    EquipmentCategory(
        key="alimentacionBebidas",
        field="alimentacion_bebidas",
        model=FoodAndBeverage,
        schema=GenericEquipmentItem,
        label_column="tipo_alimento",
    ),
    EquipmentCategory(
        key="logisticaCampo",
        field="logistica_campo",
        model=FieldLogistics,
        schema=GenericEquipmentItem,
        label_column="tipo_equipo",
    ),
    EquipmentCategory(
        key="limpiezaPersonal",
        field="limpieza_personal",
        model=PersonalCleaning,
        schema=GenericEquipmentItem,
        label_column="tipo_producto",
    ),
    EquipmentCategory(
        key="limpiezaGeneral",
        field="limpieza_general",
        model=GeneralCleaning,
        schema=GenericEquipmentItem,
        label_column="tipo_producto",
    ),
    EquipmentCategory(
        key="medicamentos",
        field="medicamentos",
        model=Medication,
        schema=GenericEquipmentItem,
        label_column="nombre_medicamento",
    ),
    EquipmentCategory(
        key="rescateAnimal",
        field="rescate_animal",
        model=AnimalRescue,
        schema=GenericEquipmentItem,
        label_column="tipo_item",
    ),
    EquipmentCategory(
        key="logisticaVehiculos",
        field="logistica_vehiculos",
        model=VehicleLogistics,
        schema=VehicleLogisticsItem,
    ),
)

# Response order of the brigade detail
DETAIL_ORDER: tuple[str, ...] = (
    "equipamientoEPP",
    "botasForestales",
    "guantesCuero",
    "equipamientoGeneral",
    "herramientas",
    "logisticaVehiculos",
    "alimentacionBebidas",
    "logisticaCampo",
    "limpiezaPersonal",
    "limpiezaGeneral",
    "medicamentos",
    "rescateAnimal",
)

_BY_KEY: Dict[str, EquipmentCategory] = {
    category.key: category for category in EQUIPMENT_CATEGORIES
}

PPE = "equipamientoEPP"
TOOLS = "herramientas"
MEDICATIONS = "medicamentos"


def get_category(key: str) -> EquipmentCategory:
    """Look up a category by its payload/response key.

    :raises KeyError: If the key names no category
    """
    return _BY_KEY[key]


def detail_categories() -> List[EquipmentCategory]:
    """Categories in the order they appear in the brigade detail."""
    return [_BY_KEY[key] for key in DETAIL_ORDER]
