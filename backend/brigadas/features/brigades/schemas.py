"""Pydantic schemas for brigade requests and responses.

Request attributes are named after the database columns they fill; their
aliases are the camelCase keys sent by the client application.
"""

from decimal import Decimal
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PayloadModel(BaseModel):
    """Base for request bodies.

    ``null`` values are treated as absent so that field defaults apply, and
    numbers sent for text fields (phone numbers) are kept as text.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# === Equipment sections ===


class EquipmentItem(PayloadModel):
    """Base for equipment payload items.

    ``label_sources`` lists attributes that feed the category's type column
    instead of being written directly.
    """

    label_sources: ClassVar[tuple[str, ...]] = ()

    @property
    def label(self) -> Optional[str]:
        for name in self.label_sources:
            value = getattr(self, name)
            if value:
                return value
        return None

    @classmethod
    def column_fields(cls) -> tuple[str, ...]:
        """Attributes written verbatim to the column of the same name."""
        return tuple(
            name for name in cls.model_fields if name not in cls.label_sources
        )


class PPEItem(EquipmentItem):
    """Personal protective equipment, quantities per size XS-XL."""

    tipo_equipo: str = Field(default="", alias="tipo")
    cantidad_xs: int = Field(default=0, alias="cantidadXS")
    cantidad_s: int = Field(default=0, alias="cantidadS")
    cantidad_m: int = Field(default=0, alias="cantidadM")
    cantidad_l: int = Field(default=0, alias="cantidadL")
    cantidad_xl: int = Field(default=0, alias="cantidadXL")
    observaciones: str = ""


class ForestryBootsStock(EquipmentItem):
    """Forestry boots per shoe size 37-43."""

    talla_37: int = Field(default=0, alias="talla37")
    talla_38: int = Field(default=0, alias="talla38")
    talla_39: int = Field(default=0, alias="talla39")
    talla_40: int = Field(default=0, alias="talla40")
    talla_41: int = Field(default=0, alias="talla41")
    talla_42: int = Field(default=0, alias="talla42")
    talla_43: int = Field(default=0, alias="talla43")
    otra_talla: int = Field(default=0, alias="otraTalla")


class LeatherGlovesStock(EquipmentItem):
    """Leather gloves per size XS-XXL."""

    talla_xs: int = Field(default=0, alias="tallaXS")
    talla_s: int = Field(default=0, alias="tallaS")
    talla_m: int = Field(default=0, alias="tallaM")
    talla_l: int = Field(default=0, alias="tallaL")
    talla_xl: int = Field(default=0, alias="tallaXL")
    talla_xxl: int = Field(default=0, alias="tallaXXL")
    otra_talla: int = Field(default=0, alias="otraTalla")


class GenericEquipmentItem(EquipmentItem):
    """(type, quantity, notes) item shared by most categories."""

    label_sources: ClassVar[tuple[str, ...]] = ("tipo", "nombre")

    tipo: Optional[str] = None
    nombre: Optional[str] = None
    cantidad: int = 0
    observaciones: str = ""


class VehicleLogisticsItem(EquipmentItem):
    tipo_item: str = Field(default="", alias="tipo")
    monto_aproximado: Decimal = Field(default=Decimal("0"), alias="montoAproximado")
    costo: Decimal = Decimal("0")
    observaciones: str = ""


# === Brigade bodies ===


class BrigadeFields(PayloadModel):
    """Core brigade fields shared by create and update."""

    nombre_brigada: Optional[str] = Field(default=None, alias="nombreBrigada")
    cantidad_bomberos_activos: int = Field(default=0, alias="cantidadBomberosActivos")
    contacto_celular_comandante: str = Field(
        default="", alias="contactoCelularComandante"
    )
    encargado_logistica: str = Field(default="", alias="encargadoLogistica")
    contacto_celular_logistica: str = Field(
        default="", alias="contactoCelularLogistica"
    )
    numero_emergencia_publico: str = Field(default="", alias="numeroEmergenciaPublico")

    def core_values(self) -> Dict[str, Any]:
        """Column values for the Brigadas row; absent fields become 0 or ''."""
        return {
            "nombre_brigada": self.nombre_brigada or "",
            "cantidad_bomberos_activos": self.cantidad_bomberos_activos or 0,
            "contacto_celular_comandante": self.contacto_celular_comandante,
            "encargado_logistica": self.encargado_logistica,
            "contacto_celular_logistica": self.contacto_celular_logistica,
            "numero_emergencia_publico": self.numero_emergencia_publico,
        }


class BrigadeCreate(BrigadeFields):
    """Schema for creating a brigade together with its equipment."""

    equipamiento_epp: Optional[List[PPEItem]] = Field(
        default=None, alias="equipamientoEPP"
    )
    botas_forestales: Optional[ForestryBootsStock] = Field(
        default=None, alias="botasForestales"
    )
    guantes_cuero: Optional[LeatherGlovesStock] = Field(
        default=None, alias="guantesCuero"
    )
    equipamiento_general: Optional[List[GenericEquipmentItem]] = Field(
        default=None, alias="equipamientoGeneral"
    )
    herramientas: Optional[List[GenericEquipmentItem]] = None
    logistica_vehiculos: Optional[List[VehicleLogisticsItem]] = Field(
        default=None, alias="logisticaVehiculos"
    )
    alimentacion_bebidas: Optional[List[GenericEquipmentItem]] = Field(
        default=None, alias="alimentacionBebidas"
    )
    logistica_campo: Optional[List[GenericEquipmentItem]] = Field(
        default=None, alias="logisticaCampo"
    )
    limpieza_personal: Optional[List[GenericEquipmentItem]] = Field(
        default=None, alias="limpiezaPersonal"
    )
    limpieza_general: Optional[List[GenericEquipmentItem]] = Field(
        default=None, alias="limpiezaGeneral"
    )
    medicamentos: Optional[List[GenericEquipmentItem]] = None
    rescate_animal: Optional[List[GenericEquipmentItem]] = Field(
        default=None, alias="rescateAnimal"
    )


class BrigadeUpdate(BrigadeFields):
    """Schema for updating a brigade. Every core field is overwritten."""


# === Responses ===


class BrigadeStatistics(BaseModel):
    """Aggregate figures over active brigades."""

    model_config = ConfigDict(populate_by_name=True)

    total_brigadas: int = Field(default=0, alias="totalBrigadas")
    total_bomberos: int = Field(default=0, alias="totalBomberos")
    promedio_bomberos_por_brigada: float = Field(
        default=0.0, alias="promedioBomberosPorBrigada"
    )


class DataResponse(BaseModel):
    """Envelope carrying a payload."""

    success: bool = True
    data: Any


class ListResponse(DataResponse):
    """Envelope carrying a list and its length."""

    data: List[Dict[str, Any]]
    count: int


class MessageResponse(BaseModel):
    """Envelope carrying only a confirmation message."""

    success: bool = True
    message: str


class CreatedResponse(MessageResponse):
    data: Dict[str, int]


class ErrorResponse(BaseModel):
    """Envelope returned for every failed request."""

    success: bool = False
    error: str
    message: Optional[str] = None
    available_routes: Optional[List[str]] = Field(
        default=None, serialization_alias="availableRoutes"
    )

    def to_content(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True, by_alias=True)
