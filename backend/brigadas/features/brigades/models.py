"""SQLAlchemy 2.0 ORM models for brigades and their equipment inventories.

Table and column names match the existing relational schema: one ``Brigadas``
table plus twelve equipment tables, each row owned by one brigade through
``brigada_id``.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    DateTime as SQLDateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from brigadas.core.models import (
    AutoIncrementPK,
    Base,
    Notes,
    Quantity,
    RequiredString,
)


class Brigade(Base):
    """Firefighting brigade, the root entity."""

    __tablename__ = "Brigadas"

    id: Mapped[AutoIncrementPK]
    nombre_brigada: Mapped[RequiredString]
    cantidad_bomberos_activos: Mapped[Quantity]
    contacto_celular_comandante: Mapped[str] = mapped_column(
        String(50), nullable=False, default="", server_default=""
    )
    encargado_logistica: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=""
    )
    contacto_celular_logistica: Mapped[str] = mapped_column(
        String(50), nullable=False, default="", server_default=""
    )
    numero_emergencia_publico: Mapped[str] = mapped_column(
        String(50), nullable=False, default="", server_default=""
    )
    fecha_registro: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="When the brigade was registered",
    )
    # Soft-delete marker
    activo: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true(), index=True
    )

    def __repr__(self) -> str:
        return f"<Brigade(id={self.id}, nombre_brigada='{self.nombre_brigada}')>"


class BrigadeOwned:
    """Mixin adding the surrogate key and owning brigade to equipment tables."""

    id: Mapped[AutoIncrementPK]
    brigada_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("Brigadas.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class PersonalProtectiveEquipment(BrigadeOwned, Base):
    """PPE line item with quantities per garment size."""

    __tablename__ = "EquipamientoEPP"

    tipo_equipo: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=""
    )
    cantidad_xs: Mapped[Quantity]
    cantidad_s: Mapped[Quantity]
    cantidad_m: Mapped[Quantity]
    cantidad_l: Mapped[Quantity]
    cantidad_xl: Mapped[Quantity]
    observaciones: Mapped[Notes]


class ForestryBoots(BrigadeOwned, Base):
    """Forestry boots stock per shoe size."""

    __tablename__ = "BotasForestales"

    talla_37: Mapped[Quantity]
    talla_38: Mapped[Quantity]
    talla_39: Mapped[Quantity]
    talla_40: Mapped[Quantity]
    talla_41: Mapped[Quantity]
    talla_42: Mapped[Quantity]
    talla_43: Mapped[Quantity]
    otra_talla: Mapped[Quantity]


class LeatherGloves(BrigadeOwned, Base):
    """Leather gloves stock per glove size."""

    __tablename__ = "GuantesCuero"

    talla_xs: Mapped[Quantity]
    talla_s: Mapped[Quantity]
    talla_m: Mapped[Quantity]
    talla_l: Mapped[Quantity]
    talla_xl: Mapped[Quantity]
    talla_xxl: Mapped[Quantity]
    otra_talla: Mapped[Quantity]


class GeneralEquipment(BrigadeOwned, Base):
    __tablename__ = "EquipamientoGeneral"

    tipo_equipo: Mapped[RequiredString]
    cantidad: Mapped[Quantity]
    observaciones: Mapped[Notes]


class Tool(BrigadeOwned, Base):
    __tablename__ = "Herramientas"

    tipo_herramienta: Mapped[RequiredString]
    cantidad: Mapped[Quantity]
    observaciones: Mapped[Notes]


class VehicleLogistics(BrigadeOwned, Base):
    """Vehicle logistics item (fuel, repairs, ...) with approximate amount and cost."""

    __tablename__ = "LogisticaVehiculos"

    tipo_item: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=""
    )
    monto_aproximado: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=0, server_default="0"
    )
    costo: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=0, server_default="0"
    )
    observaciones: Mapped[Notes]


class FoodAndBeverage(BrigadeOwned, Base):
    __tablename__ = "AlimentacionBebidas"

    tipo_alimento: Mapped[RequiredString]
    cantidad: Mapped[Quantity]
    observaciones: Mapped[Notes]


class FieldLogistics(BrigadeOwned, Base):
    __tablename__ = "LogisticaCampo"

    tipo_equipo: Mapped[RequiredString]
    cantidad: Mapped[Quantity]
    observaciones: Mapped[Notes]


class PersonalCleaning(BrigadeOwned, Base):
    __tablename__ = "LimpiezaPersonal"

    tipo_producto: Mapped[RequiredString]
    cantidad: Mapped[Quantity]
    observaciones: Mapped[Notes]


class GeneralCleaning(BrigadeOwned, Base):
    __tablename__ = "LimpiezaGeneral"

    tipo_producto: Mapped[RequiredString]
    cantidad: Mapped[Quantity]
    observaciones: Mapped[Notes]


class Medication(BrigadeOwned, Base):
    __tablename__ = "Medicamentos"

    nombre_medicamento: Mapped[RequiredString]
    cantidad: Mapped[Quantity]
    observaciones: Mapped[Notes]


class AnimalRescue(BrigadeOwned, Base):
    __tablename__ = "RescateAnimal"

    tipo_item: Mapped[RequiredString]
    cantidad: Mapped[Quantity]
    observaciones: Mapped[Notes]
