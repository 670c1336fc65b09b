"""Declarative base shared by all ORM models."""

from typing import Annotated

from sqlalchemy import Integer, MetaData, String
from sqlalchemy.orm import DeclarativeBase, mapped_column


class Base(DeclarativeBase):
    """Base class for SQLAlchemy ORM models."""

    metadata = MetaData(
        naming_convention={
            "ix": "ix_%(column_0_label)s",
            "uq": "uq_%(table_name)s_%(column_0_name)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "pk": "pk_%(table_name)s",
        }
    )


# Common column types
AutoIncrementPK = Annotated[
    int, mapped_column(Integer, primary_key=True, autoincrement=True)
]
RequiredString = Annotated[str, mapped_column(String(255), nullable=False)]
Quantity = Annotated[
    int, mapped_column(Integer, nullable=False, default=0, server_default="0")
]
Notes = Annotated[
    str, mapped_column(String(500), nullable=False, default="", server_default="")
]
