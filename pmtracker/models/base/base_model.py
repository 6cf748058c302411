# --- File: pmtracker/models/base/base_model.py ---
"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and an abstract base model with the
integer primary key shared by all tables.
"""

from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all models."""


class BaseModel(Base):
    """
    Abstract base model with common fields.

    Provides foundation for all database models.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Primary key"
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
