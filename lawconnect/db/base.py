"""SQLAlchemy Declarative Base — shared base class for all ORM models.

Invariants:
    - All models inherit from Base
    - Base.metadata is the single source of truth for alembic autogenerate

Design Decisions:
    - Separate file for Base: models and the entity store import it without
      pulling in each other
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all LawConnect ORM models."""
    pass
