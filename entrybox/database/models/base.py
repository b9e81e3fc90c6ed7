"""
Base Classes
------------

Declarative base for the entrybox ORM models.

Column server defaults (timestamps, empty notes, '[]' tag cache) differ per
backend and are owned by the Alembic migrations, not by these classes.
"""
# --- Third party ---
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base; its metadata is the Alembic autogenerate target."""

    pass
