"""
Base Model
==========

Optional declarative base for models used with ``SQLiteOperations``.

Any SQLAlchemy declarative class works with the library; this base only adds
``to_dict()`` and a readable ``repr`` for convenience.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from sqlalchemy.orm import DeclarativeBase


class SerializationMixin:
    """Mixin that adds to_dict() serialization method."""

    def to_dict(self, exclude: Optional[set] = None) -> Dict[str, Any]:
        """Convert model instance to dictionary (columns only, no relationships)."""
        exclude = exclude or set()
        result = {}
        for column in self.__table__.columns:
            if column.key in exclude:
                continue
            value = getattr(self, column.key)
            if isinstance(value, datetime):
                result[column.key] = value.isoformat()
            elif isinstance(value, Decimal):
                result[column.key] = str(value)
            else:
                result[column.key] = value
        return result

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"<{type(self).__name__}({fields})>"


class Base(SerializationMixin, DeclarativeBase):
    """Base class for models stored through SQLiteOperations."""
    pass
