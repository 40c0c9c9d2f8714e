"""
Models package.

Declarative base for user models. The library itself defines no tables.
"""

from simplesqlite.models.base import Base, SerializationMixin

__all__ = [
    "Base",
    "SerializationMixin",
]
