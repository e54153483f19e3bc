"""
Database models package.

Contains all SQLAlchemy ORM models.
"""

from parceltrack.models.base import Base, SerializationMixin
from parceltrack.models.parcel import Parcel

__all__ = [
    "Base",
    "SerializationMixin",
    "Parcel",
]
