"""
Data access layer (Repository pattern).

Repositories handle all database queries,
isolating business logic from SQL.
"""

from parceltrack.repositories.parcel import ParcelRepository

__all__ = ["ParcelRepository"]
