"""
Services Package
================

Business logic layer on top of the repositories.

Available services:
- ParcelService: parcel lifecycle (register, advance status, guarded edits)
"""

from parceltrack.services.parcels import ParcelService, get_parcel_service

__all__ = [
    "ParcelService",
    "get_parcel_service",
]
