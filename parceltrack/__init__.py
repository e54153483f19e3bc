"""
parceltrack
===========

Data-access layer for shipping parcels: registration, status transitions
and guarded address edits over a single relational table.
"""

__version__ = "0.1.0"
