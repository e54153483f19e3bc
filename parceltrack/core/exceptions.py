"""
Parcel error taxonomy.

NotFoundError and InvalidStateError are expected conditions the caller can
act on. StoreError wraps a failure of the underlying datastore.
"""

from typing import Optional


class ParcelError(Exception):
    """Base class for all parceltrack errors."""


class NotFoundError(ParcelError, LookupError):
    """No parcel exists with the requested number."""

    def __init__(self, number: int):
        self.number = number
        super().__init__(f"No parcel found with number {number}")


class InvalidStateError(ParcelError, ValueError):
    """A guarded mutation was attempted outside the registered status."""

    def __init__(self, number: int, status: str, operation: str):
        self.number = number
        self.status = status
        self.operation = operation
        super().__init__(
            f"Cannot {operation} parcel {number}: status is '{status}', "
            f"expected 'registered'"
        )


class StoreError(ParcelError):
    """The datastore failed to execute a statement."""

    def __init__(self, message: str, number: Optional[int] = None):
        self.number = number
        super().__init__(message)
