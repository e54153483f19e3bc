"""
Parcel lifecycle service.

Sits on top of ParcelRepository and speaks in terms of the lifecycle:
register a parcel, list a client's parcels, move a parcel one step forward
(registered -> sent -> delivered), and the two guarded edits.

Like the repository, the service never commits; the caller owns the
transaction.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from parceltrack.core.constants import ParcelStatus
from parceltrack.core.logging import logger
from parceltrack.models.parcel import Parcel, utc_timestamp
from parceltrack.repositories.parcel import ParcelRepository


class ParcelService:
    """
    Service for the parcel lifecycle.

    Example:
        with get_db_context() as db:
            service = ParcelService(db)
            parcel = service.register(client=1000, address="Baker st. 221b")
            service.next_status(parcel.number)  # "sent"
    """

    def __init__(self, db: Session):
        self.repository = ParcelRepository(db)

    def register(self, client: int, address: str) -> Parcel:
        """
        Register a new parcel for a client.

        Returns:
            The stored parcel, with its assigned number
        """
        parcel = Parcel(
            client=client,
            status=ParcelStatus.REGISTERED,
            address=address,
            created_at=utc_timestamp(),
        )
        number = self.repository.add(parcel)
        return self.repository.get(number)

    def client_parcels(self, client: int) -> List[Parcel]:
        """All parcels belonging to a client."""
        return self.repository.get_by_client(client)

    def next_status(self, number: int) -> Optional[str]:
        """
        Advance a parcel one step along the forward lifecycle.

        Returns:
            The new status, or None when the parcel is already delivered
            (or carries a status outside the known vocabulary)

        Raises:
            NotFoundError: No parcel with this number
        """
        parcel = self.repository.get(number)
        new_status = ParcelStatus.next(parcel.status)
        if new_status is None:
            logger.info("parcel_status_unchanged", number=number, status=parcel.status)
            return None
        self.repository.set_status(number, new_status)
        return new_status.value

    def change_address(self, number: int, address: str) -> None:
        """Change the address of a registered parcel."""
        self.repository.set_address(number, address)

    def delete(self, number: int) -> None:
        """Delete a registered parcel."""
        self.repository.delete(number)


def get_parcel_service(db: Session) -> ParcelService:
    """
    Factory function for creating ParcelService.

    Usage:
        from parceltrack.database import get_db_context
        from parceltrack.services import get_parcel_service

        with get_db_context() as db:
            service = get_parcel_service(db)
            parcels = service.client_parcels(1000)
    """
    return ParcelService(db)
