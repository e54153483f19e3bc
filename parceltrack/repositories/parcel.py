"""
Parcel repository.

All SQL touching the parcel table lives here. The repository enforces the
lifecycle guard: a parcel's address may change, and the parcel may be
deleted, only while its status is ``registered``.

The session is owned by the caller, who decides when to commit. Every write
is flushed right away so datastore failures surface at the call site as
StoreError; after a StoreError the caller should roll back.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from parceltrack.core.constants import ParcelStatus
from parceltrack.core.exceptions import InvalidStateError, NotFoundError, StoreError
from parceltrack.core.logging import logger
from parceltrack.models.parcel import Parcel

StatusLike = Union[ParcelStatus, str]


def _status_value(status: StatusLike) -> str:
    return status.value if isinstance(status, ParcelStatus) else status


class ParcelRepository:
    """
    Data access for Parcel records.

    Example:
        with get_db_context() as db:
            repo = ParcelRepository(db)
            number = repo.add(Parcel(client=1000, address="Baker st. 221b"))
            repo.set_status(number, ParcelStatus.SENT)
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _store_errors(self, operation: str, number: Optional[int] = None) -> Iterator[None]:
        """Translate SQLAlchemy failures into StoreError."""
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error("parcel_store_error", operation=operation, number=number, error=str(exc))
            raise StoreError(f"Failed to {operation} parcel: {exc}", number=number) from exc

    # ========================================
    # Reads
    # ========================================

    def get(self, number: int) -> Parcel:
        """
        Get a parcel by number.

        Raises:
            NotFoundError: No parcel with this number
            StoreError: The read failed
        """
        with self._store_errors("get", number):
            parcel = self.db.query(Parcel).filter_by(number=number).first()
        if parcel is None:
            raise NotFoundError(number)
        logger.debug("parcel_loaded", number=number)
        return parcel

    def get_by_client(self, client: int) -> List[Parcel]:
        """All parcels of a client, possibly empty."""
        with self._store_errors("list"):
            parcels = (
                self.db.query(Parcel)
                .filter_by(client=client)
                .order_by(Parcel.number)
                .all()
            )
        logger.debug("parcels_loaded", client=client, count=len(parcels))
        return parcels

    def _current_status(self, number: int) -> Optional[str]:
        return (
            self.db.query(Parcel.status)
            .filter_by(number=number)
            .scalar()
        )

    # ========================================
    # Writes
    # ========================================

    def add(self, parcel: Parcel) -> int:
        """
        Insert a parcel and return the number assigned by the store.

        The given object is used as a template and is not attached to the
        session; any number it carries is ignored.
        """
        record = Parcel(**parcel.to_dict(exclude={"number"}))
        with self._store_errors("add"):
            self.db.add(record)
            self.db.flush()
        logger.info("parcel_added", number=record.number, client=record.client, status=record.status)
        return record.number

    def set_status(self, number: int, status: StatusLike) -> None:
        """
        Set a parcel's status. Any value is accepted, including regressions.

        Raises:
            NotFoundError: No parcel with this number
        """
        status = _status_value(status)
        with self._store_errors("set status of", number):
            updated = (
                self.db.query(Parcel)
                .filter_by(number=number)
                .update({Parcel.status: status}, synchronize_session="evaluate")
            )
        if updated == 0:
            raise NotFoundError(number)
        logger.info("parcel_status_set", number=number, status=status)

    def set_address(self, number: int, address: str) -> None:
        """
        Change the delivery address of a registered parcel.

        Raises:
            NotFoundError: No parcel with this number
            InvalidStateError: The parcel is no longer registered
        """
        with self._store_errors("set address of", number):
            updated = (
                self.db.query(Parcel)
                .filter_by(number=number, status=ParcelStatus.REGISTERED.value)
                .update({Parcel.address: address}, synchronize_session="evaluate")
            )
            if updated == 0:
                self._reject(number, "change address of")
        logger.info("parcel_address_set", number=number)

    def delete(self, number: int) -> None:
        """
        Physically remove a registered parcel.

        Raises:
            NotFoundError: No parcel with this number (including one already deleted)
            InvalidStateError: The parcel is no longer registered
        """
        with self._store_errors("delete", number):
            deleted = (
                self.db.query(Parcel)
                .filter_by(number=number, status=ParcelStatus.REGISTERED.value)
                .delete(synchronize_session="evaluate")
            )
            if deleted == 0:
                self._reject(number, "delete")
        logger.info("parcel_deleted", number=number)

    def _reject(self, number: int, operation: str) -> None:
        """Explain why a guarded statement touched no rows."""
        status = self._current_status(number)
        if status is None:
            raise NotFoundError(number)
        logger.warning("parcel_mutation_rejected", number=number, status=status, operation=operation)
        raise InvalidStateError(number, status, operation)
