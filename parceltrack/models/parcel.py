"""
Parcel model.

A Parcel is one shipment tracked from registration to delivery.

Only the status and address columns ever change after insert, and the
address only while the parcel is still registered (enforced by
ParcelRepository, not by the table).
"""

from datetime import datetime, UTC

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from parceltrack.core.constants import PARCEL_TABLE, ParcelStatus
from parceltrack.models.base import Base, SerializationMixin


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with second precision."""
    return datetime.now(UTC).replace(microsecond=0).isoformat()


class Parcel(SerializationMixin, Base):
    """
    Shipment record.

    Attributes:
        number: Identity assigned by the store on insert
        client: Owning client identifier
        status: Lifecycle state (open text; see ParcelStatus)
        address: Delivery address
        created_at: ISO-8601 timestamp string fixed at creation

    Example:
        parcel = Parcel(client=1000, address="Baker st. 221b")
        db.add(parcel)
        db.flush()
        print(parcel.number)
    """

    __tablename__ = PARCEL_TABLE

    number: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    client: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,  # get_by_client
    )

    status: Mapped[str] = mapped_column(Text, nullable=False)

    address: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[str] = mapped_column(Text, nullable=False)

    # Never reuse a number after deletion
    __table_args__ = {"sqlite_autoincrement": True}

    def __init__(self, **kwargs):
        """Fill status and created_at defaults when not provided."""
        kwargs.setdefault("status", ParcelStatus.REGISTERED.value)
        kwargs.setdefault("created_at", utc_timestamp())
        if isinstance(kwargs["status"], ParcelStatus):
            kwargs["status"] = kwargs["status"].value
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return (
            f"<Parcel(number={self.number}, client={self.client}, "
            f"status='{self.status}', address='{self.address}')>"
        )

    def __str__(self) -> str:
        """Human-readable representation."""
        return (
            f"Parcel {self.number}: {self.status} for client {self.client}, "
            f"address {self.address}, created {self.created_at}"
        )
