"""
Application-wide constants.

Centralize magic strings and lifecycle values here.
"""

from enum import Enum
from typing import Optional


# ========================================
# Table Names
# ========================================

PARCEL_TABLE = "parcel"


# ========================================
# Parcel Status
# ========================================

class ParcelStatus(str, Enum):
    """
    Known parcel lifecycle states.

    The status column itself is open text: any string may be stored, and
    transitions between states are not restricted by the repository.
    Only REGISTERED carries meaning for the guarded mutations.

    Usage:
        status = ParcelStatus.REGISTERED
        print(status == "registered")  # True
    """

    REGISTERED = "registered"
    """Initial state. Address edits and deletion are allowed."""

    SENT = "sent"
    """Handed over to the carrier."""

    DELIVERED = "delivered"
    """Received by the client. Last step of the forward lifecycle."""

    @classmethod
    def next(cls, status: str) -> Optional["ParcelStatus"]:
        """
        Return the state following ``status`` in the forward lifecycle.

        Returns None for DELIVERED and for values outside the vocabulary.
        """
        try:
            current = cls(status)
        except ValueError:
            return None
        order = LIFECYCLE_ORDER
        index = order.index(current)
        if index + 1 >= len(order):
            return None
        return order[index + 1]


LIFECYCLE_ORDER = (
    ParcelStatus.REGISTERED,
    ParcelStatus.SENT,
    ParcelStatus.DELIVERED,
)
