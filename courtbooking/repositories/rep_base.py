"""Read/write contracts the booking engine depends on.

The availability checker and price calculator only ever read through these
interfaces; booking creation is the single writer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from fastapi import HTTPException
from courtbooking.models.mod_booking import Booking, BookingStatus, OverlapHit, ResourceKind
from courtbooking.models.mod_catalog import Coach, Court, Equipment, PricingRule

class NotFoundError(HTTPException):
    def __init__(self, kind: str, item_id: str):
        super().__init__(status_code=404, detail=f"{kind.capitalize()} {item_id} not found")
        self.kind = kind
        self.item_id = item_id

class CatalogRepository(ABC):
    @abstractmethod
    def get_court(self, court_id: str) -> Court:
        """Return the court or raise NotFoundError"""

    @abstractmethod
    def get_coach(self, coach_id: str) -> Coach:
        """Return the coach or raise NotFoundError"""

    @abstractmethod
    def get_equipment(self, equipment_id: str) -> Equipment:
        """Return the equipment or raise NotFoundError"""

    @abstractmethod
    def list_active_pricing_rules(self) -> List[PricingRule]:
        """Return every pricing rule with is_active set"""

class BookingLedger(ABC):
    @abstractmethod
    def find_overlapping(self, resource_kind: ResourceKind, resource_id: str,
                         start_time: datetime, end_time: datetime) -> List[OverlapHit]:
        """Confirmed bookings on the resource whose slot overlaps [start_time, end_time)"""

    @abstractmethod
    def create_booking(self, booking: Booking) -> Booking:
        pass

    @abstractmethod
    def get_booking(self, booking_id: str) -> Optional[Booking]:
        pass

    @abstractmethod
    def list_user_bookings(self, user_id: str) -> List[Booking]:
        """Bookings of one user, most recent slot first"""

    @abstractmethod
    def list_bookings(self) -> List[Booking]:
        pass

    @abstractmethod
    def update_status(self, booking_id: str, status: BookingStatus) -> Booking:
        pass
