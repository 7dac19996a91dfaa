from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from enum import Enum

class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    WAITLIST = "waitlist"

class ResourceKind(str, Enum):
    COURT = "court"
    COACH = "coach"
    EQUIPMENT = "equipment"

class EquipmentItem(BaseModel):
    equipment_id: str
    quantity: int = Field(gt=0)

class PriceBreakdown(BaseModel):
    """
    Itemized price stored with a booking and never recomputed.

    Components are non-negative except peak_fee, which goes negative when a
    matching multiplier is below 1 (an off-peak discount).
    """
    base_price: Decimal = Decimal("0")
    indoor_premium: Decimal = Decimal("0")
    peak_fee: Decimal = Decimal("0")
    weekend_fee: Decimal = Decimal("0")
    coach_fee: Decimal = Decimal("0")
    equipment_fee: Decimal = Decimal("0")
    total: Decimal = Decimal("0")

    class Config:
        frozen = True

class AvailabilityResult(BaseModel):
    ok: bool
    reason: Optional[str] = None

    @classmethod
    def available(cls) -> "AvailabilityResult":
        return cls(ok=True)

    @classmethod
    def unavailable(cls, reason: str) -> "AvailabilityResult":
        return cls(ok=False, reason=reason)

class OverlapHit(BaseModel):
    """A confirmed booking that overlaps a requested interval on one resource."""
    booking_id: str
    quantity: Optional[int] = None   # set only for equipment lookups

class Booking(BaseModel):
    id: str
    user_id: str
    court_id: str
    coach_id: Optional[str] = None
    equipment_items: List[EquipmentItem] = []
    start_time: datetime
    end_time: datetime
    status: BookingStatus = BookingStatus.CONFIRMED
    price_breakdown: PriceBreakdown
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
