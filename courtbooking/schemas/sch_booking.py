from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from courtbooking.models.mod_booking import BookingStatus, EquipmentItem, PriceBreakdown
from courtbooking.utils.intervals import ensure_utc

class PriceQuoteRequest(BaseModel):
    court_id: str
    coach_id: Optional[str] = None
    equipment_items: List[EquipmentItem] = []
    start_time: datetime = Field(
        description="Start time in ISO 8601 format (e.g. 2025-03-11T18:00:00.000Z)"
    )
    end_time: datetime = Field(
        description="End time in ISO 8601 format (e.g. 2025-03-11T19:00:00.000Z)"
    )

    @field_validator('start_time', 'end_time')
    @classmethod
    def normalize_to_utc(cls, v):
        return ensure_utc(v)

class AvailabilityRequest(PriceQuoteRequest):
    pass

class BookingCreate(PriceQuoteRequest):
    pass

class AvailabilityResponse(BaseModel):
    ok: bool
    reason: Optional[str] = None

class BookingResponse(BaseModel):
    id: str
    user_id: str
    court_id: str
    coach_id: Optional[str]
    equipment_items: List[EquipmentItem]
    start_time: datetime
    end_time: datetime
    status: BookingStatus
    price_breakdown: PriceBreakdown
    created_at: datetime

    class Config:
        from_attributes = True
