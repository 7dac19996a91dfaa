from datetime import datetime
from typing import List
from fastapi import HTTPException
from courtbooking.models.mod_booking import Booking, BookingStatus, EquipmentItem
from courtbooking.utils.intervals import ensure_utc

class BookingValidationError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)

class BookingValidator:
    @staticmethod
    def validate_interval(start_time: datetime, end_time: datetime):
        """Validate that the slot has a positive length"""
        if ensure_utc(end_time) <= ensure_utc(start_time):
            raise BookingValidationError("end_time must be after start_time")

    @staticmethod
    def validate_equipment_items(equipment_items: List[EquipmentItem]):
        """Validate quantities and that each equipment id is requested once"""
        seen = set()
        for item in equipment_items:
            if item.quantity <= 0:
                raise BookingValidationError(
                    f"Quantity for equipment {item.equipment_id} must be positive"
                )
            if item.equipment_id in seen:
                raise BookingValidationError(
                    f"Equipment {item.equipment_id} is listed more than once"
                )
            seen.add(item.equipment_id)

    @staticmethod
    def validate_booking_request(start_time: datetime, end_time: datetime, equipment_items: List[EquipmentItem]):
        """Validate all rules for checking, pricing or creating a booking"""
        BookingValidator.validate_interval(start_time, end_time)
        BookingValidator.validate_equipment_items(equipment_items)

    @staticmethod
    def validate_cancel_booking(booking: Booking):
        """Only confirmed bookings can be cancelled"""
        if booking.status != BookingStatus.CONFIRMED:
            raise BookingValidationError(
                f"Booking is {booking.status.value} and cannot be cancelled"
            )
