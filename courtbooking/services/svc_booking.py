import uuid
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import HTTPException
from courtbooking.models.mod_booking import AvailabilityResult, Booking, BookingStatus, PriceBreakdown
from courtbooking.repositories.rep_base import BookingLedger, NotFoundError
from courtbooking.schemas.sch_booking import AvailabilityRequest, BookingCreate, PriceQuoteRequest
from courtbooking.services.svc_availability import AvailabilityChecker
from courtbooking.services.svc_pricing import PriceCalculator
from courtbooking.services.svc_locks import ResourceLockManager, resource_keys
from courtbooking.validators.val_booking import BookingValidator
from courtbooking.configuration.monitor import log_event, log_exception, log_metric, start_span

class BookingConflictError(HTTPException):
    def __init__(self, reason: str):
        super().__init__(status_code=409, detail=reason)

class BookingService:
    def __init__(self, ledger: BookingLedger, availability: AvailabilityChecker,
                 pricing: PriceCalculator, locks: ResourceLockManager):
        self.ledger = ledger
        self.availability = availability
        self.pricing = pricing
        self.locks = locks

    def check_availability(self, request: AvailabilityRequest) -> AvailabilityResult:
        return self.availability.check_availability(
            request.court_id,
            request.equipment_items,
            request.coach_id,
            request.start_time,
            request.end_time
        )

    def preview_price(self, request: PriceQuoteRequest) -> PriceBreakdown:
        return self.pricing.calculate_price(request)

    def create_booking(self, user_id: str, booking: BookingCreate) -> Booking:
        try:
            with start_span("create_booking", attributes={
                "user_id": user_id,
                "court_id": booking.court_id
            }):
                log_event("Create booking started", {
                    "user_id": user_id,
                    "court_id": booking.court_id,
                    "coach_id": booking.coach_id,
                    "start_time": booking.start_time.isoformat(),
                    "end_time": booking.end_time.isoformat()
                })

                BookingValidator.validate_booking_request(
                    booking.start_time, booking.end_time, booking.equipment_items
                )

                keys = resource_keys(
                    booking.court_id,
                    booking.coach_id,
                    [item.equipment_id for item in booking.equipment_items]
                )
                # Check, price and insert under the same locks
                with self.locks.hold(keys):
                    result = self.check_availability(booking)
                    if not result.ok:
                        log_event("Booking rejected", {
                            "user_id": user_id,
                            "court_id": booking.court_id,
                            "reason": result.reason
                        })
                        raise BookingConflictError(result.reason)

                    breakdown = self.pricing.calculate_price(booking)

                    current_time = datetime.now(timezone.utc)
                    created = self.ledger.create_booking(Booking(
                        id=str(uuid.uuid4()),
                        user_id=user_id,
                        court_id=booking.court_id,
                        coach_id=booking.coach_id,
                        equipment_items=booking.equipment_items,
                        start_time=booking.start_time,
                        end_time=booking.end_time,
                        status=BookingStatus.CONFIRMED,
                        price_breakdown=breakdown,
                        created_at=current_time,
                        updated_at=current_time
                    ))

                log_event("Booking created successfully", {
                    "booking_id": created.id,
                    "user_id": user_id,
                    "court_id": created.court_id
                })
                log_metric("booking_total", breakdown.total, {"court_id": created.court_id})
                return created
        except BookingConflictError:
            raise
        except Exception as e:
            log_exception(e, {
                "operation": "create_booking",
                "user_id": user_id,
                "court_id": booking.court_id
            })
            raise

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        try:
            with start_span("get_booking", attributes={"booking_id": booking_id}):
                log_event("Retrieving booking", {"booking_id": booking_id})

                found = self.ledger.get_booking(booking_id)
                if found is None:
                    log_event("Booking not found", {"booking_id": booking_id})
                return found
        except Exception as e:
            log_exception(e, {"operation": "get_booking", "booking_id": booking_id})
            raise

    def get_user_bookings(self, user_id: str) -> List[Booking]:
        """Booking history of one user, latest slot first"""
        try:
            with start_span("get_user_bookings", attributes={"user_id": user_id}):
                bookings = self.ledger.list_user_bookings(user_id)
                log_event("User bookings retrieved", {
                    "user_id": user_id,
                    "count": len(bookings)
                })
                return bookings
        except Exception as e:
            log_exception(e, {"operation": "get_user_bookings", "user_id": user_id})
            raise

    def list_bookings(self) -> List[Booking]:
        try:
            with start_span("list_bookings"):
                bookings = self.ledger.list_bookings()
                log_event("All bookings retrieved", {"count": len(bookings)})
                return bookings
        except Exception as e:
            log_exception(e, {"operation": "list_bookings"})
            raise

    def cancel_booking(self, booking_id: str) -> Booking:
        """Release the booking's resources. The stored price breakdown is kept as is."""
        try:
            with start_span("cancel_booking", attributes={"booking_id": booking_id}):
                log_event("Cancel booking started", {"booking_id": booking_id})

                existing = self.ledger.get_booking(booking_id)
                if existing is None:
                    raise NotFoundError("booking", booking_id)
                BookingValidator.validate_cancel_booking(existing)

                cancelled = self.ledger.update_status(booking_id, BookingStatus.CANCELLED)

                log_event("Booking cancelled successfully", {
                    "booking_id": booking_id,
                    "user_id": cancelled.user_id
                })
                return cancelled
        except Exception as e:
            log_exception(e, {"operation": "cancel_booking", "booking_id": booking_id})
            raise
