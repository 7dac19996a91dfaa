from fastapi import APIRouter, HTTPException, Depends
from courtbooking.schemas.sch_booking import (
    AvailabilityRequest,
    AvailabilityResponse,
    BookingCreate,
    BookingResponse,
    PriceQuoteRequest
)
from courtbooking.models.mod_auth import AuthUser, UserRole
from courtbooking.models.mod_booking import PriceBreakdown
from courtbooking.services.svc_booking import BookingService
from courtbooking.dependencies.dep_auth import get_current_user, get_current_admin
from courtbooking.dependencies.dep_services import get_booking_service
from typing import List

router = APIRouter(
    prefix="/bookings",
    tags=["Bookings"],
    responses={404: {"description": "Not found"}},
)

def _ensure_can_access(booking, current_user: AuthUser, action: str):
    if current_user.role == UserRole.ADMIN:
        return
    if booking.user_id != current_user.id:
        raise HTTPException(
            status_code=403,
            detail=f"You don't have permission to {action} this booking"
        )

@router.post('/', response_model=BookingResponse)
def create_booking(
    booking: BookingCreate,
    service: BookingService = Depends(get_booking_service),
    current_user: AuthUser = Depends(get_current_user)
):
    """
    Book a court, with an optional coach and equipment, for the current user.

    - Rejects with 409 and the exact reason when the court, coach or an
      equipment item is not available for the slot
    - Returns the stored booking with its price breakdown
    """
    return service.create_booking(current_user.id, booking)

@router.post('/availability', response_model=AvailabilityResponse)
def check_availability(
    request: AvailabilityRequest,
    service: BookingService = Depends(get_booking_service),
    current_user: AuthUser = Depends(get_current_user)
):
    """Check whether a booking could be made, without making it."""
    result = service.check_availability(request)
    return AvailabilityResponse(ok=result.ok, reason=result.reason)

@router.post('/price-preview', response_model=PriceBreakdown)
def preview_price(
    request: PriceQuoteRequest,
    service: BookingService = Depends(get_booking_service),
    current_user: AuthUser = Depends(get_current_user)
):
    """Quote the price breakdown of a prospective booking. Nothing is stored."""
    return service.preview_price(request)

@router.get('/me', response_model=List[BookingResponse])
def get_my_bookings(
    service: BookingService = Depends(get_booking_service),
    current_user: AuthUser = Depends(get_current_user)
):
    """Booking history of the authenticated user, most recent slot first."""
    return service.get_user_bookings(current_user.id)

@router.get('/', response_model=List[BookingResponse])
def list_bookings(
    service: BookingService = Depends(get_booking_service),
    current_user: AuthUser = Depends(get_current_admin)
):
    """All bookings. Admins only."""
    return service.list_bookings()

@router.get('/{booking_id}', response_model=BookingResponse)
def get_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
    current_user: AuthUser = Depends(get_current_user)
):
    """
    Get details of a specific booking by its ID.
    - Users can only view their own bookings
    - Admins can view all bookings
    """
    booking = service.get_booking(booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail='Booking not found')
    _ensure_can_access(booking, current_user, "view")
    return booking

@router.post('/{booking_id}/cancel', response_model=BookingResponse)
def cancel_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
    current_user: AuthUser = Depends(get_current_user)
):
    """
    Cancel a confirmed booking.

    - Frees the court, coach and equipment for the slot
    - Keeps the price breakdown recorded at creation
    - Users can only cancel their own bookings, admins can cancel any
    """
    booking = service.get_booking(booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail='Booking not found')
    _ensure_can_access(booking, current_user, "cancel")
    return service.cancel_booking(booking_id)
