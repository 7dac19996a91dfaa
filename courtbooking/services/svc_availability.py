from datetime import datetime
from typing import List, Optional
from courtbooking.models.mod_booking import AvailabilityResult, EquipmentItem, ResourceKind
from courtbooking.repositories.rep_base import BookingLedger, CatalogRepository
from courtbooking.validators.val_booking import BookingValidator
from courtbooking.configuration.monitor import log_event, log_exception, start_span

COURT_UNAVAILABLE = "Court not available for this slot."
COACH_UNAVAILABLE = "Coach unavailable for this slot."
STOCK_UNAVAILABLE = "{name} stock not available."

class AvailabilityChecker:
    """
    Decides whether a court, an optional coach and a list of equipment can be
    booked for a slot without clashing with confirmed bookings.

    Checks run court, then equipment (in request order), then coach. The
    first failing check is reported and nothing after it is read.
    """

    def __init__(self, ledger: BookingLedger, catalog: CatalogRepository):
        self.ledger = ledger
        self.catalog = catalog

    def _court_is_free(self, court_id: str, start_time: datetime, end_time: datetime) -> bool:
        return not self.ledger.find_overlapping(ResourceKind.COURT, court_id, start_time, end_time)

    def _coach_is_free(self, coach_id: str, start_time: datetime, end_time: datetime) -> bool:
        self.catalog.get_coach(coach_id)
        return not self.ledger.find_overlapping(ResourceKind.COACH, coach_id, start_time, end_time)

    def _first_short_equipment(self, equipment_items: List[EquipmentItem],
                               start_time: datetime, end_time: datetime) -> Optional[str]:
        """Name of the first requested equipment whose stock would be exceeded"""
        for item in equipment_items:
            equipment = self.catalog.get_equipment(item.equipment_id)
            # Equipment is a shared pool, so bookings on every court count
            hits = self.ledger.find_overlapping(
                ResourceKind.EQUIPMENT, item.equipment_id, start_time, end_time
            )
            booked = sum(hit.quantity or 0 for hit in hits)
            if booked + item.quantity > equipment.total_stock:
                log_event("Equipment stock exceeded", {
                    "equipment_id": item.equipment_id,
                    "booked": booked,
                    "requested": item.quantity,
                    "total_stock": equipment.total_stock
                })
                return equipment.name
        return None

    def check_availability(self, court_id: str, equipment_items: List[EquipmentItem],
                           coach_id: Optional[str], start_time: datetime,
                           end_time: datetime) -> AvailabilityResult:
        try:
            with start_span("check_availability", attributes={"court_id": court_id}):
                BookingValidator.validate_booking_request(start_time, end_time, equipment_items)

                log_event("Availability check started", {
                    "court_id": court_id,
                    "coach_id": coach_id,
                    "equipment_count": len(equipment_items),
                    "start_time": start_time.isoformat(),
                    "end_time": end_time.isoformat()
                })

                # Raises NotFoundError for an unknown court
                self.catalog.get_court(court_id)

                if not self._court_is_free(court_id, start_time, end_time):
                    result = AvailabilityResult.unavailable(COURT_UNAVAILABLE)
                else:
                    short_name = self._first_short_equipment(equipment_items, start_time, end_time)
                    if short_name is not None:
                        result = AvailabilityResult.unavailable(STOCK_UNAVAILABLE.format(name=short_name))
                    elif coach_id and not self._coach_is_free(coach_id, start_time, end_time):
                        result = AvailabilityResult.unavailable(COACH_UNAVAILABLE)
                    else:
                        result = AvailabilityResult.available()

                log_event("Availability check finished", {
                    "court_id": court_id,
                    "ok": result.ok,
                    "reason": result.reason
                })
                return result
        except Exception as e:
            log_exception(e, {"operation": "check_availability", "court_id": court_id})
            raise
