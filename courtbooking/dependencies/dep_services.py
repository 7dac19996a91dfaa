from functools import lru_cache
from courtbooking.configuration.database import get_container
from courtbooking.repositories.rep_booking import CosmosBookingLedger
from courtbooking.repositories.rep_catalog import CosmosCatalogRepository
from courtbooking.services.svc_availability import AvailabilityChecker
from courtbooking.services.svc_booking import BookingService
from courtbooking.services.svc_locks import ResourceLockManager
from courtbooking.services.svc_pricing import PriceCalculator

@lru_cache(maxsize=1)
def get_booking_service() -> BookingService:
    """
    Wire the booking service to the Cosmos containers.
    Cached so that every request shares the same resource locks.
    """
    ledger = CosmosBookingLedger(get_container("bookings"))
    catalog = CosmosCatalogRepository({
        key: get_container(key) for key in ("courts", "coaches", "equipment", "pricingrules")
    })
    return BookingService(
        ledger=ledger,
        availability=AvailabilityChecker(ledger, catalog),
        pricing=PriceCalculator(catalog),
        locks=ResourceLockManager()
    )
