from decimal import Decimal

import pytest

from courtbooking.models.mod_catalog import Coach, Court, CourtType, Equipment
from courtbooking.services.svc_availability import AvailabilityChecker
from courtbooking.services.svc_booking import BookingService
from courtbooking.services.svc_locks import ResourceLockManager
from courtbooking.services.svc_pricing import PriceCalculator
from fakes import InMemoryCatalog, InMemoryLedger


@pytest.fixture
def catalog():
    catalog = InMemoryCatalog()
    catalog.courts["court-1"] = Court(id="court-1", name="Court 1", type=CourtType.INDOOR, base_price=Decimal("500"))
    catalog.courts["court-2"] = Court(id="court-2", name="Court 2", type=CourtType.OUTDOOR, base_price=Decimal("300"))
    catalog.coaches["coach-1"] = Coach(id="coach-1", name="Ana", price_per_hour=Decimal("200"))
    catalog.equipment["racket"] = Equipment(id="racket", name="Racket", total_stock=5, price_per_unit=Decimal("50"))
    catalog.equipment["shuttle"] = Equipment(id="shuttle", name="Shuttlecock tube", total_stock=10, price_per_unit=Decimal("25.50"))
    return catalog


@pytest.fixture
def ledger():
    return InMemoryLedger()


@pytest.fixture
def checker(ledger, catalog):
    return AvailabilityChecker(ledger, catalog)


@pytest.fixture
def calculator(catalog):
    return PriceCalculator(catalog, timezone_name="UTC")


@pytest.fixture
def booking_service(ledger, catalog):
    return BookingService(
        ledger=ledger,
        availability=AvailabilityChecker(ledger, catalog),
        pricing=PriceCalculator(catalog, timezone_name="UTC"),
        locks=ResourceLockManager()
    )
