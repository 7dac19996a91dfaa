import pytest
from unittest.mock import MagicMock

from courtbooking.models.mod_booking import BookingStatus, EquipmentItem, ResourceKind
from courtbooking.repositories.rep_base import NotFoundError
from courtbooking.services.svc_availability import (
    AvailabilityChecker,
    COACH_UNAVAILABLE,
    COURT_UNAVAILABLE,
)
from courtbooking.validators.val_booking import BookingValidationError
from helpers import at


class TestCourtAvailability:
    def test_free_court(self, checker):
        result = checker.check_availability("court-1", [], None, at(10), at(11))
        assert result.ok is True
        assert result.reason is None

    def test_overlapping_booking_blocks_court(self, checker, ledger):
        ledger.add("existing", at(10), at(11))

        result = checker.check_availability("court-1", [], None, at(10, 30), at(11, 30))

        assert result.ok is False
        assert result.reason == "Court not available for this slot."

    def test_touching_slot_is_available(self, checker, ledger):
        ledger.add("existing", at(10), at(11))

        assert checker.check_availability("court-1", [], None, at(11), at(12)).ok is True
        assert checker.check_availability("court-1", [], None, at(9), at(10)).ok is True

    def test_booking_on_other_court_does_not_block(self, checker, ledger):
        ledger.add("existing", at(10), at(11), court_id="court-2")

        assert checker.check_availability("court-1", [], None, at(10), at(11)).ok is True

    @pytest.mark.parametrize("status", [BookingStatus.CANCELLED, BookingStatus.WAITLIST])
    def test_only_confirmed_bookings_occupy(self, checker, ledger, status):
        ledger.add("existing", at(10), at(11), status=status)

        assert checker.check_availability("court-1", [], None, at(10), at(11)).ok is True

    def test_unknown_court_raises(self, checker):
        with pytest.raises(NotFoundError) as exc_info:
            checker.check_availability("nowhere", [], None, at(10), at(11))
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Court nowhere not found"


class TestEquipmentAvailability:
    def test_stock_exceeded(self, checker, ledger):
        ledger.add("a", at(10), at(11), court_id="court-2",
                   equipment_items=[EquipmentItem(equipment_id="racket", quantity=2)])
        ledger.add("b", at(10, 30), at(11, 30), court_id="court-3",
                   equipment_items=[EquipmentItem(equipment_id="racket", quantity=1)])

        result = checker.check_availability(
            "court-1", [EquipmentItem(equipment_id="racket", quantity=3)], None, at(10), at(11)
        )

        assert result.ok is False
        assert result.reason == "Racket stock not available."

    def test_remaining_stock_can_be_booked(self, checker, ledger):
        ledger.add("a", at(10), at(11), court_id="court-2",
                   equipment_items=[EquipmentItem(equipment_id="racket", quantity=3)])

        result = checker.check_availability(
            "court-1", [EquipmentItem(equipment_id="racket", quantity=2)], None, at(10), at(11)
        )

        assert result.ok is True

    def test_non_overlapping_usage_is_ignored(self, checker, ledger):
        ledger.add("a", at(9), at(10), court_id="court-2",
                   equipment_items=[EquipmentItem(equipment_id="racket", quantity=5)])

        result = checker.check_availability(
            "court-1", [EquipmentItem(equipment_id="racket", quantity=5)], None, at(10), at(11)
        )

        assert result.ok is True

    def test_first_failing_item_in_request_order_is_reported(self, checker, ledger):
        ledger.add("a", at(10), at(11), court_id="court-2", equipment_items=[
            EquipmentItem(equipment_id="racket", quantity=5),
            EquipmentItem(equipment_id="shuttle", quantity=10),
        ])

        result = checker.check_availability("court-1", [
            EquipmentItem(equipment_id="shuttle", quantity=1),
            EquipmentItem(equipment_id="racket", quantity=1),
        ], None, at(10), at(11))

        assert result.reason == "Shuttlecock tube stock not available."

    def test_unknown_equipment_raises(self, checker):
        with pytest.raises(NotFoundError):
            checker.check_availability(
                "court-1", [EquipmentItem(equipment_id="ghost", quantity=1)], None, at(10), at(11)
            )


class TestCoachAvailability:
    def test_coach_busy_on_other_court(self, checker, ledger):
        ledger.add("existing", at(10), at(11), court_id="court-2", coach_id="coach-1")

        result = checker.check_availability("court-1", [], "coach-1", at(10, 30), at(11, 30))

        assert result.ok is False
        assert result.reason == "Coach unavailable for this slot."

    def test_coach_not_checked_when_not_requested(self, checker, ledger):
        ledger.add("existing", at(10), at(11), court_id="court-2", coach_id="coach-1")

        assert checker.check_availability("court-1", [], None, at(10), at(11)).ok is True

    def test_unknown_coach_raises(self, checker):
        with pytest.raises(NotFoundError) as exc_info:
            checker.check_availability("court-1", [], "ghost-coach", at(10), at(11))
        assert exc_info.value.detail == "Coach ghost-coach not found"

    def test_unknown_coach_not_looked_up_when_court_is_taken(self, checker, ledger):
        ledger.add("existing", at(10), at(11))

        result = checker.check_availability("court-1", [], "ghost-coach", at(10), at(11))

        assert result.reason == COURT_UNAVAILABLE


class TestCheckOrder:
    def test_court_conflict_short_circuits(self, catalog):
        ledger = MagicMock()
        ledger.find_overlapping.return_value = [MagicMock(quantity=None)]
        checker = AvailabilityChecker(ledger, catalog)

        result = checker.check_availability(
            "court-1", [EquipmentItem(equipment_id="racket", quantity=1)], "coach-1", at(10), at(11)
        )

        assert result.reason == COURT_UNAVAILABLE
        ledger.find_overlapping.assert_called_once_with(ResourceKind.COURT, "court-1", at(10), at(11))

    def test_equipment_checked_before_coach(self, checker, ledger):
        ledger.add("existing", at(10), at(11), court_id="court-2", coach_id="coach-1",
                   equipment_items=[EquipmentItem(equipment_id="racket", quantity=5)])

        result = checker.check_availability(
            "court-1", [EquipmentItem(equipment_id="racket", quantity=1)], "coach-1", at(10), at(11)
        )

        assert result.reason == "Racket stock not available."

    def test_coach_reported_when_everything_else_is_free(self, checker, ledger):
        ledger.add("existing", at(10), at(11), court_id="court-2", coach_id="coach-1")

        result = checker.check_availability(
            "court-1", [EquipmentItem(equipment_id="racket", quantity=1)], "coach-1", at(10), at(11)
        )

        assert result.reason == COACH_UNAVAILABLE


class TestInputValidation:
    @pytest.mark.parametrize("start, end", [(at(11), at(10)), (at(10), at(10))])
    def test_empty_or_reversed_interval_is_an_error(self, checker, start, end):
        with pytest.raises(BookingValidationError) as exc_info:
            checker.check_availability("court-1", [], None, start, end)
        assert exc_info.value.status_code == 400

    def test_duplicate_equipment_is_rejected(self, checker):
        with pytest.raises(BookingValidationError):
            checker.check_availability("court-1", [
                EquipmentItem(equipment_id="racket", quantity=1),
                EquipmentItem(equipment_id="racket", quantity=1),
            ], None, at(10), at(11))
