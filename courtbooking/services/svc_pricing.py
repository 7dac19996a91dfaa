from decimal import Decimal
from typing import Optional
from courtbooking.models.mod_booking import PriceBreakdown
from courtbooking.models.mod_catalog import Court, PricingRule, RuleType
from courtbooking.repositories.rep_base import CatalogRepository
from courtbooking.schemas.sch_booking import PriceQuoteRequest
from courtbooking.validators.val_booking import BookingValidator
from courtbooking.utils.intervals import local_hour_and_weekday
from courtbooking.configuration.config import Config
from courtbooking.configuration.monitor import log_event, log_exception, start_span

ZERO = Decimal("0")

def _matches_day(rule: PricingRule, weekday: int) -> bool:
    return bool(rule.condition.days) and weekday in rule.condition.days

def _matches_peak(rule: PricingRule, hour: int) -> bool:
    condition = rule.condition
    if condition.start_hour is None or condition.end_hour is None:
        return False
    return condition.start_hour <= hour < condition.end_hour and rule.type == RuleType.MULTIPLIER

def _matches_court_type(rule: PricingRule, court: Court) -> bool:
    return rule.condition.court_type is not None and rule.condition.court_type == court.type

class PriceCalculator:
    """
    Itemized price for a prospective booking.

    The court's base price and the coach rate are flat per booking. Every
    active pricing rule is evaluated on its own and may add to several
    buckets at once: day-of-week rules add to weekend_fee, multiplier rules
    whose hour window contains the start hour add to peak_fee, and court-type
    rules add to indoor_premium.
    """

    def __init__(self, catalog: CatalogRepository, timezone_name: Optional[str] = None):
        self.catalog = catalog
        self.timezone_name = timezone_name or Config.BOOKING_TIMEZONE

    def calculate_price(self, request: PriceQuoteRequest) -> PriceBreakdown:
        try:
            with start_span("calculate_price", attributes={"court_id": request.court_id}):
                BookingValidator.validate_booking_request(
                    request.start_time, request.end_time, request.equipment_items
                )

                court = self.catalog.get_court(request.court_id)
                rules = self.catalog.list_active_pricing_rules()
                hour, weekday = local_hour_and_weekday(request.start_time, self.timezone_name)

                base_price = court.base_price
                indoor_premium = ZERO
                peak_fee = ZERO
                weekend_fee = ZERO
                equipment_fee = ZERO
                coach_fee = ZERO

                for rule in rules:
                    if not rule.is_active:
                        continue
                    if _matches_day(rule, weekday):
                        weekend_fee += rule.value
                    if _matches_peak(rule, hour):
                        peak_fee += base_price * (rule.value - 1)
                    if _matches_court_type(rule, court):
                        indoor_premium += rule.value

                for item in request.equipment_items:
                    equipment = self.catalog.get_equipment(item.equipment_id)
                    equipment_fee += equipment.price_per_unit * item.quantity

                if request.coach_id:
                    coach_fee = self.catalog.get_coach(request.coach_id).price_per_hour

                breakdown = PriceBreakdown(
                    base_price=base_price,
                    indoor_premium=indoor_premium,
                    peak_fee=peak_fee,
                    weekend_fee=weekend_fee,
                    coach_fee=coach_fee,
                    equipment_fee=equipment_fee,
                    total=base_price + indoor_premium + peak_fee + weekend_fee + equipment_fee + coach_fee
                )

                log_event("Price calculated", {
                    "court_id": request.court_id,
                    "hour": hour,
                    "weekday": weekday,
                    "rules_evaluated": len(rules),
                    "total": breakdown.total
                })
                return breakdown
        except Exception as e:
            log_exception(e, {"operation": "calculate_price", "court_id": request.court_id})
            raise
