# services/booking_service.py
"""
Serviced-accommodation booking service.

Booking financials:
- total_nights = ceil(|check_out - check_in|) in days
- gross_booking_value = total_nights x nightly_rate (unless supplied)
- net_revenue = gross_booking_value - platform_fee (unless supplied)
- for a managed SA property:
     pm_fee_amount = (net_revenue - cleaning_fee) x management_fee_percent / 100
     total_pm_deduction = cleaning_fee + pm_fee_amount

The PM fee is always taken on net revenue after cleaning. Every code path
that sets pm_fee_amount goes through calculate_pm_fee.
"""
import logging
import math
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import PMPaymentTerms, Property, SABooking
from schemas.sa_booking import (
     BookingForecast,
     PaymentTiming,
     PMSummary,
     RecalculateResult,
)
from services.summary_service import as_money, fold_booking_forecast, fold_pm_summary
from utils.dates import month_bounds

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
     return value.quantize(CENT, rounding=ROUND_HALF_UP)


def count_nights(check_in: date, check_out: date) -> int:
     return math.ceil(abs((check_out - check_in).days))


def calculate_pm_fee(net_revenue, cleaning_fee, fee_percent) -> Tuple[Decimal, Decimal]:
     """
     Return (pm_fee_amount, total_pm_deduction).

     >>> calculate_pm_fee(Decimal("1000"), Decimal("285"), Decimal("18"))
     (Decimal('128.70'), Decimal('413.70'))
     """
     cleaning = as_money(cleaning_fee)
     pm_fee = round_money((as_money(net_revenue) - cleaning) * as_money(fee_percent) / Decimal("100"))
     return pm_fee, round_money(cleaning + pm_fee)


def derive_booking_financials(fields: Dict, prop: Property) -> Dict:
     """
     Fill in the derived figures of a booking from its raw fields.

     Explicitly supplied nights, gross and net are kept. The cleaning fee
     falls back to the property's fixed cleaning fee for a managed SA
     property. Returns a new dict.
     """
     data = dict(fields)

     if not data.get("total_nights") and data.get("check_in") and data.get("check_out"):
          data["total_nights"] = count_nights(data["check_in"], data["check_out"])

     if data.get("gross_booking_value") is None:
          rate = data.get("nightly_rate")
          data["gross_booking_value"] = (
               round_money(as_money(rate) * (data.get("total_nights") or 0)) if rate is not None else Decimal("0")
          )

     platform_fee = as_money(data.get("platform_fee"))
     data["platform_fee"] = platform_fee
     if data.get("net_revenue") is None:
          data["net_revenue"] = round_money(as_money(data["gross_booking_value"]) - platform_fee)

     if prop.is_managed_sa:
          if data.get("cleaning_fee") is None:
               data["cleaning_fee"] = as_money(prop.fixed_cleaning_fee)
          pm_fee, deduction = calculate_pm_fee(
               data["net_revenue"], data["cleaning_fee"], prop.management_fee_percent
          )
          data["pm_fee_amount"] = pm_fee
          data["total_pm_deduction"] = deduction
     else:
          data["cleaning_fee"] = as_money(data.get("cleaning_fee"))
          data["pm_fee_amount"] = Decimal("0")
          data["total_pm_deduction"] = Decimal("0")

     if not data.get("currency"):
          data["currency"] = prop.currency
     return data


def refresh_booking_financials(booking: SABooking, prop: Property, changes: Dict) -> None:
     """
     Apply an update to a stored booking and re-derive what depends on it.

     Nights, gross and net are recomputed from the changed inputs unless the
     update supplies them itself. PM figures are always recomputed.
     """
     for field, value in changes.items():
          setattr(booking, field, value)

     if "total_nights" not in changes and {"check_in", "check_out"} & changes.keys():
          booking.total_nights = count_nights(booking.check_in, booking.check_out)

     gross_changed = "gross_booking_value" in changes
     if not gross_changed and {"check_in", "check_out", "nightly_rate", "total_nights"} & changes.keys():
          if booking.nightly_rate is not None:
               booking.gross_booking_value = round_money(as_money(booking.nightly_rate) * (booking.total_nights or 0))
               gross_changed = True

     if "net_revenue" not in changes and (gross_changed or "platform_fee" in changes):
          booking.net_revenue = round_money(as_money(booking.gross_booking_value) - as_money(booking.platform_fee))

     apply_pm_fees(booking, prop)


def apply_pm_fees(booking: SABooking, prop: Property) -> bool:
     """
     Set the PM figures of a booking from its property. Returns True when
     anything changed.
     """
     if prop.is_managed_sa:
          pm_fee, deduction = calculate_pm_fee(
               booking.net_revenue, booking.cleaning_fee, prop.management_fee_percent
          )
     else:
          pm_fee, deduction = Decimal("0"), Decimal("0")

     changed = as_money(booking.pm_fee_amount) != pm_fee or as_money(booking.total_pm_deduction) != deduction
     booking.pm_fee_amount = pm_fee
     booking.total_pm_deduction = deduction
     return changed


def _format_percent(value: Decimal) -> str:
     return format(value.normalize(), "f")


def payment_timing_for(prop: Property, terms: Optional[PMPaymentTerms]) -> PaymentTiming:
     """
     Describe how the property manager of a property is paid.

     Uses the property's payment terms record when there is one, otherwise
     a generic "<pct>% of net" paid as agreed.
     """
     percent = as_money(prop.management_fee_percent)
     if terms is None:
          return PaymentTiming(
               description=f"{_format_percent(percent)}% of net",
               percentage=percent,
               timing="As agreed",
          )
     return PaymentTiming(
          description=terms.description,
          percentage=as_money(terms.percentage) if terms.percentage is not None else percent,
          timing=terms.timing,
          cleaning_fee=(
               as_money(terms.cleaning_fee) if terms.cleaning_fee is not None else as_money(prop.fixed_cleaning_fee)
          ),
          currency=terms.currency,
     )


def get_landlord_property(db: Session, property_id: int, landlord_id: str) -> Optional[Property]:
     return (
          db.query(Property)
          .filter(
               Property.id == property_id,
               Property.landlord_id == landlord_id,
               Property.deleted_at.is_(None),
          )
          .first()
     )


def summarize_pm_payments(
     db: Session,
     property_id: int,
     landlord_id: str,
     month: Optional[int] = None,
     year: Optional[int] = None,
     today: Optional[date] = None
) -> PMSummary:
     """What the property manager is owed for bookings checking in during a month."""
     today = today or date.today()
     month = month if month is not None else today.month
     year = year if year is not None else today.year
     if not 1 <= month <= 12:
          return PMSummary.invalid("Month must be between 1 and 12")

     first_day, last_day = month_bounds(year, month)
     try:
          prop = get_landlord_property(db, property_id, landlord_id)
          if prop is None:
               return PMSummary.not_found("Property not found")

          bookings = (
               db.query(SABooking)
               .filter(
                    SABooking.property_id == property_id,
                    SABooking.landlord_id == landlord_id,
                    SABooking.check_in >= first_day,
                    SABooking.check_in <= last_day,
               )
               .all()
          )
          timing = payment_timing_for(prop, prop.payment_terms)
     except SQLAlchemyError:
          logger.exception("Failed to build PM summary for property %s", property_id)
          return PMSummary.upstream("Failed to fetch PM summary")

     return PMSummary(
          month=month,
          year=year,
          property_manager=prop.property_manager_name,
          payment_timing=timing,
          **fold_pm_summary(bookings),
     )


def booking_forecast(
     db: Session,
     property_id: int,
     landlord_id: str,
     year: Optional[int] = None
) -> BookingForecast:
     """Monthly revenue forecast of a property for a year, by check-in month."""
     year = year if year is not None else date.today().year
     try:
          prop = get_landlord_property(db, property_id, landlord_id)
          if prop is None:
               return BookingForecast.not_found("Property not found")

          bookings = (
               db.query(SABooking)
               .filter(
                    SABooking.property_id == property_id,
                    SABooking.landlord_id == landlord_id,
                    SABooking.check_in >= date(year, 1, 1),
                    SABooking.check_in <= date(year, 12, 31),
               )
               .all()
          )
     except SQLAlchemyError:
          logger.exception("Failed to build forecast for property %s", property_id)
          return BookingForecast.upstream("Failed to fetch forecast")

     return BookingForecast(year=year, months=fold_booking_forecast(bookings, year))


def recalculate_pm_fees(db: Session, property_id: int, landlord_id: str) -> RecalculateResult:
     """
     Re-apply the PM fee formula to every stored booking of a property.

     Commits once at the end; returns how many bookings changed.
     """
     try:
          prop = get_landlord_property(db, property_id, landlord_id)
          if prop is None:
               return RecalculateResult.not_found("Property not found")

          bookings = (
               db.query(SABooking)
               .filter(SABooking.property_id == property_id, SABooking.landlord_id == landlord_id)
               .all()
          )
          updated = sum(1 for booking in bookings if apply_pm_fees(booking, prop))
          db.commit()
     except SQLAlchemyError:
          db.rollback()
          logger.exception("Failed to recalculate PM fees for property %s", property_id)
          return RecalculateResult.upstream("Failed to recalculate PM fees")

     logger.info("Recalculated PM fees for property %s: %d of %d bookings changed", property_id, updated, len(bookings))
     return RecalculateResult(updated_count=updated)
