"""
Serviced-accommodation booking financials and the PM settlement views.
"""
from datetime import date
from decimal import Decimal

from models import PMPaymentTerms, Property, SABooking
from schemas.common import ErrorKind
from services.booking_service import (
    calculate_pm_fee,
    count_nights,
    derive_booking_financials,
    payment_timing_for,
    recalculate_pm_fees,
    refresh_booking_financials,
    summarize_pm_payments,
)
from tests.conftest import LANDLORD_ID, OTHER_LANDLORD_ID


def managed_sa_property(**overrides):
    values = dict(
        name="OceanBliss Villa",
        property_category="sa",
        is_managed=True,
        management_fee_percent=Decimal("18"),
        fixed_cleaning_fee=Decimal("285"),
        currency="USD",
    )
    values.update(overrides)
    return Property(**values)


# ── pure derivation ──────────────────────────────────────────────────────────

class TestCalculatePMFee:
    def test_fee_taken_after_cleaning(self):
        assert calculate_pm_fee(Decimal("1000"), Decimal("285"), Decimal("18")) == (
            Decimal("128.70"), Decimal("413.70")
        )

    def test_rounds_half_up_to_cents(self):
        pm_fee, total = calculate_pm_fee(Decimal("100.05"), Decimal("0"), Decimal("10"))
        assert pm_fee == Decimal("10.01")
        assert total == Decimal("10.01")

    def test_zero_percent(self):
        assert calculate_pm_fee(Decimal("1000"), Decimal("285"), Decimal("0")) == (
            Decimal("0.00"), Decimal("285.00")
        )


class TestCountNights:
    def test_forward(self):
        assert count_nights(date(2025, 3, 1), date(2025, 3, 5)) == 4

    def test_reversed_dates_use_absolute_difference(self):
        assert count_nights(date(2025, 3, 5), date(2025, 3, 1)) == 4

    def test_across_month_end(self):
        assert count_nights(date(2025, 1, 30), date(2025, 2, 2)) == 3


class TestDeriveBookingFinancials:
    def test_managed_sa_booking(self):
        fields = derive_booking_financials(
            {
                "check_in": date(2025, 3, 1),
                "check_out": date(2025, 3, 5),
                "nightly_rate": Decimal("300"),
                "platform_fee": Decimal("200"),
            },
            managed_sa_property(),
        )

        assert fields["total_nights"] == 4
        assert fields["gross_booking_value"] == Decimal("1200.00")
        assert fields["net_revenue"] == Decimal("1000.00")
        assert fields["cleaning_fee"] == Decimal("285")
        assert fields["pm_fee_amount"] == Decimal("128.70")
        assert fields["total_pm_deduction"] == Decimal("413.70")
        assert fields["currency"] == "USD"

    def test_supplied_net_is_kept(self):
        fields = derive_booking_financials(
            {
                "check_in": date(2025, 3, 1),
                "check_out": date(2025, 3, 4),
                "net_revenue": Decimal("1000"),
                "cleaning_fee": Decimal("285"),
            },
            managed_sa_property(),
        )

        assert fields["net_revenue"] == Decimal("1000")
        assert fields["pm_fee_amount"] == Decimal("128.70")

    def test_unmanaged_property_has_no_pm_deduction(self):
        prop = managed_sa_property(is_managed=False)

        fields = derive_booking_financials(
            {"check_in": date(2025, 3, 1), "check_out": date(2025, 3, 3), "net_revenue": Decimal("500")},
            prop,
        )

        assert fields["pm_fee_amount"] == Decimal("0")
        assert fields["total_pm_deduction"] == Decimal("0")
        assert fields["cleaning_fee"] == Decimal("0")

    def test_managed_non_sa_property_has_no_pm_deduction(self):
        prop = managed_sa_property(property_category="btr")

        fields = derive_booking_financials(
            {"check_in": date(2025, 3, 1), "check_out": date(2025, 3, 3), "net_revenue": Decimal("500")},
            prop,
        )

        assert fields["total_pm_deduction"] == Decimal("0")


class TestRefreshBookingFinancials:
    def _booking(self):
        return SABooking(
            check_in=date(2025, 3, 1),
            check_out=date(2025, 3, 5),
            nightly_rate=Decimal("300"),
            total_nights=4,
            gross_booking_value=Decimal("1200"),
            platform_fee=Decimal("200"),
            net_revenue=Decimal("1000"),
            cleaning_fee=Decimal("285"),
            pm_fee_amount=Decimal("128.70"),
            total_pm_deduction=Decimal("413.70"),
        )

    def test_new_check_out_recomputes_chain(self):
        booking = self._booking()

        refresh_booking_financials(booking, managed_sa_property(), {"check_out": date(2025, 3, 6)})

        assert booking.total_nights == 5
        assert booking.gross_booking_value == Decimal("1500.00")
        assert booking.net_revenue == Decimal("1300.00")
        assert booking.pm_fee_amount == Decimal("182.70")
        assert booking.total_pm_deduction == Decimal("467.70")

    def test_explicit_net_wins(self):
        booking = self._booking()

        refresh_booking_financials(
            booking, managed_sa_property(), {"platform_fee": Decimal("0"), "net_revenue": Decimal("785")}
        )

        assert booking.net_revenue == Decimal("785")
        assert booking.pm_fee_amount == Decimal("90.00")

    def test_guest_details_leave_figures_alone(self):
        booking = self._booking()

        refresh_booking_financials(booking, managed_sa_property(), {"guest_name": "R. Lee"})

        assert booking.net_revenue == Decimal("1000")
        assert booking.pm_fee_amount == Decimal("128.70")


class TestPaymentTimingFor:
    def test_fallback_description(self):
        timing = payment_timing_for(managed_sa_property(management_fee_percent=Decimal("18.00")), None)

        assert timing.description == "18% of net"
        assert timing.timing == "As agreed"
        assert timing.percentage == Decimal("18.00")
        assert timing.currency is None

    def test_fractional_percentage(self):
        timing = payment_timing_for(managed_sa_property(management_fee_percent=Decimal("12.50")), None)

        assert timing.description == "12.5% of net"

    def test_terms_record(self):
        terms = PMPaymentTerms(
            description="18% of net + $285 cleaning, paid last day of month",
            timing="Last day of month",
            currency="USD",
        )

        timing = payment_timing_for(managed_sa_property(), terms)

        assert timing.description == "18% of net + $285 cleaning, paid last day of month"
        assert timing.timing == "Last day of month"
        assert timing.currency == "USD"
        assert timing.percentage == Decimal("18")
        assert timing.cleaning_fee == Decimal("285")


# ── database-backed ──────────────────────────────────────────────────────────

def _add_booking(db, prop, check_in, net, **fields):
    values = dict(
        landlord_id=prop.landlord_id,
        property_id=prop.id,
        check_in=check_in,
        check_out=check_in,
        net_revenue=Decimal(net),
        cleaning_fee=Decimal("285"),
        currency="USD",
    )
    values.update(fields)
    booking = SABooking(**values)
    db.add(booking)
    db.commit()
    return booking


class TestRecalculatePMFees:
    def test_repairs_raw_net_fees(self, db, make_property):
        prop = make_property(
            property_category="sa",
            is_managed=True,
            management_fee_percent=Decimal("18"),
            fixed_cleaning_fee=Decimal("285"),
        )
        # Saved with the fee on raw net: 18% of 1000
        stale = _add_booking(db, prop, date(2025, 3, 1), "1000",
                             pm_fee_amount=Decimal("180.00"), total_pm_deduction=Decimal("465.00"))

        first = recalculate_pm_fees(db, prop.id, LANDLORD_ID)
        second = recalculate_pm_fees(db, prop.id, LANDLORD_ID)
        db.refresh(stale)

        assert first.updated_count == 1
        assert second.updated_count == 0
        assert stale.pm_fee_amount == Decimal("128.70")
        assert stale.total_pm_deduction == Decimal("413.70")

    def test_other_landlord_not_found(self, db, make_property):
        prop = make_property(landlord_id=OTHER_LANDLORD_ID)

        result = recalculate_pm_fees(db, prop.id, LANDLORD_ID)

        assert result.error_kind == ErrorKind.NOT_FOUND


class TestSummarizePMPayments:
    def test_month_totals_with_terms(self, db, make_property):
        prop = make_property(
            property_category="sa",
            is_managed=True,
            management_fee_percent=Decimal("18"),
            fixed_cleaning_fee=Decimal("285"),
            property_manager_name="Island Stays",
        )
        db.add(PMPaymentTerms(landlord_id=LANDLORD_ID, property_id=prop.id,
                              description="18% of net + $285 cleaning, paid last day of month",
                              timing="Last day of month", currency="USD"))
        _add_booking(db, prop, date(2025, 3, 1), "1000", pm_fee_amount=Decimal("128.70"),
                     total_pm_deduction=Decimal("413.70"), pm_payment_status="paid")
        _add_booking(db, prop, date(2025, 3, 20), "1000", pm_fee_amount=Decimal("128.70"),
                     total_pm_deduction=Decimal("413.70"))
        _add_booking(db, prop, date(2025, 4, 2), "1000", pm_fee_amount=Decimal("128.70"),
                     total_pm_deduction=Decimal("413.70"))

        result = summarize_pm_payments(db, prop.id, LANDLORD_ID, month=3, year=2025)

        assert result.success
        assert result.total_bookings == 2
        assert result.total_pm_deduction == Decimal("827.40")
        assert result.already_paid == Decimal("413.70")
        assert result.remaining_to_pay == Decimal("413.70")
        assert result.property_manager == "Island Stays"
        assert result.payment_timing.timing == "Last day of month"

    def test_invalid_month(self, db, make_property):
        prop = make_property()

        result = summarize_pm_payments(db, prop.id, LANDLORD_ID, month=13, year=2025)

        assert result.error_kind == ErrorKind.VALIDATION

    def test_month_zero_rejected(self, db, make_property):
        prop = make_property()

        result = summarize_pm_payments(db, prop.id, LANDLORD_ID, month=0, year=2025)

        assert result.error_kind == ErrorKind.VALIDATION
