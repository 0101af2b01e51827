"""
Property income figures.
"""
from datetime import date
from decimal import Decimal

from models import SABooking
from services.property_service import booking_counts_toward_month, sa_revenue_for_month, to_gbp


def sa_booking(check_in, net, currency="GBP", payment_status="pending", received_date=None, status="confirmed"):
    return SABooking(
        check_in=check_in,
        check_out=check_in,
        net_revenue=Decimal(net),
        currency=currency,
        payment_status=payment_status,
        received_date=received_date,
        status=status,
    )


class TestToGBP:
    def test_gbp_at_par(self):
        assert to_gbp(Decimal("100"), "GBP") == Decimal("100")

    def test_usd(self):
        assert to_gbp(Decimal("100"), "USD") == Decimal("79.00")

    def test_unknown_currency_at_par(self):
        assert to_gbp(Decimal("100"), "JPY") == Decimal("100")

    def test_missing_amount(self):
        assert to_gbp(None, "EUR") == Decimal("0")


class TestBookingCountsTowardMonth:
    def test_received_this_month(self):
        booking = sa_booking(date(2025, 2, 20), "500", payment_status="received", received_date=date(2025, 3, 2))
        assert booking_counts_toward_month(booking, 2025, 3)

    def test_pending_check_in_this_month(self):
        assert booking_counts_toward_month(sa_booking(date(2025, 3, 10), "500"), 2025, 3)

    def test_received_last_month_for_this_months_stay(self):
        booking = sa_booking(date(2025, 3, 10), "500", payment_status="received", received_date=date(2025, 2, 28))
        assert not booking_counts_toward_month(booking, 2025, 3)

    def test_cancelled_never_counts(self):
        assert not booking_counts_toward_month(sa_booking(date(2025, 3, 10), "500", status="cancelled"), 2025, 3)


class TestSARevenueForMonth:
    def test_converts_each_booking(self):
        bookings = [
            sa_booking(date(2025, 3, 1), "1000", currency="USD"),
            sa_booking(date(2025, 3, 5), "200"),
            sa_booking(date(2025, 4, 5), "999"),
        ]

        assert sa_revenue_for_month(bookings, 2025, 3) == Decimal("990.00")
