"""
Model helpers that sit next to the `property` relationship.
"""
from datetime import date, timedelta
from decimal import Decimal

from models import Expense, RentPayment, SABooking, Tenancy, TenancyStatus


class TestTenancy:
    def test_computed_status_from_dates(self):
        tenancy = Tenancy(start_date=date.today() - timedelta(days=1), end_date=None)

        assert tenancy.computed_status == TenancyStatus.ACTIVE

    def test_computed_status_upcoming(self):
        tenancy = Tenancy(start_date=date.today() + timedelta(days=1))

        assert tenancy.computed_status == TenancyStatus.PENDING

    def test_property_is_a_relationship(self, db, make_property, make_tenancy):
        prop = make_property()
        tenancy = make_tenancy(prop, date(2025, 1, 1))

        assert tenancy.property is prop


class TestRentPayment:
    def test_outstanding(self):
        payment = RentPayment(amount_due=Decimal("1250.00"), amount_paid=Decimal("400.00"))

        assert payment.outstanding == Decimal("850.00")

    def test_outstanding_when_unpaid(self):
        assert RentPayment(amount_due=Decimal("900.00")).outstanding == Decimal("900.00")


class TestExpenseAndBooking:
    def test_is_recurring(self):
        assert Expense(frequency="monthly").is_recurring
        assert not Expense(frequency="one-off").is_recurring

    def test_is_cancelled(self):
        assert SABooking(status="cancelled").is_cancelled
        assert not SABooking(status="confirmed").is_cancelled


class TestSoftDelete:
    def test_soft_delete_stamps_deleted_at(self, db, make_property):
        prop = make_property()

        prop.soft_delete()
        db.commit()

        assert prop.deleted_at is not None
        assert prop.is_deleted
