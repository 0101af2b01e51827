"""
Rent ledger: monthly materialization, per-tenancy generation and recording
payments, against an in-memory SQLite database.
"""
from datetime import date
from decimal import Decimal

from models import RentPayment
from schemas.common import ErrorKind
from services.rent_payment_service import RentPaymentService
from tests.conftest import LANDLORD_ID, OTHER_LANDLORD_ID


def _payments(db, tenancy_id=None):
    query = db.query(RentPayment)
    if tenancy_id is not None:
        query = query.filter(RentPayment.tenancy_id == tenancy_id)
    return query.order_by(RentPayment.due_date).all()


# ── materialize_for_month ────────────────────────────────────────────────────

class TestMaterializeForMonth:
    def test_january_scenario(self, db, make_property, make_tenancy):
        prop = make_property()
        tenancy = make_tenancy(prop, date(2025, 1, 10), rent_due_day=15)

        result = RentPaymentService.materialize_for_month(
            db, LANDLORD_ID, 2025, 1, today=date(2025, 1, 20)
        )

        assert result.success
        assert result.created_count == 1
        assert result.already_covered == 0
        assert result.total_tenancies == 1
        record = result.records[0]
        assert record.tenancy_id == tenancy.id
        assert record.due_date == date(2025, 1, 15)
        assert record.billing_period == date(2025, 1, 1)
        assert record.status == "late"
        assert record.amount_due == Decimal("1250.00")

    def test_due_date_ahead_is_pending(self, db, make_property, make_tenancy):
        prop = make_property()
        make_tenancy(prop, date(2025, 1, 1), rent_due_day=25)

        result = RentPaymentService.materialize_for_month(
            db, LANDLORD_ID, 2025, 1, today=date(2025, 1, 20)
        )

        assert result.records[0].status == "pending"

    def test_due_day_clamps_to_short_month(self, db, make_property, make_tenancy):
        prop = make_property()
        make_tenancy(prop, date(2025, 1, 1), rent_due_day=31)

        result = RentPaymentService.materialize_for_month(
            db, LANDLORD_ID, 2025, 4, today=date(2025, 4, 1)
        )

        assert result.records[0].due_date == date(2025, 4, 30)

    def test_due_day_clamps_in_february(self, db, make_property, make_tenancy):
        prop = make_property()
        make_tenancy(prop, date(2024, 1, 1), rent_due_day=30)

        result = RentPaymentService.materialize_for_month(
            db, LANDLORD_ID, 2025, 2, today=date(2025, 2, 1)
        )

        assert result.records[0].due_date == date(2025, 2, 28)

    def test_rerun_creates_nothing(self, db, make_property, make_tenancy):
        prop = make_property()
        make_tenancy(prop, date(2025, 1, 10), rent_due_day=15)
        make_tenancy(prop, date(2024, 6, 1), rent_due_day=1)
        today = date(2025, 1, 20)

        first = RentPaymentService.materialize_for_month(db, LANDLORD_ID, 2025, 1, today=today)
        second = RentPaymentService.materialize_for_month(db, LANDLORD_ID, 2025, 1, today=today)

        assert first.created_count == 2
        assert second.created_count == 0
        assert second.already_covered == 2
        assert len(_payments(db)) == 2

    def test_unique_violation_counts_as_covered(self, db, make_property, make_tenancy, monkeypatch):
        prop = make_property()
        make_tenancy(prop, date(2025, 1, 10), rent_due_day=15)
        today = date(2025, 1, 20)
        RentPaymentService.materialize_for_month(db, LANDLORD_ID, 2025, 1, today=today)

        # Simulate a concurrent request that passed the existence check
        monkeypatch.setattr(
            RentPaymentService, "covered_tenancy_ids", staticmethod(lambda *args, **kwargs: set())
        )
        result = RentPaymentService.materialize_for_month(db, LANDLORD_ID, 2025, 1, today=today)

        assert result.success
        assert result.created_count == 0
        assert result.already_covered == 1
        assert len(_payments(db)) == 1

    def test_only_active_tenancies(self, db, make_property, make_tenancy):
        prop = make_property()
        today = date(2025, 1, 20)
        make_tenancy(prop, date(2025, 2, 1))  # not started
        make_tenancy(prop, date(2024, 1, 1), end_date=date(2025, 1, 19))  # ended
        deleted = make_tenancy(prop, date(2024, 1, 1))
        deleted.soft_delete()
        db.commit()
        make_tenancy(make_property(landlord_id=OTHER_LANDLORD_ID), date(2024, 1, 1))
        active = make_tenancy(prop, date(2024, 1, 1), end_date=today)

        result = RentPaymentService.materialize_for_month(db, LANDLORD_ID, 2025, 1, today=today)

        assert result.total_tenancies == 1
        assert [r.tenancy_id for r in result.records] == [active.id]

    def test_uses_dates_not_stored_status(self, db, make_property, make_tenancy):
        prop = make_property()
        make_tenancy(prop, date(2024, 1, 1), status="pending")

        result = RentPaymentService.materialize_for_month(
            db, LANDLORD_ID, 2025, 1, today=date(2025, 1, 20)
        )

        assert result.created_count == 1

    def test_invalid_month(self, db):
        result = RentPaymentService.materialize_for_month(db, LANDLORD_ID, 2025, 13)

        assert not result.success
        assert result.error_kind == ErrorKind.VALIDATION

    def test_month_zero_is_not_the_current_month(self, db):
        result = RentPaymentService.materialize_for_month(db, LANDLORD_ID, 2025, 0)

        assert not result.success
        assert result.error_kind == ErrorKind.VALIDATION

    def test_does_not_touch_tenancies(self, db, make_property, make_tenancy):
        prop = make_property()
        tenancy = make_tenancy(prop, date(2024, 1, 1), status="pending")

        RentPaymentService.materialize_for_month(db, LANDLORD_ID, 2025, 1, today=date(2025, 1, 20))
        db.refresh(tenancy)

        assert tenancy.status == "pending"


# ── generate_for_tenancy ─────────────────────────────────────────────────────

class TestGenerateForTenancy:
    def test_three_months_ahead(self, db, make_property, make_tenancy):
        prop = make_property()
        tenancy = make_tenancy(prop, date(2025, 1, 10), rent_due_day=15)

        result = RentPaymentService.generate_for_tenancy(
            db, tenancy.id, LANDLORD_ID, today=date(2025, 1, 20)
        )

        assert result.success
        assert result.created_count == 3
        assert [p.due_date for p in _payments(db, tenancy.id)] == [
            date(2025, 1, 15), date(2025, 2, 15), date(2025, 3, 15)
        ]
        assert [p.status for p in _payments(db, tenancy.id)] == ["late", "pending", "pending"]

    def test_skips_due_dates_before_start(self, db, make_property, make_tenancy):
        prop = make_property()
        tenancy = make_tenancy(prop, date(2025, 1, 20), rent_due_day=5)

        result = RentPaymentService.generate_for_tenancy(
            db, tenancy.id, LANDLORD_ID, today=date(2025, 1, 20)
        )

        assert result.created_count == 2
        assert [p.due_date for p in _payments(db, tenancy.id)] == [date(2025, 2, 5), date(2025, 3, 5)]

    def test_skips_due_dates_after_end(self, db, make_property, make_tenancy):
        prop = make_property()
        tenancy = make_tenancy(prop, date(2025, 1, 1), end_date=date(2025, 2, 28), rent_due_day=15)

        result = RentPaymentService.generate_for_tenancy(
            db, tenancy.id, LANDLORD_ID, today=date(2025, 1, 2)
        )

        assert [p.due_date for p in _payments(db, tenancy.id)] == [date(2025, 1, 15), date(2025, 2, 15)]
        assert result.created_count == 2

    def test_wraps_into_next_year(self, db, make_property, make_tenancy):
        prop = make_property()
        tenancy = make_tenancy(prop, date(2025, 12, 1), rent_due_day=31)

        RentPaymentService.generate_for_tenancy(db, tenancy.id, LANDLORD_ID, today=date(2025, 12, 1))

        assert [p.due_date for p in _payments(db, tenancy.id)] == [
            date(2025, 12, 31), date(2026, 1, 31), date(2026, 2, 28)
        ]

    def test_skips_months_already_covered(self, db, make_property, make_tenancy):
        prop = make_property()
        tenancy = make_tenancy(prop, date(2025, 1, 1), rent_due_day=1)
        today = date(2025, 1, 2)
        RentPaymentService.materialize_for_month(db, LANDLORD_ID, 2025, 1, today=today)

        result = RentPaymentService.generate_for_tenancy(db, tenancy.id, LANDLORD_ID, today=today)

        assert result.created_count == 2
        assert len(_payments(db, tenancy.id)) == 3

    def test_other_landlords_tenancy_not_found(self, db, make_property, make_tenancy):
        tenancy = make_tenancy(make_property(landlord_id=OTHER_LANDLORD_ID), date(2025, 1, 1))

        result = RentPaymentService.generate_for_tenancy(db, tenancy.id, LANDLORD_ID)

        assert not result.success
        assert result.error_kind == ErrorKind.NOT_FOUND


# ── record_payment ───────────────────────────────────────────────────────────

class TestRecordPayment:
    def _payment(self, db, make_property, make_tenancy):
        prop = make_property()
        make_tenancy(prop, date(2025, 1, 10), rent_due_day=15)
        result = RentPaymentService.materialize_for_month(
            db, LANDLORD_ID, 2025, 1, today=date(2025, 1, 20)
        )
        return result.records[0]

    def test_marks_paid(self, db, make_property, make_tenancy):
        payment = self._payment(db, make_property, make_tenancy)

        result = RentPaymentService.record_payment(
            db,
            payment.id,
            LANDLORD_ID,
            Decimal("1250.00"),
            paid_date=date(2025, 1, 21),
            payment_method="bank_transfer",
        )

        assert result.success
        assert result.payment.status == "paid"
        assert result.payment.amount_paid == Decimal("1250.00")
        assert result.payment.paid_date == date(2025, 1, 21)
        assert result.payment.payment_method == "bank_transfer"

    def test_paid_date_defaults_to_today(self, db, make_property, make_tenancy):
        payment = self._payment(db, make_property, make_tenancy)

        result = RentPaymentService.record_payment(db, payment.id, LANDLORD_ID, Decimal("100"))

        assert result.payment.paid_date == date.today()

    def test_amount_required(self, db, make_property, make_tenancy):
        payment = self._payment(db, make_property, make_tenancy)

        result = RentPaymentService.record_payment(db, payment.id, LANDLORD_ID, None)

        assert result.error_kind == ErrorKind.VALIDATION
        assert result.error == "amount_paid is required"

    def test_negative_amount_rejected(self, db, make_property, make_tenancy):
        payment = self._payment(db, make_property, make_tenancy)

        result = RentPaymentService.record_payment(db, payment.id, LANDLORD_ID, Decimal("-1"))

        assert result.error_kind == ErrorKind.VALIDATION

    def test_other_landlord_not_found(self, db, make_property, make_tenancy):
        payment = self._payment(db, make_property, make_tenancy)

        result = RentPaymentService.record_payment(db, payment.id, OTHER_LANDLORD_ID, Decimal("10"))

        assert result.error_kind == ErrorKind.NOT_FOUND
