# services/rent_payment_service.py
"""
Rent Payment Service - turns tenancies into dated rent obligations.

Business rules:
- A tenancy has at most one RentPayment per billing period (calendar month),
  backed by a unique constraint on (tenancy_id, billing_period).
- The due date is the tenancy's rent_due_day clamped to the length of the
  month (31 -> 30 in a 30-day month).
- A new obligation whose due date is already behind us starts out 'late',
  otherwise 'pending'.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Set

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models import RentPayment, RentPaymentStatus, Tenancy
from schemas.rent_payment import (
     GenerateResult,
     MaterializeResult,
     RecordPaymentResult,
     RentPaymentResponse,
)
from utils.dates import add_months, clamped_due_date, month_bounds

logger = logging.getLogger(__name__)

# Current month plus the two that follow
TENANCY_LOOKAHEAD_MONTHS = 3


class RentPaymentService:
     """Service class for rent obligation business logic."""

     @staticmethod
     def build_payment(tenancy: Tenancy, year: int, month: int, today: date) -> RentPayment:
          """
          Build (but do not persist) the obligation of a tenancy for a month.
          """
          due_date = clamped_due_date(year, month, tenancy.rent_due_day)
          status = RentPaymentStatus.LATE if due_date < today else RentPaymentStatus.PENDING
          return RentPayment(
               landlord_id=tenancy.landlord_id,
               tenancy_id=tenancy.id,
               property_id=tenancy.property_id,
               billing_period=date(year, month, 1),
               due_date=due_date,
               amount_due=tenancy.rent_amount,
               amount_paid=Decimal("0"),
               status=status.value,
          )

     @staticmethod
     def covered_tenancy_ids(
          db: Session,
          tenancy_ids: Iterable[int],
          year: int,
          month: int
     ) -> Set[int]:
          """
          IDs of the given tenancies that already have a payment for the month.
          """
          ids = list(tenancy_ids)
          if not ids:
               return set()
          first_day, last_day = month_bounds(year, month)
          rows = (
               db.query(RentPayment.tenancy_id)
               .filter(
                    RentPayment.tenancy_id.in_(ids),
                    or_(
                         RentPayment.billing_period == first_day,
                         and_(RentPayment.due_date >= first_day, RentPayment.due_date <= last_day),
                    ),
               )
               .distinct()
               .all()
          )
          return {row[0] for row in rows}

     @staticmethod
     def insert_unless_covered(db: Session, payment: RentPayment) -> bool:
          """
          Insert a payment inside a savepoint.

          Returns False when the (tenancy, billing period) pair already exists,
          e.g. because a concurrent request created it first.
          """
          try:
               with db.begin_nested():
                    db.add(payment)
          except IntegrityError:
               logger.info(
                    "Rent payment for tenancy %s period %s already exists",
                    payment.tenancy_id,
                    payment.billing_period,
               )
               return False
          return True

     @staticmethod
     def materialize_for_month(
          db: Session,
          landlord_id: str,
          year: Optional[int] = None,
          month: Optional[int] = None,
          today: Optional[date] = None
     ) -> MaterializeResult:
          """
          Ensure every currently active tenancy of a landlord has a payment
          for the billing month.

          Args:
               db: SQLAlchemy database session
               landlord_id: Owner of the tenancies
               year, month: Billing month (defaults to the current month)
               today: Reference date (defaults to date.today())

          Returns:
               MaterializeResult with created/covered counts and new records
          """
          today = today or date.today()
          year = year if year is not None else today.year
          month = month if month is not None else today.month
          if not 1 <= month <= 12:
               return MaterializeResult.invalid("Month must be between 1 and 12")

          try:
               tenancies = (
                    db.query(Tenancy)
                    .filter(
                         Tenancy.landlord_id == landlord_id,
                         Tenancy.deleted_at.is_(None),
                         Tenancy.start_date <= today,
                         or_(Tenancy.end_date.is_(None), Tenancy.end_date >= today),
                    )
                    .order_by(Tenancy.id)
                    .all()
               )
               covered = RentPaymentService.covered_tenancy_ids(
                    db, (t.id for t in tenancies), year, month
               )

               created: List[RentPayment] = []
               already_covered = 0
               for tenancy in tenancies:
                    if tenancy.id in covered:
                         already_covered += 1
                         continue
                    payment = RentPaymentService.build_payment(tenancy, year, month, today)
                    if RentPaymentService.insert_unless_covered(db, payment):
                         created.append(payment)
                    else:
                         already_covered += 1

               db.commit()
               records = [RentPaymentResponse.model_validate(p) for p in created]
          except SQLAlchemyError:
               db.rollback()
               logger.exception("Failed to materialize rent payments for landlord %s", landlord_id)
               return MaterializeResult.upstream("Failed to generate rent payments")

          logger.info(
               "Materialized %04d-%02d for landlord %s: %d created, %d already covered",
               year, month, landlord_id, len(created), already_covered,
          )
          return MaterializeResult(
               year=year,
               month=month,
               created_count=len(created),
               already_covered=already_covered,
               total_tenancies=len(tenancies),
               records=records,
          )

     @staticmethod
     def generate_for_tenancy(
          db: Session,
          tenancy_id: int,
          landlord_id: str,
          today: Optional[date] = None
     ) -> GenerateResult:
          """
          Create obligations for the current month and the next two months.

          Called when a tenancy is created. Months whose due date falls before
          the tenancy starts or after it ends are skipped, as are months that
          already have a payment.
          """
          today = today or date.today()
          try:
               tenancy = (
                    db.query(Tenancy)
                    .filter(
                         Tenancy.id == tenancy_id,
                         Tenancy.landlord_id == landlord_id,
                         Tenancy.deleted_at.is_(None),
                    )
                    .first()
               )
               if tenancy is None:
                    return GenerateResult.not_found("Tenancy not found")

               created: List[RentPayment] = []
               for offset in range(TENANCY_LOOKAHEAD_MONTHS):
                    year, month = add_months(today.year, today.month, offset)
                    due_date = clamped_due_date(year, month, tenancy.rent_due_day)
                    if due_date < tenancy.start_date:
                         continue
                    if tenancy.end_date is not None and due_date > tenancy.end_date:
                         continue
                    if tenancy.id in RentPaymentService.covered_tenancy_ids(db, [tenancy.id], year, month):
                         continue
                    payment = RentPaymentService.build_payment(tenancy, year, month, today)
                    if RentPaymentService.insert_unless_covered(db, payment):
                         created.append(payment)

               db.commit()
               records = [RentPaymentResponse.model_validate(p) for p in created]
          except SQLAlchemyError:
               db.rollback()
               logger.exception("Failed to generate rent payments for tenancy %s", tenancy_id)
               return GenerateResult.upstream("Failed to generate rent payments")

          return GenerateResult(created_count=len(created), records=records)

     @staticmethod
     def record_payment(
          db: Session,
          payment_id: int,
          landlord_id: str,
          amount_paid: Optional[Decimal],
          paid_date: Optional[date] = None,
          payment_method: Optional[str] = None,
          payment_reference: Optional[str] = None,
          notes: Optional[str] = None
     ) -> RecordPaymentResult:
          """
          Record that a tenant has paid: sets amount_paid, paid_date and
          status 'paid'.
          """
          if amount_paid is None:
               return RecordPaymentResult.invalid("amount_paid is required")
          if amount_paid < 0:
               return RecordPaymentResult.invalid("amount_paid must not be negative")

          try:
               payment = (
                    db.query(RentPayment)
                    .filter(RentPayment.id == payment_id, RentPayment.landlord_id == landlord_id)
                    .first()
               )
               if payment is None:
                    return RecordPaymentResult.not_found("Payment not found")

               payment.mark_as_paid(amount_paid, paid_date)
               if payment_method is not None:
                    payment.payment_method = payment_method
               if payment_reference is not None:
                    payment.payment_reference = payment_reference
               if notes is not None:
                    payment.notes = notes

               db.commit()
               db.refresh(payment)
          except SQLAlchemyError:
               db.rollback()
               logger.exception("Failed to record payment %s", payment_id)
               return RecordPaymentResult.upstream("Failed to record payment")

          return RecordPaymentResult(payment=RentPaymentResponse.model_validate(payment))
