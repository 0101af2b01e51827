# services/summary_service.py
"""
Financial summaries over rent payments, expenses and bookings.

The fold_* functions are pure: they take already-loaded rows (anything with
the right attributes) and return figures. The summarize_* functions load
the rows for a landlord and wrap the figures in result objects.
"""
import calendar
import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Set, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import (
     BookingPaymentStatus,
     Expense,
     ExpenseFrequency,
     PMPaymentStatus,
     Property,
     RentPayment,
     RentPaymentStatus,
)
from schemas.expense import ExpenseSummary, MonthlyTransaction, MonthlyTransactions
from schemas.rent_payment import RentCollectionSummary
from utils.dates import in_month, month_bounds

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Day of the month compared against a recurring expense's end_date
MID_MONTH_PROBE_DAY = 15


def as_money(value) -> Decimal:
     """Coerce a stored amount (Decimal, float, str or None) to Decimal."""
     if value is None:
          return ZERO
     if isinstance(value, Decimal):
          return value
     return Decimal(str(value))


def collection_rate(received: Decimal, expected: Decimal) -> int:
     """Received as a whole-number percentage of expected; 0 when nothing is expected."""
     if expected <= 0:
          return 0
     rate = (received / expected) * 100
     return int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Rent collection
# ---------------------------------------------------------------------------

def fold_rent_collection(payments: Iterable) -> Dict:
     """
     Partition payments by status and total them.

     - paid:    amount_paid
     - pending: amount_due
     - late:    amount_due - amount_paid
     - missed:  amount_due
     expected is the sum of amount_due over all payments.
     """
     totals = {status: ZERO for status in RentPaymentStatus}
     counts = {status.value: 0 for status in RentPaymentStatus}
     expected = ZERO

     for payment in payments:
          amount_due = as_money(payment.amount_due)
          amount_paid = as_money(payment.amount_paid)
          expected += amount_due
          try:
               status = RentPaymentStatus(payment.status)
          except ValueError:
               logger.warning("Ignoring rent payment %s with unknown status %r", payment.id, payment.status)
               continue
          counts[status.value] += 1
          if status == RentPaymentStatus.PAID:
               totals[status] += amount_paid
          elif status == RentPaymentStatus.LATE:
               totals[status] += amount_due - amount_paid
          else:
               totals[status] += amount_due

     received = totals[RentPaymentStatus.PAID]
     return {
          "total_received": received,
          "total_pending": totals[RentPaymentStatus.PENDING],
          "total_late": totals[RentPaymentStatus.LATE],
          "total_missed": totals[RentPaymentStatus.MISSED],
          "expected": expected,
          "collection_rate": collection_rate(received, expected),
          "counts": counts,
     }


def summarize_rent_collection(
     db: Session,
     landlord_id: str,
     year: Optional[int] = None,
     month: Optional[int] = None,
     today: Optional[date] = None
) -> RentCollectionSummary:
     """Rent collection figures for the payments due in a month."""
     today = today or date.today()
     year = year if year is not None else today.year
     month = month if month is not None else today.month
     if not 1 <= month <= 12:
          return RentCollectionSummary.invalid("Month must be between 1 and 12")

     first_day, last_day = month_bounds(year, month)
     try:
          payments = (
               db.query(RentPayment)
               .filter(
                    RentPayment.landlord_id == landlord_id,
                    RentPayment.due_date >= first_day,
                    RentPayment.due_date <= last_day,
               )
               .all()
          )
     except SQLAlchemyError:
          logger.exception("Failed to load rent payments for landlord %s", landlord_id)
          return RentCollectionSummary.upstream("Failed to fetch stats")

     return RentCollectionSummary(year=year, month=month, **fold_rent_collection(payments))


# ---------------------------------------------------------------------------
# Property expenses
# ---------------------------------------------------------------------------

def expense_counts_in_month(expense, year: int, month: int) -> bool:
     """
     Whether an expense adds to a month's total on the property summary.

     One-off expenses count in the month of expense_date only. Recurring
     expenses count in full every month from expense_date onwards while
     end_date (if any) is on or after the 15th of that month.
     """
     if expense.frequency == ExpenseFrequency.ONE_OFF.value:
          return in_month(expense.expense_date, year, month)
     _, last_day = month_bounds(year, month)
     if expense.expense_date > last_day:
          return False
     if expense.end_date is not None and expense.end_date < date(year, month, MID_MONTH_PROBE_DAY):
          return False
     return True


def fold_expense_summary(expenses: Iterable, year: int, month: int) -> Dict:
     one_off = ZERO
     monthly_recurring = ZERO
     total_this_month = ZERO
     by_category: Dict[str, Decimal] = {}

     for expense in expenses:
          amount = as_money(expense.amount)
          by_category.setdefault(expense.category, ZERO)
          counts = expense_counts_in_month(expense, year, month)

          if expense.frequency == ExpenseFrequency.ONE_OFF.value:
               one_off += amount
          elif counts:
               monthly_recurring += amount

          if counts:
               total_this_month += amount
               by_category[expense.category] += amount

     return {
          "one_off": one_off,
          "monthly_recurring": monthly_recurring,
          "total_this_month": total_this_month,
          "by_category": by_category,
     }


def summarize_expenses(
     db: Session,
     property_id: int,
     landlord_id: str,
     year: Optional[int] = None,
     month: Optional[int] = None,
     today: Optional[date] = None
) -> ExpenseSummary:
     """Expense totals of one property for a month (defaults to the current month)."""
     today = today or date.today()
     year = year if year is not None else today.year
     month = month if month is not None else today.month
     if not 1 <= month <= 12:
          return ExpenseSummary.invalid("Month must be between 1 and 12")

     try:
          prop = (
               db.query(Property)
               .filter(
                    Property.id == property_id,
                    Property.landlord_id == landlord_id,
                    Property.deleted_at.is_(None),
               )
               .first()
          )
          if prop is None:
               return ExpenseSummary.not_found("Property not found")

          expenses = (
               db.query(Expense)
               .filter(Expense.property_id == property_id, Expense.landlord_id == landlord_id)
               .all()
          )
     except SQLAlchemyError:
          logger.exception("Failed to load expenses for property %s", property_id)
          return ExpenseSummary.upstream("Failed to fetch expense summary")

     return ExpenseSummary(year=year, month=month, **fold_expense_summary(expenses, year, month))


# ---------------------------------------------------------------------------
# Landlord-wide monthly transactions
# ---------------------------------------------------------------------------

def quarter_cycle_months(start_month: int) -> Set[int]:
     """
     Months a quarterly expense falls in: its start month and the months
     three and six later, wrapped around the year. The month nine later is
     not part of the set.
     """
     return {(start_month - 1 + offset) % 12 + 1 for offset in (0, 3, 6)}


def transaction_applies_in_month(expense, year: int, month: int) -> bool:
     """
     Whether an expense is a transaction of the given month.

     - one-off:   expense_date inside the month
     - monthly:   started by month end and not ended before month start
     - quarterly: as monthly, and the month is in its quarter cycle
     - yearly:    as monthly, and the month is the anniversary month
     """
     first_day, last_day = month_bounds(year, month)
     frequency = expense.frequency

     if frequency == ExpenseFrequency.ONE_OFF.value:
          return first_day <= expense.expense_date <= last_day
     if expense.expense_date > last_day:
          return False
     if expense.end_date is not None and expense.end_date < first_day:
          return False

     if frequency == ExpenseFrequency.MONTHLY.value:
          return True
     if frequency == ExpenseFrequency.QUARTERLY.value:
          return month in quarter_cycle_months(expense.expense_date.month)
     if frequency == ExpenseFrequency.YEARLY.value:
          return month == expense.expense_date.month
     return False


def fold_monthly_transactions(expenses: Iterable, year: int, month: int) -> Tuple[List[MonthlyTransaction], Decimal, Decimal]:
     """
     Transactions of a month, sorted by category then largest amount first,
     with the recurring and one-off totals.
     """
     transactions = []
     total_recurring = ZERO
     total_one_off = ZERO

     for expense in expenses:
          if not transaction_applies_in_month(expense, year, month):
               continue
          amount = as_money(expense.amount)
          is_recurring = expense.frequency != ExpenseFrequency.ONE_OFF.value
          if is_recurring:
               total_recurring += amount
          else:
               total_one_off += amount
          transactions.append(
               MonthlyTransaction(
                    expense_id=expense.id,
                    property_id=expense.property_id,
                    category=expense.category,
                    description=expense.description,
                    amount=amount,
                    frequency=expense.frequency,
                    expense_date=expense.expense_date,
                    is_recurring=is_recurring,
               )
          )

     transactions.sort(key=lambda t: (t.category, -t.amount))
     return transactions, total_recurring, total_one_off


def monthly_transactions(
     db: Session,
     landlord_id: str,
     year: Optional[int] = None,
     month: Optional[int] = None,
     today: Optional[date] = None
) -> MonthlyTransactions:
     """Expense transactions across all of a landlord's properties for a month."""
     today = today or date.today()
     year = year if year is not None else today.year
     month = month if month is not None else today.month
     if not 1 <= month <= 12:
          return MonthlyTransactions.invalid("Month must be between 1 and 12")

     _, last_day = month_bounds(year, month)
     try:
          expenses = (
               db.query(Expense)
               .filter(Expense.landlord_id == landlord_id, Expense.expense_date <= last_day)
               .all()
          )
     except SQLAlchemyError:
          logger.exception("Failed to load expenses for landlord %s", landlord_id)
          return MonthlyTransactions.upstream("Failed to fetch transactions")

     transactions, total_recurring, total_one_off = fold_monthly_transactions(expenses, year, month)
     return MonthlyTransactions(
          year=year,
          month=month,
          transactions=transactions,
          total_recurring=total_recurring,
          total_one_off=total_one_off,
          total=total_recurring + total_one_off,
     )


# ---------------------------------------------------------------------------
# Serviced accommodation
# ---------------------------------------------------------------------------

def fold_pm_summary(bookings: Iterable) -> Dict:
     """
     Property manager totals over bookings (cancelled ones are skipped).

     remaining_to_pay is the total deduction less the deductions of bookings
     already settled with the manager.
     """
     totals = {
          "total_bookings": 0,
          "total_net_revenue": ZERO,
          "total_cleaning_fees": ZERO,
          "total_pm_fees": ZERO,
          "total_pm_deduction": ZERO,
          "already_paid": ZERO,
     }
     for booking in bookings:
          if booking.is_cancelled:
               continue
          deduction = as_money(booking.total_pm_deduction)
          totals["total_bookings"] += 1
          totals["total_net_revenue"] += as_money(booking.net_revenue)
          totals["total_cleaning_fees"] += as_money(booking.cleaning_fee)
          totals["total_pm_fees"] += as_money(booking.pm_fee_amount)
          totals["total_pm_deduction"] += deduction
          if booking.pm_payment_status == PMPaymentStatus.PAID.value:
               totals["already_paid"] += deduction

     totals["pm_should_pay"] = totals["total_pm_deduction"]
     totals["remaining_to_pay"] = totals["total_pm_deduction"] - totals["already_paid"]
     return totals


def fold_booking_forecast(bookings: Iterable, year: int) -> List[Dict]:
     """
     Twelve monthly buckets keyed by check-in month. Cancelled bookings count
     towards bookings and nights but add no revenue.
     """
     months = [
          {
               "month": m,
               "month_name": calendar.month_name[m],
               "bookings": 0,
               "total_nights": 0,
               "confirmed": ZERO,
               "received": ZERO,
               "pending_payment": ZERO,
          }
          for m in range(1, 13)
     ]
     for booking in bookings:
          if booking.check_in.year != year:
               continue
          bucket = months[booking.check_in.month - 1]
          bucket["bookings"] += 1
          bucket["total_nights"] += booking.total_nights or 0
          if booking.is_cancelled:
               continue
          net = as_money(booking.net_revenue)
          bucket["confirmed"] += net
          if booking.payment_status == BookingPaymentStatus.RECEIVED.value:
               bucket["received"] += net
          else:
               bucket["pending_payment"] += net
     return months
