# services/__init__.py
from .tenancy_service import (
     derive_tenancy_status,
     recompute_tenancy_statuses,
     refresh_statuses_before_read,
)
from .rent_payment_service import RentPaymentService
from .summary_service import (
     summarize_rent_collection,
     summarize_expenses,
     monthly_transactions,
)
from .booking_service import (
     calculate_pm_fee,
     derive_booking_financials,
     refresh_booking_financials,
     payment_timing_for,
     summarize_pm_payments,
     booking_forecast,
     recalculate_pm_fees,
)

__all__ = [
     "derive_tenancy_status",
     "recompute_tenancy_statuses",
     "refresh_statuses_before_read",
     "RentPaymentService",
     "summarize_rent_collection",
     "summarize_expenses",
     "monthly_transactions",
     "calculate_pm_fee",
     "derive_booking_financials",
     "refresh_booking_financials",
     "payment_timing_for",
     "summarize_pm_payments",
     "booking_forecast",
     "recalculate_pm_fees",
]
