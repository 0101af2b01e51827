from .base import Base
from .property import Property, PropertyCategory
from .tenant import Tenant, TenancyTenant
from .tenancy import Tenancy, TenancyStatus
from .rent_payment import RentPayment, RentPaymentStatus
from .expense import Expense, ExpenseFrequency, EXPENSE_CATEGORIES
from .sa_booking import SABooking, BookingStatus, BookingPaymentStatus, PMPaymentStatus
from .payment_terms import PMPaymentTerms

__all__ = [
     "Base",
     "Property",
     "PropertyCategory",
     "Tenant",
     "TenancyTenant",
     "Tenancy",
     "TenancyStatus",
     "RentPayment",
     "RentPaymentStatus",
     "Expense",
     "ExpenseFrequency",
     "EXPENSE_CATEGORIES",
     "SABooking",
     "BookingStatus",
     "BookingPaymentStatus",
     "PMPaymentStatus",
     "PMPaymentTerms",
]
