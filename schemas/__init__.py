from .common import ErrorKind, PartialUpdate, ServiceResult
from .property import (
     PropertyCreate,
     PropertyUpdate,
     PropertyResponse,
     PropertyListItem,
     PropertyDetail,
     PropertySummary,
     PaymentTermsUpsert,
     PaymentTermsResponse,
)
from .tenant import TenantCreate, TenantUpdate, TenantResponse
from .tenancy import (
     TenancyCreate,
     TenancyUpdate,
     TenancyResponse,
     TenancyDetail,
     TenancyTenantLink,
     TenancyTenantResponse,
     RecomputeResult,
)
from .rent_payment import (
     RentPaymentCreate,
     RentPaymentUpdate,
     RentPaymentResponse,
     RecordPaymentRequest,
     GenerateRentPaymentsRequest,
     MaterializeResult,
     GenerateResult,
     RecordPaymentResult,
     RentCollectionSummary,
)
from .expense import (
     ExpenseCreate,
     ExpenseUpdate,
     ExpenseResponse,
     ExpenseSummary,
     MonthlyTransaction,
     MonthlyTransactions,
)
from .sa_booking import (
     BookingCreate,
     BookingUpdate,
     BookingResponse,
     MarkReceivedRequest,
     MarkPMPaidRequest,
     PaymentTiming,
     PMSummary,
     ForecastMonth,
     BookingForecast,
     RecalculateResult,
)

__all__ = [
     "ErrorKind",
     "ServiceResult",
     "PartialUpdate",
     "PropertyCreate",
     "PropertyUpdate",
     "PropertyResponse",
     "PropertyListItem",
     "PropertyDetail",
     "PropertySummary",
     "PaymentTermsUpsert",
     "PaymentTermsResponse",
     "TenantCreate",
     "TenantUpdate",
     "TenantResponse",
     "TenancyCreate",
     "TenancyUpdate",
     "TenancyResponse",
     "TenancyDetail",
     "TenancyTenantLink",
     "TenancyTenantResponse",
     "RecomputeResult",
     "RentPaymentCreate",
     "RentPaymentUpdate",
     "RentPaymentResponse",
     "RecordPaymentRequest",
     "GenerateRentPaymentsRequest",
     "MaterializeResult",
     "GenerateResult",
     "RecordPaymentResult",
     "RentCollectionSummary",
     "ExpenseCreate",
     "ExpenseUpdate",
     "ExpenseResponse",
     "ExpenseSummary",
     "MonthlyTransaction",
     "MonthlyTransactions",
     "BookingCreate",
     "BookingUpdate",
     "BookingResponse",
     "MarkReceivedRequest",
     "MarkPMPaidRequest",
     "PaymentTiming",
     "PMSummary",
     "ForecastMonth",
     "BookingForecast",
     "RecalculateResult",
]
