"""
Pydantic schemas for RentPayment API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List, Dict
from pydantic import BaseModel, Field, ConfigDict

from models.rent_payment import RentPaymentStatus
from .common import PartialUpdate, ServiceResult


class RentPaymentCreate(BaseModel):
     """Schema for recording a rent obligation by hand."""
     tenancy_id: int = Field(..., gt=0, description="Tenancy ID (must belong to the landlord)")
     due_date: date = Field(..., description="Payment due date")
     amount_due: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     amount_paid: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
     status: RentPaymentStatus = RentPaymentStatus.PENDING
     paid_date: Optional[date] = None
     notes: Optional[str] = None

     model_config = ConfigDict(use_enum_values=True)


class RentPaymentUpdate(PartialUpdate):
     """Schema for updating a rent payment; only provided fields change."""
     non_nullable = ("amount_paid", "status")

     amount_paid: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     paid_date: Optional[date] = None
     status: Optional[RentPaymentStatus] = None
     payment_method: Optional[str] = None
     payment_reference: Optional[str] = None
     notes: Optional[str] = None

     model_config = ConfigDict(
          use_enum_values=True,
          json_schema_extra={
               "example": {
                    "status": "missed"
               }
          }
     )


class RecordPaymentRequest(BaseModel):
     """Schema for recording that a tenant has paid."""
     amount_paid: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
     paid_date: Optional[date] = Field(None, description="Defaults to today")
     payment_method: Optional[str] = None
     payment_reference: Optional[str] = None
     notes: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "amount_paid": 1250.00,
                    "paid_date": "2025-01-15",
                    "payment_method": "bank_transfer"
               }
          }
     )


class GenerateRentPaymentsRequest(BaseModel):
     """Billing month to materialize; defaults to the current month."""
     year: Optional[int] = Field(None, ge=2000, le=2100)
     month: Optional[int] = None


class RentPaymentResponse(BaseModel):
     """Schema for rent payment response."""
     id: int
     tenancy_id: int
     property_id: int
     billing_period: date
     due_date: date
     amount_due: Decimal
     amount_paid: Decimal
     status: str
     paid_date: Optional[date] = None
     payment_method: Optional[str] = None
     payment_reference: Optional[str] = None
     notes: Optional[str] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class MaterializeResult(ServiceResult):
     """Outcome of materializing one billing month."""
     year: Optional[int] = None
     month: Optional[int] = None
     created_count: int = 0
     already_covered: int = 0
     total_tenancies: int = 0
     records: List[RentPaymentResponse] = []


class GenerateResult(ServiceResult):
     """Outcome of generating obligations for a single tenancy."""
     created_count: int = 0
     records: List[RentPaymentResponse] = []


class RecordPaymentResult(ServiceResult):
     payment: Optional[RentPaymentResponse] = None


class RentCollectionSummary(ServiceResult):
     """Rent collection figures for a billing month."""
     year: Optional[int] = None
     month: Optional[int] = None
     total_received: Decimal = Decimal("0")
     total_pending: Decimal = Decimal("0")
     total_late: Decimal = Decimal("0")
     total_missed: Decimal = Decimal("0")
     expected: Decimal = Decimal("0")
     collection_rate: int = 0
     counts: Dict[str, int] = {}
