"""
Pydantic schemas for Tenancy API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, model_validator

from .common import PartialUpdate, ServiceResult
from .tenant import TenantResponse


class TenancyCreate(BaseModel):
     """Schema for creating a new tenancy."""
     property_id: int = Field(..., gt=0, description="Property ID (must belong to the landlord)")
     start_date: date = Field(..., description="First day of the tenancy")
     end_date: Optional[date] = Field(None, description="Last day of the tenancy; omit for open-ended")
     rent_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     rent_due_day: int = Field(1, ge=1, le=31, description="Day of month rent falls due")
     rent_frequency: str = "monthly"
     tenancy_type: Optional[str] = None
     is_periodic: bool = False
     deposit_amount: Optional[Decimal] = Field(None, ge=0)
     room_number: Optional[str] = None
     notes: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "property_id": 1,
                    "start_date": "2025-01-10",
                    "rent_amount": 1250.00,
                    "rent_due_day": 15,
                    "tenancy_type": "ast"
               }
          }
     )

     @model_validator(mode="after")
     def _check_dates(self):
          if self.end_date is not None and self.end_date < self.start_date:
               raise ValueError("end_date must not be before start_date")
          return self


class TenancyUpdate(PartialUpdate):
     """
     Schema for updating a tenancy. Status is not accepted: it is derived
     from the dates.
     """
     non_nullable = ("start_date", "rent_amount", "rent_due_day", "rent_frequency", "is_periodic")

     start_date: Optional[date] = None
     end_date: Optional[date] = None
     rent_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     rent_due_day: Optional[int] = Field(None, ge=1, le=31)
     rent_frequency: Optional[str] = None
     tenancy_type: Optional[str] = None
     is_periodic: Optional[bool] = None
     deposit_amount: Optional[Decimal] = Field(None, ge=0)
     room_number: Optional[str] = None
     notes: Optional[str] = None
     notice_given_date: Optional[date] = None
     notice_expiry_date: Optional[date] = None


class TenancyTenantLink(BaseModel):
     tenant_id: int = Field(..., gt=0)
     is_primary: bool = False


class TenancyTenantResponse(BaseModel):
     id: int
     tenancy_id: int
     tenant_id: int
     is_primary: bool

     model_config = ConfigDict(from_attributes=True)


class TenantInTenancy(TenantResponse):
     is_primary: bool = False


class TenancyResponse(BaseModel):
     """Schema for tenancy response."""
     id: int
     property_id: int
     status: str
     start_date: date
     end_date: Optional[date] = None
     rent_amount: Decimal
     rent_due_day: int
     rent_frequency: str
     tenancy_type: Optional[str] = None
     is_periodic: bool
     deposit_amount: Optional[Decimal] = None
     room_number: Optional[str] = None
     notes: Optional[str] = None
     notice_given_date: Optional[date] = None
     notice_expiry_date: Optional[date] = None
     created_at: datetime

     # Optional related data
     property_name: Optional[str] = None
     tenants: List[TenantInTenancy] = []

     model_config = ConfigDict(from_attributes=True)


class TenancyDetail(TenancyResponse):
     rent_payments: List["RentPaymentResponse"] = []


class RecomputeResult(ServiceResult):
     """Outcome of a tenancy status recompute pass."""
     updated_count: int = 0


from .rent_payment import RentPaymentResponse  # noqa: E402

TenancyDetail.model_rebuild()
