"""
Pydantic schemas for serviced-accommodation bookings.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from models.sa_booking import BookingStatus, BookingPaymentStatus, PMPaymentStatus
from .common import PartialUpdate, ServiceResult


class BookingCreate(BaseModel):
     """
     Schema for creating a booking.

     Derived figures (nights, gross, net, PM deductions) are filled in
     when omitted.
     """
     property_id: int = Field(..., gt=0, description="Property ID (must belong to the landlord)")
     check_in: date
     check_out: date
     platform: str = "airbnb"
     reservation_id: Optional[str] = None
     guest_name: Optional[str] = None
     guest_email: Optional[str] = None
     guest_phone: Optional[str] = None
     booking_date: Optional[date] = None
     status: BookingStatus = BookingStatus.CONFIRMED
     currency: Optional[str] = Field(None, min_length=3, max_length=3)
     nightly_rate: Optional[Decimal] = Field(None, ge=0)
     total_nights: Optional[int] = Field(None, ge=0)
     gross_booking_value: Optional[Decimal] = Field(None, ge=0)
     platform_fee: Decimal = Field(Decimal("0"), ge=0)
     net_revenue: Optional[Decimal] = None
     cleaning_fee: Optional[Decimal] = Field(None, ge=0)
     notes: Optional[str] = None

     model_config = ConfigDict(
          use_enum_values=True,
          json_schema_extra={
               "example": {
                    "property_id": 3,
                    "check_in": "2025-03-01",
                    "check_out": "2025-03-05",
                    "nightly_rate": 300.00,
                    "platform_fee": 200.00
               }
          }
     )


class BookingUpdate(PartialUpdate):
     """Schema for updating a booking; only provided fields change."""
     non_nullable = (
          "platform", "check_in", "check_out", "total_nights", "gross_booking_value",
          "platform_fee", "net_revenue", "cleaning_fee", "status", "payment_status",
          "pm_payment_status",
     )

     reservation_id: Optional[str] = None
     guest_name: Optional[str] = None
     guest_email: Optional[str] = None
     guest_phone: Optional[str] = None
     platform: Optional[str] = None
     check_in: Optional[date] = None
     check_out: Optional[date] = None
     booking_date: Optional[date] = None
     nightly_rate: Optional[Decimal] = Field(None, ge=0)
     total_nights: Optional[int] = Field(None, ge=0)
     gross_booking_value: Optional[Decimal] = Field(None, ge=0)
     platform_fee: Optional[Decimal] = Field(None, ge=0)
     net_revenue: Optional[Decimal] = None
     cleaning_fee: Optional[Decimal] = Field(None, ge=0)
     status: Optional[BookingStatus] = None
     payment_status: Optional[BookingPaymentStatus] = None
     received_date: Optional[date] = None
     pm_payment_status: Optional[PMPaymentStatus] = None
     pm_paid_date: Optional[date] = None
     notes: Optional[str] = None

     model_config = ConfigDict(use_enum_values=True)


class MarkReceivedRequest(BaseModel):
     received_date: Optional[date] = Field(None, description="Defaults to today")


class MarkPMPaidRequest(BaseModel):
     paid_date: Optional[date] = Field(None, description="Defaults to today")


class BookingResponse(BaseModel):
     id: int
     property_id: int
     reservation_id: Optional[str] = None
     platform: str
     guest_name: Optional[str] = None
     guest_email: Optional[str] = None
     guest_phone: Optional[str] = None
     booking_date: Optional[date] = None
     check_in: date
     check_out: date
     status: str
     currency: str
     nightly_rate: Optional[Decimal] = None
     total_nights: int
     gross_booking_value: Decimal
     platform_fee: Decimal
     net_revenue: Decimal
     payment_status: str
     received_date: Optional[date] = None
     cleaning_fee: Decimal
     pm_fee_amount: Decimal
     total_pm_deduction: Decimal
     pm_payment_status: str
     pm_paid_date: Optional[date] = None
     notes: Optional[str] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class PaymentTiming(BaseModel):
     """Describes when and how the property manager is paid."""
     description: str
     percentage: Decimal
     timing: str
     cleaning_fee: Optional[Decimal] = None
     currency: Optional[str] = None


class PMSummary(ServiceResult):
     """Property manager settlement for one property and month."""
     month: Optional[int] = None
     year: Optional[int] = None
     total_bookings: int = 0
     total_net_revenue: Decimal = Decimal("0")
     total_cleaning_fees: Decimal = Decimal("0")
     total_pm_fees: Decimal = Decimal("0")
     total_pm_deduction: Decimal = Decimal("0")
     pm_should_pay: Decimal = Decimal("0")
     already_paid: Decimal = Decimal("0")
     remaining_to_pay: Decimal = Decimal("0")
     property_manager: Optional[str] = None
     payment_timing: Optional[PaymentTiming] = None


class ForecastMonth(BaseModel):
     month: int
     month_name: str
     bookings: int = 0
     total_nights: int = 0
     confirmed: Decimal = Decimal("0")
     received: Decimal = Decimal("0")
     pending_payment: Decimal = Decimal("0")


class BookingForecast(ServiceResult):
     year: Optional[int] = None
     months: List[ForecastMonth] = []


class RecalculateResult(ServiceResult):
     updated_count: int = 0
