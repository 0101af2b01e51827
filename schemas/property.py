"""
Pydantic schemas for Property API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from models.property import PropertyCategory
from .common import PartialUpdate


class PropertyCreate(BaseModel):
     """Schema for creating a new property."""
     name: str = Field(..., min_length=1, max_length=255)
     address_line_1: Optional[str] = None
     address_line_2: Optional[str] = None
     city: Optional[str] = None
     postcode: Optional[str] = None
     property_category: PropertyCategory = PropertyCategory.BTR
     property_type: Optional[str] = None
     status: str = "active"
     bedrooms: Optional[int] = Field(None, ge=0)
     bathrooms: Optional[int] = Field(None, ge=0)
     is_hmo: bool = False
     currency: str = Field("GBP", min_length=3, max_length=3)
     is_managed: bool = False
     management_fee_percent: Decimal = Field(Decimal("0"), ge=0, le=100)
     fixed_cleaning_fee: Decimal = Field(Decimal("0"), ge=0)
     property_manager_name: Optional[str] = None
     purchase_price: Optional[Decimal] = None
     current_value: Optional[Decimal] = None
     monthly_mortgage: Optional[Decimal] = None
     notes: Optional[str] = None

     model_config = ConfigDict(
          use_enum_values=True,
          json_schema_extra={
               "example": {
                    "name": "OceanBliss Villa",
                    "address_line_1": "12 Queen's Highway, Exuma",
                    "property_category": "sa",
                    "currency": "USD",
                    "is_managed": True,
                    "management_fee_percent": 18,
                    "fixed_cleaning_fee": 285,
                    "property_manager_name": "Island Stays"
               }
          }
     )


class PropertyUpdate(PartialUpdate):
     """Schema for updating a property; only provided fields change."""
     non_nullable = (
          "name", "property_category", "status", "is_hmo", "currency",
          "is_managed", "management_fee_percent", "fixed_cleaning_fee",
     )

     name: Optional[str] = Field(None, min_length=1, max_length=255)
     address_line_1: Optional[str] = None
     address_line_2: Optional[str] = None
     city: Optional[str] = None
     postcode: Optional[str] = None
     property_category: Optional[PropertyCategory] = None
     property_type: Optional[str] = None
     status: Optional[str] = None
     bedrooms: Optional[int] = Field(None, ge=0)
     bathrooms: Optional[int] = Field(None, ge=0)
     is_hmo: Optional[bool] = None
     hmo_license_number: Optional[str] = None
     hmo_license_expiry: Optional[date] = None
     currency: Optional[str] = Field(None, min_length=3, max_length=3)
     is_managed: Optional[bool] = None
     management_fee_percent: Optional[Decimal] = Field(None, ge=0, le=100)
     fixed_cleaning_fee: Optional[Decimal] = Field(None, ge=0)
     property_manager_name: Optional[str] = None
     purchase_price: Optional[Decimal] = None
     current_value: Optional[Decimal] = None
     monthly_mortgage: Optional[Decimal] = None
     notes: Optional[str] = None

     model_config = ConfigDict(use_enum_values=True)


class PropertyResponse(BaseModel):
     """Schema for property response."""
     id: int
     name: str
     address_line_1: Optional[str] = None
     address_line_2: Optional[str] = None
     city: Optional[str] = None
     postcode: Optional[str] = None
     property_category: str
     property_type: Optional[str] = None
     status: str
     bedrooms: Optional[int] = None
     bathrooms: Optional[int] = None
     is_hmo: bool
     currency: str
     is_managed: bool
     management_fee_percent: Decimal
     fixed_cleaning_fee: Decimal
     property_manager_name: Optional[str] = None
     purchase_price: Optional[Decimal] = None
     current_value: Optional[Decimal] = None
     monthly_mortgage: Optional[Decimal] = None
     notes: Optional[str] = None
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)


class PropertyListItem(PropertyResponse):
     """Property with occupancy and income figures for the current month."""
     active_tenancies: int = 0
     active_tenants: int = 0
     monthly_income: Decimal = Decimal("0")
     sa_booking_revenue: Optional[Decimal] = None


class PropertyDetail(PropertyListItem):
     tenancies: List["TenancyResponse"] = []
     recent_payments: List["RentPaymentResponse"] = []


class PropertySummary(BaseModel):
     id: int
     name: str
     status: str
     address_line_1: Optional[str] = None
     active_tenancies: int
     active_tenants: int
     total_monthly_rent: Decimal


class PaymentTermsUpsert(BaseModel):
     """How a property manager is paid for a property."""
     description: str = Field(..., min_length=1, max_length=255)
     timing: str = Field(..., min_length=1, max_length=100)
     currency: Optional[str] = Field(None, min_length=3, max_length=3)
     percentage: Optional[Decimal] = Field(None, ge=0, le=100)
     cleaning_fee: Optional[Decimal] = Field(None, ge=0)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "description": "18% of net + $285 cleaning, paid last day of month",
                    "timing": "Last day of month",
                    "currency": "USD",
                    "percentage": 18,
                    "cleaning_fee": 285
               }
          }
     )


class PaymentTermsResponse(PaymentTermsUpsert):
     id: int
     property_id: int

     model_config = ConfigDict(from_attributes=True)


from .tenancy import TenancyResponse  # noqa: E402
from .rent_payment import RentPaymentResponse  # noqa: E402

PropertyDetail.model_rebuild()
