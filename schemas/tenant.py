"""
Pydantic schemas for Tenant API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from .common import PartialUpdate


class TenantCreate(BaseModel):
     """Schema for creating a new tenant."""
     first_name: str = Field(..., min_length=1, max_length=100)
     last_name: str = Field(..., min_length=1, max_length=100)
     email: Optional[str] = Field(None, max_length=255)
     phone: Optional[str] = None
     phone_secondary: Optional[str] = None
     date_of_birth: Optional[date] = None
     emergency_contact_name: Optional[str] = None
     emergency_contact_phone: Optional[str] = None
     emergency_contact_relationship: Optional[str] = None
     employment_status: Optional[str] = None
     employer_name: Optional[str] = None
     annual_income: Optional[Decimal] = Field(None, ge=0)
     notes: Optional[str] = None


class TenantUpdate(PartialUpdate):
     """Schema for updating a tenant; only provided fields change."""
     non_nullable = ("first_name", "last_name")

     first_name: Optional[str] = Field(None, min_length=1, max_length=100)
     last_name: Optional[str] = Field(None, min_length=1, max_length=100)
     email: Optional[str] = Field(None, max_length=255)
     phone: Optional[str] = None
     phone_secondary: Optional[str] = None
     date_of_birth: Optional[date] = None
     emergency_contact_name: Optional[str] = None
     emergency_contact_phone: Optional[str] = None
     emergency_contact_relationship: Optional[str] = None
     employment_status: Optional[str] = None
     employer_name: Optional[str] = None
     annual_income: Optional[Decimal] = Field(None, ge=0)
     notes: Optional[str] = None


class TenantResponse(BaseModel):
     id: int
     first_name: str
     last_name: str
     email: Optional[str] = None
     phone: Optional[str] = None
     phone_secondary: Optional[str] = None
     date_of_birth: Optional[date] = None
     emergency_contact_name: Optional[str] = None
     emergency_contact_phone: Optional[str] = None
     emergency_contact_relationship: Optional[str] = None
     employment_status: Optional[str] = None
     employer_name: Optional[str] = None
     annual_income: Optional[Decimal] = None
     notes: Optional[str] = None
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)
